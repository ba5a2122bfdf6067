"""age_calculator: exact age in years, months and days from a birth date.

Public API
----------
calculate
    Validate a raw ``YYYY-MM-DD`` string and return an ``AgeBreakdown``.
compute_age / validate
    The calendar arithmetic on already-normalised ``CalendarDate`` values.
parse / today
    Timezone-safe date normalisation.
PersistenceCache / create_cache
    Persistence of the last calculation across restarts.
AgeCalculatorSession
    Form state: restore, submit, clear.

``create_agent`` (the Strands agent surface) lives in
``age_calculator.agent`` so importing the package never touches the
Strands SDK.

Example
-------
>>> from age_calculator import CalendarDate, calculate
>>> calculate("1990-06-15", today=CalendarDate(2024, 6, 15))
AgeBreakdown(years=34, months=0, days=0)
"""

from age_calculator.cache import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    PersistedRecord,
    PersistenceCache,
    create_cache,
)
from age_calculator.calculator import AgeBreakdown, calculate, compute_age, validate
from age_calculator.dates import CalendarDate, format_iso, parse, today
from age_calculator.errors import (
    AgeCalculatorError,
    ConfigurationError,
    FutureDateError,
    InputValidationError,
    InvalidDateError,
    MissingInputError,
    PersistenceUnavailable,
)
from age_calculator.session import AgeCalculatorSession

__all__: list[str] = [
    "AgeBreakdown",
    "AgeCalculatorError",
    "AgeCalculatorSession",
    "CalendarDate",
    "ConfigurationError",
    "FutureDateError",
    "InputValidationError",
    "InvalidDateError",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "MissingInputError",
    "PersistedRecord",
    "PersistenceCache",
    "PersistenceUnavailable",
    "calculate",
    "compute_age",
    "create_cache",
    "format_iso",
    "parse",
    "today",
    "validate",
]
