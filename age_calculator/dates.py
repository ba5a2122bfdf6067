"""Calendar-day normalisation.

Dates are always built from explicit (year, month, day) fields.  Handing a
``YYYY-MM-DD`` string to a generic instant parser is avoided on purpose:
such parsers tend to read the string as UTC midnight, which moves the local
calendar day backwards in time zones west of UTC.
"""

import calendar
import datetime
import logging
import re
from dataclasses import dataclass

from age_calculator.errors import InvalidDateError

logger: logging.Logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})", re.ASCII)
_MIN_YEAR = datetime.MINYEAR
_MAX_YEAR = datetime.MAXYEAR


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year`` (Gregorian)."""
    return calendar.monthrange(year, month)[1]


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A Gregorian calendar day with no time-of-day or offset.

    Field order makes the generated comparison operators compare by
    calendar day.  Impossible dates raise ``InvalidDateError``.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not all(type(part) is int for part in (self.year, self.month, self.day)):
            raise InvalidDateError("Date components must be integers.")
        if not _MIN_YEAR <= self.year <= _MAX_YEAR:
            raise InvalidDateError(f"Year must be between {_MIN_YEAR} and {_MAX_YEAR}.")
        if not 1 <= self.month <= 12:
            raise InvalidDateError("Month must be between 1 and 12.")
        last_day = days_in_month(self.year, self.month)
        if not 1 <= self.day <= last_day:
            raise InvalidDateError(
                f"Day must be between 1 and {last_day} for {self.year:04d}-{self.month:02d}."
            )

    @classmethod
    def from_date(cls, value: datetime.date) -> "CalendarDate":
        # datetime is a date subclass; only its calendar fields are kept
        return cls(value.year, value.month, value.day)

    def to_date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return format_iso(self)

    def __str__(self) -> str:
        return format_iso(self)


def parse(raw: str) -> CalendarDate:
    """Parse a ``YYYY-MM-DD`` string into a ``CalendarDate``.

    Args:
        raw: The date string.  Surrounding whitespace is ignored; month and
            day may be given with one or two digits.

    Returns:
        The calendar day named by the string, in local wall-clock terms.

    Raises:
        InvalidDateError: If the string is malformed or names a day that
            does not exist (e.g. ``2023-02-29`` or ``2024-04-31``).
    """
    if not isinstance(raw, str):
        raise InvalidDateError("The birth date must be a string.")

    match = _DATE_PATTERN.fullmatch(raw.strip())
    if match is None:
        logger.debug("Rejected %d-char date string: not YYYY-MM-DD", len(raw))
        raise InvalidDateError()

    year, month, day = (int(part) for part in match.groups())
    return CalendarDate(year, month, day)


def format_iso(value: CalendarDate) -> str:
    """Render ``value`` as a zero-padded ``YYYY-MM-DD`` string."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def today() -> CalendarDate:
    """Return the current local date as a ``CalendarDate``."""
    return CalendarDate.from_date(datetime.date.today())


def preceding_month_length(value: CalendarDate) -> int:
    """Number of days in the month immediately before ``value``'s month.

    January wraps to December of the previous year.
    """
    if value.month == 1:
        return 31  # December
    return days_in_month(value.year, value.month - 1)
