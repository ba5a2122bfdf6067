"""Exact age in years, months and days.

``calculate`` is the boundary between a raw form value and the arithmetic:
every validation failure is raised there, so ``compute_age`` only ever sees
a birth date that is on or before the reference date.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from age_calculator.dates import CalendarDate, parse, preceding_month_length
from age_calculator.dates import today as current_date
from age_calculator.errors import FutureDateError, MissingInputError

logger: logging.Logger = logging.getLogger(__name__)


class AgeBreakdown(BaseModel):
    """An elapsed span expressed as whole years, months and days."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    years: int = Field(..., ge=0)
    months: int = Field(..., ge=0, le=11)
    days: int = Field(..., ge=0, le=30)


def validate(birth: CalendarDate, today: CalendarDate) -> None:
    """Check that ``birth`` is not later than ``today``.

    Raises:
        FutureDateError: If ``birth`` falls strictly after ``today``.  Equal
            dates are valid.
    """
    if birth > today:
        raise FutureDateError()


def compute_age(birth: CalendarDate, today: CalendarDate) -> AgeBreakdown:
    """Subtract ``birth`` from ``today`` field by field, borrowing as needed.

    A negative day difference borrows the length of the month preceding
    ``today``'s month.  When ``birth.day`` exceeds that length the birthday
    in that month is taken to be its last day, so only ``today.day`` counts.
    A negative month difference then borrows twelve months from the years.

    Args:
        birth: The birth date.
        today: The reference date; must not be earlier than ``birth``.

    Returns:
        The age as an ``AgeBreakdown``.

    Raises:
        FutureDateError: If ``birth`` is after ``today``.
    """
    validate(birth, today)

    years = today.year - birth.year
    months = today.month - birth.month
    days = today.day - birth.day

    if days < 0:
        borrowed = preceding_month_length(today)
        days = max(borrowed - birth.day, 0) + today.day
        months -= 1

    if months < 0:
        months += 12
        years -= 1

    return AgeBreakdown(years=years, months=months, days=days)


def calculate(raw: str, today: CalendarDate | None = None) -> AgeBreakdown:
    """Validate a raw ``YYYY-MM-DD`` birth date and compute the age.

    Args:
        raw: The birth date exactly as entered.
        today: Reference date.  Defaults to the current local date.

    Returns:
        The age as an ``AgeBreakdown``.

    Raises:
        MissingInputError: If ``raw`` is empty or whitespace.
        InvalidDateError: If ``raw`` is not a real calendar date.
        FutureDateError: If the birth date is after ``today``.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise MissingInputError()

    birth = parse(raw)
    reference = today or current_date()

    result = compute_age(birth, reference)
    logger.debug(
        "Computed age %d/%d/%d against %s",
        result.years,
        result.months,
        result.days,
        reference,
    )
    return result
