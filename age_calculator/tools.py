"""Strands tools exposing the age calculator to the agent.

Each function is decorated with ``@tool`` so the Strands framework can
expose it to the language model.  Input validation happens in the
calculator before any arithmetic, so the model receives a clear error
message rather than a cryptic Python traceback.
"""

import logging

from strands import tool

from age_calculator.calculator import calculate
from age_calculator.dates import today

logger: logging.Logger = logging.getLogger(__name__)


@tool
def get_current_date() -> str:
    """Get today's date in YYYY-MM-DD format.

    Use this tool to retrieve the current local date when you need to tell
    the user which day their age was calculated against.

    Returns:
        Today's date as a string in YYYY-MM-DD format.
    """
    current = today().isoformat()
    logger.debug("get_current_date called, returning %s", current)
    return current


@tool
def calculate_age(birthdate: str) -> dict:
    """Calculate a person's exact age in years, months and days.

    Use this tool whenever the user gives a birthdate and wants to know how
    old they are.  The age is measured against today's local date.

    Args:
        birthdate: The birth date in YYYY-MM-DD format.  It must be a real
            calendar date and must not be in the future.

    Returns:
        A dict with integer keys "years", "months" and "days".

    Raises:
        ValueError: If birthdate is empty, is not a valid YYYY-MM-DD
            calendar date, or is later than today.
    """
    # log the input length, never the birth date itself
    logger.debug(
        "calculate_age called with %d-char birthdate",
        len(birthdate) if isinstance(birthdate, str) else 0,
    )

    result = calculate(birthdate)
    return result.model_dump()
