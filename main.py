"""Entry point for the age calculator CLI.

Run with:
    python main.py            # show the cached result, then ask for a birthdate
    python main.py --clear    # forget the cached result

The script configures logging, restores the last calculation from the local
store, prompts the user for their birthdate, and prints the exact age.
"""

import argparse
import json
import logging
import sys

from age_calculator import AgeBreakdown, AgeCalculatorSession, InputValidationError, create_cache
from age_calculator.config import settings
from age_calculator.dates import parse

logger: logging.Logger = logging.getLogger(__name__)

# attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message and any extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _configure_logging() -> None:
    """Configure logging format from the LOG_FORMAT setting.

    Set LOG_FORMAT=json for structured JSON lines; any other value falls
    back to human-readable plaintext.
    """
    if settings.log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonLogFormatter())
        logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def format_display_date(raw: str) -> str:
    """Render a stored ``YYYY-MM-DD`` value as DD/MM/YYYY."""
    value = parse(raw)
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def format_breakdown(result: AgeBreakdown) -> str:
    return f"{result.years} years, {result.months} months and {result.days} days"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calculate your exact age.")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete the saved birthdate and result, then exit.",
    )
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Configure logging, restore the cached result and run the prompt.

    Exits with code 1 on invalid input so that callers (shell scripts, CI
    jobs, etc.) can detect failure cleanly.
    """
    args = _parse_args(argv)
    _configure_logging()

    session = AgeCalculatorSession(create_cache())

    if args.clear:
        session.clear()
        print("Saved data cleared.")
        return

    if session.restore() is not None and session.result is not None:
        print(
            f"Last calculation: born {format_display_date(session.raw_input)}, "
            f"{format_breakdown(session.result)} old."
        )

    print("Welcome to the Age Calculator!")
    birthdate_raw = input("Please enter your birthdate (YYYY-MM-DD, e.g. 1990-05-15): ").strip()

    try:
        result = session.submit(birthdate_raw)
    except InputValidationError as exc:
        print(f"Error: '{birthdate_raw}' was rejected. {exc.message}")
        logger.info("birthdate_rejected", extra={"reason": exc.code})
        sys.exit(1)

    print(f"Birthdate: {format_display_date(session.raw_input)}")
    print(f"You are {format_breakdown(result)} old.")
    logger.info("age_calculated", extra={"input_length": len(birthdate_raw)})


if __name__ == "__main__":
    run()
