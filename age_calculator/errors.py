"""Exception hierarchy for the age_calculator package.

Input validation failures subclass ``ValueError`` as well as
``AgeCalculatorError`` so that callers which only know about ``ValueError``
(for example the Strands tool layer) still see a clear message.
"""


class AgeCalculatorError(Exception):
    """Base class for every error raised by age_calculator."""


class InputValidationError(AgeCalculatorError, ValueError):
    """A raw birth date could not be turned into a valid, non-future date.

    Attributes:
        code: Stable machine-readable identifier for the failure kind.
        message: Human-readable message suitable for showing to the user.
    """

    code: str = "invalid_input"
    default_message: str = "The birth date is not valid."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInputError(InputValidationError):
    code = "required"
    default_message = "A birth date is required."


class InvalidDateError(InputValidationError):
    code = "invalid_date"
    default_message = "Invalid date. Please use the format YYYY-MM-DD."


class FutureDateError(InputValidationError):
    code = "future_date"
    default_message = "The birth date cannot be in the future."


class PersistenceUnavailable(AgeCalculatorError):
    """The durable key/value store could not be read or written."""


class ConfigurationError(AgeCalculatorError):
    """A required runtime setting is missing."""
