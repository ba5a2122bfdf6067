"""State behind the birth-date form.

A session restores the cached record once at startup, recomputes on every
submission and writes the outcome back to the cache.  Presentation code
reads ``raw_input`` and ``result`` and never touches calendar logic.
"""

import logging
from typing import Callable

from age_calculator.cache import PersistedRecord, PersistenceCache
from age_calculator.calculator import AgeBreakdown, calculate
from age_calculator.dates import CalendarDate, today

logger: logging.Logger = logging.getLogger(__name__)


class AgeCalculatorSession:
    def __init__(
        self,
        cache: PersistenceCache,
        clock: Callable[[], CalendarDate] = today,
    ) -> None:
        self.cache = cache
        self.clock = clock
        self.raw_input: str = ""
        self.result: AgeBreakdown | None = None

    def restore(self) -> PersistedRecord | None:
        """Load the cached record into the session without recomputing it."""
        record = self.cache.load(today=self.clock())
        if record is None:
            return None
        self.raw_input = record.raw_input
        self.result = record.result
        logger.info("Restored cached calculation")
        return record

    def submit(self, raw: str) -> AgeBreakdown:
        """Compute the age for ``raw`` and persist the pair.

        Validation errors propagate unchanged and leave both the session
        and the cache as they were.
        """
        result = calculate(raw, self.clock())
        self.raw_input = raw.strip()
        self.result = result
        self.cache.save(PersistedRecord(raw_input=self.raw_input, result=result))
        return result

    def clear(self) -> None:
        self.cache.clear()
        self.raw_input = ""
        self.result = None
        logger.info("Cleared persisted calculation")
