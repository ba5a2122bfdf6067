"""Integration tests for the form session over a real JSON file store.

A "restart" is modelled by building a new cache and session over the same
file, which is what happens when the CLI is run again.
"""

import json

import pytest

from age_calculator.cache import JsonFileStore, PersistenceCache
from age_calculator.calculator import AgeBreakdown
from age_calculator.dates import CalendarDate
from age_calculator.errors import FutureDateError
from age_calculator.session import AgeCalculatorSession


def _session(path, today: CalendarDate) -> AgeCalculatorSession:
    return AgeCalculatorSession(PersistenceCache(JsonFileStore(path)), clock=lambda: today)


@pytest.mark.integration
class TestRestartFlows:
    def test_result_survives_restart(self, storage_file, fixed_today):
        first = _session(storage_file, fixed_today)
        first.restore()
        first.submit("2020-02-29")

        second = _session(storage_file, fixed_today)
        record = second.restore()
        assert record is not None
        assert second.raw_input == "2020-02-29"
        assert second.result == AgeBreakdown(years=4, months=3, days=17)

    def test_cleared_result_does_not_survive_restart(self, storage_file, fixed_today):
        first = _session(storage_file, fixed_today)
        first.submit("1990-06-15")
        first.clear()

        assert _session(storage_file, fixed_today).restore() is None

    def test_rejected_submission_keeps_previous_record(self, storage_file, fixed_today):
        first = _session(storage_file, fixed_today)
        first.submit("1990-06-15")
        with pytest.raises(FutureDateError):
            first.submit("2030-01-01")

        second = _session(storage_file, fixed_today)
        second.restore()
        assert second.raw_input == "1990-06-15"

    def test_record_from_a_later_clock_is_dropped(self, storage_file):
        _session(storage_file, CalendarDate(2024, 6, 15)).submit("2024-06-15")

        earlier = _session(storage_file, CalendarDate(2024, 6, 1))
        assert earlier.restore() is None
        assert json.loads(storage_file.read_text(encoding="utf-8")) == {}

    def test_hand_edited_garbage_is_ignored_then_overwritten(self, storage_file, fixed_today):
        storage_file.parent.mkdir(parents=True)
        storage_file.write_text(json.dumps({"formData": "oops"}), encoding="utf-8")

        session = _session(storage_file, fixed_today)
        assert session.restore() is None
        session.submit("2000-01-31")
        assert _session(storage_file, fixed_today).restore().result == AgeBreakdown(
            years=24, months=4, days=15
        )
