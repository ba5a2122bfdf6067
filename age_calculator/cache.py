"""Persistence of the last successful calculation.

The cache keeps exactly one ``PersistedRecord`` under one fixed key of a
client-local key/value store.  Reads never raise: an absent, corrupted,
stale or unreachable record all come back as ``None``.  Writes are best
effort; the in-memory session stays authoritative when the store fails.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from age_calculator.calculator import AgeBreakdown, validate
from age_calculator.config import Settings, settings as default_settings
from age_calculator.dates import CalendarDate, parse
from age_calculator.dates import today as current_date
from age_calculator.errors import InputValidationError, PersistenceUnavailable

logger: logging.Logger = logging.getLogger(__name__)


class PersistedRecord(BaseModel):
    """The raw form value together with the breakdown computed from it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    raw_input: str
    result: AgeBreakdown | None = None

    @field_validator("raw_input")
    @classmethod
    def _must_be_calendar_date(cls, value: str) -> str:
        parse(value)
        return value

    @property
    def birth_date(self) -> CalendarDate:
        return parse(self.raw_input)


class KeyValueStore(Protocol):
    """A string-to-string store with ``localStorage`` semantics.

    Implementations raise ``PersistenceUnavailable`` when the medium cannot
    be used.
    """

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """In-process store; contents vanish with the process."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStore:
    """Store backed by a single JSON object file of key -> string.

    The whole document is rewritten on every change through a temporary
    file and ``os.replace``, so readers never observe a partial write.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self, strict: bool = True) -> dict[str, str]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceUnavailable(f"Cannot read {self.path}: {exc}") from exc

        # undecodable bytes and pathologically nested JSON count as malformed
        try:
            document = json.loads(raw.decode("utf-8"))
        except (ValueError, RecursionError):
            document = None
        if not isinstance(document, dict):
            if strict:
                raise PersistenceUnavailable(f"{self.path} does not hold a JSON object.")
            # writes start over rather than stay blocked by a damaged file
            logger.warning("Replacing malformed store file %s", self.path)
            return {}
        return {key: value for key, value in document.items() if isinstance(value, str)}

    def _write(self, document: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceUnavailable(f"Cannot write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        document = self._read(strict=False)
        document[key] = value
        self._write(document)

    def remove_item(self, key: str) -> None:
        document = self._read(strict=False)
        if key not in document:
            return
        del document[key]
        self._write(document)


class PersistenceCache:
    """``load``/``save``/``clear`` of the single persisted record."""

    def __init__(self, store: KeyValueStore, key: str = "formData") -> None:
        self.store = store
        self.key = key

    def load(self, today: CalendarDate | None = None) -> PersistedRecord | None:
        """Return the stored record, or ``None`` if there is nothing usable.

        Args:
            today: Reference date for the staleness check.  Defaults to the
                current local date.
        """
        try:
            payload = self.store.get_item(self.key)
        except PersistenceUnavailable as exc:
            logger.warning("Persistence unavailable, starting without a cached record: %s", exc)
            return None

        if payload is None:
            return None

        try:
            record = PersistedRecord.model_validate_json(payload)
        except ValidationError:
            logger.warning("Discarding corrupted record under key %r", self.key)
            self._discard()
            return None

        try:
            validate(record.birth_date, today or current_date())
        except InputValidationError:
            logger.warning("Discarding stale record under key %r: birth date is in the future", self.key)
            self._discard()
            return None

        return record

    def save(self, record: PersistedRecord) -> None:
        """Overwrite the stored record.  Store failures are logged, not raised."""
        try:
            self.store.set_item(self.key, record.model_dump_json())
        except PersistenceUnavailable as exc:
            logger.warning("Could not persist the last calculation: %s", exc)

    def clear(self) -> None:
        """Remove the stored record.  Clearing an empty cache is a no-op."""
        try:
            self.store.remove_item(self.key)
        except PersistenceUnavailable as exc:
            logger.warning("Could not clear the persisted calculation: %s", exc)

    def _discard(self) -> None:
        try:
            self.store.remove_item(self.key)
        except PersistenceUnavailable:
            logger.debug("Could not remove unusable record under key %r", self.key)


def create_cache(config: Settings | None = None) -> PersistenceCache:
    """Build a ``PersistenceCache`` over the configured JSON file store."""
    config = config or default_settings
    logger.debug("Using storage file %s with key %r", config.storage_path, config.storage_key)
    return PersistenceCache(JsonFileStore(config.storage_path), key=config.storage_key)
