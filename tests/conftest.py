"""Shared pytest fixtures for the age-calculator test suite.

Fixtures defined here are available to all test modules (unit, integration,
evaluation) without any import.

No AWS credentials are required - the ``agent_runner`` fixture patches
``BedrockModel`` before any SDK initialisation can attempt a network call.
"""

import os

import pytest
from unittest.mock import MagicMock, patch

# ---------------------------------------------------------------------------
# Ensure MODEL_ARN is set before any test module is collected, so the
# module-level ``settings`` object can build an agent.
# ---------------------------------------------------------------------------
os.environ.setdefault("MODEL_ARN", "arn:aws:bedrock:us-east-1::foundation-model/test-model")

from age_calculator.cache import JsonFileStore, MemoryStore, PersistenceCache  # noqa: E402
from age_calculator.dates import CalendarDate  # noqa: E402


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_bedrock_model() -> MagicMock:
    """A MagicMock standing in for ``BedrockModel`` - no AWS credentials needed."""
    model = MagicMock()
    model.invoke.return_value = {
        "role": "assistant",
        "content": [{"type": "text", "text": "Mocked response"}],
    }
    return model


# ---------------------------------------------------------------------------
# Agent fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def agent_runner(mock_bedrock_model: MagicMock):
    """Fully constructed ``strands.Agent`` with ``BedrockModel`` patched out."""
    with patch("age_calculator.agent.BedrockModel", return_value=mock_bedrock_model):
        from age_calculator.agent import create_agent
        return create_agent()


# ---------------------------------------------------------------------------
# Date fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_today() -> CalendarDate:
    """A reference date used instead of the system clock."""
    return CalendarDate(2024, 6, 15)


@pytest.fixture
def leap_day() -> CalendarDate:
    """A valid leap-day date (2020 is a leap year)."""
    return CalendarDate(2020, 2, 29)


# ---------------------------------------------------------------------------
# Persistence fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def memory_cache(memory_store: MemoryStore) -> PersistenceCache:
    return PersistenceCache(memory_store, key="formData")


@pytest.fixture
def storage_file(tmp_path):
    """Path of a not-yet-created JSON store file inside a nested directory."""
    return tmp_path / "state" / "storage.json"


@pytest.fixture
def file_cache(storage_file) -> PersistenceCache:
    return PersistenceCache(JsonFileStore(storage_file), key="formData")
