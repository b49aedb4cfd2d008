"""
Shared pytest fixtures and configuration for folio tests.

This module provides:
- Settings/sink/logging reset between tests
- A deterministic error-code resolver
- Small result trees used across the render and console tests
"""

from __future__ import annotations

from pathlib import Path

import pytest
from folio.core.console import BufferSink, set_sink
from folio.core.logging import clear_context, use_default_logging
from folio.core.result import Err, Message, Ok, aggregate
from folio.core.settings import reset_settings


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """Fresh settings, default sink and logging state for every test."""
    for name in ("FOLIO_LOG_LEVEL", "FOLIO_JSON_LOGS", "FOLIO_COLOR", "FOLIO_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    set_sink(None)
    yield
    reset_settings()
    set_sink(None)
    clear_context()
    use_default_logging()


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def buffer_sink() -> BufferSink:
    return BufferSink()


@pytest.fixture
def fake_resolver():
    """Resolves any code to a fixed, code-free message."""

    def resolve(code: int) -> str:
        return "resolved platform error"

    return resolve


# =============================================================================
# Result trees
# =============================================================================


@pytest.fixture
def nested_failure():
    """stage B -> stage A -> "bad input" (2nd of three items failed)."""
    inner = aggregate([Ok(), Err(Message("bad input")), Ok()], "stage A")
    return aggregate([inner], "stage B")
