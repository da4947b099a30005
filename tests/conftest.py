"""Pytest configuration and shared fixtures."""

import pytest

from eventemitter.events import emitter as emitter_module
from eventemitter.logging_config import configure_logging


def pytest_configure(config):
    """Configure pytest markers and quiet logging."""
    config.addinivalue_line("markers", "property: mark test as hypothesis property test")
    configure_logging(level="WARNING", colors=False, cache_loggers=False)


@pytest.fixture
def emitter():
    from eventemitter import EventEmitter

    return EventEmitter()


@pytest.fixture
def fresh_global_emitter(monkeypatch):
    """Reset the global emitter for the duration of a test."""
    monkeypatch.setattr(emitter_module, "_emitter", None)
