"""
Exception hierarchy for the event emitter.

Listener faults are never wrapped in these types: whatever a listener raises
reaches the caller of ``emit`` unchanged.
"""

from __future__ import annotations

from typing import Any


class EventEmitterError(Exception):
    """Base class for errors raised by this package."""


class InvalidListenerError(EventEmitterError, TypeError):
    """Raised when a listener or continue callback is not callable."""

    def __init__(
        self,
        event_name: str,
        value: Any,
        message: str | None = None,
    ):
        self.event_name = event_name
        self.value = value
        self.message = message or (
            f"Listener for '{event_name}' must be callable, got {type(value).__name__}"
        )
        super().__init__(self.message)


class ConfigurationError(EventEmitterError, ValueError):
    """Raised when emitter settings are invalid."""

    def __init__(self, field_name: str, value: Any, reason: str):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field_name}={value!r}: {reason}")
