"""
eventemitter package.

In-process publish/subscribe primitive:
- Priority-ordered listeners per event name
- Single-shot listeners
- Emission that can be stopped by a listener or by a continue callback
"""

from eventemitter.config import DEFAULT_PRIORITY, EmitterSettings
from eventemitter.errors import ConfigurationError, EventEmitterError, InvalidListenerError
from eventemitter.events import (
    EventEmitter,
    EventEmitterInterface,
    EventEmitterMixin,
    OnceListener,
    get_emitter,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PRIORITY",
    "ConfigurationError",
    "EmitterSettings",
    "EventEmitter",
    "EventEmitterError",
    "EventEmitterInterface",
    "EventEmitterMixin",
    "InvalidListenerError",
    "OnceListener",
    "get_emitter",
]
