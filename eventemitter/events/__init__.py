"""
Event emitter module.

Provides the priority-ordered, synchronous listener registry and its
emission protocols.
"""

from eventemitter.events.emitter import (
    EventEmitter,
    EventEmitterMixin,
    Listener,
    emit,
    get_emitter,
    on,
    once,
)
from eventemitter.events.interface import EventEmitterInterface
from eventemitter.events.once import OnceListener

__all__ = [
    "EventEmitter",
    "EventEmitterInterface",
    "EventEmitterMixin",
    "Listener",
    "OnceListener",
    "emit",
    "get_emitter",
    "on",
    "once",
]
