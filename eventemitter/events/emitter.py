"""
Priority-ordered, synchronous event emitter.

Provides:
- Per-event listener lists ordered by priority (lower runs first)
- Lazy, stable re-sorting after registrations
- Single-shot listeners
- Plain and continue-callback gated emission
- A mixin form for adding emitter capabilities to existing classes
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from operator import itemgetter
from typing import Any

from eventemitter.config import EmitterSettings
from eventemitter.errors import InvalidListenerError
from eventemitter.events.interface import EventEmitterInterface
from eventemitter.events.once import OnceListener
from eventemitter.logging_config import get_logger

logger = get_logger(__name__)

Listener = Callable[..., Any]

_DEFAULT_SETTINGS = EmitterSettings()
_LOGGED_MARKER = "_eventemitter_logged"


# =============================================================================
# Storage
# =============================================================================


@dataclass
class _ListenerBucket:
    """Listeners of one event, stored in registration order until sorted."""

    entries: list[tuple[int, Listener]] = field(default_factory=list)
    is_sorted: bool = True

    def append(self, priority: int, callback: Listener) -> None:
        self.entries.append((priority, callback))
        self.is_sorted = False


def _describe(callback: Any) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


def _same_listener(check: Listener, listener: Listener) -> bool:
    if check is listener:
        return True
    # obj.method builds a new bound method object on every access
    return (
        inspect.ismethod(check)
        and inspect.ismethod(listener)
        and check.__self__ is listener.__self__
        and check.__func__ is listener.__func__
    )


def _log_failure(message: str, exc: Exception, **context: Any) -> None:
    """Log a fault once, at the innermost emission it passed through."""
    if getattr(exc, _LOGGED_MARKER, False):
        return
    setattr(exc, _LOGGED_MARKER, True)
    logger.exception(message, **context)


# =============================================================================
# Emitter
# =============================================================================


class EventEmitterMixin:
    """
    Event emitter capabilities for any class.

    The listener registry is created on first use, so host classes do not
    need to call a mixin ``__init__``::

        class Document(Model, EventEmitterMixin):
            def save(self):
                if not self.emit("before_save", [self]):
                    return False
                ...
    """

    _emitter_settings: EmitterSettings | None = None

    @property
    def emitter_settings(self) -> EmitterSettings:
        return self._emitter_settings or _DEFAULT_SETTINGS

    def _buckets(self) -> dict[str, _ListenerBucket]:
        buckets = getattr(self, "_listener_buckets", None)
        if buckets is None:
            buckets = self._listener_buckets = {}
        return buckets

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def on(
        self,
        event_name: str,
        callback: Listener | None = None,
        priority: int | None = None,
    ):
        """
        Subscribe to an event.

        The same callback may be registered several times; each registration
        is called and removed independently.

        Args:
            event_name: Event to listen to
            callback: Listener; omit to use ``on`` as a decorator
            priority: Lower runs earlier, defaults to the configured priority

        Returns:
            The callback

        Examples:
            emitter.on("saved", handler)
            emitter.on("saved", audit, priority=10)

            @emitter.on("saved", priority=200)
            def cleanup(doc): ...
        """
        if callback is None:

            def decorator(fn: Listener) -> Listener:
                return self.on(event_name, fn, priority)

            return decorator

        if not callable(callback):
            raise InvalidListenerError(event_name, callback)

        if priority is None:
            priority = self.emitter_settings.default_priority

        buckets = self._buckets()
        bucket = buckets.get(event_name)
        if bucket is None:
            bucket = buckets[event_name] = _ListenerBucket()
        bucket.append(priority, callback)

        logger.debug(
            "listener_added",
            event_name=event_name,
            listener=_describe(callback),
            priority=priority,
        )
        return callback

    def once(
        self,
        event_name: str,
        callback: Listener | None = None,
        priority: int | None = None,
    ):
        """
        Subscribe to an event for exactly one invocation.

        Args:
            event_name: Event to listen to
            callback: Listener; omit to use ``once`` as a decorator
            priority: Lower runs earlier, defaults to the configured priority

        Returns:
            The registered OnceListener (the decorated function in decorator form)
        """
        if callback is None:

            def decorator(fn: Listener) -> Listener:
                self.once(event_name, fn, priority)
                return fn

            return decorator

        if not callable(callback):
            raise InvalidListenerError(event_name, callback)

        wrapper = OnceListener(self, event_name, callback)
        self.on(event_name, wrapper, priority)
        return wrapper

    # -------------------------------------------------------------------------
    # Query
    # -------------------------------------------------------------------------

    def listeners(self, event_name: str) -> list[Listener]:
        """
        Return the listeners of an event, sorted by priority.

        Sorting is deferred to the first read after a registration. The
        returned list is a copy; changing the registry does not affect it.
        """
        bucket = self._buckets().get(event_name)
        if bucket is None:
            return []

        if not bucket.is_sorted:
            # list.sort is stable: equal priorities keep registration order
            bucket.entries.sort(key=itemgetter(0))
            bucket.is_sorted = True
            logger.debug("listeners_sorted", event_name=event_name, count=len(bucket.entries))

        return [callback for _, callback in bucket.entries]

    def listener_count(self, event_name: str) -> int:
        bucket = self._buckets().get(event_name)
        return len(bucket.entries) if bucket else 0

    def event_names(self) -> list[str]:
        """Events that currently have at least one listener."""
        return [name for name, bucket in self._buckets().items() if bucket.entries]

    def get_stats(self) -> dict[str, Any]:
        """Get emitter statistics."""
        buckets = self._buckets()
        return {
            "events": len(self.event_names()),
            "total_listeners": sum(len(b.entries) for b in buckets.values()),
        }

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    def remove_listener(self, event_name: str, listener: Listener) -> bool:
        """
        Remove one registration of a listener.

        Only the first matching entry (in stored order) is removed and the
        remaining entries keep their order.
        Listeners match by identity; a bound method also matches a fresh
        ``obj.method`` for the same object and function.

        Returns:
            True if a registration was removed, False otherwise
        """
        bucket = self._buckets().get(event_name)
        if bucket is None:
            return False

        for index, (_, check) in enumerate(bucket.entries):
            if _same_listener(check, listener):
                del bucket.entries[index]
                logger.debug(
                    "listener_removed",
                    event_name=event_name,
                    listener=_describe(listener),
                )
                return True
        return False

    def remove_all_listeners(self, event_name: str | None = None) -> None:
        """
        Remove all listeners.

        Args:
            event_name: Event to clear, or None to clear every event
        """
        buckets = self._buckets()
        if event_name is None:
            buckets.clear()
        else:
            buckets.pop(event_name, None)
        logger.debug("listeners_cleared", event_name=event_name)

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def emit(
        self,
        event_name: str,
        arguments: Sequence[Any] = (),
        continue_callback: Callable[[], Any] | None = None,
    ) -> bool:
        """
        Emit an event.

        Listeners run in priority order with ``arguments`` unpacked as
        positional arguments. A listener returning ``False`` breaks the
        chain and makes ``emit`` return False.

        If ``continue_callback`` is given, it is called before each listener
        after the first. Returning ``False`` from it stops propagation, which
        still counts as a successful emission. With N listeners the callback
        runs at most N - 1 times.

        Exceptions raised by listeners or by ``continue_callback`` are logged
        once and propagate to the caller unchanged.

        Args:
            event_name: Event to emit
            arguments: Positional arguments for every listener
            continue_callback: Optional gate consulted between listeners

        Returns:
            False if a listener broke the chain, True otherwise
        """
        if continue_callback is not None and not callable(continue_callback):
            raise InvalidListenerError(event_name, continue_callback)

        arguments = tuple(arguments)
        listeners = self.listeners(event_name)
        remaining = len(listeners)

        for listener in listeners:
            remaining -= 1
            try:
                result = listener(*arguments)
            except Exception as exc:
                _log_failure("listener_failed", exc, event_name=event_name, listener=_describe(listener))
                raise

            if result is False:
                logger.debug(
                    "emit_stopped_by_listener",
                    event_name=event_name,
                    listener=_describe(listener),
                )
                self._trace_emit(event_name, len(listeners), "aborted")
                return False

            if continue_callback is not None and remaining > 0:
                try:
                    proceed = continue_callback()
                except Exception as exc:
                    _log_failure("gate_failed", exc, event_name=event_name)
                    raise

                if proceed is False:
                    logger.debug(
                        "emit_stopped_by_gate",
                        event_name=event_name,
                        skipped=remaining,
                    )
                    self._trace_emit(event_name, len(listeners), "stopped")
                    return True

        self._trace_emit(event_name, len(listeners), "completed")
        return True

    def _trace_emit(self, event_name: str, listener_count: int, outcome: str) -> None:
        if self.emitter_settings.trace_emits:
            logger.debug(
                "event_emitted",
                event_name=event_name,
                listeners=listener_count,
                outcome=outcome,
            )


class EventEmitter(EventEmitterMixin, EventEmitterInterface):
    """Standalone event emitter."""

    def __init__(self, settings: EmitterSettings | None = None):
        """
        Initialize emitter.

        Args:
            settings: Emitter settings, defaults to EmitterSettings()
        """
        self._emitter_settings = settings or EmitterSettings()
        self._listener_buckets: dict[str, _ListenerBucket] = {}


# =============================================================================
# Global Instance
# =============================================================================

_emitter: EventEmitter | None = None


def get_emitter() -> EventEmitter:
    """Get or create the global emitter, configured from the environment."""
    global _emitter
    if _emitter is None:
        _emitter = EventEmitter(EmitterSettings.from_env())
    return _emitter


# =============================================================================
# Convenience Functions
# =============================================================================


def on(event_name: str, callback: Listener | None = None, priority: int | None = None):
    """
    Subscribe on the global emitter (can be used as decorator).

    Usage:
        @on("document.saved")
        def index_document(doc):
            ...

        # Or:
        on("document.saved", handler, priority=10)
    """
    return get_emitter().on(event_name, callback, priority)


def once(event_name: str, callback: Listener | None = None, priority: int | None = None):
    """Subscribe once on the global emitter (can be used as decorator)."""
    return get_emitter().once(event_name, callback, priority)


def emit(
    event_name: str,
    arguments: Sequence[Any] = (),
    continue_callback: Callable[[], Any] | None = None,
) -> bool:
    """Emit an event on the global emitter."""
    return get_emitter().emit(event_name, arguments, continue_callback)
