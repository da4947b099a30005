"""
Single-shot listener adapter.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from eventemitter.events.emitter import EventEmitterMixin


class OnceListener:
    """Listener that unsubscribes itself before delegating to ``callback``.

    Removal happens first and unconditionally, so the wrapper is gone from
    the emitter even when the callback raises or re-emits the same event.
    The current emission still reaches it because ``emit`` iterates a
    snapshot taken before the wrapper ran.
    """

    __slots__ = ("emitter", "event_name", "callback")

    def __init__(
        self,
        emitter: EventEmitterMixin,
        event_name: str,
        callback: Callable[..., Any],
    ):
        self.emitter = emitter
        self.event_name = event_name
        self.callback = callback

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.emitter.remove_listener(self.event_name, self)
        return self.callback(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<OnceListener {self.event_name!r} -> {self.callback!r}>"
