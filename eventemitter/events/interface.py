from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any


class EventEmitterInterface(ABC):
    """Priority-ordered, synchronous event emitter.

    Implementations keep listeners per event name, run them in ascending
    priority order and report whether the emission ran to completion.
    """

    @abstractmethod
    def on(self, event_name: str, callback: Callable[..., Any], priority: int | None = None) -> Any:
        """Subscribe ``callback`` to ``event_name``."""
        raise NotImplementedError

    @abstractmethod
    def once(self, event_name: str, callback: Callable[..., Any], priority: int | None = None) -> Any:
        """Subscribe ``callback`` to ``event_name`` for a single invocation."""
        raise NotImplementedError

    @abstractmethod
    def emit(
        self,
        event_name: str,
        arguments: Sequence[Any] = (),
        continue_callback: Callable[[], Any] | None = None,
    ) -> bool:
        """Invoke the listeners of ``event_name``.

        Returns:
            False if a listener broke the chain, True otherwise
        """
        raise NotImplementedError

    @abstractmethod
    def listeners(self, event_name: str) -> list[Callable[..., Any]]:
        """Return the listeners of ``event_name`` sorted by priority."""
        raise NotImplementedError

    @abstractmethod
    def remove_listener(self, event_name: str, listener: Callable[..., Any]) -> bool:
        """Remove one registration of ``listener``; True if one was found."""
        raise NotImplementedError

    @abstractmethod
    def remove_all_listeners(self, event_name: str | None = None) -> None:
        """Remove the listeners of one event, or of every event when omitted."""
        raise NotImplementedError
