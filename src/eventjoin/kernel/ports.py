"""Port protocols for eventjoin - the event source capability."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EventSource(Protocol):
    """Named-channel publish/subscribe source.

    ``pyee.EventEmitter`` satisfies this protocol as-is. Listeners are
    identified by the callable passed to ``once``; ``remove_listener``
    works in terms of that same object.
    """

    def once(self, event: str, f: Callable[..., Any]) -> Any:
        """Register f for the next emission of event only.

        The source drops f itself before calling it.
        """
        ...

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None:
        """Deregister a previously registered callback."""
        ...

    def emit(self, event: str, *args: Any) -> Any:
        """Deliver args to the listeners of event."""
        ...
