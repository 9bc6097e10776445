"""Attach the combinators to an event source as bound methods."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from eventjoin.combinators.ops import once_all, once_any
from eventjoin.combinators.types import Unsubscriber
from eventjoin.kernel.errors import PreconditionError
from eventjoin.kernel.ports import EventSource
from eventjoin.kernel.trace import Trace


class AttachedSource:
    """View of an event source with once_any/once_all bound to it.

    The EventSource methods are delegated explicitly; any other attribute
    is looked up on the wrapped source, so the view can be used wherever
    the source was.
    """

    def __init__(self, source: EventSource) -> None:
        if not isinstance(source, EventSource):
            raise PreconditionError(
                f"source: must provide once, remove_listener and emit, "
                f"got {type(source).__name__}"
            )
        self._source = source

    @property
    def source(self) -> EventSource:
        return self._source

    def once(self, event: str, f: Callable[..., Any] | None = None) -> Any:
        # f=None keeps the decorator form (``@view.once("evt")``) working
        if f is None:
            return self._source.once(event)
        return self._source.once(event, f)

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None:
        self._source.remove_listener(event, f)

    def emit(self, event: str, *args: Any, **kwargs: Any) -> Any:
        return self._source.emit(event, *args, **kwargs)

    def once_any(
        self,
        event_names: Sequence[str],
        handler: Callable[..., Any],
        *,
        trace: Trace | None = None,
    ) -> Unsubscriber:
        """once_any bound to the wrapped source."""
        return once_any(self._source, event_names, handler, trace=trace)

    def once_all(
        self,
        event_names: Sequence[str],
        handler: Callable[[list[str], list[list[Any]]], Any],
        *,
        trace: Trace | None = None,
    ) -> Unsubscriber:
        """once_all bound to the wrapped source."""
        return once_all(self._source, event_names, handler, trace=trace)

    def __getattr__(self, name: str) -> Any:
        """Pass any other attribute through to the wrapped source."""
        source = self.__dict__.get("_source")
        if source is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return getattr(source, name)

    def __repr__(self) -> str:
        return f"AttachedSource({self._source!r})"


def attach(source: EventSource) -> AttachedSource:
    """Wrap source so that it exposes once_any and once_all as methods."""
    return AttachedSource(source)
