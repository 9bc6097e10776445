from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pyee import EventEmitter


@dataclass
class RedeliveringSource:
    """Once-source that can deliver again to listeners it already dropped.

    remove_listener raises ValueError for a listener it no longer holds.
    """

    _listeners: dict[str, list[Callable[..., Any]]] = field(default_factory=dict)
    _fired: dict[str, list[Callable[..., Any]]] = field(default_factory=dict)

    def once(self, event: str, f: Callable[..., Any]) -> Callable[..., Any]:
        self._listeners.setdefault(event, []).append(f)
        return f

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None:
        self._listeners.get(event, []).remove(f)

    def emit(self, event: str, *args: Any) -> None:
        fired = self._listeners.pop(event, [])
        self._fired.setdefault(event, []).extend(fired)
        for f in fired:
            f(*args)

    def redeliver(self, event: str, *args: Any) -> None:
        for f in list(self._fired.get(event, [])):
            f(*args)

    def listeners(self, event: str) -> list[Callable[..., Any]]:
        return list(self._listeners.get(event, []))


class ThreeMethodSource:
    """Source offering only once, remove_listener and emit."""

    def __init__(self) -> None:
        self.registered: dict[str, list[Callable[..., Any]]] = {}

    def once(self, event: str, f: Callable[..., Any]) -> None:
        self.registered.setdefault(event, []).append(f)

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None:
        self.registered.get(event, []).remove(f)

    def emit(self, event: str, *args: Any) -> None:
        for f in self.registered.pop(event, []):
            f(*args)

    def count(self) -> int:
        return sum(len(fs) for fs in self.registered.values())


class FailingSource(EventEmitter):
    """pyee emitter that refuses one event name or all removals."""

    def __init__(self, fail_on: str | None = None, fail_remove: bool = False) -> None:
        super().__init__()
        self.fail_on = fail_on
        self.fail_remove = fail_remove

    def once(self, event: str, f: Any = None) -> Any:
        if event == self.fail_on:
            raise RuntimeError(f"cannot subscribe to {event}")
        return super().once(event, f)

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None:
        if self.fail_remove:
            raise RuntimeError("registry locked")
        super().remove_listener(event, f)


def listener_count(source: Any, *events: str) -> int:
    return sum(len(source.listeners(event)) for event in events)
