"""Combinator types and per-call state."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from eventjoin.kernel.errors import PreconditionError
from eventjoin.kernel.ports import EventSource

Unsubscriber = Callable[[], None]
Listener = Callable[..., None]


class SubscriptionRequest(BaseModel):
    """Validated arguments of a single combinator call."""

    model_config = ConfigDict(frozen=True)

    source: Any
    event_names: tuple[str, ...]
    handler: Callable[..., Any]

    @field_validator("source")
    @classmethod
    def require_event_source(cls, value: Any) -> Any:
        if not isinstance(value, EventSource):
            raise ValueError("must provide once, remove_listener and emit")
        return value

    @field_validator("event_names", mode="before")
    @classmethod
    def require_sequence(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise ValueError("must be a sequence of event names")
        return value

    @field_validator("event_names")
    @classmethod
    def require_distinct(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("must not be empty")
        duplicates = sorted({name for name in value if value.count(name) > 1})
        if duplicates:
            raise ValueError(f"must be distinct, repeated: {', '.join(duplicates)}")
        return value

    @classmethod
    def check(cls, source: Any, event_names: Any, handler: Any) -> SubscriptionRequest:
        """Validate combinator arguments, raising PreconditionError on failure."""
        try:
            return cls(source=source, event_names=event_names, handler=handler)
        except ValidationError as exc:
            errors = exc.errors(include_url=False)
            message = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors
            )
            raise PreconditionError(message, errors) from exc


@dataclass
class SubscriptionSet:
    """Wrapped listeners registered by one combinator call, keyed by event name.

    Closed exactly once, at cleanup; listeners check ``closed`` so that a
    late delivery after cleanup does nothing.
    """

    _listeners: dict[str, Listener] = field(default_factory=dict)
    closed: bool = False

    def add(self, name: str, listener: Listener) -> None:
        self._listeners[name] = listener

    def get(self, name: str) -> Listener | None:
        return self._listeners.get(name)

    def discard(self, name: str) -> None:
        """Forget the listener for name; the source has already dropped it."""
        self._listeners.pop(name, None)

    def close(self) -> None:
        self._listeners.clear()
        self.closed = True

    def __len__(self) -> int:
        return len(self._listeners)


@dataclass
class ArrivalLog:
    """Payloads captured by once_all, in arrival order.

    Attributes:
        expected: Event names the call waits for.
        _payloads: First payload seen for each arrived name.
    """

    expected: tuple[str, ...]
    _payloads: dict[str, list[Any]] = field(default_factory=dict)

    def capture(self, name: str, payload: Sequence[Any]) -> bool:
        """Record the first payload of name. Returns False for repeats."""
        if name not in self.expected or name in self._payloads:
            return False
        self._payloads[name] = list(payload)
        return True

    @property
    def complete(self) -> bool:
        return len(self._payloads) == len(self.expected)

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(name for name in self.expected if name not in self._payloads)

    def names(self) -> list[str]:
        return list(self._payloads)

    def payloads(self) -> list[list[Any]]:
        return list(self._payloads.values())
