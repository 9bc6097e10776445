"""Runtime trace infrastructure for combinator calls.

A Trace collects Evidence entries describing what a combinator call did:
when it subscribed, which events it captured, when it fired and whether it
was cancelled. It is observation only and never affects dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)


class Trace:
    """Collects Evidence for one or more combinator calls.

    Each call records a root ``<combinator>.subscribe`` entry; later
    entries for that call (capture, fire, cancel) point at it via
    ``parent_id``. Safe for single-threaded dispatch only.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> int | None:
        """Record an evidence entry.

        Args:
            action: What happened (e.g., "once_any.subscribe", "fire")
            info: Additional context
            parent_id: ID of the call's root entry, if any

        Returns:
            Event ID for linking child entries, or None if tracing disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                timestamp=datetime.now(UTC),
                info=info or {},
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded entries in recording order."""
        return list(self._events)

    def find(self, action: str) -> list[Evidence]:
        """Get all entries with the given action."""
        return [ev for ev in self._events if ev.action == action]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent_id to the IDs of its child entries."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all entries (for reuse)."""
        self._events.clear()
        self._next_id = 0
