"""Error types for combinator argument checking."""

from __future__ import annotations

from typing import Any


class PreconditionError(ValueError):
    """Raised when a combinator is called with invalid arguments.

    Raised before any listener is registered. ``errors`` keeps the
    individual validation entries for callers that want to inspect them.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)

    def __repr__(self) -> str:
        return f"PreconditionError({super().__str__()!r}, errors={len(self.errors)})"
