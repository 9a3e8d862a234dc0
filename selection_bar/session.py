"""Session-scoped tracking of which list items received their initial selection."""

from __future__ import annotations

from typing import NamedTuple


class SelectionKey(NamedTuple):
    """Identity of one list item within one widget instance."""

    surface_id: str
    list_index: int

    def __str__(self) -> str:
        return f"{self.surface_id}::{self.list_index}"


class SessionRegistry:
    """Remember which selection keys have had their default applied.

    Keyed by identity only, never by the configured value: editing an
    initial selection under the same key does not make it apply again.
    Entries live until ``reset`` is called or the session ends.
    """

    def __init__(self) -> None:
        self._applied: set[SelectionKey] = set()

    def has_applied(self, key: SelectionKey) -> bool:
        return key in self._applied

    def mark_applied(self, key: SelectionKey) -> None:
        self._applied.add(key)

    def reset(self) -> None:
        """Forget every applied key."""
        self._applied.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._applied

    def __len__(self) -> int:
        return len(self._applied)
