"""Bounded command history with readline-style navigation."""

from __future__ import annotations

from typing import Iterable, Iterator

DEFAULT_CAPACITY = 32


class History:
    """Fixed-capacity ring of previously submitted lines.

    Entries are stored oldest first. Once the ring is full, pushing a new
    entry evicts the oldest one.

    A navigation cursor tracks how many steps back from the newest entry the
    user is currently browsing. ``None`` means the user is on the live
    (uncommitted) line.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: list[str] = []
        self._cursor: int | None = None

    @classmethod
    def with_initial(
        cls, entries: Iterable[str], capacity: int = DEFAULT_CAPACITY
    ) -> History:
        """Create a history holding the first *capacity* of *entries*.

        Extra entries are ignored. Entries are taken as-is, so blank lines
        passed here are kept.
        """
        history = cls(capacity)
        for entry in entries:
            if len(history._entries) == capacity:
                break
            history._entries.append(entry)
        return history

    # -- properties ---------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int | None:
        """Steps back from the newest entry, or ``None`` on the live line."""
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    # -- mutation -----------------------------------------------------------

    def push(self, entry: str) -> None:
        """Append *entry*, evicting the oldest entry when at capacity.

        Empty and whitespace-only entries are ignored and leave the
        navigation cursor untouched. Otherwise the cursor is reset so the
        next ``prev()`` selects the newest entry.
        """
        if not entry or entry.isspace():
            return

        self._cursor = None
        if len(self._entries) == self._capacity:
            del self._entries[0]
        self._entries.append(entry)

    def pop(self) -> str | None:
        """Remove and return the newest entry."""
        self._cursor = None
        if not self._entries:
            return None
        return self._entries.pop()

    # -- access -------------------------------------------------------------

    def get(self, index: int) -> str | None:
        """Entry at *index*, counted from the oldest (0)."""
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[index]

    def newest(self) -> str | None:
        return self._entries[-1] if self._entries else None

    def current(self) -> str | None:
        """Entry under the navigation cursor."""
        if not self._entries or self._cursor is None:
            return None
        return self.get(max(0, len(self._entries) - 1 - self._cursor))

    # -- navigation ---------------------------------------------------------

    def prev(self) -> str | None:
        """Step one entry further into the past and return it."""
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = 0
        elif self._cursor + 1 < len(self._entries):
            self._cursor += 1
        return self.current()

    def next(self) -> str | None:
        """Step one entry towards the present.

        Returns ``None`` when stepping off the newest entry back onto the
        live line, and ``""`` when already on the live line.
        """
        if self._cursor == 0:
            self._cursor = None
            return None
        if self._cursor is None:
            return ""
        self._cursor -= 1
        return self.current()

    # -- iteration ----------------------------------------------------------

    def iter(self) -> Iterator[str]:
        """Iterate stored entries, oldest to newest."""
        return iter(tuple(self._entries))

    def __iter__(self) -> Iterator[str]:
        return self.iter()

    def __repr__(self) -> str:
        return (
            f"History(capacity={self._capacity}, cursor={self._cursor!r}, "
            f"entries={self._entries!r})"
        )
