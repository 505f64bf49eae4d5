"""Fixed-capacity, newest-first event history."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedLog(Generic[T]):
    """Ring buffer ordered newest-first.

    Pushing onto a full log drops the oldest entry (the last one).

    Parameters
    ----------
    capacity : int
        Maximum number of entries kept.  Default 5.
    """

    def __init__(self, capacity: int = 5) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._entries: deque[T] = deque(maxlen=capacity)

    def push(self, entry: T) -> None:
        # appendleft on a full deque discards from the right, i.e. the oldest.
        self._entries.appendleft(entry)

    @property
    def newest(self) -> T | None:
        return self._entries[0] if self._entries else None

    def items(self) -> tuple[T, ...]:
        """Entries newest-first, as an immutable tuple."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._entries))
