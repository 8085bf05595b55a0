"""An ordered list of items, each carrying an integer sort key."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class KeyedList(Generic[T]):
    """A queue of items with optional key ordering.

    ``append`` and ``prepend`` give items key 0; ``sorted_insert`` places an
    item before the first later element with a larger key, so equal keys keep
    their insertion order.  Mutual exclusion is up to the caller.
    """

    def __init__(self) -> None:
        self._entries: deque[tuple[int, T]] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[T]:
        return (item for _, item in self._entries)

    def is_empty(self) -> bool:
        """Return True if the list holds no items."""
        return not self._entries

    def append(self, item: T) -> None:
        """Put ``item`` at the end of the list."""
        self._entries.append((0, item))

    def prepend(self, item: T) -> None:
        """Put ``item`` at the front of the list."""
        self._entries.appendleft((0, item))

    def remove(self) -> T | None:
        """Take the first item off the front; None if the list is empty."""
        entry = self.sorted_remove()
        return None if entry is None else entry[1]

    def sorted_insert(self, item: T, key: int) -> None:
        """Insert ``item`` ahead of the first later element whose key exceeds ``key``."""
        if not self._entries or key < self._entries[0][0]:
            self._entries.appendleft((key, item))
            return
        position = next(
            (
                index
                for index, (other_key, _) in enumerate(self._entries)
                if index > 0 and key < other_key
            ),
            len(self._entries),
        )
        self._entries.insert(position, (key, item))

    def sorted_remove(self) -> tuple[int, T] | None:
        """Remove the front item and return ``(key, item)``; None if empty."""
        if not self._entries:
            return None
        return self._entries.popleft()

    def mapcar(self, func: Callable[[T], Any]) -> None:
        """Apply ``func`` to every item, front to back."""
        for _, item in self._entries:
            func(item)