"""A list that kernel threads can share, with blocking removal."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from .keyedlist import KeyedList
from .synch import Condition, Lock
from .thread import Kernel

T = TypeVar("T")


class SynchList(Generic[T]):
    """A FIFO list guarded by a lock.

    One thread at a time touches the list, and ``remove`` waits until the
    list holds an item.
    """

    def __init__(self, kernel: Kernel) -> None:
        self.kernel = kernel
        self._list: KeyedList[T] = KeyedList()
        self._lock = Lock(kernel, "list lock")
        self._list_empty = Condition(kernel, "list empty cond")

    def __len__(self) -> int:
        return len(self._list)

    def append(self, item: T) -> None:
        """Put ``item`` at the end and wake a thread waiting in ``remove``."""
        with self._lock:
            self._list.append(item)
            self._list_empty.signal(self._lock)

    def remove(self) -> T:
        """Take the first item off the front, waiting while the list is empty."""
        with self._lock:
            while self._list.is_empty():
                self._list_empty.wait(self._lock)
            entry = self._list.sorted_remove()
            if entry is None:
                raise RuntimeError("list emptied while its lock was held")
            return entry[1]

    def mapcar(self, func: Callable[[T], Any]) -> None:
        """Apply ``func`` to every item, front to back, under the lock."""
        with self._lock:
            self._list.mapcar(func)