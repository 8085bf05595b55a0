"""The ready queue and dispatcher for cooperative threads."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .keyedlist import KeyedList
from .utility import Debug

SwitchFunc = Callable[[Any, Any], None]


def _status():
    # Imported here because the thread module itself depends on this one.
    from .thread import ThreadStatus

    return ThreadStatus


class Scheduler:
    """Keeps the FIFO list of ready threads and dispatches the CPU between them.

    ``switch`` is called as ``switch(old_thread, next_thread)`` to transfer
    control; it returns once ``old_thread`` runs again.  Without a ``switch``
    the dispatcher only does the bookkeeping.  Threads are objects with
    ``name`` and ``status`` attributes.
    """

    def __init__(
        self, switch: Optional[SwitchFunc] = None, debug: Optional[Debug] = None
    ) -> None:
        self._ready: KeyedList[Any] = KeyedList()
        self._switch = switch
        self.debug = debug if debug is not None else Debug()
        self.current_thread: Any = None
        self.thread_to_be_destroyed: Any = None

    def __len__(self) -> int:
        return len(self._ready)

    def ready_to_run(self, thread: Any) -> None:
        """Mark ``thread`` ready and put it at the end of the ready list."""
        self.debug.log("t", "Putting thread %s on ready list.\n", thread.name)
        thread.status = _status().READY
        self._ready.append(thread)

    def find_next_to_run(self) -> Any:
        """Dequeue and return the first ready thread, or None if there is none."""
        return self._ready.remove()

    def run(self, next_thread: Any) -> None:
        """Dispatch the CPU to ``next_thread``.

        The current thread's status must already have been changed to ready or
        blocked.  Returns when the previous thread is switched back in.
        """
        old_thread = self.current_thread
        if old_thread is None:
            raise RuntimeError("no thread is currently running")

        self.current_thread = next_thread
        next_thread.status = _status().RUNNING

        self.debug.log(
            "t",
            'Switching from thread "%s" to thread "%s"\n',
            old_thread.name,
            next_thread.name,
        )
        if self._switch is not None:
            self._switch(old_thread, next_thread)
        self.debug.log("t", 'Now in thread "%s"\n', self.current_thread.name)

        if self.thread_to_be_destroyed is not None:
            self.debug.log(
                "t", 'Deleting thread "%s"\n', self.thread_to_be_destroyed.name
            )
            self.thread_to_be_destroyed = None

    def format(self) -> str:
        """Describe the contents of the ready list."""
        return "Ready list contents:\n" + "".join(
            f"{thread.name}, " for thread in self._ready
        )