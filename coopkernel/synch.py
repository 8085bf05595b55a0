"""Synchronization between kernel threads: semaphores, locks and condition variables.

Only the kernel's current thread ever executes, so the check-and-update steps
below cannot be interleaved with another kernel thread.  A thread gives up
the CPU only where it explicitly sleeps.
"""

from __future__ import annotations

from .keyedlist import KeyedList
from .thread import Kernel, Thread


class Semaphore:
    """A counting semaphore whose value never drops below zero.

    ``p`` waits until the value is positive and then decrements it; ``v``
    increments it and makes one waiting thread ready, if there is one.
    """

    def __init__(self, kernel: Kernel, name: str, initial_value: int = 0) -> None:
        if initial_value < 0:
            raise ValueError(f"semaphore value must not be negative: {initial_value}")
        self.kernel = kernel
        self.name = name
        self._value = initial_value
        self._queue: KeyedList[Thread] = KeyedList()

    def __repr__(self) -> str:
        return f"Semaphore({self.name!r}, value={self._value})"

    @property
    def value(self) -> int:
        """The value at the moment of reading; for diagnostics only."""
        return self._value

    @property
    def waiting(self) -> int:
        """How many threads are queued in ``p``."""
        return len(self._queue)

    def p(self) -> None:
        """Wait until the value is positive, then decrement it."""
        while self._value == 0:
            current = self.kernel.current_thread
            self._queue.append(current)
            current.sleep()
        self._value -= 1

    def v(self) -> None:
        """Increment the value, waking the first waiting thread if any."""
        thread = self._queue.remove()
        if thread is not None:
            self.kernel.scheduler.ready_to_run(thread)
        self._value += 1


class Lock:
    """A mutual-exclusion lock that is either free or held by one thread.

    Only the thread that acquired the lock may release it.
    """

    def __init__(self, kernel: Kernel, name: str) -> None:
        self.kernel = kernel
        self.name = name
        self._free = Semaphore(kernel, f"{name} (free)", 1)
        self._holder: Thread | None = None

    def __repr__(self) -> str:
        holder = self._holder.name if self._holder is not None else None
        return f"Lock({self.name!r}, holder={holder!r})"

    def __enter__(self) -> "Lock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    @property
    def holder(self) -> Thread | None:
        """The thread holding the lock, or None if it is free."""
        return self._holder

    def is_held_by_current_thread(self) -> bool:
        """Return True if the running thread holds this lock."""
        return self._holder is not None and self._holder is self.kernel.current_thread

    def acquire(self) -> None:
        """Wait until the lock is free, then take it."""
        if self.is_held_by_current_thread():
            raise RuntimeError(
                f"lock {self.name!r} is already held by thread "
                f"{self.kernel.current_thread.name!r}"
            )
        self._free.p()
        self._holder = self.kernel.current_thread

    def release(self) -> None:
        """Free the lock, waking a thread waiting to acquire it."""
        if not self.is_held_by_current_thread():
            raise RuntimeError(
                f"lock {self.name!r} released by thread "
                f"{self.kernel.current_thread.name!r}, which does not hold it"
            )
        self._holder = None
        self._free.v()


class Condition:
    """A Mesa-style condition variable.

    Every operation must be made while holding the lock that guards the
    condition.  A woken thread only becomes ready; it re-acquires the lock
    before ``wait`` returns, so the condition must be checked again.
    """

    def __init__(self, kernel: Kernel, name: str) -> None:
        self.kernel = kernel
        self.name = name
        self._waiters: KeyedList[Semaphore] = KeyedList()

    def __repr__(self) -> str:
        return f"Condition({self.name!r}, waiting={len(self._waiters)})"

    @property
    def waiting(self) -> int:
        """How many threads are waiting on the condition."""
        return len(self._waiters)

    def _require_held(self, lock: Lock) -> None:
        if not lock.is_held_by_current_thread():
            raise RuntimeError(
                f"condition {self.name!r} used without holding lock {lock.name!r}"
            )

    def wait(self, lock: Lock) -> None:
        """Release ``lock``, sleep until signalled, then re-acquire ``lock``."""
        self._require_held(lock)
        waiter = Semaphore(self.kernel, f"{self.name} waiter", 0)
        self._waiters.append(waiter)
        lock.release()
        waiter.p()
        lock.acquire()

    def signal(self, lock: Lock) -> None:
        """Wake the longest-waiting thread, if any."""
        self._require_held(lock)
        waiter = self._waiters.remove()
        if waiter is not None:
            waiter.v()

    def broadcast(self, lock: Lock) -> None:
        """Wake every waiting thread."""
        self._require_held(lock)
        while (waiter := self._waiters.remove()) is not None:
            waiter.v()