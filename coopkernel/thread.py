"""Cooperative kernel threads: creation, forking, yielding, sleeping and finishing.

Each kernel thread runs on its own host thread, but only the kernel's current
thread ever executes; the others wait on a private semaphore until the
scheduler switches to them.  This gives the same one-at-a-time, explicitly
dispatched behaviour as a uniprocessor kernel.
"""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Optional

from .scheduler import Scheduler
from .utility import Debug

_JOIN_TIMEOUT = 5.0

IDLE_REASON = "No threads ready or runnable, and no pending interrupts."
SHUTDOWN_REASON = "Kernel shut down."


class ThreadStatus(enum.Enum):
    """Life-cycle state of a kernel thread."""

    JUST_CREATED = "just created"
    RUNNING = "running"
    READY = "ready"
    BLOCKED = "blocked"


class KernelHalted(Exception):
    """Raised in a thread that tries to run, or is waiting, once the kernel halts."""


class _ThreadExit(BaseException):
    """Unwinds the host thread of a kernel thread that has finished."""


class Kernel:
    """Owns the scheduler and the set of live threads.

    The host thread that creates the kernel becomes its ``main`` thread, which
    starts out running.
    """

    def __init__(self, debug: Optional[Debug] = None) -> None:
        self.debug = debug if debug is not None else Debug()
        self.scheduler = Scheduler(switch=self._switch, debug=self.debug)
        self.halted = False
        self.halt_reason = ""
        self.error: Optional[BaseException] = None
        self._lock = threading.Lock()
        self._live: set[Thread] = set()

        main = Thread(self, "main")
        main._is_root = True
        main.status = ThreadStatus.RUNNING
        self._register(main)
        self.main_thread = main
        self.scheduler.current_thread = main

    def __enter__(self) -> "Kernel":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def current_thread(self) -> "Thread":
        """The thread that holds the CPU."""
        return self.scheduler.current_thread

    def shutdown(self) -> None:
        """Halt the kernel and wait for every forked thread's host thread to end."""
        self._halt(SHUTDOWN_REASON)
        me = threading.current_thread()
        with self._lock:
            host_threads = [t._os_thread for t in self._live if t._os_thread is not None]
        for host in host_threads:
            if host is not me:
                host.join(timeout=_JOIN_TIMEOUT)

    def _register(self, thread: "Thread") -> None:
        with self._lock:
            self._live.add(thread)

    def _unregister(self, thread: "Thread") -> None:
        with self._lock:
            self._live.discard(thread)

    def _halt(self, reason: str) -> None:
        with self._lock:
            if self.halted:
                return
            self.halted = True
            self.halt_reason = reason
            waiting = list(self._live)
        for thread in waiting:
            thread._resume.release()

    def _fail(self, thread: "Thread", exc: BaseException) -> None:
        self.error = exc
        self._halt(f"thread {thread.name!r} raised {exc!r}")

    def _idle(self) -> None:
        # With no devices to raise interrupts, nothing can ever become ready.
        self._halt(IDLE_REASON)
        raise KernelHalted(self.halt_reason)

    def _check_running(self) -> None:
        if self.halted:
            raise KernelHalted(self.halt_reason)

    def _setup_thread_state(self) -> None:
        doomed = self.scheduler.thread_to_be_destroyed
        if doomed is not None:
            self.debug.log("t", 'Deleting thread "%s"\n', doomed.name)
            self.scheduler.thread_to_be_destroyed = None

    def _switch(self, old_thread: "Thread", next_thread: "Thread") -> None:
        next_thread._resume.release()
        if old_thread._finished and not old_thread._is_root:
            raise _ThreadExit()
        old_thread._wait()


class Thread:
    """A kernel thread: a name, a status and, once forked, a procedure to run."""

    def __init__(self, kernel: Kernel, name: str) -> None:
        self.kernel = kernel
        self.name = name
        self.status = ThreadStatus.JUST_CREATED
        self._resume = threading.Semaphore(0)
        self._os_thread: Optional[threading.Thread] = None
        self._finished = False
        self._is_root = False

    def __repr__(self) -> str:
        return f"Thread({self.name!r}, {self.status.name})"

    def __str__(self) -> str:
        return self.name

    def _require_current(self) -> None:
        if self is not self.kernel.current_thread:
            raise RuntimeError(f"thread {self.name!r} is not the current thread")

    def _wait(self) -> None:
        self._resume.acquire()
        if self.kernel.halted:
            raise KernelHalted(self.kernel.halt_reason) from self.kernel.error

    def _bootstrap(self, func: Callable[[Any], Any], arg: Any) -> None:
        try:
            self._wait()
            self.kernel._setup_thread_state()
            func(arg)
            self.finish()
        except (_ThreadExit, KernelHalted):
            pass
        except BaseException as exc:  # noqa: BLE001 - reported through the kernel
            self.kernel._fail(self, exc)
        finally:
            self.kernel._unregister(self)

    def fork(self, func: Callable[[Any], Any], arg: Any) -> None:
        """Make this thread run ``func(arg)`` concurrently with the caller."""
        self.kernel._check_running()
        if self._is_root or self._os_thread is not None:
            raise RuntimeError(f"thread {self.name!r} has already been started")
        self.kernel.debug.log(
            "t",
            'Forking thread "%s" with func = %s, arg = %r\n',
            self.name,
            getattr(func, "__qualname__", repr(func)),
            arg,
        )
        self._os_thread = threading.Thread(
            target=self._bootstrap, args=(func, arg), name=self.name, daemon=True
        )
        self.kernel._register(self)
        self._os_thread.start()
        self.kernel.scheduler.ready_to_run(self)

    def yield_cpu(self) -> None:
        """Give the CPU to the next ready thread, if any, and requeue this one.

        Returns at once when no other thread is ready.
        """
        self.kernel._check_running()
        self._require_current()
        self.kernel.debug.log("t", 'Yielding thread "%s"\n', self.name)
        scheduler = self.kernel.scheduler
        next_thread = scheduler.find_next_to_run()
        if next_thread is not None:
            scheduler.ready_to_run(self)
            scheduler.run(next_thread)

    def sleep(self) -> None:
        """Block this thread and run another; returns once it is made ready again.

        If no thread is ready the kernel halts and KernelHalted is raised.
        """
        self.kernel._check_running()
        self._require_current()
        self.kernel.debug.log("t", 'Sleeping thread "%s"\n', self.name)
        self.status = ThreadStatus.BLOCKED
        scheduler = self.kernel.scheduler
        next_thread = scheduler.find_next_to_run()
        while next_thread is None:
            self.kernel._idle()
            next_thread = scheduler.find_next_to_run()
        scheduler.run(next_thread)

    def finish(self) -> None:
        """End this thread.

        A forked thread never returns from here.  The main thread waits until the
        kernel halts and then gets KernelHalted.
        """
        self.kernel._check_running()
        self._require_current()
        self.kernel.debug.log("t", 'Finishing thread "%s"\n', self.name)
        scheduler = self.kernel.scheduler
        if scheduler.thread_to_be_destroyed is not None:
            raise RuntimeError("another finished thread is still awaiting removal")
        scheduler.thread_to_be_destroyed = self
        self._finished = True
        self.sleep()