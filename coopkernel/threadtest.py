"""A ping-pong between two kernel threads that yield the CPU to each other."""

from __future__ import annotations

from functools import partial

from .thread import Kernel, Thread

LOOPS = 5


def simple_thread(kernel: Kernel, which: int) -> None:
    """Loop five times, yielding the CPU to another ready thread each time.

    ``which`` only identifies the thread in the printed messages.
    """
    for num in range(LOOPS):
        print(f"*** thread {which} looped {num} times", flush=True)
        kernel.current_thread.yield_cpu()


def thread_test(kernel: Kernel) -> Thread:
    """Fork a thread running ``simple_thread`` and run it in the caller as well.

    Returns the forked thread.
    """
    kernel.debug.log("t", "Entering SimpleTest\n")
    forked = Thread(kernel, "forked thread")
    forked.fork(partial(simple_thread, kernel), 1)
    simple_thread(kernel, 0)
    return forked