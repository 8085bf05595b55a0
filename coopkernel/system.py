"""Start-up and shut-down of the kernel, and its command-line entry point."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from .thread import Kernel, KernelHalted
from .threadtest import thread_test
from .utility import ALL_FLAGS, Debug

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Options:
    """Settings taken from the command line.

    ``debug_flags`` selects which debug messages are printed.  ``random_yield``
    and ``random_seed`` record a request for randomly placed yields, driven by
    a timer device when one is attached.
    """

    debug_flags: str = ""
    random_yield: bool = False
    random_seed: Optional[int] = None


def _atoi(text: str) -> int:
    """Read a leading decimal integer from ``text``; 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: Sequence[str]) -> Options:
    """Interpret the kernel's command-line flags; unknown arguments are ignored.

    ``-d [flags]`` enables debug messages (all of them when no flags follow);
    ``-rs <seed>`` asks for random yields with the given seed.
    """
    debug_flags = ""
    random_yield = False
    random_seed: Optional[int] = None

    args = iter(argv)
    for arg in args:
        if arg == "-d":
            debug_flags = next(args, ALL_FLAGS)
        elif arg == "-rs":
            seed = next(args, None)
            if seed is None:
                raise ValueError("option -rs requires a seed argument")
            random_seed = _atoi(seed)
            random_yield = True

    return Options(
        debug_flags=debug_flags, random_yield=random_yield, random_seed=random_seed
    )


def initialize(argv: Sequence[str]) -> tuple[Options, Kernel]:
    """Parse ``argv`` and build a kernel whose main thread is the caller."""
    options = parse_args(argv)
    kernel = Kernel(debug=Debug(options.debug_flags))
    return options, kernel


def _cleanup(kernel: Kernel) -> None:
    print("\nCleaning up...", flush=True)
    kernel.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Boot the kernel, run the thread test, then shut down."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        _, kernel = initialize(argv)
    except ValueError as exc:
        print(f"coopkernel: {exc}", file=sys.stderr)
        return 2

    try:
        thread_test(kernel)
        kernel.current_thread.finish()
    except (KernelHalted, KeyboardInterrupt):
        pass
    finally:
        _cleanup(kernel)

    if kernel.error is not None:
        print(f"coopkernel: {kernel.halt_reason}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())