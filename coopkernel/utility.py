"""Debug-message control and small arithmetic helpers."""

from __future__ import annotations

import sys
from typing import TextIO

ALL_FLAGS = "+"


def _trunc_div(n: int, s: int) -> int:
    """Integer division that truncates toward zero."""
    if s == 0:
        raise ZeroDivisionError("division by zero")
    q = abs(n) // abs(s)
    return q if (n >= 0) == (s > 0) else -q


def div_round_down(n: int, s: int) -> int:
    """Divide ``n`` by ``s``, truncating the quotient."""
    return _trunc_div(n, s)


def div_round_up(n: int, s: int) -> int:
    """Divide ``n`` by ``s``, rounding up when a positive remainder is left."""
    q = _trunc_div(n, s)
    remainder = n - q * s
    return q + 1 if remainder > 0 else q


class Debug:
    """Prints debug messages whose flag character is enabled.

    ``flags`` is a string of flag characters; ``"+"`` enables every flag,
    and ``None`` disables all of them.
    """

    def __init__(self, flags: str | None = None, stream: TextIO | None = None) -> None:
        self.flags = flags
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def is_enabled(self, flag: str) -> bool:
        """Return True if messages tagged with ``flag`` are to be printed."""
        if self.flags is None:
            return False
        return flag in self.flags or ALL_FLAGS in self.flags

    def log(self, flag: str, message: str, *args: object) -> None:
        """Print ``message`` (printf-style formatted with ``args``) if ``flag`` is on."""
        if not self.is_enabled(flag):
            return
        text = message % args if args else message
        out = self.stream
        out.write(text)
        out.flush()