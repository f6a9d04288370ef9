"""A single-hart model of the supervisor binary interface firmware calls."""

from __future__ import annotations

import enum
import operator
import sys
from collections import deque
from typing import Iterable, Iterator, TextIO, Union

_MASK64 = (1 << 64) - 1

CharSource = Iterable[Union[str, int]]


class SbiCall(enum.IntEnum):
    """Legacy SBI function numbers."""

    SET_TIMER = 0
    CONSOLE_PUTCHAR = 1
    CONSOLE_GETCHAR = 2
    CLEAR_IPI = 3
    SEND_IPI = 4
    REMOTE_FENCE_I = 5
    REMOTE_SFENCE_VMA = 6
    REMOTE_SFENCE_VMA_ASID = 7
    SHUTDOWN = 8


def _codes(chars: CharSource) -> Iterator[int]:
    for ch in chars:
        yield ord(ch) & 0xFF if isinstance(ch, str) else operator.index(ch) & 0xFF


class Sbi:
    """Firmware for one hart: a console on text streams, a timer and shutdown."""

    def __init__(self, output: TextIO | None = None, input_chars: CharSource = "") -> None:
        self.output = output if output is not None else sys.stdout
        self._input: deque[int] = deque(_codes(input_chars))
        self.timer: int | None = None
        self.ipi_pending = False
        self.is_shutdown = False

    def feed(self, chars: CharSource) -> None:
        """Queue more characters for the console to read."""
        self._input.extend(_codes(chars))

    def call(self, kind: int, arg0: int = 0, arg1: int = 0, arg2: int = 0) -> int:
        """Perform firmware call ``kind``; the result is an unsigned 64-bit value."""
        call = SbiCall(kind)
        arg0 = operator.index(arg0) & _MASK64
        if call is SbiCall.SET_TIMER:
            self.timer = arg0
            result = 0
        elif call is SbiCall.CONSOLE_PUTCHAR:
            self.output.write(chr(arg0 & 0xFF))
            result = 0
        elif call is SbiCall.CONSOLE_GETCHAR:
            result = self._input.popleft() if self._input else -1
        elif call is SbiCall.CLEAR_IPI:
            result = int(self.ipi_pending)
            self.ipi_pending = False
        elif call is SbiCall.SEND_IPI:
            self.ipi_pending = True
            result = 0
        elif call is SbiCall.SHUTDOWN:
            self.is_shutdown = True
            result = 0
        else:
            # Fences have nothing to synchronise on a single hart.
            result = 0
        return result & _MASK64

    def console_putchar(self, ch: int | str) -> None:
        """Write one byte to the console."""
        code = ord(ch) if isinstance(ch, str) else operator.index(ch)
        self.call(SbiCall.CONSOLE_PUTCHAR, code & 0xFF)

    def console_getchar(self) -> int:
        """Read one byte from the console, or -1 when none is waiting."""
        value = self.call(SbiCall.CONSOLE_GETCHAR) & 0xFFFFFFFF
        return value - (1 << 32) if value >> 31 else value

    def set_timer(self, value: int) -> None:
        """Program the next timer event."""
        self.call(SbiCall.SET_TIMER, value)

    def shutdown(self) -> None:
        """Power the machine off."""
        self.call(SbiCall.SHUTDOWN)