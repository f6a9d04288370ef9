"""Kernel-style formatted output: the %-escapes understood by the console."""

from __future__ import annotations

import enum
import operator
from typing import Any, Callable, Iterator

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
_DIGITS = "0123456789abcdef"


class ErrorCode(enum.IntEnum):
    """Kernel error codes; functions report them negated."""

    UNSPECIFIED = 1
    BAD_PROC = 2
    INVAL = 3
    NO_MEM = 4
    NO_FREE_PROC = 5
    FAULT = 6


MAXERROR = max(ErrorCode)

_ERROR_STRINGS = {
    ErrorCode.UNSPECIFIED: "unspecified error",
    ErrorCode.BAD_PROC: "bad process",
    ErrorCode.INVAL: "invalid parameter",
    ErrorCode.NO_MEM: "out of memory",
    ErrorCode.NO_FREE_PROC: "out of processes",
    ErrorCode.FAULT: "segmentation fault",
}


def error_message(code: int) -> str:
    """Describe an error code; a negative code means the same as its positive."""
    err = abs(operator.index(code))
    text = _ERROR_STRINGS.get(err) if err <= MAXERROR else None
    return text if text is not None else f"error {err}"


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _next_arg(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _print_number(putch: Callable[[str], Any], num: int, base: int, width: int, padc: str) -> None:
    digits = []
    while True:
        num, mod = divmod(num, base)
        digits.append(_DIGITS[mod])
        if num == 0:
            break
    for _ in range(width - len(digits)):
        putch(padc)
    for digit in reversed(digits):
        putch(digit)


def _print_string(
    putch: Callable[[str], Any], value: Any, width: int, precision: int, padc: str, altflag: bool
) -> None:
    if value is None:
        text = "(null)"
    elif isinstance(value, str):
        text = value.split("\0", 1)[0]
    else:
        raise TypeError(f"%s expects a string, not {type(value).__name__}")

    if width > 0 and padc != "-":
        shown = len(text) if precision < 0 else min(len(text), precision)
        width -= shown
        while width > 0:
            putch(padc)
            width -= 1
    for ch in text:
        if precision >= 0:
            precision -= 1
            if precision < 0:
                break
        putch("?" if altflag and not (" " <= ch <= "~") else ch)
        width -= 1
    while width > 0:
        putch(" ")
        width -= 1


def printfmt(putch: Callable[[str], Any], fmt: str, *args: Any) -> None:
    """Format ``fmt`` with ``args`` and hand each character to ``putch``."""
    remaining = iter(args)
    length = len(fmt)
    pos = 0

    def at(index: int) -> str:
        return fmt[index] if index < length else "\0"

    while True:
        while True:
            ch = at(pos)
            pos += 1
            if ch == "\0":
                return
            if ch == "%":
                break
            putch(ch)

        start = pos
        padc = " "
        width = precision = -1
        lflag = 0
        altflag = False

        while True:
            ch = at(pos)
            pos += 1
            set_precision = False

            if ch == "-":
                padc = "-"
                continue
            if ch == "0":
                padc = "0"
                continue
            if "1" <= ch <= "9":
                precision = 0
                while True:
                    precision = precision * 10 + int(ch)
                    ch = at(pos)
                    if not "0" <= ch <= "9":
                        break
                    pos += 1
                set_precision = True
            elif ch == "*":
                precision = _signed(operator.index(_next_arg(remaining)), 32)
                set_precision = True
            elif ch == ".":
                if width < 0:
                    width = 0
                continue
            elif ch == "#":
                altflag = True
                continue
            elif ch == "l":
                lflag += 1
                continue

            if set_precision:
                if width < 0:
                    width, precision = precision, -1
                continue
            break

        if ch == "c":
            value = _next_arg(remaining)
            if isinstance(value, str) and len(value) == 1:
                putch(value)
            else:
                putch(chr(operator.index(value) & 0xFF))
        elif ch == "e":
            err = _signed(operator.index(_next_arg(remaining)), 32)
            for out in error_message(err):
                putch(out)
        elif ch == "s":
            _print_string(putch, _next_arg(remaining), width, precision, padc, altflag)
        elif ch == "d":
            num = _signed(operator.index(_next_arg(remaining)), 64 if lflag else 32)
            if num < 0:
                putch("-")
                num = -num
            _print_number(putch, num, 10, width, padc)
        elif ch in "uox":
            mask = _MASK64 if lflag else _MASK32
            num = operator.index(_next_arg(remaining)) & mask
            _print_number(putch, num, {"u": 10, "o": 8, "x": 16}[ch], width, padc)
        elif ch == "p":
            putch("0")
            putch("x")
            value = _next_arg(remaining)
            num = 0 if value is None else operator.index(value) & _MASK64
            _print_number(putch, num, 16, width, padc)
        elif ch == "%":
            putch("%")
        else:
            # Unknown escape: print the '%' and re-read what followed it literally.
            putch("%")
            pos = start


def kformat(fmt: str, *args: Any) -> str:
    """Return the text that ``printfmt`` would produce."""
    out: list[str] = []
    printfmt(out.append, fmt, *args)
    return "".join(out)


def snprintf(size: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Format into a buffer of ``size`` bytes, terminator included.

    Returns the text that fits and the length the full text would have had.
    """
    if size < 1:
        raise ValueError(f"buffer size must be at least 1, got {size}")
    text = kformat(fmt, *args)
    return text[: size - 1], len(text)