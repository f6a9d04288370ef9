"""NUL-terminated string and raw memory helpers with C comparison semantics."""

from __future__ import annotations

import operator
from itertools import islice, zip_longest
from typing import Union

CString = Union[str, bytes, bytearray, memoryview]

_MASK64 = (1 << 64) - 1


def _codes(s: CString) -> list[int]:
    if isinstance(s, str):
        return [ord(ch) for ch in s]
    return list(bytes(s))


def _terminated(s: CString) -> list[int]:
    """Code units of ``s`` up to, not including, the first NUL."""
    codes = _codes(s)
    try:
        return codes[: codes.index(0)]
    except ValueError:
        return codes


def _char_code(c: Union[str, int]) -> int:
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return ord(c)
    return operator.index(c)


def _size(n: int, what: str) -> int:
    n = operator.index(n)
    if n < 0:
        raise ValueError(f"{what} must not be negative, got {n}")
    return n


def _signed64(value: int) -> int:
    value &= _MASK64
    return value - (1 << 64) if value >> 63 else value


def strnlen(s: CString, maxlen: int) -> int:
    """Length of ``s`` up to its first NUL, but at most ``maxlen``."""
    return min(len(_terminated(s)), _size(maxlen, "maxlen"))


def strcmp(s1: CString, s2: CString) -> int:
    """Compare two strings as unsigned characters; 0 when equal."""
    for x, y in zip_longest(_terminated(s1), _terminated(s2), fillvalue=0):
        if x != y:
            return x - y
    return 0


def strncmp(s1: CString, s2: CString, n: int) -> int:
    """Compare at most ``n`` characters of two strings."""
    pairs = zip_longest(_terminated(s1), _terminated(s2), fillvalue=0)
    for x, y in islice(pairs, _size(n, "n")):
        if x != y:
            return x - y
    return 0


def strfind(s: CString, c: Union[str, int]) -> int:
    """Index of the first ``c`` in ``s``, or of its terminating NUL if absent."""
    codes = _terminated(s)
    target = _char_code(c)
    try:
        return codes.index(target)
    except ValueError:
        return len(codes)


def strtol(s: CString, base: int = 0) -> tuple[int, int]:
    """Parse a long integer from ``s``.

    Returns the value and the index of the first character not consumed.
    Overflow wraps around a signed 64-bit long instead of being reported.
    """
    codes = _terminated(s)
    base = operator.index(base)

    def at(index: int) -> int:
        return codes[index] if index < len(codes) else 0

    pos = 0
    while at(pos) in (ord(" "), ord("\t")):
        pos += 1

    neg = False
    if at(pos) == ord("+"):
        pos += 1
    elif at(pos) == ord("-"):
        pos += 1
        neg = True

    if base in (0, 16) and at(pos) == ord("0") and at(pos + 1) == ord("x"):
        pos += 2
        base = 16
    elif base == 0 and at(pos) == ord("0"):
        pos += 1
        base = 8
    elif base == 0:
        base = 10

    val = 0
    while True:
        ch = at(pos)
        if ord("0") <= ch <= ord("9"):
            dig = ch - ord("0")
        elif ord("a") <= ch <= ord("z"):
            dig = ch - ord("a") + 10
        elif ord("A") <= ch <= ord("Z"):
            dig = ch - ord("A") + 10
        else:
            break
        if dig >= base:
            break
        pos += 1
        val = (val * base + dig) & _MASK64

    return _signed64(-val if neg else val), pos


def memmove(buf: bytearray, dst: int, src: int, n: int) -> None:
    """Copy ``n`` bytes of ``buf`` from ``src`` to ``dst``; the ranges may overlap."""
    n = _size(n, "n")
    dst = _size(dst, "dst")
    src = _size(src, "src")
    if src + n > len(buf) or dst + n > len(buf):
        raise IndexError(
            f"copy of {n} bytes from {src} to {dst} exceeds a buffer of {len(buf)} bytes"
        )
    buf[dst : dst + n] = bytes(buf[src : src + n])


def memcmp(v1: bytes | bytearray | memoryview, v2: bytes | bytearray | memoryview, n: int) -> int:
    """Compare the first ``n`` bytes of two blocks as unsigned values."""
    n = _size(n, "n")
    a, b = bytes(v1), bytes(v2)
    if n > len(a) or n > len(b):
        raise IndexError(f"cannot compare {n} bytes of blocks of {len(a)} and {len(b)} bytes")
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return x - y
    return 0