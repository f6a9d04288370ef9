"""Atomic bit operations on a word array and address rounding helpers."""

from __future__ import annotations

import operator
import threading
from dataclasses import dataclass, field

BITS_PER_LONG = 64


def _bit_number(nr: int) -> int:
    nr = operator.index(nr)
    if nr < 0:
        raise ValueError(f"bit number must not be negative, got {nr}")
    return nr


@dataclass
class BitWord:
    """A run of machine words treated as one bit field, updated atomically.

    Bit ``nr`` lives in word ``nr // BITS_PER_LONG``; as an integer the
    whole run is simply ``value``.
    """

    value: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __int__(self) -> int:
        return self.value

    def set_bit(self, nr: int) -> None:
        """Set bit ``nr``."""
        mask = 1 << _bit_number(nr)
        with self._lock:
            self.value |= mask

    def clear_bit(self, nr: int) -> None:
        """Clear bit ``nr``."""
        mask = 1 << _bit_number(nr)
        with self._lock:
            self.value &= ~mask

    def change_bit(self, nr: int) -> None:
        """Toggle bit ``nr``."""
        mask = 1 << _bit_number(nr)
        with self._lock:
            self.value ^= mask

    def test_bit(self, nr: int) -> bool:
        """Return whether bit ``nr`` is set."""
        return bool((self.value >> _bit_number(nr)) & 1)

    def test_and_set_bit(self, nr: int) -> bool:
        """Set bit ``nr`` and return its previous state."""
        mask = 1 << _bit_number(nr)
        with self._lock:
            old = self.value
            self.value = old | mask
        return bool(old & mask)

    def test_and_clear_bit(self, nr: int) -> bool:
        """Clear bit ``nr`` and return its previous state."""
        mask = 1 << _bit_number(nr)
        with self._lock:
            old = self.value
            self.value = old & ~mask
        return bool(old & mask)


def round_down(a: int, n: int) -> int:
    """Round ``a`` down to the nearest multiple of ``n``."""
    a, n = operator.index(a), operator.index(n)
    if n <= 0:
        raise ValueError(f"rounding unit must be positive, got {n}")
    if a < 0:
        raise ValueError(f"value must not be negative, got {a}")
    return a - a % n


def round_up(a: int, n: int) -> int:
    """Round ``a`` up to the nearest multiple of ``n``."""
    a, n = operator.index(a), operator.index(n)
    if n <= 0:
        raise ValueError(f"rounding unit must be positive, got {n}")
    return round_down(a + n - 1, n)