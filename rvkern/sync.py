"""Supervisor interrupt enable state and a critical-section guard."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

SSTATUS_SIE = 0x00000002


@dataclass
class InterruptState:
    """The ``sstatus`` register of one hart, as far as interrupts go."""

    sstatus: int = 0

    @property
    def enabled(self) -> bool:
        """Whether supervisor interrupts are enabled."""
        return bool(self.sstatus & SSTATUS_SIE)

    def enable(self) -> None:
        """Enable supervisor interrupts."""
        self.sstatus |= SSTATUS_SIE

    def disable(self) -> None:
        """Disable supervisor interrupts."""
        self.sstatus &= ~SSTATUS_SIE


@contextmanager
def local_intr_save(state: InterruptState) -> Iterator[bool]:
    """Run the block with interrupts off, restoring them afterwards.

    Yields whether interrupts were enabled on entry.
    """
    flag = state.enabled
    if flag:
        state.disable()
    try:
        yield flag
    finally:
        if flag:
            state.enable()