"""Trap frames and the dispatch of interrupts and exceptions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields

from .console import Console

_MASK64 = (1 << 64) - 1
_INTERRUPT_BIT = 1 << 63

SSTATUS_SPP = 0x00000100


class Cause(enum.IntEnum):
    """Exception cause codes."""

    MISALIGNED_FETCH = 0x0
    FAULT_FETCH = 0x1
    ILLEGAL_INSTRUCTION = 0x2
    BREAKPOINT = 0x3
    MISALIGNED_LOAD = 0x4
    FAULT_LOAD = 0x5
    MISALIGNED_STORE = 0x6
    FAULT_STORE = 0x7
    USER_ECALL = 0x8
    SUPERVISOR_ECALL = 0x9
    HYPERVISOR_ECALL = 0xA
    MACHINE_ECALL = 0xB


class Irq(enum.IntEnum):
    """Interrupt cause codes."""

    U_SOFT = 0
    S_SOFT = 1
    H_SOFT = 2
    M_SOFT = 3
    U_TIMER = 4
    S_TIMER = 5
    H_TIMER = 6
    M_TIMER = 7
    U_EXT = 8
    S_EXT = 9
    H_EXT = 10
    M_EXT = 11
    COP = 12
    HOST = 13


@dataclass
class PushRegs:
    """General purpose registers saved on trap entry."""

    zero: int = 0
    ra: int = 0
    sp: int = 0
    gp: int = 0
    tp: int = 0
    t0: int = 0
    t1: int = 0
    t2: int = 0
    s0: int = 0
    s1: int = 0
    a0: int = 0
    a1: int = 0
    a2: int = 0
    a3: int = 0
    a4: int = 0
    a5: int = 0
    a6: int = 0
    a7: int = 0
    s2: int = 0
    s3: int = 0
    s4: int = 0
    s5: int = 0
    s6: int = 0
    s7: int = 0
    s8: int = 0
    s9: int = 0
    s10: int = 0
    s11: int = 0
    t3: int = 0
    t4: int = 0
    t5: int = 0
    t6: int = 0


@dataclass
class TrapFrame:
    """Machine state saved when a trap is taken."""

    gpr: PushRegs = field(default_factory=PushRegs)
    status: int = 0
    epc: int = 0
    badvaddr: int = 0
    cause: int = 0


# Interrupts the kernel recognises; None marks one it handles silently.
_INTERRUPT_MESSAGES = {
    Irq.U_SOFT: "User software interrupt",
    Irq.S_SOFT: "Supervisor software interrupt",
    Irq.H_SOFT: "Hypervisor software interrupt",
    Irq.M_SOFT: "Machine software interrupt",
    Irq.U_TIMER: "User Timer interrupt",
    Irq.S_TIMER: None,
    Irq.H_TIMER: "Hypervisor software interrupt",
    Irq.M_TIMER: "Machine software interrupt",
    Irq.U_EXT: "User software interrupt",
    Irq.S_EXT: "Supervisor external interrupt",
    Irq.H_EXT: "Hypervisor software interrupt",
    Irq.M_EXT: "Machine software interrupt",
}

_KNOWN_EXCEPTIONS = frozenset(Cause)


def trap_in_kernel(tf: TrapFrame) -> bool:
    """Whether the trap was taken while in supervisor mode."""
    return (tf.status & SSTATUS_SPP) != 0


def print_regs(console: Console, gpr: PushRegs) -> None:
    """Print every saved general purpose register."""
    for reg in fields(gpr):
        console.cprintf(f"  {reg.name:<9}0x%08x\n", getattr(gpr, reg.name))


def print_trapframe(console: Console, tf: TrapFrame) -> None:
    """Print a trap frame and its registers."""
    console.cprintf("trapframe at %p\n", id(tf))
    print_regs(console, tf.gpr)
    console.cprintf("  status   0x%08x\n", tf.status)
    console.cprintf("  epc      0x%08x\n", tf.epc)
    console.cprintf("  badvaddr 0x%08x\n", tf.badvaddr)
    console.cprintf("  cause    0x%08x\n", tf.cause)


def interrupt_handler(console: Console, tf: TrapFrame) -> None:
    """Handle an interrupt; unknown ones have their frame printed."""
    cause = tf.cause & (_INTERRUPT_BIT - 1)
    if cause in _INTERRUPT_MESSAGES:
        message = _INTERRUPT_MESSAGES[Irq(cause)]
        if message is not None:
            console.cprintf("%s\n", message)
    else:
        print_trapframe(console, tf)


def exception_handler(console: Console, tf: TrapFrame) -> None:
    """Handle an exception; unknown ones have their frame printed."""
    if (tf.cause & _MASK64) not in _KNOWN_EXCEPTIONS:
        print_trapframe(console, tf)


def trap(console: Console, tf: TrapFrame) -> None:
    """Dispatch a trap to the interrupt or exception handler."""
    if tf.cause & _MASK64 & _INTERRUPT_BIT:
        interrupt_handler(console, tf)
    else:
        exception_handler(console, tf)