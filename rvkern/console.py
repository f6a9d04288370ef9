"""Console input and output over the firmware, and kernel panics and warnings."""

from __future__ import annotations

from typing import Any, Optional, Union

from .fmt import kformat, printfmt
from .sbi import Sbi
from .sync import InterruptState

BUFSIZE = 1024


class KernelPanic(RuntimeError):
    """An unrecoverable kernel error."""

    def __init__(self, message: str, file: str, line: int) -> None:
        super().__init__(f"kernel panic at {file}:{line}: {message}")
        self.message = message
        self.file = file
        self.line = line


class Console:
    """Character console of the kernel, backed by firmware calls."""

    def __init__(self, sbi: Sbi) -> None:
        self.sbi = sbi
        self.interrupts = InterruptState()
        self.panicked = False

    def putc(self, c: Union[int, str]) -> None:
        """Write one character."""
        self.sbi.console_putchar(c)

    def getc(self) -> int:
        """Read one character code; 0 or a negative value when none is waiting."""
        return self.sbi.console_getchar()

    def write(self, text: str) -> int:
        """Write already formatted text; returns the number of characters."""
        for ch in text:
            self.putc(ch)
        return len(text)

    def cprintf(self, fmt: str, *args: Any) -> int:
        """Format and write text; returns the number of characters written."""
        count = 0

        def putch(ch: str) -> None:
            nonlocal count
            self.putc(ch)
            count += 1

        printfmt(putch, fmt, *args)
        return count

    def cputs(self, s: str) -> int:
        """Write a string followed by a newline; returns the characters written."""
        text = s.split("\0", 1)[0]
        return self.write(text) + self.write("\n")

    def getchar(self) -> int:
        """Read a character, skipping zeros; negative when input has ended."""
        while True:
            c = self.getc()
            if c != 0:
                return c

    def readline(self, prompt: Optional[str] = None) -> Optional[str]:
        """Read an echoed line; None when input ends first.

        Characters past the buffer limit are dropped; backspace erases one.
        """
        if prompt is not None:
            self.cprintf("%s", prompt)
        buf: list[str] = []
        while True:
            c = self.getchar()
            if c < 0:
                return None
            if c >= 0x20 and len(buf) < BUFSIZE - 1:
                self.putc(c)
                buf.append(chr(c))
            elif c == 0x08 and buf:
                self.putc(c)
                buf.pop()
            elif c in (0x0A, 0x0D):
                self.putc(c)
                return "".join(buf)

    def panic(self, file: str, line: int, fmt: str, *args: Any) -> None:
        """Report a fatal error, disable interrupts and raise KernelPanic.

        Only the first panic is reported; later ones raise silently.
        """
        message = kformat(fmt, *args)
        if not self.panicked:
            self.panicked = True
            self.cprintf("kernel panic at %s:%d:\n    ", file, line)
            self.write(message)
            self.cprintf("\n")
        self.interrupts.disable()
        raise KernelPanic(message, file, line)

    def warn(self, file: str, line: int, fmt: str, *args: Any) -> None:
        """Report a problem and carry on."""
        self.cprintf("kernel warning at %s:%d:\n    ", file, line)
        self.cprintf(fmt, *args)
        self.cprintf("\n")