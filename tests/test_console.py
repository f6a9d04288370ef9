import io

import pytest

from rvkern.console import BUFSIZE, Console, KernelPanic
from rvkern.sbi import Sbi


def make(input_chars=""):
    sbi = Sbi(output=io.StringIO(), input_chars=input_chars)
    return Console(sbi), sbi.output


def test_cprintf_counts_characters():
    console, out = make()
    count = console.cprintf("%d ticks\n", 100)
    assert out.getvalue() == "100 ticks\n"
    assert count == len(out.getvalue())


def test_cputs_appends_newline():
    console, out = make()
    assert console.cputs("hi") == 3
    assert out.getvalue() == "hi\n"


def test_cputs_stops_at_nul():
    console, out = make()
    console.cputs("(THU.CST) os is loading ...\0")
    assert out.getvalue() == "(THU.CST) os is loading ...\n"


def test_getchar_skips_zero():
    console, _ = make("\0\0A")
    assert console.getchar() == ord("A")


def test_getchar_reports_end_of_input():
    console, _ = make()
    assert console.getchar() < 0


def test_readline_echoes_prompt_and_input():
    console, out = make("help\n")
    assert console.readline("K> ") == "help"
    assert out.getvalue() == "K> help\n"


def test_readline_backspace():
    console, _ = make("ab\bc\r")
    assert console.readline() == "ac"


def test_readline_backspace_on_empty_line_is_ignored():
    console, out = make("\bx\n")
    assert console.readline() == "x"
    assert out.getvalue() == "x\n"


def test_readline_ignores_control_characters():
    console, _ = make("a\tb\n")
    assert console.readline() == "ab"


def test_readline_end_of_input():
    console, _ = make("abc")
    assert console.readline() is None


def test_readline_truncates_long_lines():
    console, _ = make("x" * (BUFSIZE + 50) + "\n")
    line = console.readline()
    assert len(line) == BUFSIZE - 1
    assert set(line) == {"x"}


def test_panic_reports_and_raises():
    console, out = make()
    console.interrupts.enable()
    with pytest.raises(KernelPanic) as info:
        console.panic("init.c", 12, "boom %d", 7)
    assert info.value.message == "boom 7"
    assert info.value.line == 12
    assert out.getvalue() == "kernel panic at init.c:12:\n    boom 7\n"
    assert not console.interrupts.enabled
    assert console.panicked


def test_second_panic_is_silent():
    console, out = make()
    with pytest.raises(KernelPanic):
        console.panic("a.c", 1, "first")
    before = out.getvalue()
    with pytest.raises(KernelPanic):
        console.panic("b.c", 2, "second")
    assert out.getvalue() == before


def test_warn_does_not_raise():
    console, out = make()
    console.warn("pmm.c", 5, "low on %s", "memory")
    assert out.getvalue() == "kernel warning at pmm.c:5:\n    low on memory\n"
    assert not console.panicked