import pytest

from rvkern.fmt import ErrorCode, error_message, kformat, printfmt, snprintf


def test_error_messages_from_table():
    assert error_message(ErrorCode.NO_MEM) == "out of memory"
    assert error_message(ErrorCode.INVAL) == "invalid parameter"
    assert error_message(-ErrorCode.BAD_PROC) == error_message(ErrorCode.BAD_PROC)


def test_error_message_unknown_code():
    assert error_message(0) == "error 0"
    assert error_message(-7) == error_message(7)
    assert error_message(7).startswith("error ")


def test_percent_e_accepts_negative_codes():
    assert kformat("%e", -ErrorCode.FAULT) == "segmentation fault"
    assert kformat("%e", 40) == error_message(40)


@pytest.mark.parametrize("n", [0, 1, 9, 10, 255, 4096, 123456789])
def test_unsigned_bases_round_trip(n):
    assert int(kformat("%x", n), 16) == n
    assert int(kformat("%o", n), 8) == n
    assert int(kformat("%u", n), 10) == n


@pytest.mark.parametrize("n", [0, 7, -7, 2**31 - 1, -(2**31)])
def test_signed_decimal(n):
    assert kformat("%d", n) == str(n)


def test_int_width_truncation():
    assert kformat("%x", -1) == format(2**32 - 1, "x")
    assert kformat("%lx", -1) == format(2**64 - 1, "x")
    assert kformat("%d", 2**31) == str(-(2**31))
    assert kformat("%lld", -(2**63)) == str(-(2**63))


def test_number_padding():
    assert kformat("%5d", 42) == "42".rjust(5)
    assert kformat("%05d", 42) == "42".rjust(5, "0")
    assert kformat("%-5d", 42) == "42".rjust(5, "-")
    assert kformat("%*d", 4, 7) == "7".rjust(4)
    assert kformat("%1d", 12345) == "12345"


def test_string_formats():
    assert kformat("%s", None) == "(null)"
    assert kformat("%6s|", "ab") == "ab".rjust(6) + "|"
    assert kformat("%-6s|", "ab") == "ab".ljust(6) + "|"
    assert kformat("%.2s", "abcdef") == "ab"
    assert kformat("%5.2s", "abcdef") == "ab".rjust(5)
    assert kformat("%#s", "a\tb") == "a?b"
    assert kformat("%s", "ab\0cd") == "ab"


def test_pointer_and_char_and_percent():
    out = kformat("%p", 0x80200000)
    assert out.startswith("0x")
    assert int(out, 16) == 0x80200000
    assert kformat("%c", ord("A")) == "A"
    assert kformat("100%%") == "100%"


def test_unknown_escape_printed_literally():
    assert kformat("%5z") == "%5z"
    assert kformat("x%-q") == "x%-q"
    assert kformat("abc%") == "abc%"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        kformat("%d %d", 1)
    with pytest.raises(TypeError):
        kformat("%d", "text")


def test_printfmt_feeds_putch_one_char_at_a_time():
    chars = []
    printfmt(chars.append, "%s=%d", "x", 5)
    assert all(len(c) == 1 for c in chars)
    assert "".join(chars) == kformat("%s=%d", "x", 5)


def test_snprintf_truncates_but_counts_everything():
    text, count = snprintf(4, "%s", "abcdef")
    assert text == "abc"
    assert count == len("abcdef")
    assert snprintf(1, "%d", 99) == ("", 2)


def test_snprintf_rejects_empty_buffer():
    with pytest.raises(ValueError):
        snprintf(0, "x")