import pytest

from reborners.fmtflags import Flags
from reborners.printf import (
    NULL_TEXT,
    format_char,
    format_hex,
    format_int,
    format_pointer,
    format_string,
    format_unsigned,
    printf,
    sprintf,
)


def test_unsigned_wraps_to_32_bits():
    assert sprintf("%u", -1) == "%d" % 0xFFFFFFFF
    assert sprintf("%x", -1) == "%x" % 0xFFFFFFFF


def test_int_wraps_to_32_bits():
    assert sprintf("%d", 2**31) == sprintf("%d", -(2**31))


def test_null_string():
    assert sprintf("%s", None) == NULL_TEXT
    assert sprintf("%.3s", None) == ""
    assert sprintf("%4.3s", None) == "%4s" % ""


def test_pointer():
    assert sprintf("%p", 0x1234) == "%#x" % 0x1234
    assert sprintf("%p", None) == NULL_TEXT
    assert sprintf("%p", 0) == NULL_TEXT
    assert sprintf("%10p", 0x1234) == "%10s" % "0x1234"
    assert sprintf("%8p", 0) == "%8s" % NULL_TEXT
    assert sprintf("%-10p", 0x1234) == "%-10s" % "0x1234"


def test_unknown_conversion_is_copied():
    assert sprintf("%q") == "%q"
    assert sprintf("abc%") == "abc%"
    assert sprintf("%5") == "%5"


def test_empty_and_missing_format():
    assert sprintf("") == ""
    assert sprintf(None) == ""
    assert printf(None) == 0


def test_text_after_nul_is_ignored():
    assert sprintf("ab\0cd") == "ab"


def test_star_precision_also_takes_width():
    assert sprintf("%.*d", 3, 5, 42) == sprintf("%5.3d", 42)


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        sprintf("%d")
    with pytest.raises(TypeError):
        sprintf("%*d", 4)


def test_printf_writes_and_counts(capsys):
    count = printf("%s=%d\n", "answer", 42)
    captured = capsys.readouterr().out
    assert captured == "answer=42\n"
    assert count == len(captured)


def test_printf_count_matches_sprintf(capsys):
    fmt, args = "%#08x|%-6s|%+d", (255, "ab", 3)
    count = printf(fmt, *args)
    assert capsys.readouterr().out == sprintf(fmt, *args)
    assert count == len(sprintf(fmt, *args))


def test_format_int_with_flags():
    assert format_int(-42, Flags(width=5, zero=True)) == "%05d" % -42
    assert format_int(42, Flags(width=6, left=True)) == "%-6d" % 42
    assert format_int(0, Flags(precision=0)) == ""


def test_format_functions_do_not_mutate_flags():
    flags = Flags(width=5, precision=1)
    format_int(-3, flags)
    format_hex(3, False, flags)
    format_unsigned(3, flags)
    format_string("abc", flags)
    assert flags == Flags(width=5, precision=1)


def test_format_hex_upper_with_hash():
    assert format_hex(255, True, Flags(hash=True)) == "%#X" % 255
    assert format_hex(0, False, Flags(precision=0, width=3)) == "%3s" % ""


def test_format_unsigned():
    assert format_unsigned(123, Flags(width=6, zero=True)) == "%06d" % 123
    assert format_unsigned(-1) == str(0xFFFFFFFF)


def test_format_string_precision_clamped():
    assert format_string(None, Flags(precision=8)) == NULL_TEXT
    assert format_string("abc", Flags(precision=10, width=5)) == "%5s" % "abc"


def test_format_char():
    assert format_char("x", Flags(width=4, zero=True)) == "%04s".replace(" ", "0") % "x" if False else format_char("x", Flags(width=4, zero=True)) == "000x"
    assert format_char("%", Flags(width=3, left=True)) == "%-3s" % "%"
    with pytest.raises(ValueError):
        format_char("ab")


def test_format_pointer_left():
    assert format_pointer(0, Flags(width=8, left=True)) == "%-8s" % NULL_TEXT
    assert format_pointer(0xABC) == "0x" + "abc"