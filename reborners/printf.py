"""A small printf: ``%c %s %d %i %u %x %X %p %%`` with flags, width and precision."""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import Any, Iterable

from reborners.fmtflags import (
    Flags,
    hex_to_str,
    is_flag,
    is_type,
    pad,
    parse_precision,
    pointer_len,
    signed_to_str,
    unsigned_to_str,
)
from reborners.textutils import is_digit

NULL_TEXT = "(null)"

_UINT_MASK = 0xFFFFFFFF
_ULONG_MASK = 0xFFFFFFFFFFFFFFFF
_INT_SPAN = 1 << 32
_INT_HALF = 1 << 31


class _Arguments:
    """Iterator over the values a format consumes; running out is a TypeError."""

    def __init__(self, values: Iterable[Any]) -> None:
        self._values = iter(values)

    def __iter__(self) -> _Arguments:
        return self

    def __next__(self) -> Any:
        try:
            return next(self._values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None


def _copy(flags: Flags | None) -> Flags:
    return Flags() if flags is None else replace(flags)


def _to_int32(number: int) -> int:
    return (int(number) + _INT_HALF) % _INT_SPAN - _INT_HALF


def format_char(char: str | int, flags: Flags | None = None) -> str:
    """Render one character padded to the field width."""
    flags = _copy(flags)
    if isinstance(char, int):
        char = chr(char & 0xFF)
    elif len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    padding = pad(flags.width, 1, flags.zero)
    return char + padding if flags.left else padding + char


def format_string(text: str | None, flags: Flags | None = None) -> str:
    """Render a string, cut to the precision and padded to the width."""
    flags = _copy(flags)
    if text is None and 0 <= flags.precision < len(NULL_TEXT):
        return pad(flags.width, 0, False)
    if text is None:
        text = NULL_TEXT
    precision = flags.precision
    if precision >= 0 and precision > len(text):
        precision = len(text)
    body = text[:precision] if precision >= 0 else text
    shown = precision if precision >= 0 else len(text)
    padding = pad(flags.width, shown, False)
    return body + padding if flags.left else padding + body


def _sign_before_zeros(number: int, flags: Flags) -> str:
    if number < 0 and flags.precision == -1:
        flags.width -= 1
        return "-"
    if flags.plus:
        return "+"
    if flags.space:
        flags.width -= 1
        return " "
    return ""


def _int_body(digits: str, number: int, flags: Flags) -> str:
    if number < 0:
        sign = "-" if (not flags.zero or flags.precision >= 0) else ""
    elif flags.plus and not flags.zero:
        sign = "+"
    elif flags.space and not flags.zero:
        sign = " "
    else:
        sign = ""
    zeros = ""
    if flags.precision >= 0:
        zeros = pad(flags.precision - 1, len(digits) - 1, True)
    return sign + zeros + digits


def format_int(number: int, flags: Flags | None = None) -> str:
    """Render a signed 32-bit integer in decimal."""
    flags = _copy(flags)
    number = _to_int32(number)
    if number < 0 and not flags.zero:
        flags.width -= 1
    if flags.precision == 0 and number == 0:
        return pad(flags.width, 0, False)
    digits = signed_to_str(abs(number))
    parts = []
    if flags.zero:
        parts.append(_sign_before_zeros(number, flags))
    if flags.left:
        parts.append(_int_body(digits, number, flags))
    if 0 <= flags.precision < len(digits):
        flags.precision = len(digits)
    if flags.precision >= 0:
        width = flags.width - flags.precision
        if number < 0 and not flags.left:
            width -= 1
        parts.append(pad(width, 0, False))
    else:
        width = flags.width - int(flags.plus) - int(flags.space)
        parts.append(pad(width, len(digits), flags.zero))
    if not flags.left:
        parts.append(_int_body(digits, number, flags))
    return "".join(parts)


def _unsigned_body(digits: str, flags: Flags) -> str:
    zeros = ""
    if flags.precision >= 0:
        zeros = pad(flags.precision - 1, len(digits) - 1, True)
    return zeros + digits


def format_unsigned(number: int, flags: Flags | None = None) -> str:
    """Render an unsigned 32-bit integer in decimal."""
    flags = _copy(flags)
    number = int(number) & _UINT_MASK
    if flags.precision == 0 and number == 0:
        return pad(flags.width, 0, False)
    digits = unsigned_to_str(number)
    parts = []
    if flags.left:
        parts.append(_unsigned_body(digits, flags))
    if 0 <= flags.precision < len(digits):
        flags.precision = len(digits)
    if flags.precision >= 0:
        parts.append(pad(flags.width - flags.precision, 0, False))
    else:
        parts.append(pad(flags.width, len(digits), flags.zero))
    if not flags.left:
        parts.append(_unsigned_body(digits, flags))
    return "".join(parts)


def _hex_body(digits: str, number: int, prefix: str, flags: Flags) -> str:
    lead = prefix if (not flags.zero and flags.hash and number) else ""
    zeros = ""
    if flags.precision >= 0:
        zeros = pad(flags.precision - 1, len(digits) - 1, True)
    return lead + zeros + digits


def format_hex(number: int, upper: bool = False, flags: Flags | None = None) -> str:
    """Render an unsigned 32-bit integer in hexadecimal."""
    flags = _copy(flags)
    number = int(number) & _UINT_MASK
    if flags.precision == 0 and number == 0:
        return pad(flags.width, 0, False)
    digits = hex_to_str(number, upper)
    prefix = "0X" if upper else "0x"
    parts = []
    if flags.zero and flags.hash and number:
        parts.append(prefix)
    if flags.left:
        parts.append(_hex_body(digits, number, prefix, flags))
    if 0 <= flags.precision < len(digits):
        flags.precision = len(digits)
    if flags.precision >= 0:
        parts.append(pad(flags.width - flags.precision, 0, False))
    else:
        parts.append(pad(flags.width, len(digits) + 2 * int(flags.hash), flags.zero))
    if not flags.left:
        parts.append(_hex_body(digits, number, prefix, flags))
    return "".join(parts)


def format_pointer(address: int | None, flags: Flags | None = None) -> str:
    """Render an address as ``0x`` and hex digits; a null address as ``(null)``."""
    flags = _copy(flags)
    address = 0 if address is None else int(address) & _ULONG_MASK
    if address == 0:
        width = flags.width - (len(NULL_TEXT) - 1)
        text = NULL_TEXT
    else:
        width = flags.width - 2
        text = "0x" + hex_to_str(address)
    padding = pad(width, pointer_len(address), False)
    return text + padding if flags.left else padding + text


def _read_directive(fmt: str, index: int, args: _Arguments, flags: Flags) -> int:
    """Read flags after the ``%`` at ``index``; return where reading stopped."""
    length = len(fmt)
    while True:
        index += 1
        if index >= length or not is_flag(fmt[index]):
            return index
        char = fmt[index]
        if char == "-":
            flags.set_left()
        if char == "#":
            flags.hash = True
        if char == " ":
            flags.space = True
        if char == "+":
            flags.plus = True
        if char == "0" and not flags.left and flags.width == 0:
            flags.zero = True
        if char == ".":
            index = parse_precision(fmt, index, args, flags)
        char = fmt[index] if index < length else ""
        if char == "*":
            flags.set_width(int(next(args)))
        if is_digit(char):
            flags.set_digit(char)
        if is_type(char):
            flags.spec = char
            return index


def _convert(kind: str, args: _Arguments, flags: Flags) -> str:
    if kind == "%":
        return format_char("%", flags)
    value = next(args)
    if kind == "c":
        return format_char(value, flags)
    if kind == "s":
        return format_string(value, flags)
    if kind in ("d", "i"):
        return format_int(value, flags)
    if kind == "x":
        return format_hex(value, False, flags)
    if kind == "X":
        return format_hex(value, True, flags)
    if kind == "u":
        return format_unsigned(value, flags)
    return format_pointer(value, flags)


def sprintf(fmt: str | None, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text.

    Raises TypeError when the format asks for more arguments than given.
    """
    if not fmt:
        return ""
    fmt = fmt.split("\0", 1)[0]
    values = _Arguments(args)
    parts = []
    index = 0
    length = len(fmt)
    while index < length:
        char = fmt[index]
        if char == "%" and index + 1 < length:
            flags = Flags()
            stopped = _read_directive(fmt, index, values, flags)
            if flags.spec:
                index = stopped
            current = fmt[index] if index < length else ""
            if current and flags.spec and is_type(current):
                parts.append(_convert(current, values, flags))
            elif current:
                parts.append(current)
        else:
            parts.append(char)
        index += 1
    return "".join(parts)


def printf(fmt: str | None, *args: Any) -> int:
    """Write the formatted text to standard output; return its length."""
    text = sprintf(fmt, *args)
    if text:
        sys.stdout.write(text)
    return len(text)