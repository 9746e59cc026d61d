"""Conversion flags and number rendering for the formatted printer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

_TYPES = frozenset("csdiuxXp%")
_SPECS = frozenset("-0.*# +")
_DIGITS = frozenset("0123456789")

_UINT_MASK = 0xFFFFFFFF
_ULONG_MASK = 0xFFFFFFFFFFFFFFFF

NO_PRECISION = -1


@dataclass
class Flags:
    """The options read from one conversion directive."""

    spec: str = ""
    width: int = 0
    left: bool = False
    zero: bool = False
    star: bool = False
    precision: int = NO_PRECISION
    hash: bool = False
    space: bool = False
    plus: bool = False

    def set_left(self) -> None:
        """Left-justify; this cancels zero padding."""
        self.left = True
        self.zero = False

    def set_digit(self, char: str) -> None:
        """Append one decimal digit to the field width.

        Once the width came from ``*`` every digit starts the width over.
        """
        if char not in _DIGITS or len(char) != 1:
            raise ValueError(f"not a digit: {char!r}")
        if self.star:
            self.width = 0
        self.width = self.width * 10 + int(char)

    def set_width(self, value: int) -> None:
        """Take the width from an argument; a negative one left-justifies."""
        self.star = True
        self.width = value
        if self.width < 0:
            self.left = True
            self.width = -self.width


def parse_precision(fmt: str, position: int, args: Iterator, flags: Flags) -> int:
    """Read the precision after the ``.`` at ``position`` into ``flags``.

    A ``*`` takes the precision from ``args`` and the index of the ``*`` is
    returned; otherwise the digits are read and the index of the first
    character after them is returned.
    """
    index = position + 1
    if index < len(fmt) and fmt[index] == "*":
        flags.precision = int(next(args))
        return index
    flags.precision = 0
    while index < len(fmt) and fmt[index] in _DIGITS:
        flags.precision = flags.precision * 10 + int(fmt[index])
        index += 1
    return index


def _single(char: str) -> bool:
    return isinstance(char, str) and len(char) == 1


def is_type(char: str) -> bool:
    """Tell whether ``char`` is a conversion letter."""
    return _single(char) and char in _TYPES


def is_spec(char: str) -> bool:
    """Tell whether ``char`` is a flag, precision or width marker."""
    return _single(char) and char in _SPECS


def is_flag(char: str) -> bool:
    """Tell whether ``char`` may appear inside a conversion directive."""
    return is_type(char) or (_single(char) and char in _DIGITS) or is_spec(char)


def pad(total_width: int, size: int, zero: bool) -> str:
    """Return the padding that widens ``size`` characters to ``total_width``."""
    return ("0" if zero else " ") * max(total_width - size, 0)


def pointer_len(number: int) -> int:
    """Return the number of hexadecimal digits in ``number``."""
    return len(format(number & _ULONG_MASK, "x"))


def signed_to_str(number: int) -> str:
    """Render a signed integer in decimal."""
    return str(int(number))


def unsigned_to_str(number: int) -> str:
    """Render a 32-bit unsigned integer in decimal."""
    return str(int(number) & _UINT_MASK)


def hex_to_str(number: int, upper: bool = False) -> str:
    """Render an unsigned long in hexadecimal, in upper case if asked."""
    return format(int(number) & _ULONG_MASK, "X" if upper else "x")