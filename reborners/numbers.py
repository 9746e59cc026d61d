"""Number parsing and printing helpers."""

from __future__ import annotations

import sys
from typing import TextIO

_SPACES = " \t\n\r\v\f"
_DIGITS = "0123456789"


def atoi(text: str) -> int:
    """Parse a leading integer after optional spaces and one sign; 0 if none."""
    pos = 0
    while pos < len(text) and text[pos] in _SPACES:
        pos += 1
    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    value = 0
    while pos < len(text) and text[pos] in _DIGITS:
        value = value * 10 + int(text[pos])
        pos += 1
    return -value if negative else value


def itoa(number: int) -> str:
    """Render an integer in decimal."""
    return str(int(number))


def put_number(number: int, stream: TextIO | None = None) -> None:
    """Write an integer in decimal to ``stream``."""
    (sys.stdout if stream is None else stream).write(itoa(number))


def put_line(text: str | None, stream: TextIO | None = None) -> None:
    """Write ``text`` followed by a newline; None writes just the newline."""
    out = sys.stdout if stream is None else stream
    if text is not None:
        out.write(text)
    out.write("\n")