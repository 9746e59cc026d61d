"""ASCII character classes and small string helpers."""

from __future__ import annotations

from typing import Callable

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_DIGITS = "0123456789"
_SPACES = "\t\n\v\f\r "
_CASE_OFFSET = 32


def _is_single(char: str) -> bool:
    return isinstance(char, str) and len(char) == 1


def is_alpha(char: str) -> bool:
    """Tell whether ``char`` is an ASCII letter."""
    return _is_single(char) and (char in _UPPER or char in _LOWER)


def is_digit(char: str) -> bool:
    """Tell whether ``char`` is an ASCII decimal digit."""
    return _is_single(char) and char in _DIGITS


def is_alnum(char: str) -> bool:
    """Tell whether ``char`` is an ASCII letter or digit."""
    return is_alpha(char) or is_digit(char)


def is_ascii(char: str) -> bool:
    """Tell whether ``char`` lies in the 7-bit ASCII range."""
    return _is_single(char) and 0 <= ord(char) <= 127


def is_print(char: str) -> bool:
    """Tell whether ``char`` is a printable ASCII character."""
    return _is_single(char) and 32 <= ord(char) <= 126


def is_space(char: str) -> bool:
    """Tell whether ``char`` is ASCII white space."""
    return _is_single(char) and char in _SPACES


def to_upper(char: str) -> str:
    """Upper-case an ASCII lower-case letter; anything else is returned as is."""
    if _is_single(char) and char in _LOWER:
        return chr(ord(char) - _CASE_OFFSET)
    return char


def to_lower(char: str) -> str:
    """Lower-case an ASCII upper-case letter; anything else is returned as is."""
    if _is_single(char) and char in _UPPER:
        return chr(ord(char) + _CASE_OFFSET)
    return char


def _is_terminator(char: str) -> bool:
    return char in ("", "\0")


def strchr(text: str, char: str) -> int | None:
    """Return the index of the first ``char`` in ``text``, or None.

    Searching for the terminator (``""`` or ``"\\0"``) gives ``len(text)``.
    """
    if _is_terminator(char):
        return len(text)
    index = text.find(char)
    return None if index == -1 else index


def strrchr(text: str, char: str) -> int | None:
    """Return the index of the last ``char`` in ``text``, or None.

    Searching for the terminator (``""`` or ``"\\0"``) gives ``len(text)``.
    """
    if _is_terminator(char):
        return len(text)
    index = text.rfind(char)
    return None if index == -1 else index


def _code_at(text: str, index: int) -> int:
    return ord(text[index]) if index < len(text) else 0


def strcmp(first: str, second: str) -> int:
    """Compare two strings; return the code difference at the first mismatch."""
    index = 0
    while (
        index < len(first)
        and index < len(second)
        and first[index] == second[index]
    ):
        index += 1
    return _code_at(first, index) - _code_at(second, index)


def strncmp(first: str, second: str, count: int) -> int:
    """Compare at most ``count`` characters of two strings."""
    if count <= 0:
        return 0
    index = 0
    while (
        index < len(first)
        and index < len(second)
        and index < count - 1
        and first[index] == second[index]
    ):
        index += 1
    return _code_at(first, index) - _code_at(second, index)


def strnstr(haystack: str, needle: str, count: int) -> int | None:
    """Find ``needle`` wholly inside the first ``count`` characters of ``haystack``.

    An empty needle is found at index 0.
    """
    if not needle:
        return 0
    index = haystack[: max(count, 0)].find(needle)
    return None if index == -1 else index


def substr(text: str | None, start: int, length: int) -> str | None:
    """Return up to ``length`` characters of ``text`` from ``start``.

    A start past the end gives an empty string; None gives None.
    """
    if text is None:
        return None
    if start > len(text):
        return ""
    return text[start : start + max(length, 0)]


def strtrim(text: str | None, charset: str | None) -> str:
    """Strip characters in ``charset`` from both ends of ``text``."""
    if text is None:
        return ""
    if charset is None:
        return text
    return text.strip(charset)


def split(text: str | None, separator: str) -> list[str]:
    """Split ``text`` on ``separator``, dropping empty words."""
    if text is None:
        return []
    return [word for word in text.split(separator) if word]


def strmapi(text: str | None, func: Callable[[int, str], str] | None) -> str:
    """Build a string by applying ``func(index, char)`` to every character."""
    if text is None:
        return ""
    if func is None:
        return text
    return "".join(func(index, char) for index, char in enumerate(text))


def strjoin(first: str, second: str) -> str:
    """Concatenate two strings."""
    return first + second