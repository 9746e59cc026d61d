"""Turning a command's raw argument string into a list of words."""

from __future__ import annotations

import string

from reborners.tokens import QUOTE_CHARS

_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def is_valid_char(char: str) -> bool:
    """Tell whether ``char`` may appear in a variable name."""
    return char in _WORD_CHARS


def _quoted_end(text: str, start: int) -> int:
    """Return the index just past the quote closing the one at ``start``."""
    quote = text[start]
    closing = text.find(quote, start + 1)
    if closing == -1:
        raise ValueError(f"unclosed quote {quote} in {text!r}")
    return closing + 1


def _segments(text: str):
    """Yield the quoted and unquoted runs of ``text`` in order."""
    pos = 0
    while pos < len(text):
        if text[pos] in QUOTE_CHARS:
            end = _quoted_end(text, pos)
        else:
            end = pos
            while end < len(text) and text[end] not in QUOTE_CHARS:
                end += 1
        yield text[pos:end]
        pos = end


def expand_quotes(text: str) -> str:
    """Reassemble ``text`` from its quoted and unquoted runs.

    Quotes are kept and ``$`` is taken literally. Raises ValueError on an
    unclosed quote.
    """
    return "".join(_segments(text))


def split_args(text: str) -> list[str]:
    """Split ``text`` on spaces, keeping quoted runs inside their word."""
    words: list[str] = []
    pos = 0
    while pos < len(text):
        if text[pos] == " ":
            pos += 1
            continue
        start = pos
        while pos < len(text) and text[pos] != " ":
            if text[pos] in QUOTE_CHARS:
                pos = _quoted_end(text, pos)
            else:
                pos += 1
        words.append(text[start:pos])
    return words


def remove_quotes(text: str) -> str:
    """Strip each pair of matching quotes, keeping what they enclose."""
    return "".join(
        segment[1:-1] if segment[0] in QUOTE_CHARS else segment
        for segment in _segments(text)
    )


def solve_args(text: str) -> list[str]:
    """Turn a raw argument string into the words handed to a command."""
    expanded = expand_quotes(text)
    if not expanded:
        return []
    return [remove_quotes(word) for word in split_args(expanded)]