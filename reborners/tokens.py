"""Splitting a command line into words and operator tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SPACE_CHARS = "\t\n\v\f\r "
SEPARATOR_CHARS = " \t<>|&"
QUOTE_CHARS = "'\""

UNCLOSED_QUOTE_STATUS = 258


class TokenType(Enum):
    """Kinds of tokens produced by the tokenizer."""

    ALPHANUMERIC = 0
    LESS = 1
    GREAT = 2
    DLESS = 3
    DGREAT = 4
    PIPE = 5
    NL = 6


@dataclass(frozen=True)
class Token:
    """A single token; operators carry no value."""

    type: TokenType
    value: str | None = None


class UnclosedQuoteError(ValueError):
    """Raised when a quote opened on the line is never closed."""

    def __init__(self, quote: str) -> None:
        self.quote = quote
        self.status = UNCLOSED_QUOTE_STATUS
        super().__init__(
            f"minishell: unexpected EOF while looking for matching {quote}'"
        )


_OPERATORS = (
    ("<<", TokenType.DLESS),
    (">>", TokenType.DGREAT),
    ("<", TokenType.LESS),
    (">", TokenType.GREAT),
)


def is_quote(char: str) -> bool:
    """Tell whether ``char`` is a single or double quote."""
    return len(char) == 1 and char in QUOTE_CHARS


def is_separator(text: str) -> bool:
    """Tell whether ``text`` starts with a character that ends a word."""
    return bool(text) and text[0] in SEPARATOR_CHARS


def skip_quotes(line: str, index: int) -> int | None:
    """Return the index just past the quote closing the one at ``index``.

    Returns None when the quote is never closed.
    """
    quote = line[index]
    closing = line.find(quote, index + 1)
    if closing == -1:
        return None
    return closing + 1


def _read_operator(line: str, pos: int) -> tuple[Token, int]:
    for text, token_type in _OPERATORS:
        if line.startswith(text, pos):
            return Token(token_type), pos + len(text)
    # '|' and '&' alike end up as a pipe.
    return Token(TokenType.PIPE), pos + 1


def _read_word(line: str, pos: int) -> tuple[Token, int]:
    end = pos
    while end < len(line) and not is_separator(line[end]):
        if is_quote(line[end]):
            after = skip_quotes(line, end)
            if after is None:
                raise UnclosedQuoteError(line[end])
            end = after
        else:
            end += 1
    return Token(TokenType.ALPHANUMERIC, line[pos:end]), end


def tokenize(line: str) -> list[Token]:
    """Split ``line`` into tokens, keeping quotes inside words."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        char = line[pos]
        if char in SPACE_CHARS:
            pos += 1
            continue
        if is_separator(char):
            token, pos = _read_operator(line, pos)
        else:
            token, pos = _read_word(line, pos)
        tokens.append(token)
    return tokens