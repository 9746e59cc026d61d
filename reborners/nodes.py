"""Syntax tree nodes, redirections and syntax error reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from reborners.tokens import Token, TokenType

SYNTAX_ERROR_STATUS = 258

_INDENT = "    "

# Names shown for the offending token, indexed by token type value.
_ERROR_TOKEN_NAMES = (
    "T_ALPANUMERIC", "<", ">", "<<", ">>", "|", "(", ")", "&&", "||", "newline",
)


class NodeType(Enum):
    """Kinds of tree nodes."""

    PIPE = 0
    CMD = 1


class IoType(Enum):
    """Kinds of redirection."""

    IN = 0
    OUT = 1
    HEREDOC = 2
    APPEND = 3


@dataclass(frozen=True)
class Redirection:
    """A redirection operator with its target word."""

    type: IoType
    value: str


@dataclass
class Node:
    """A pipe joining two subtrees, or a simple command."""

    type: NodeType
    args: str | None = None
    redirections: list[Redirection] = field(default_factory=list)
    left: Node | None = None
    right: Node | None = None
    structured_args: list[str] | None = None


_NODE_LABELS = {NodeType.PIPE: "N_PIPE", NodeType.CMD: "N_CMD"}


def io_type_for(token_type: TokenType) -> IoType:
    """Map a redirection token type to its redirection kind."""
    if token_type is TokenType.LESS:
        return IoType.IN
    if token_type is TokenType.GREAT:
        return IoType.OUT
    if token_type is TokenType.DLESS:
        return IoType.HEREDOC
    return IoType.APPEND


def syntax_error_message(token: Token | None) -> str:
    """Build the syntax error message for the token where parsing stopped."""
    token_type = TokenType.NL if token is None else token.type
    name = _ERROR_TOKEN_NAMES[token_type.value]
    return f"minishell: syntax error near unexpected token `{name}'"


def join_with(first: str | None, second: str | None, separator: str) -> str | None:
    """Join two strings with ``separator`` unless either is empty."""
    if first is None or second is None:
        return None
    if not separator or not first or not second:
        return first + second
    return f"{first}{separator}{second}"


def _tree_lines(node: Node | None, depth: int) -> Iterator[str]:
    if node is None:
        return
    pad = _INDENT * depth
    yield f"{pad}Branch Type: {_NODE_LABELS[node.type]}\n"
    if node.args is not None:
        yield f"{pad}Args: {node.args}\n"
    if node.redirections:
        yield f"{pad}IO List:\n"
        inner = _INDENT * (depth + 1)
        for redirection in node.redirections:
            yield f"{inner}IO Type: {redirection.type.value}, Value: {redirection.value}\n"
    for child in (node.left, node.right):
        if child is not None:
            yield pad
            yield from _tree_lines(child, depth + 1)


def format_tree(node: Node | None) -> str:
    """Render a tree as indented text for debugging."""
    return "".join(_tree_lines(node, 0))