"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import string
import sys
from typing import Sequence, TextIO

from reborners.environment import ShellState

BUILTINS = frozenset({"env", "cd", "exit", "unset", "pwd", "echo", "export"})

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = frozenset(string.digits)


class ShellExit(Exception):
    """Raised when the shell is asked to exit with ``status``."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


def _stream(stream: TextIO | None, default: TextIO) -> TextIO:
    return default if stream is None else stream


def is_builtin(name: str | None) -> bool:
    """Tell whether ``name`` is a command the shell runs itself."""
    return name in BUILTINS


def echo(args: Sequence[str], stdout: TextIO | None = None) -> int:
    """Print the arguments; leading ``-n`` options drop the newline."""
    out = _stream(stdout, sys.stdout)
    index = 1
    newline = True
    while index < len(args) and args[index].startswith("-n"):
        if args[index][2:].strip("n"):
            break
        newline = False
        index += 1
    out.write(" ".join(args[index:]))
    if newline:
        out.write("\n")
    return 0


def _getcwd() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def cd(
    args: Sequence[str],
    state: ShellState,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Change directory and record PWD and OLDPWD."""
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    oldpwd = _getcwd() or ""
    if len(args) < 2:
        target = state.env.get("HOME")
        if target is None:
            err.write("minishell: cd: HOME not set\n")
            return 1
    elif args[1] == "-":
        target = state.env.get("OLDPWD")
        if target is None:
            err.write("minishell: cd: OLDPWD not set\n")
            return 1
        out.write(f"{target}\n")
    else:
        target = args[1]
    try:
        os.chdir(target)
    except OSError as exc:
        reason = os.strerror(exc.errno) if exc.errno else str(exc)
        err.write(f"minishell: cd: {target}: {reason}\n")
        return 1
    newpwd = _getcwd()
    if newpwd is not None:
        state.env.update("OLDPWD", oldpwd, True)
        state.env.update("PWD", newpwd, True)
    return 0


def pwd(stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
    """Print the current working directory."""
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    try:
        cwd = os.getcwd()
    except OSError as exc:
        reason = os.strerror(exc.errno) if exc.errno else str(exc)
        err.write(f"minishell: pwd: {reason}\n")
        return 1
    out.write(f"{cwd}\n")
    return 0


def _valid_export_key(arg: str) -> bool:
    if not arg or arg[0] not in _NAME_START:
        return False
    key = arg.partition("=")[0]
    return all(char in _NAME_CHARS for char in key)


def export(
    args: Sequence[str],
    state: ShellState,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Set variables, or list them all when given no arguments."""
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    if len(args) < 2:
        out.write(state.env.format_export())
        return 0
    for arg in args[1:]:
        if not _valid_export_key(arg):
            err.write(f"minishell: export: `{arg}': not a valid identifier\n")
            continue
        key, sep, value = arg.partition("=")
        state.env.update(key, value if sep else None, True)
    return 0


def _valid_identifier(arg: str) -> bool:
    return bool(arg) and arg[0] in _NAME_START and all(c in _NAME_CHARS for c in arg)


def unset(
    args: Sequence[str], state: ShellState, stderr: TextIO | None = None
) -> int:
    """Remove variables."""
    err = _stream(stderr, sys.stderr)
    for arg in args[1:]:
        if _valid_identifier(arg):
            state.env.remove(arg)
        else:
            err.write(f"minishell: unset: `{arg}': not a valid identifier\n")
    return 0


def env_command(state: ShellState, stdout: TextIO | None = None) -> int:
    """Print every variable that has a value."""
    _stream(stdout, sys.stdout).write(state.env.format_env())
    return 0


def _exit_status(text: str) -> int | None:
    """Parse an exit argument; None when it is not numeric."""
    body = text[1:] if text[:1] in ("+", "-") else text
    if not all(char in _DIGITS for char in body):
        return None
    value = int(body) if body else 0
    if text.startswith("-"):
        value = -value
    return value & 0xFF


def exit_command(
    args: Sequence[str],
    state: ShellState,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Ask the shell to exit by raising ShellExit.

    With more than one argument nothing is raised and the status becomes 1.
    """
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    out.write("exit\n")
    status = 0
    if len(args) > 1:
        parsed = _exit_status(args[1])
        if parsed is None:
            err.write(f"minishell: exit: {args[1]}: numeric argument required\n")
            raise ShellExit(255)
        if len(args) > 2:
            err.write("minishell: exit: too many arguments\n")
            state.exit_status = 1
            return
        status = parsed
    raise ShellExit(status)


def run_builtin(
    args: Sequence[str],
    state: ShellState,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    name = args[0]
    if name == "env":
        env_command(state, stdout)
        return 0
    if name == "export":
        export(args, state, stdout, stderr)
        return 0
    if name == "unset":
        unset(args, state, stderr)
        return 0
    if name == "echo":
        echo(args, stdout)
        return 0
    if name == "pwd":
        return pwd(stdout, stderr)
    if name == "cd":
        return cd(args, state, stdout, stderr)
    if name == "exit":
        exit_command(args, state, stdout, stderr)
    return 1