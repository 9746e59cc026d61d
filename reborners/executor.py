"""Running a parsed command tree: heredocs, redirections, pipes and programs."""

from __future__ import annotations

import os
import signal
import stat
import subprocess
import sys
import tempfile
import traceback
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence, TextIO, Tuple

from reborners.builtins import ShellExit, is_builtin, run_builtin
from reborners.environment import ShellState
from reborners.expansion import solve_args
from reborners.nodes import IoType, Node, NodeType, Redirection, join_with

PROMPT = "reborners> "
HEREDOC_PROMPT = "> "
COMMAND_NOT_FOUND = 127
SIGNAL_STATUS_BASE = 128

ReadLine = Callable[[str], Optional[str]]

_TARGET_FD = {
    IoType.IN: 0,
    IoType.HEREDOC: 0,
    IoType.OUT: 1,
    IoType.APPEND: 1,
}

_OPEN_FLAGS = {
    IoType.IN: os.O_RDONLY,
    IoType.OUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    IoType.APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}


class _RedirectionError(Exception):
    """A redirection target could not be opened."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(target)


def _flush() -> None:
    sys.stdout.flush()
    sys.stderr.flush()


def _prompt_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def read_heredoc(delimiter: str, read_line: ReadLine | None = None) -> str:
    """Read lines until ``delimiter`` or end of input; return them joined."""
    reader = read_line or _prompt_line
    lines = []
    while True:
        line = reader(HEREDOC_PROMPT)
        if line is None or line == delimiter:
            break
        lines.append(f"{line}\n")
    return "".join(lines)


def prepare_tree(node: Node | None, read_line: ReadLine | None = None) -> None:
    """Split every command's arguments into words and read its heredoc."""
    if node is None:
        return
    if node.type is NodeType.PIPE:
        prepare_tree(node.left, read_line)
        prepare_tree(node.right, read_line)
    elif node.args is not None:
        node.structured_args = solve_args(node.args)
    if node.redirections and node.redirections[0].type is IoType.HEREDOC:
        node.heredoc = read_heredoc(node.redirections[0].value, read_line)


def _interrupt_child(signum: int, frame: object) -> None:
    sys.stdout.write("\n")
    sys.stdout.flush()


def _interrupt_prompt(signum: int, frame: object) -> None:
    sys.stdout.write(f"\n{PROMPT}")
    sys.stdout.flush()


def install_signals(state: ShellState) -> None:
    """Set the interrupt handler for the current mode and ignore quit."""
    handler = _interrupt_child if state.is_child else _interrupt_prompt
    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)


@contextmanager
def _child_mode(state: ShellState) -> Iterator[None]:
    state.is_child = True
    install_signals(state)
    try:
        yield
    finally:
        state.is_child = False
        install_signals(state)


def _status_from_returncode(returncode: int) -> int:
    if returncode < 0:
        return SIGNAL_STATUS_BASE - returncode
    return returncode


def _is_executable_file(path: str) -> bool:
    try:
        info = os.stat(path)
    except OSError:
        return False
    return stat.S_ISREG(info.st_mode) and bool(info.st_mode & stat.S_IXUSR)


def _spawn(executable: str, args: Sequence[str], state: ShellState) -> int:
    _flush()
    with _child_mode(state):
        process = subprocess.Popen(
            list(args), executable=executable, env=state.env.to_environ()
        )
        return _status_from_returncode(process.wait())


def run_external(args: Sequence[str], state: ShellState) -> int:
    """Start a program, directly or through PATH, and return its status."""
    name = args[0]
    if _is_executable_file(name):
        try:
            return _spawn(name, args, state)
        except OSError:
            pass
    path = state.env.get("PATH")
    if path is None:
        return COMMAND_NOT_FOUND
    for directory in (entry for entry in path.split(":") if entry):
        candidate = join_with(directory, name, "/")
        try:
            return _spawn(candidate, args, state)
        except OSError:
            continue
    return COMMAND_NOT_FOUND


def _heredoc_fd(text: str) -> int:
    with tempfile.TemporaryFile() as handle:
        handle.write(text.encode())
        handle.seek(0)
        return os.dup(handle.fileno())


def _open_redirection(node: Node, redirection: Redirection) -> int:
    if redirection.type is IoType.HEREDOC:
        return _heredoc_fd(getattr(node, "heredoc", ""))
    try:
        return os.open(redirection.value, _OPEN_FLAGS[redirection.type], 0o644)
    except OSError as exc:
        raise _RedirectionError(redirection.value) from exc


@contextmanager
def _redirected(node: Node) -> Iterator[None]:
    _flush()
    saved: dict[int, int] = {}
    try:
        for redirection in node.redirections:
            fd = _open_redirection(node, redirection)
            target = _TARGET_FD[redirection.type]
            if target not in saved:
                saved[target] = os.dup(target)
            os.dup2(fd, target)
            os.close(fd)
        yield
    finally:
        _flush()
        for target, copy in saved.items():
            os.dup2(copy, target)
            os.close(copy)


@contextmanager
def _fd_streams() -> Iterator[Tuple[TextIO, TextIO]]:
    with open(1, "w", closefd=False) as out, open(2, "w", closefd=False) as err:
        yield out, err


def run_command(node: Node | None, state: ShellState) -> None:
    """Run one simple command with its redirections, setting the exit status."""
    if node is None or node.type is not NodeType.CMD or not node.structured_args:
        state.exit_status = 0
        return
    args = node.structured_args
    try:
        with _redirected(node):
            if is_builtin(args[0]):
                with _fd_streams() as (out, err):
                    state.exit_status = run_builtin(args, state, out, err)
            else:
                state.exit_status = run_external(args, state)
    except _RedirectionError as exc:
        sys.stderr.write(f"{exc.target}\n")
        sys.stderr.flush()
        state.exit_status = 1


def _fork_side(
    node: Node | None, state: ShellState, fd: int, target: int, other: int
) -> int:
    pid = os.fork()
    if pid:
        return pid
    status = 1
    try:
        os.close(other)
        os.dup2(fd, target)
        os.close(fd)
        state.is_child = True
        install_signals(state)
        run_tree(node, state)
        status = state.exit_status
    except ShellExit as exc:
        status = exc.status
    except BaseException:
        traceback.print_exc()
    finally:
        _flush()
        os._exit(status)


def _run_pipe(node: Node, state: ShellState) -> None:
    _flush()
    try:
        read_fd, write_fd = os.pipe()
    except OSError:
        sys.stderr.write("pipe failed")
        state.exit_status = 1
        return
    pids = []
    failed = False
    try:
        pids.append(_fork_side(node.left, state, write_fd, 1, read_fd))
        pids.append(_fork_side(node.right, state, read_fd, 0, write_fd))
    except OSError:
        sys.stderr.write("fork failed")
        failed = True
    finally:
        os.close(read_fd)
        os.close(write_fd)
    for pid in pids:
        _, status = os.waitpid(pid, 0)
        if not failed and os.WIFEXITED(status):
            state.exit_status = os.WEXITSTATUS(status)
    if failed:
        state.exit_status = 1
        return
    state.is_child = False
    install_signals(state)


def run_tree(node: Node | None, state: ShellState) -> None:
    """Run a command tree, connecting the sides of each pipe."""
    if node is None:
        state.exit_status = 1
        return
    if node.type is NodeType.PIPE:
        _run_pipe(node, state)
    elif node.type is NodeType.CMD:
        run_command(node, state)