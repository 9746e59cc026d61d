"""The shell's variable table and run-time state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator


def split_entry(line: str) -> tuple[str, str | None]:
    """Split ``KEY=VALUE`` at the first ``=``; the value is None without one."""
    key, sep, value = line.partition("=")
    return key, (value if sep else None)


class Environment:
    """Shell variables kept in key order; a variable may have no value."""

    def __init__(self) -> None:
        self._vars: dict[str, str | None] = {}

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> Environment:
        """Build a table from ``KEY=VALUE`` strings."""
        env = cls()
        for entry in entries:
            key, value = split_entry(entry)
            env.update(key, value, True)
        return env

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or None if unset or valueless."""
        return self._vars.get(key)

    def update(self, key: str, value: str | None, add: bool = True) -> None:
        """Set ``key``; a None value leaves an existing value alone.

        A missing key is only created when ``add`` is true.
        """
        if key in self._vars:
            if value is not None:
                self._vars[key] = value
        elif add:
            self._vars[key] = value

    def remove(self, key: str) -> None:
        """Drop ``key`` if present."""
        self._vars.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def format_env(self) -> str:
        """Render variables that have a value, as ``env`` prints them."""
        return "".join(
            f"{key}={self._vars[key]}\n" for key in self if self._vars[key] is not None
        )

    def format_export(self) -> str:
        """Render every variable, as ``export`` with no arguments prints them."""
        lines = []
        for key in self:
            value = self._vars[key]
            if value is None:
                lines.append(f"declare -x {key}\n")
            else:
                lines.append(f'declare -x {key}="{value}"\n')
        return "".join(lines)

    def to_environ(self) -> dict[str, str]:
        """Return the variables that have a value, for a child process."""
        return {key: value for key, value in self._vars.items() if value is not None}


@dataclass
class ShellState:
    """What the shell carries from one command to the next."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0
    is_child: bool = False