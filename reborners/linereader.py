"""Reading a stream one line at a time in fixed-size chunks."""

from __future__ import annotations

from typing import IO, AnyStr, Iterator

DEFAULT_BUFFER_SIZE = 42


class LineReader:
    """Yield lines, newline included, from a text or binary stream."""

    def __init__(self, stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending = None

    def read_line(self):
        """Return the next line, or an empty string or bytes at end of input."""
        while True:
            if self._pending:
                newline = "\n" if isinstance(self._pending, str) else b"\n"
                end = self._pending.find(newline)
                if end != -1:
                    line = self._pending[: end + 1]
                    self._pending = self._pending[end + 1 :]
                    return line
            chunk = self._stream.read(self._buffer_size)
            if not chunk:
                break
            self._pending = chunk if self._pending is None else self._pending + chunk
        if self._pending is None:
            return ""
        line = self._pending
        self._pending = line[:0]
        return line

    def __iter__(self) -> Iterator:
        while True:
            line = self.read_line()
            if not line:
                return
            yield line