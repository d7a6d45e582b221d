"""A writer that turns each line written to it into a log entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from corelog.core import Core, Entry, Level


@dataclass
class Writer:
    """Buffers written bytes and logs one entry per line.

    Partial lines stay buffered until a newline arrives or the writer is
    synced or closed.
    """

    log: Core
    level: Level = Level.INFO
    _buffer: bytearray = field(default_factory=bytearray, init=False, repr=False)

    def write(self, data: bytes | str) -> int:
        """Log every complete line in data; return the number of bytes taken."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        size = len(data)
        if not self.log.enabled(self.level):
            return size
        remaining = bytes(data)
        while remaining:
            remaining = self._write_line(remaining)
        return size

    def _write_line(self, data: bytes) -> bytes:
        index = data.find(b"\n")
        if index < 0:
            self._buffer.extend(data)
            return b""
        line, rest = data[:index], data[index + 1 :]
        if not self._buffer:
            self._log(line)
            return rest
        self._buffer.extend(line)
        # Empty lines in the middle of a stream are kept as empty messages.
        self._flush(allow_empty=True)
        return rest

    def sync(self) -> None:
        """Log any buffered partial line, skipping an empty buffer."""
        self._flush(allow_empty=False)

    def close(self) -> None:
        """Flush buffered data to the logger."""
        self.sync()

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _flush(self, allow_empty: bool) -> None:
        if allow_empty or self._buffer:
            self._log(bytes(self._buffer))
        self._buffer.clear()

    def _log(self, data: bytes) -> None:
        entry = Entry(
            level=self.level,
            time=datetime.now(timezone.utc),
            message=data.decode("utf-8", errors="replace"),
        )
        checked = self.log.check(entry, None)
        if checked is not None:
            checked.write()