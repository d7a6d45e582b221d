"""A writer that sends log output to a test harness."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TestingT(Protocol):
    """The subset of a test harness that log output is sent to."""

    def logf(self, fmt: str, *args: Any) -> None:
        """Log a message without failing the test."""

    def errorf(self, fmt: str, *args: Any) -> None:
        """Log a message and mark the test as failed."""

    def fail(self) -> None:
        """Mark the test as failed."""

    def failed(self) -> bool:
        """Whether the test has been marked as failed."""

    def name(self) -> str:
        """The name of the test."""

    def fail_now(self) -> None:
        """Mark the test as failed and stop it."""


@dataclass(frozen=True)
class TestingWriter:
    """Writes each chunk to the harness's log, optionally failing the test."""

    __test__ = False

    t: TestingT
    mark_failed: bool = False

    def with_mark_failed(self, value: bool) -> "TestingWriter":
        """A copy of this writer with mark_failed set to value."""
        return replace(self, mark_failed=value)

    def write(self, data: bytes | str) -> int:
        """Log data without its trailing newlines; return its full length."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        size = len(data)
        text = data.rstrip(b"\n").decode("utf-8", errors="replace")
        self.t.logf("%s", text)
        if self.mark_failed:
            self.t.fail()
        return size

    def sync(self) -> None:
        """Flush the harness's own output, if it buffers any.

        The writer itself holds no data, so a harness without a ``flush``
        method needs nothing done.
        """
        flush = getattr(self.t, "flush", None)
        if callable(flush):
            flush()