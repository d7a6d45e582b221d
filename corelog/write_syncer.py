"""Writers that can also flush, and helpers to lock and combine them."""

from __future__ import annotations

import threading
from typing import Any, Iterable, Protocol, runtime_checkable

from corelog.core import _raise_all


@runtime_checkable
class WriteSyncer(Protocol):
    """A writer that can also flush buffered data."""

    def write(self, data: bytes) -> int: ...

    def sync(self) -> None: ...


def _written(result: Any, data: bytes) -> int:
    return len(data) if result is None else result


class WriterWrapper:
    """Adds a sync method to a plain writer; it flushes the writer if it can."""

    def __init__(self, writer: Any) -> None:
        self.writer = writer

    def write(self, data: bytes) -> int:
        return _written(self.writer.write(data), data)

    def sync(self) -> None:
        flush = getattr(self.writer, "flush", None)
        if callable(flush):
            flush()


def add_sync(writer: Any) -> WriteSyncer:
    """Return the writer itself if it can sync, otherwise wrap it."""
    if isinstance(writer, WriteSyncer):
        return writer
    return WriterWrapper(writer)


class LockedWriteSyncer:
    """Serializes writes and syncs to an underlying syncer."""

    def __init__(self, syncer: WriteSyncer) -> None:
        self.syncer = syncer
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            return _written(self.syncer.write(data), data)

    def sync(self) -> None:
        with self._lock:
            self.syncer.sync()


def lock(syncer: WriteSyncer) -> LockedWriteSyncer:
    """Wrap a syncer in a lock, unless it already is one."""
    if isinstance(syncer, LockedWriteSyncer):
        return syncer
    return LockedWriteSyncer(syncer)


class MultiWriteSyncer:
    """Duplicates writes and syncs across several syncers."""

    def __init__(self, syncers: Iterable[WriteSyncer]) -> None:
        self.syncers: tuple[WriteSyncer, ...] = tuple(syncers)

    def write(self, data: bytes) -> int:
        """Write to every syncer; report the smallest non-zero count written."""
        errors: list[Exception] = []
        written = 0
        for syncer in self.syncers:
            try:
                count = _written(syncer.write(data), data)
            except Exception as exc:
                errors.append(exc)
                count = 0
            if written == 0 and count != 0:
                written = count
            elif count < written:
                written = count
        _raise_all(errors)
        return written

    def sync(self) -> None:
        errors: list[Exception] = []
        for syncer in self.syncers:
            try:
                syncer.sync()
            except Exception as exc:
                errors.append(exc)
        _raise_all(errors)


def new_multi_write_syncer(*args: WriteSyncer) -> WriteSyncer:
    """Combine syncers; a single syncer is returned unchanged."""
    if len(args) == 1:
        return args[0]
    return MultiWriteSyncer(args)