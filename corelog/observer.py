"""A core that keeps logged entries in memory, for making assertions in tests."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Sequence

from corelog.core import Core, Entry, Field, Level, _is_enabled, level_of


@dataclass(frozen=True)
class LoggedEntry:
    """An encoding-agnostic record of one log message and its context."""

    entry: Entry
    context: list[Field] = field(default_factory=list)

    def context_map(self) -> dict[str, Any]:
        """Return the context as a dict, with namespaces as nested dicts."""
        root: dict[str, Any] = {}
        current = root
        for item in self.context:
            if item.namespace:
                nested: dict[str, Any] = {}
                current[item.key] = nested
                current = nested
            else:
                current[item.key] = item.value
        return root


class ObservedLogs:
    """A thread-safe, ordered collection of observed entries."""

    def __init__(self, logs: Iterable[LoggedEntry] = ()) -> None:
        self._lock = threading.Lock()
        self._logs: list[LoggedEntry] = list(logs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    def all(self) -> list[LoggedEntry]:
        """A copy of every observed entry."""
        with self._lock:
            return list(self._logs)

    def take_all(self) -> list[LoggedEntry]:
        """Every observed entry; the collection is emptied."""
        with self._lock:
            taken, self._logs = self._logs, []
        return taken

    def all_untimed(self) -> list[LoggedEntry]:
        """A copy of every observed entry with its timestamp cleared."""
        return [replace(e, entry=replace(e.entry, time=None)) for e in self.all()]

    def filter_level_exact(self, level: Level) -> "ObservedLogs":
        return self.filter(lambda e: e.entry.level == level)

    def filter_message(self, msg: str) -> "ObservedLogs":
        return self.filter(lambda e: e.entry.message == msg)

    def filter_message_snippet(self, snippet: str) -> "ObservedLogs":
        return self.filter(lambda e: snippet in e.entry.message)

    def filter_field(self, field: Field) -> "ObservedLogs":
        return self.filter(lambda e: field in e.context)

    def filter_field_key(self, key: str) -> "ObservedLogs":
        return self.filter(lambda e: any(f.key == key for f in e.context))

    def filter(self, keep: Callable[[LoggedEntry], bool]) -> "ObservedLogs":
        """A new collection holding only the entries for which keep is true."""
        with self._lock:
            snapshot = list(self._logs)
        return ObservedLogs(e for e in snapshot if keep(e))

    def _add(self, log: LoggedEntry) -> None:
        with self._lock:
            self._logs.append(log)


class ObserverCore(Core):
    """A core that records entries, with their context, into ObservedLogs."""

    def __init__(
        self, enabler: Any, logs: ObservedLogs, context: Sequence[Field] = ()
    ) -> None:
        self.enabler = enabler
        self.logs = logs
        self.context: tuple[Field, ...] = tuple(context)

    def level(self) -> Level:
        return level_of(self.enabler)

    def enabled(self, level: Level) -> bool:
        return _is_enabled(self.enabler, level)

    def check(self, entry, checked):
        return super().check(entry, checked)

    def with_fields(self, fields: Iterable[Field]) -> "ObserverCore":
        return ObserverCore(self.enabler, self.logs, self.context + tuple(fields))

    def write(self, entry: Entry, fields: Sequence[Field]) -> None:
        self.logs._add(LoggedEntry(entry, [*self.context, *(fields or ())]))

    def sync(self) -> None:
        return None


def observe(enabler: Any) -> tuple[ObserverCore, ObservedLogs]:
    """Create a recording core and the collection it records into."""
    logs = ObservedLogs()
    return ObserverCore(enabler, logs), logs