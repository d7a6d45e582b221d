"""Levels, entries, fields and cores, including the tee that fans entries out."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Sequence


class Level(enum.IntEnum):
    """Logging priority; higher levels are more important."""

    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    DPANIC = 3
    PANIC = 4
    FATAL = 5
    INVALID = 6

    def __str__(self) -> str:
        return self.name.lower()

    def enabled(self, level: "Level") -> bool:
        """A level used as an enabler lets through itself and everything above."""
        return level >= self


_MIN_LEVEL = Level.DEBUG
_MAX_LEVEL = Level.FATAL


def _is_enabled(enabler: Any, level: Level) -> bool:
    check = getattr(enabler, "enabled", None)
    if callable(check):
        return bool(check(level))
    if callable(enabler):
        return bool(enabler(level))
    raise TypeError(f"{enabler!r} cannot decide whether a level is enabled")


def level_of(enabler: Any) -> Level:
    """Report the minimum level an enabler allows, or INVALID if none."""
    if isinstance(enabler, Level):
        return enabler
    reported = getattr(enabler, "level", None)
    if callable(reported):
        return reported()
    for value in range(_MIN_LEVEL, _MAX_LEVEL + 1):
        candidate = Level(value)
        if _is_enabled(enabler, candidate):
            return candidate
    return Level.INVALID


def _raise_all(errors: Sequence[BaseException]) -> None:
    """Raise nothing, the single error, or a group of all of them."""
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise ExceptionGroup("multiple errors", list(errors))


@dataclass(frozen=True)
class Entry:
    """A single log event, before any context is attached."""

    level: Level = Level.INFO
    time: datetime | None = None
    logger_name: str = ""
    message: str = ""
    caller: str | None = None
    stack: str = ""


@dataclass(frozen=True)
class Field:
    """A key/value pair of structured context; a namespace field nests what follows."""

    key: str
    value: Any = None
    namespace: bool = False


class CheckedEntry:
    """An entry together with the cores that agreed to write it."""

    def __init__(self, entry: Entry) -> None:
        self.entry = entry
        self.cores: list[Core] = []

    def write(self, *args: Field) -> None:
        """Write the entry with the given fields to every collected core."""
        errors: list[Exception] = []
        for core in self.cores:
            try:
                core.write(self.entry, list(args))
            except Exception as exc:
                errors.append(exc)
        _raise_all(errors)


def add_core(checked: CheckedEntry | None, entry: Entry, core: "Core") -> CheckedEntry:
    """Add a core to a checked entry, creating the checked entry if needed."""
    if checked is None:
        checked = CheckedEntry(entry)
    checked.cores.append(core)
    return checked


class Core(abc.ABC):
    """A minimal, fast logger interface."""

    @abc.abstractmethod
    def enabled(self, level: Level) -> bool:
        """Whether entries at the given level should be logged."""

    @abc.abstractmethod
    def with_fields(self, fields: Iterable[Field]) -> "Core":
        """Return a core that adds the fields to every entry."""

    def check(self, entry: Entry, checked: CheckedEntry | None) -> CheckedEntry | None:
        """Add this core to the checked entry if the entry's level is enabled."""
        if self.enabled(entry.level):
            return add_core(checked, entry, self)
        return checked

    @abc.abstractmethod
    def write(self, entry: Entry, fields: Sequence[Field]) -> None:
        """Serialize the entry and fields to the destination."""

    def sync(self) -> None:
        """Flush any buffered entries."""


class NopCore(Core):
    """A core that is never enabled and writes nothing."""

    def enabled(self, level: Level) -> bool:
        return False

    def with_fields(self, fields: Iterable[Field]) -> "NopCore":
        return self

    def check(self, entry: Entry, checked: CheckedEntry | None) -> CheckedEntry | None:
        return checked

    def write(self, entry: Entry, fields: Sequence[Field]) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NopCore)

    def __hash__(self) -> int:
        return hash(NopCore)


def new_nop_core() -> NopCore:
    """Return a core that discards everything."""
    return NopCore()


class MultiCore(Core):
    """A core that duplicates entries into several underlying cores."""

    def __init__(self, cores: Iterable[Core]) -> None:
        self.cores: tuple[Core, ...] = tuple(cores)

    def level(self) -> Level:
        """The lowest level enabled by any underlying core."""
        return min((level_of(core) for core in self.cores), default=_MAX_LEVEL)

    def enabled(self, level: Level) -> bool:
        return any(core.enabled(level) for core in self.cores)

    def with_fields(self, fields: Iterable[Field]) -> "MultiCore":
        fields = list(fields)
        return MultiCore(core.with_fields(fields) for core in self.cores)

    def check(self, entry: Entry, checked: CheckedEntry | None) -> CheckedEntry | None:
        for core in self.cores:
            checked = core.check(entry, checked)
        return checked

    def write(self, entry: Entry, fields: Sequence[Field]) -> None:
        errors: list[Exception] = []
        for core in self.cores:
            try:
                core.write(entry, fields)
            except Exception as exc:
                errors.append(exc)
        _raise_all(errors)

    def sync(self) -> None:
        errors: list[Exception] = []
        for core in self.cores:
            try:
                core.sync()
            except Exception as exc:
                errors.append(exc)
        _raise_all(errors)


def new_tee(*args: Core) -> Core:
    """Combine cores; one core is returned unchanged and none gives a no-op core."""
    if not args:
        return new_nop_core()
    if len(args) == 1:
        return args[0]
    return MultiCore(args)