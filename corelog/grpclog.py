"""A logger with the method set expected by gRPC's logging interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from corelog.core import Core, Entry, Level

_GRPC_INFO = 0
_GRPC_WARN = 1
_GRPC_ERROR = 2
_GRPC_FATAL = 3

_GRPC_TO_LEVEL = {
    _GRPC_INFO: Level.INFO,
    _GRPC_WARN: Level.WARN,
    _GRPC_ERROR: Level.ERROR,
    _GRPC_FATAL: Level.FATAL,
}

Option = Callable[["Logger"], None]


def _value_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)


def _sprint(args: tuple[Any, ...]) -> str:
    """Join operands, adding a space only between two non-string operands."""
    parts: list[str] = []
    previous_is_str = False
    for position, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if position > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(_value_text(arg))
        previous_is_str = is_str
    return "".join(parts)


def _sprintln(args: tuple[Any, ...]) -> str:
    """Join operands with single spaces, without a trailing newline."""
    return " ".join(_value_text(arg) for arg in args)


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    if not args:
        return fmt
    return fmt % args


@dataclass
class _Printer:
    """Print, printf and println operations bound to one level."""

    owner: "Logger"
    level: Level

    def print(self, *args: Any) -> None:
        self.owner._log(self.level, _sprint(args))

    def printf(self, fmt: str, *args: Any) -> None:
        self.owner._log(self.level, _sprintf(fmt, args))

    def println(self, *args: Any) -> None:
        if self.owner._core.enabled(self.level):
            self.owner._log(self.level, _sprintln(args))


class Logger:
    """Adapts a core to the gRPC logger method set."""

    def __init__(self, core: Core) -> None:
        self._core = core
        self._print = _Printer(self, Level.INFO)
        self._fatal = _Printer(self, Level.FATAL)

    def _log(self, level: Level, message: str) -> None:
        entry = Entry(level=level, time=datetime.now(timezone.utc), message=message)
        checked = self._core.check(entry, None)
        if checked is not None:
            checked.write()
        if level == Level.FATAL:
            raise SystemExit(1)

    def _logln(self, level: Level, args: tuple[Any, ...]) -> None:
        if self._core.enabled(level):
            self._log(level, _sprintln(args))

    def print(self, *args: Any) -> None:
        self._print.print(*args)

    def printf(self, fmt: str, *args: Any) -> None:
        self._print.printf(fmt, *args)

    def println(self, *args: Any) -> None:
        self._print.println(*args)

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, _sprint(args))

    def infoln(self, *args: Any) -> None:
        self._logln(Level.INFO, args)

    def infof(self, fmt: str, *args: Any) -> None:
        self._log(Level.INFO, _sprintf(fmt, args))

    def warning(self, *args: Any) -> None:
        self._log(Level.WARN, _sprint(args))

    def warningln(self, *args: Any) -> None:
        self._logln(Level.WARN, args)

    def warningf(self, fmt: str, *args: Any) -> None:
        self._log(Level.WARN, _sprintf(fmt, args))

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, _sprint(args))

    def errorln(self, *args: Any) -> None:
        self._logln(Level.ERROR, args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._log(Level.ERROR, _sprintf(fmt, args))

    def fatal(self, *args: Any) -> None:
        """Log at the fatal level, then exit."""
        self._fatal.print(*args)

    def fatalln(self, *args: Any) -> None:
        self._fatal.println(*args)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self._fatal.printf(fmt, *args)

    def v(self, level: int) -> bool:
        """Whether the given gRPC verbosity level is enabled."""
        return self._core.enabled(_GRPC_TO_LEVEL.get(level, Level.INFO))


def with_debug() -> Option:
    """Make print, printf and println log at the debug level instead of info."""

    def apply(logger: Logger) -> None:
        logger._print = _Printer(logger, Level.DEBUG)

    return apply


def _with_warn() -> Option:
    """Redirect the fatal methods to the warn level, without exiting."""

    def apply(logger: Logger) -> None:
        logger._fatal = _Printer(logger, Level.WARN)

    return apply


def new_logger(core: Core, *args: Option) -> Logger:
    """Build a logger over a core, applying the given options in order."""
    logger = Logger(core)
    for option in args:
        option(logger)
    return logger