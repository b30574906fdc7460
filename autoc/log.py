"""Coloured console logging with a global minimum level."""

from __future__ import annotations

import sys
from enum import IntEnum
from pathlib import Path

COLOUR_RED = "\x1b[31m"
COLOUR_YELLOW = "\x1b[33m"
COLOUR_BLUE = "\x1b[34m"
COLOUR_MAGENTA = "\x1b[35m"
COLOUR_RESET = "\x1b[0m"


class LogLevel(IntEnum):
    """Severity of a log message, from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


_STYLES: dict[LogLevel, tuple[str, str]] = {
    LogLevel.FATAL: ("FATAL: ", COLOUR_RED),
    LogLevel.ERROR: ("ERROR: ", COLOUR_RED),
    LogLevel.WARNING: ("Warning: ", COLOUR_YELLOW),
    LogLevel.INFO: ("Info: ", COLOUR_BLUE),
    LogLevel.DEBUG: ("Debug: ", COLOUR_MAGENTA),
}

_level = LogLevel.INFO


def set_level(level: LogLevel) -> None:
    """Set the minimum level of messages that are printed."""
    global _level
    _level = LogLevel(level)


def only_errors() -> None:
    """Suppress everything below errors."""
    set_level(LogLevel.ERROR)


def flog(level: LogLevel, message: str) -> None:
    """Print a coloured message to stdout; a fatal message exits with status 1."""
    if level >= _level:
        prefix, colour = _STYLES.get(level, ("", COLOUR_RESET))
        sys.stdout.write(f"{colour}{prefix}{message}{COLOUR_RESET}\n")
        sys.stdout.flush()
    if level == LogLevel.FATAL:
        raise SystemExit(1)


def read_file(path: str | Path) -> str:
    """Return the whole contents of a text file."""
    with open(path, encoding="utf-8") as handle:
        return handle.read()