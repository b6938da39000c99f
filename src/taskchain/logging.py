"""Logging infrastructure for taskchain.

Provides the Logger interface used for dependency injection of diagnostic output.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod


class LogLevel(enum.Enum):
    """Log verbosity levels for taskchain diagnostic messages.

    Lower numeric values represent higher severity / less verbosity.
    """
    FATAL = 0  # Only unrecoverable errors (malformed recipe files, bad config)
    ERROR = 1  # Fatal errors plus recipe execution failures
    WARN = 2   # Errors plus warnings
    INFO = 3   # Warnings plus command echo and listings (default)
    DEBUG = 4  # Info plus resolved execution order, project root, shell
    TRACE = 5  # Debug plus fine-grained dispatch tracing


def parse_log_level(name: str) -> LogLevel:
    """Convert a case-insensitive level name into a LogLevel.

    Raises:
        ValueError: If the name is not a known level
    """
    try:
        return LogLevel[name.strip().upper()]
    except KeyError:
        valid = ", ".join(level.name.lower() for level in LogLevel)
        raise ValueError(f"Invalid log level '{name}' (expected one of: {valid})") from None


class Logger(ABC):
    """Leveled logger interface.

    Implementations decide where messages go; callers only pick a level.
    """

    @abstractmethod
    def log(self, level: LogLevel = LogLevel.INFO, *args, **kwargs) -> None:
        ...

    @abstractmethod
    def push_level(self, level: LogLevel) -> None:
        ...

    @abstractmethod
    def pop_level(self) -> LogLevel:
        ...

    def fatal(self, *args, **kwargs) -> None:
        self.log(LogLevel.FATAL, *args, **kwargs)

    def error(self, *args, **kwargs) -> None:
        self.log(LogLevel.ERROR, *args, **kwargs)

    def warn(self, *args, **kwargs) -> None:
        self.log(LogLevel.WARN, *args, **kwargs)

    def info(self, *args, **kwargs) -> None:
        self.log(LogLevel.INFO, *args, **kwargs)

    def debug(self, *args, **kwargs) -> None:
        self.log(LogLevel.DEBUG, *args, **kwargs)

    def trace(self, *args, **kwargs) -> None:
        self.log(LogLevel.TRACE, *args, **kwargs)
