"""npm-style log levels mapped onto loguru levels."""

from __future__ import annotations

from enum import IntEnum

from loguru import logger

from httplog.core.exceptions import ConfigurationError


class LogLevel(IntEnum):
    """Severity levels, most severe first.

    A sink with threshold ``T`` accepts a record at level ``L`` iff ``L <= T``.
    """

    ERROR = 0
    WARN = 1
    INFO = 2
    VERBOSE = 3
    DEBUG = 4
    SILLY = 5

    @property
    def loguru_name(self) -> str:
        return _LOGURU_NAMES[self]

    @property
    def label(self) -> str:
        return self.name.lower()

    def permits(self, record_level: LogLevel) -> bool:
        """Return True if a sink at this threshold accepts ``record_level``."""

        return record_level <= self

    @classmethod
    def parse(cls, value: str | int | LogLevel) -> LogLevel:
        """Resolve a level from its npm name, loguru name or number."""

        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as e:
                raise ConfigurationError(f"Unknown log level: {value!r}", key="level") from e
        normalized = str(value).strip().lower()
        if normalized.isdigit():
            return cls.parse(int(normalized))
        resolved = _ALIASES.get(normalized)
        if resolved is None:
            raise ConfigurationError(f"Unknown log level: {value!r}", key="level")
        return resolved

    @classmethod
    def from_loguru(cls, name: str) -> LogLevel:
        return _FROM_LOGURU[name]


_LOGURU_NAMES = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARN: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.VERBOSE: "VERBOSE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.SILLY: "SILLY",
}

_FROM_LOGURU = {name: level for level, name in _LOGURU_NAMES.items()}

_ALIASES = {level.label: level for level in LogLevel}
_ALIASES["warning"] = LogLevel.WARN

# Severity numbers for the two levels loguru does not ship with.
_CUSTOM_SEVERITY = {
    LogLevel.VERBOSE: 15,
    LogLevel.SILLY: 5,
}

_COLORS = {
    LogLevel.ERROR: "<red>",
    LogLevel.WARN: "<yellow>",
    LogLevel.INFO: "<green>",
    LogLevel.VERBOSE: "<cyan>",
    LogLevel.DEBUG: "<blue>",
    LogLevel.SILLY: "<magenta>",
}


def register_levels() -> None:
    """Make every :class:`LogLevel` known to loguru. Safe to call repeatedly."""

    for level in LogLevel:
        try:
            logger.level(level.loguru_name)
        except ValueError:
            logger.level(level.loguru_name, no=_CUSTOM_SEVERITY[level], color=_COLORS[level])
        else:
            logger.level(level.loguru_name, color=_COLORS[level])


__all__ = ["LogLevel", "register_levels"]
