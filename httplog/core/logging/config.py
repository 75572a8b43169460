"""Sink configuration models used to initialise :class:`AppLogger`."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from httplog.core.config import (
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_FILES,
    DEFAULT_MAX_SIZE_BYTES,
    LoggingConfig,
)
from httplog.core.logging.levels import LogLevel


class SinkConfig(BaseModel):
    """Options for a single log destination.

    ``destination`` is a text stream for the console sink (``None`` means
    standard output) and a file path for the file sink.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: LogLevel = LogLevel.INFO
    destination: Any = None
    max_size_bytes: int | None = None
    max_files: int | None = None
    colorize: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> LogLevel:
        return LogLevel.parse(value)


def default_console_sink() -> SinkConfig:
    return SinkConfig(level=LogLevel.DEBUG, colorize=True)


def default_file_sink() -> SinkConfig:
    return SinkConfig(
        level=LogLevel.INFO,
        destination=DEFAULT_LOG_FILE,
        max_size_bytes=DEFAULT_MAX_SIZE_BYTES,
        max_files=DEFAULT_MAX_FILES,
    )


class LogConfig(BaseModel):
    """Configuration for the console and file sinks of an :class:`AppLogger`.

    Setting a sink to ``None`` disables it. ``exit_on_error=False`` keeps a
    failing sink from raising into the caller. ``handle_exceptions`` routes
    uncaught exceptions through the logger via ``sys.excepthook``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: SinkConfig | None = Field(default_factory=default_console_sink)
    file: SinkConfig | None = Field(default_factory=default_file_sink)
    exit_on_error: bool = False
    handle_exceptions: bool = True
    backtrace: bool = False
    diagnose: bool = False

    @classmethod
    def from_settings(cls, settings: LoggingConfig) -> LogConfig:
        """Build sink options from the application logging settings."""

        console = SinkConfig(level=settings.console_level, colorize=settings.colorize)
        file = None
        if settings.file_enabled:
            file = SinkConfig(
                level=settings.file_level,
                destination=settings.file_path,
                max_size_bytes=settings.max_size_bytes,
                max_files=settings.max_files,
            )
        return cls(console=console, file=file)


__all__ = ["LogConfig", "SinkConfig"]
