"""loguru-backed application logger with a console sink and a rotating file sink."""

from __future__ import annotations

import json
import sys
import traceback
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any
from uuid import uuid4

from loguru import logger

from httplog.core.logging.config import LogConfig, SinkConfig
from httplog.core.logging.levels import LogLevel, register_levels

_OWNER_KEY = "_owner"
_META_KEY = "meta"

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{extra[_level_label]: <7}</level> | "
    "<level>{message}</level>{extra[_meta_text]}\n{exception}"
)


def _drop_default_handler() -> None:
    # loguru installs a stderr handler with id 0 on import.
    try:
        logger.remove(0)
    except ValueError:
        pass


def _level_label(record: dict[str, Any]) -> str:
    name = record["level"].name
    try:
        return LogLevel.from_loguru(name).label
    except KeyError:
        return name.lower()


def _metadata(record: dict[str, Any]) -> dict[str, Any]:
    return record["extra"].get(_META_KEY) or {}


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": _level_label(record),
        "message": record["message"],
        "logger": record["name"],
    }
    meta = _metadata(record)
    if meta:
        payload["meta"] = meta
    exception = record["exception"]
    if exception is not None:
        payload["stack"] = "".join(
            traceback.format_exception(exception.type, exception.value, exception.traceback)
        )
    return payload


def _console_format(record: dict[str, Any]) -> str:
    extra = record["extra"]
    extra["_level_label"] = _level_label(record)
    meta = _metadata(record)
    extra["_meta_text"] = " " + json.dumps(meta, default=_json_default) if meta else ""
    return _CONSOLE_FORMAT


def _json_format(record: dict[str, Any]) -> str:
    record["extra"]["_json"] = json.dumps(_format_payload(record), default=_json_default)
    return "{extra[_json]}\n"


class AppLogger:
    """Leveled logger delivering each record to every sink whose threshold permits it.

    Every instance owns its loguru handlers and only receives the records it
    emitted itself, so several instances (one per app, one per test) can live
    in the same process without seeing each other's output.
    """

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        self._owner = uuid4().hex
        self._handler_ids: list[int] = []
        self._previous_excepthook: Callable[..., Any] | None = None
        self._logger = logger.bind(**{_OWNER_KEY: self._owner})
        register_levels()
        _drop_default_handler()
        self._setup()

    @property
    def handler_ids(self) -> tuple[int, ...]:
        return tuple(self._handler_ids)

    def _owns(self, record: dict[str, Any]) -> bool:
        return record["extra"].get(_OWNER_KEY) == self._owner

    def _setup(self) -> None:
        self._setup_handlers()
        if self.config.handle_exceptions:
            self._install_excepthook()

    def _setup_handlers(self) -> None:
        if self.config.console is not None:
            self._handler_ids.append(self._add_console_sink(self.config.console))
        if self.config.file is not None:
            self._handler_ids.append(self._add_file_sink(self.config.file))

    def _add_console_sink(self, sink: SinkConfig) -> int:
        stream = sink.destination or sys.stdout
        return logger.add(
            stream,
            level=sink.level.loguru_name,
            format=_console_format,
            filter=self._owns,
            colorize=sink.colorize,
            backtrace=self.config.backtrace,
            diagnose=self.config.diagnose,
            catch=not self.config.exit_on_error,
        )

    def _add_file_sink(self, sink: SinkConfig) -> int:
        log_file = Path(sink.destination)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        options: dict[str, Any] = {}
        if sink.max_size_bytes is not None:
            options["rotation"] = sink.max_size_bytes
        if sink.max_files is not None:
            options["retention"] = sink.max_files

        return logger.add(
            str(log_file),
            level=sink.level.loguru_name,
            format=_json_format,
            filter=self._owns,
            colorize=False,
            backtrace=self.config.backtrace,
            diagnose=self.config.diagnose,
            catch=not self.config.exit_on_error,
            encoding="utf-8",
            **options,
        )

    def configure(self, **kwargs: Any) -> None:
        """Rebuild the sinks from an updated configuration."""

        self.close()
        self.config = self.config.model_copy(update=kwargs)
        self._setup()

    def close(self) -> None:
        """Remove this logger's handlers, closing the log file, and restore the previous excepthook."""

        self._restore_excepthook()
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids.clear()

    def _install_excepthook(self) -> None:
        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._log_uncaught

    def _restore_excepthook(self) -> None:
        if self._previous_excepthook is None:
            return
        # Leave a hook installed later by someone else in place.
        if sys.excepthook == self._log_uncaught:
            sys.excepthook = self._previous_excepthook
        self._previous_excepthook = None

    def _log_uncaught(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None,
    ) -> None:
        """Record an exception nobody caught, with its stack."""

        if issubclass(exc_type, KeyboardInterrupt):
            previous = self._previous_excepthook or sys.__excepthook__
            previous(exc_type, exc_value, exc_traceback)
            return
        if exc_value.__traceback__ is None:
            exc_value = exc_value.with_traceback(exc_traceback)
        self.error(f"Uncaught exception: {exc_value}", error=exc_value)

    def _emit(
        self,
        level: str | int | LogLevel,
        message: str,
        error: Any,
        metadata: dict[str, Any],
    ) -> None:
        if error is not None and not isinstance(error, BaseException):
            # A plain `error=` value is metadata, not an exception to render.
            metadata = {**metadata, "error": error}
            error = None
        resolved = LogLevel.parse(level)
        self._logger.bind(**{_META_KEY: metadata}).opt(depth=2, exception=error).log(resolved.loguru_name, message)

    def log(
        self,
        level: str | int | LogLevel,
        message: str,
        /,
        *,
        error: Any = None,
        **metadata: Any,
    ) -> None:
        """Emit ``message`` at ``level`` with optional exception and structured metadata."""

        self._emit(level, message, error, metadata)

    def error(self, message: str, /, *, error: Any = None, **metadata: Any) -> None:
        self._emit(LogLevel.ERROR, message, error, metadata)

    def warn(self, message: str, /, *, error: Any = None, **metadata: Any) -> None:
        self._emit(LogLevel.WARN, message, error, metadata)

    def info(self, message: str, /, *, error: Any = None, **metadata: Any) -> None:
        self._emit(LogLevel.INFO, message, error, metadata)

    def verbose(self, message: str, /, *, error: Any = None, **metadata: Any) -> None:
        self._emit(LogLevel.VERBOSE, message, error, metadata)

    def debug(self, message: str, /, *, error: Any = None, **metadata: Any) -> None:
        self._emit(LogLevel.DEBUG, message, error, metadata)

    def silly(self, message: str, /, *, error: Any = None, **metadata: Any) -> None:
        self._emit(LogLevel.SILLY, message, error, metadata)


__all__ = ["AppLogger"]
