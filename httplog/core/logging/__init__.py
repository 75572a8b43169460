"""Leveled logging with a console sink and a size-capped rotating file sink."""

from httplog.core.logging.config import LogConfig, SinkConfig
from httplog.core.logging.levels import LogLevel, register_levels
from httplog.core.logging.logger import AppLogger

__all__ = [
    "AppLogger",
    "LogConfig",
    "LogLevel",
    "SinkConfig",
    "register_levels",
]
