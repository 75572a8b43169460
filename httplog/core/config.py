"""Application configuration loaded from defaults, a ``.env`` file and the environment."""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from httplog.core.exceptions import ConfigurationError

DEFAULT_PORT = 3001
DEFAULT_LOG_FILE = "./logs/app.log"
DEFAULT_MAX_SIZE_BYTES = 5 * 1024 * 1024
DEFAULT_MAX_FILES = 5


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT


@dataclass
class LoggingConfig:
    """Logging settings"""

    console_level: str = "debug"
    file_level: str = "info"
    file_path: str = DEFAULT_LOG_FILE
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES
    max_files: int = DEFAULT_MAX_FILES
    colorize: bool = True
    file_enabled: bool = True


@dataclass
class AppConfig:
    """Top level httplog configuration"""

    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "AppConfig":
        """Build a configuration from a nested dictionary."""
        server_config = ServerConfig(**config_dict.get("server", {}))
        logging_config = LoggingConfig(**config_dict.get("logging", {}))

        return cls(server=server_config, logging=logging_config)

    def to_dict(self) -> dict[str, Any]:
        return {
            "server": asdict(self.server),
            "logging": asdict(self.logging),
        }


def load_env_file(path: str | Path | None = None) -> bool:
    """Load variables from a ``.env`` file into the process environment.

    Variables already set in the environment are left untouched. A missing
    file is not an error.

    Returns:
        True if at least one variable was read from the file.
    """
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    return load_dotenv(env_path, override=False)


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}", key=key) from e


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env() -> dict[str, Any]:
    """Read ``HTTPLOG_*`` environment variables into a nested configuration dict."""
    config: dict[str, Any] = {}

    server_config: dict[str, Any] = {}
    httplog_host = os.getenv("HTTPLOG_HOST")
    if httplog_host is not None:
        server_config["host"] = httplog_host
    httplog_port = os.getenv("HTTPLOG_PORT")
    if httplog_port is not None:
        server_config["port"] = _parse_int("HTTPLOG_PORT", httplog_port)

    if server_config:
        config["server"] = server_config

    logging_config: dict[str, Any] = {}
    httplog_console_level = os.getenv("HTTPLOG_CONSOLE_LEVEL")
    if httplog_console_level is not None:
        logging_config["console_level"] = httplog_console_level
    httplog_file_level = os.getenv("HTTPLOG_FILE_LEVEL")
    if httplog_file_level is not None:
        logging_config["file_level"] = httplog_file_level
    httplog_log_file = os.getenv("HTTPLOG_LOG_FILE")
    if httplog_log_file is not None:
        logging_config["file_path"] = httplog_log_file
    httplog_max_bytes = os.getenv("HTTPLOG_LOG_MAX_BYTES")
    if httplog_max_bytes is not None:
        logging_config["max_size_bytes"] = _parse_int("HTTPLOG_LOG_MAX_BYTES", httplog_max_bytes)
    httplog_max_files = os.getenv("HTTPLOG_LOG_MAX_FILES")
    if httplog_max_files is not None:
        logging_config["max_files"] = _parse_int("HTTPLOG_LOG_MAX_FILES", httplog_max_files)
    httplog_colorize = os.getenv("HTTPLOG_LOG_COLORIZE")
    if httplog_colorize is not None:
        logging_config["colorize"] = _parse_bool(httplog_colorize)
    httplog_file_logging = os.getenv("HTTPLOG_FILE_LOGGING")
    if httplog_file_logging is not None:
        logging_config["file_enabled"] = _parse_bool(httplog_file_logging)

    if logging_config:
        config["logging"] = logging_config

    return config


def get_config(env_file: str | Path | None = None) -> AppConfig:
    """Load the ``.env`` file, then build the configuration from the environment."""
    load_env_file(env_file)
    return AppConfig.from_dict(load_config_from_env())


__all__ = [
    "AppConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_config",
    "load_config_from_env",
    "load_env_file",
]
