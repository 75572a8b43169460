"""httplog - a small HTTP service showing layered request and error logging.

The service exposes three demo routes on top of FastAPI and records every
request and error through a loguru-backed logger with a console sink and a
size-capped rotating file sink.
"""

from httplog.core.config import AppConfig, get_config
from httplog.core.exceptions import HttplogError, InvalidArgumentError
from httplog.core.logging import AppLogger, LogConfig, LogLevel
from httplog.providers import compute

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "AppLogger",
    "HttplogError",
    "InvalidArgumentError",
    "LogConfig",
    "LogLevel",
    "compute",
    "get_config",
    "__version__",
]
