"""Route handlers for the three demo endpoints.

Handlers are plain functions returning a :class:`HandlerResult`; they never
touch the HTTP layer directly.
"""

from typing import NoReturn

from httplog.core.exceptions import DemoFailure
from httplog.core.logging import AppLogger
from httplog.web.results import EscalatedError, HandledError, HandlerResult, Success


def _explode() -> NoReturn:
    raise DemoFailure("Wowza!")


def index(app_logger: AppLogger) -> HandlerResult:
    app_logger.debug('This is the "/" route.')
    return Success("Hello World!")


def boom(app_logger: AppLogger) -> HandlerResult:
    """Fail, then deal with the failure locally."""
    try:
        _explode()
    except DemoFailure as error:
        app_logger.error(f"Whooops! This broke with error: {error}", error=error)
        return HandledError(error)


def escalate(app_logger: AppLogger) -> HandlerResult:
    """Fail and hand the failure to the error pipeline."""
    try:
        _explode()
    except DemoFailure as error:
        return EscalatedError(error)
