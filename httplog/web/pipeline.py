"""Ordered error middleware.

Each stage receives the request and the escalated error and either passes
an error on to the next stage or answers the request. Order matters: the
logging stage has to run before the stage that answers, otherwise the
error is answered without ever being recorded.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

from httplog.core.logging import AppLogger
from httplog.web.results import GENERIC_ERROR_BODY

FALLBACK_ERROR_BODY = "Internal Server Error"


@dataclass(frozen=True)
class Continue:
    """Hand ``error`` to the next stage."""

    error: BaseException


@dataclass(frozen=True)
class Respond:
    """Stop the chain and send ``response``."""

    response: Response


StageResult = Continue | Respond
ErrorStage = Callable[[Request, BaseException], Awaitable[StageResult]]


class ErrorPipeline:
    """Drives an ordered list of error stages until one of them responds."""

    def __init__(self, stages: Sequence[ErrorStage] = ()) -> None:
        self._stages: list[ErrorStage] = list(stages)

    @property
    def stages(self) -> tuple[ErrorStage, ...]:
        return tuple(self._stages)

    def use(self, stage: ErrorStage) -> ErrorPipeline:
        """Append ``stage`` to the end of the chain."""

        self._stages.append(stage)
        return self

    async def run(self, request: Request, error: BaseException) -> Response:
        current = error
        for stage in self._stages:
            result = await stage(request, current)
            if isinstance(result, Respond):
                return result.response
            current = result.error
        return PlainTextResponse(FALLBACK_ERROR_BODY, status_code=500)


def log_errors(app_logger: AppLogger) -> ErrorStage:
    """Build the stage that records the error with its stack trace, then continues."""

    async def log_errors_stage(request: Request, error: BaseException) -> StageResult:
        app_logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {error}",
            error=error,
            method=request.method,
            path=request.url.path,
        )
        return Continue(error)

    return log_errors_stage


async def respond_with_error(request: Request, error: BaseException) -> StageResult:
    """Terminal stage: answer with a generic 500."""

    return Respond(PlainTextResponse(GENERIC_ERROR_BODY, status_code=500))


def default_error_pipeline(app_logger: AppLogger) -> ErrorPipeline:
    return ErrorPipeline([log_errors(app_logger), respond_with_error])


__all__ = [
    "Continue",
    "ErrorPipeline",
    "ErrorStage",
    "Respond",
    "StageResult",
    "default_error_pipeline",
    "log_errors",
    "respond_with_error",
]
