"""Explicit results returned by route handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

GENERIC_ERROR_BODY = "Error!"


@dataclass(frozen=True)
class Success:
    """The handler produced a body to send."""

    body: str
    status_code: int = 200


@dataclass(frozen=True)
class HandledError:
    """The handler dealt with ``error`` itself and only needs a generic reply."""

    error: BaseException
    body: str = GENERIC_ERROR_BODY
    status_code: int = 500


@dataclass(frozen=True)
class EscalatedError:
    """The handler declines to deal with ``error``; the error pipeline takes over."""

    error: BaseException


HandlerResult = Success | HandledError | EscalatedError


async def resolve(
    request: Request,
    handler: Callable[..., HandlerResult],
    *args: Any,
) -> Response:
    """Run ``handler`` and turn its result into a response.

    An exception raised by the handler is escalated like an
    :class:`EscalatedError`.
    """
    try:
        result = handler(*args)
    except Exception as exc:
        result = EscalatedError(exc)

    if isinstance(result, Success):
        return PlainTextResponse(result.body, status_code=result.status_code)
    if isinstance(result, HandledError):
        return PlainTextResponse(result.body, status_code=result.status_code)
    return await request.app.state.error_pipeline.run(request, result.error)


__all__ = [
    "EscalatedError",
    "GENERIC_ERROR_BODY",
    "HandledError",
    "HandlerResult",
    "Success",
    "resolve",
]
