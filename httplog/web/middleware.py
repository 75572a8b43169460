"""Request logging middleware."""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from httplog.core.logging import AppLogger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Record method, path, status and duration of every request.

    The request and response pass through untouched.
    """

    def __init__(self, app: ASGIApp, app_logger: AppLogger) -> None:
        super().__init__(app)
        self.app_logger = app_logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, None, start_time)
            raise

        self._record(request, response.status_code, response.headers.get("content-length"), start_time)
        return response

    def _record(
        self,
        request: Request,
        status_code: int,
        content_length: str | None,
        start_time: float,
    ) -> None:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 3)
        self.app_logger.info(
            f"{request.method} {request.url.path} {status_code} {content_length or '-'} - {duration_ms} ms",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
