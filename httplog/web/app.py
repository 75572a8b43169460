"""
FastAPI application factory
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from httplog import __version__
from httplog.core.config import AppConfig
from httplog.core.logging import AppLogger, LogConfig
from httplog.web.middleware import RequestLoggingMiddleware
from httplog.web.pipeline import ErrorPipeline, default_error_pipeline
from httplog.web.routes import demo_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Announce startup and shutdown through the shared logger"""
    app_logger: AppLogger = app.state.app_logger
    config: AppConfig = app.state.config
    app_logger.info(
        f"httplog listening on port {config.server.port}.",
        host=config.server.host,
        port=config.server.port,
    )

    yield

    app_logger.info("httplog shutting down.")


def create_app(
    config: AppConfig | None = None,
    app_logger: AppLogger | None = None,
    error_pipeline: ErrorPipeline | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    The logger is built from ``config`` unless one is passed in; it is shared
    by the request logging middleware, the route handlers and the error
    pipeline through ``app.state``.
    """
    config = config or AppConfig()
    app_logger = app_logger or AppLogger(LogConfig.from_settings(config.logging))

    app = FastAPI(
        title="httplog",
        description="Minimal HTTP service demonstrating request and error logging middleware",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.app_logger = app_logger
    app.state.error_pipeline = error_pipeline or default_error_pipeline(app_logger)

    _setup_middleware(app, app_logger)
    _setup_routes(app)

    return app


def _setup_middleware(app: FastAPI, app_logger: AppLogger) -> None:
    app.add_middleware(RequestLoggingMiddleware, app_logger=app_logger)


def _setup_routes(app: FastAPI) -> None:
    app.include_router(demo_router, tags=["demo"])
