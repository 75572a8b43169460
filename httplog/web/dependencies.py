"""FastAPI dependencies resolving shared objects from application state."""

from fastapi import Request

from httplog.core.logging import AppLogger


def get_app_logger(request: Request) -> AppLogger:
    return request.app.state.app_logger
