"""HTTP surface: FastAPI app factory, request logging and error middleware."""

from httplog.web.app import create_app

__all__ = ["create_app"]
