"""HTTP routers."""

from httplog.web.routes.demo_routes import router as demo_router

__all__ = ["demo_router"]
