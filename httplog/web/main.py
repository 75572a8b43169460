"""
Web server entry point
"""

import uvicorn

from httplog.core.config import AppConfig, get_config
from httplog.core.logging import AppLogger, LogConfig
from httplog.web.app import create_app


def run_server(config: AppConfig | None = None) -> None:
    """Serve the application until the process is terminated.

    uvicorn exits the process with a non-zero status if the port cannot be bound.
    """
    config = config or get_config()
    app_logger = AppLogger(LogConfig.from_settings(config.logging))
    app = create_app(config, app_logger)

    try:
        uvicorn.run(
            app,
            host=config.server.host,
            port=config.server.port,
            access_log=False,
            log_level="warning",
        )
    finally:
        app_logger.close()


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
