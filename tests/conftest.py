"""Pytest configuration and shared fixtures for the httplog test suite."""

from __future__ import annotations

import io
import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from httplog.core.config import AppConfig
from httplog.core.logging import AppLogger, LogConfig, SinkConfig
from httplog.web.app import create_app

HTTPLOG_ENV_VARS = (
    "HTTPLOG_HOST",
    "HTTPLOG_PORT",
    "HTTPLOG_CONSOLE_LEVEL",
    "HTTPLOG_FILE_LEVEL",
    "HTTPLOG_LOG_FILE",
    "HTTPLOG_LOG_MAX_BYTES",
    "HTTPLOG_LOG_MAX_FILES",
    "HTTPLOG_LOG_COLORIZE",
    "HTTPLOG_FILE_LOGGING",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove HTTPLOG_* variables and restore them after the test, including ones set by dotenv."""

    for name in HTTPLOG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def console_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "app.log"


@pytest.fixture
def app_logger(console_stream: io.StringIO, log_file: Path) -> Iterator[AppLogger]:
    """Logger with the production thresholds writing to an in-memory console and a temp file."""

    config = LogConfig(
        console=SinkConfig(level="debug", destination=console_stream),
        file=SinkConfig(
            level="info",
            destination=str(log_file),
            max_size_bytes=5 * 1024 * 1024,
            max_files=5,
        ),
    )
    app_logger = AppLogger(config)
    yield app_logger
    app_logger.close()


@pytest.fixture
def file_records(log_file: Path) -> Callable[[], list[dict[str, Any]]]:
    """Return a reader parsing the JSON lines written to the log file so far."""

    def read() -> list[dict[str, Any]]:
        if not log_file.exists():
            return []
        lines = log_file.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line.strip()]

    return read


@pytest.fixture
def app(app_logger: AppLogger) -> FastAPI:
    return create_app(AppConfig(), app_logger)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
