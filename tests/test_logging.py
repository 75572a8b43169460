"""Tests for the loguru-backed application logger."""

import io
import json
import sys
from pathlib import Path

import pytest

from httplog.core.config import LoggingConfig
from httplog.core.logging import AppLogger, LogConfig, LogLevel, SinkConfig


class _BrokenStream(io.StringIO):
    """Stream whose writes always fail."""

    def write(self, text):
        raise OSError("disk on fire")


class TestLogConfig:
    """Test sink configuration models."""

    def test_default_config(self):
        """Defaults match the production sinks."""
        config = LogConfig()
        assert config.console.level == LogLevel.DEBUG
        assert config.console.colorize is True
        assert config.file.level == LogLevel.INFO
        assert config.file.destination == "./logs/app.log"
        assert config.file.max_size_bytes == 5242880
        assert config.file.max_files == 5
        assert config.file.colorize is False
        assert config.exit_on_error is False

    def test_level_accepts_names_and_numbers(self):
        assert SinkConfig(level="verbose").level == LogLevel.VERBOSE
        assert SinkConfig(level="WARNING").level == LogLevel.WARN
        assert SinkConfig(level=5).level == LogLevel.SILLY

    def test_from_settings(self):
        settings = LoggingConfig(console_level="info", file_level="warn", file_path="/tmp/x.log", colorize=False)
        config = LogConfig.from_settings(settings)
        assert config.console.level == LogLevel.INFO
        assert config.console.colorize is False
        assert config.file.level == LogLevel.WARN
        assert config.file.destination == "/tmp/x.log"

    def test_from_settings_without_file(self):
        config = LogConfig.from_settings(LoggingConfig(file_enabled=False))
        assert config.file is None


class TestLevelFiltering:
    """A record reaches a sink iff its level is at or above the sink threshold."""

    def test_debug_goes_to_console_only(self, app_logger, console_stream, file_records):
        app_logger.debug("debug only")
        assert "debug only" in console_stream.getvalue()
        assert file_records() == []

    def test_info_goes_to_both_sinks(self, app_logger, console_stream, file_records):
        app_logger.info("both sinks")
        assert "both sinks" in console_stream.getvalue()
        records = file_records()
        assert len(records) == 1
        assert records[0]["message"] == "both sinks"
        assert records[0]["level"] == "info"

    def test_verbose_is_below_file_threshold(self, app_logger, console_stream, file_records):
        app_logger.verbose("verbose record")
        assert "verbose record" in console_stream.getvalue()
        assert file_records() == []

    def test_silly_is_dropped_everywhere(self, app_logger, console_stream, file_records):
        app_logger.silly("silly record")
        assert "silly record" not in console_stream.getvalue()
        assert file_records() == []

    @pytest.mark.parametrize("level", ["error", "warn", "info"])
    def test_severe_levels_reach_file(self, app_logger, file_records, level):
        app_logger.log(level, f"{level} message")
        assert [r["level"] for r in file_records()] == [level]

    def test_console_shows_npm_level_name(self, app_logger, console_stream):
        app_logger.warn("careful")
        line = console_stream.getvalue().splitlines()[0]
        assert "| warn" in line
        assert "careful" in line


class TestStructuredRecords:
    """File records are JSON objects carrying metadata and stack traces."""

    def test_metadata_is_stored(self, app_logger, file_records):
        app_logger.info("with meta", request_id="abc", attempt=2)
        record = file_records()[0]
        assert record["meta"] == {"request_id": "abc", "attempt": 2}
        assert "timestamp" in record

    def test_private_keys_are_not_stored(self, app_logger, file_records):
        app_logger.info("plain")
        record = file_records()[0]
        assert "meta" not in record

    def test_braces_in_message_are_kept(self, app_logger, file_records):
        app_logger.info("payload {not a placeholder}", value=1)
        assert file_records()[0]["message"] == "payload {not a placeholder}"

    def test_error_attaches_stack(self, app_logger, console_stream, file_records):
        try:
            raise ValueError("kaput")
        except ValueError as exc:
            app_logger.error("it broke", error=exc)

        record = file_records()[0]
        assert record["level"] == "error"
        assert "ValueError: kaput" in record["stack"]
        assert "Traceback" in record["stack"]
        assert "ValueError: kaput" in console_stream.getvalue()

    def test_console_appends_metadata(self, app_logger, console_stream):
        app_logger.info("hello", user="ada")
        assert '{"user": "ada"}' in console_stream.getvalue()


class TestMetadataKeys:
    """Caller metadata never clashes with the logger's own arguments or bookkeeping."""

    @pytest.mark.parametrize("key", ["message", "level"])
    def test_argument_names_as_metadata(self, app_logger, file_records, key):
        app_logger.info("hello", **{key: "x"})
        app_logger.log("warn", "again", **{key: "y"})

        records = file_records()
        assert [r["message"] for r in records] == ["hello", "again"]
        assert records[0]["meta"] == {key: "x"}
        assert records[1]["meta"] == {key: "y"}

    def test_non_exception_error_is_metadata(self, app_logger, file_records):
        app_logger.warn("lookup failed", error="not found")

        record = file_records()[0]
        assert record["meta"] == {"error": "not found"}
        assert "stack" not in record

    def test_owner_key_does_not_hide_record(self, app_logger, console_stream, file_records):
        app_logger.info("still visible", _owner="someone")

        assert "still visible" in console_stream.getvalue()
        assert file_records()[0]["meta"] == {"_owner": "someone"}

    def test_underscore_keys_are_kept(self, app_logger, file_records):
        app_logger.info("private looking", _trace="t-1", _json="raw")
        assert file_records()[0]["meta"] == {"_trace": "t-1", "_json": "raw"}


class TestUncaughtExceptions:
    """Uncaught exceptions are recorded through sys.excepthook."""

    def test_hook_installed_and_restored(self, console_stream):
        previous = sys.excepthook
        app_logger = AppLogger(LogConfig(console=SinkConfig(level="debug", destination=console_stream), file=None))
        assert sys.excepthook == app_logger._log_uncaught
        app_logger.close()
        assert sys.excepthook is previous

    def test_hook_disabled(self, console_stream):
        previous = sys.excepthook
        app_logger = AppLogger(
            LogConfig(
                console=SinkConfig(level="debug", destination=console_stream),
                file=None,
                handle_exceptions=False,
            )
        )
        try:
            assert sys.excepthook is previous
        finally:
            app_logger.close()

    def test_hook_logs_stack(self, app_logger, console_stream, file_records):
        try:
            raise RuntimeError("startup failed")
        except RuntimeError:
            sys.excepthook(*sys.exc_info())

        record = file_records()[0]
        assert record["level"] == "error"
        assert record["message"] == "Uncaught exception: startup failed"
        assert "Traceback" in record["stack"]
        assert "RuntimeError: startup failed" in record["stack"]
        assert "RuntimeError: startup failed" in console_stream.getvalue()

    def test_hook_attaches_traceback_passed_separately(self, app_logger, file_records):
        try:
            raise ValueError("late")
        except ValueError as exc:
            exc_type, tb = type(exc), exc.__traceback__
        error = ValueError("late")
        sys.excepthook(exc_type, error, tb)

        assert "ValueError: late" in file_records()[0]["stack"]


class TestLoggerLifecycle:
    """Test handler ownership and reconfiguration."""

    def test_instances_are_isolated(self, tmp_path):
        first_stream, second_stream = io.StringIO(), io.StringIO()
        first = AppLogger(LogConfig(console=SinkConfig(level="debug", destination=first_stream), file=None))
        second = AppLogger(LogConfig(console=SinkConfig(level="debug", destination=second_stream), file=None))
        try:
            first.info("from first")
            second.info("from second")
        finally:
            first.close()
            second.close()

        assert "from first" in first_stream.getvalue()
        assert "from second" not in first_stream.getvalue()
        assert "from second" in second_stream.getvalue()
        assert "from first" not in second_stream.getvalue()

    def test_close_removes_handlers(self, console_stream):
        app_logger = AppLogger(LogConfig(console=SinkConfig(level="debug", destination=console_stream), file=None))
        assert len(app_logger.handler_ids) == 1
        app_logger.close()
        assert app_logger.handler_ids == ()

        app_logger.info("after close")
        assert "after close" not in console_stream.getvalue()

    def test_configure_updates_threshold(self, console_stream):
        app_logger = AppLogger(LogConfig(console=SinkConfig(level="info", destination=console_stream), file=None))
        try:
            app_logger.debug("hidden")
            app_logger.configure(console=SinkConfig(level="debug", destination=console_stream))
            app_logger.debug("shown")
        finally:
            app_logger.close()

        output = console_stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output
        assert app_logger.config.console.level == LogLevel.DEBUG

    def test_file_sink_creates_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "dir" / "app.log"
        app_logger = AppLogger(LogConfig(console=None, file=SinkConfig(destination=str(log_file))))
        app_logger.close()
        assert log_file.parent.is_dir()


class TestSinkFailures:
    """A broken sink must not take the caller down unless asked to."""

    def test_sink_failure_is_swallowed(self):
        app_logger = AppLogger(LogConfig(console=SinkConfig(level="debug", destination=_BrokenStream()), file=None))
        try:
            app_logger.info("goes nowhere")
        finally:
            app_logger.close()

    def test_sink_failure_raises_when_exit_on_error(self):
        app_logger = AppLogger(
            LogConfig(
                console=SinkConfig(level="debug", destination=_BrokenStream()),
                file=None,
                exit_on_error=True,
            )
        )
        try:
            with pytest.raises(OSError):
                app_logger.info("goes nowhere")
        finally:
            app_logger.close()


class TestFileRotation:
    """Test size-based rotation and retention of the file sink."""

    def _archives(self, directory: Path) -> list[Path]:
        return sorted(directory.glob("app.*.log"))

    def test_rotation_keeps_five_archives(self, tmp_path):
        log_file = tmp_path / "app.log"
        app_logger = AppLogger(
            LogConfig(
                console=None,
                file=SinkConfig(
                    level="info",
                    destination=str(log_file),
                    max_size_bytes=1024,
                    max_files=5,
                ),
            )
        )
        try:
            for i in range(200):
                app_logger.info(f"record {i} " + "x" * 100)
        finally:
            app_logger.close()

        assert log_file.exists()
        assert len(self._archives(tmp_path)) == 5

        remaining = [log_file, *self._archives(tmp_path)]
        contents = [path.read_text(encoding="utf-8") for path in remaining]
        assert not any("record 0 " in text for text in contents)
        assert any("record 199 " in text for text in contents)
        assert all(path.stat().st_size <= 1024 for path in remaining)

    def test_no_rotation_below_threshold(self, tmp_path):
        log_file = tmp_path / "app.log"
        app_logger = AppLogger(
            LogConfig(
                console=None,
                file=SinkConfig(destination=str(log_file), max_size_bytes=5 * 1024 * 1024, max_files=5),
            )
        )
        try:
            for i in range(20):
                app_logger.info(f"record {i}")
        finally:
            app_logger.close()

        assert self._archives(tmp_path) == []
        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 20
        assert json.loads(lines[-1])["message"] == "record 19"

    def test_file_is_appended_across_loggers(self, tmp_path):
        log_file = tmp_path / "app.log"
        for message in ("first run", "second run"):
            app_logger = AppLogger(LogConfig(console=None, file=SinkConfig(destination=str(log_file))))
            app_logger.info(message)
            app_logger.close()

        messages = [json.loads(line)["message"] for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert messages == ["first run", "second run"]
