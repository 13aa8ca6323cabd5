"""Tests for shared logging and telemetry helpers."""

import io
from unittest.mock import Mock

from loguru import logger

from src.shared_utilities.logging_config import LoggingManager
from src.shared_utilities.telemetry import TelemetryManager


class TestLoggingManager:
    """Test LoggingManager configuration."""

    def test_configure_once(self, monkeypatch):
        stream = io.StringIO()
        monkeypatch.setattr("sys.stderr", stream)
        manager = LoggingManager()

        manager.configure_logging(level="WARNING")
        manager.configure_logging(level="DEBUG")
        manager.get_logger("tests").info("hidden")
        manager.get_logger("tests").warning("shown")

        assert manager.configured
        assert "shown" in stream.getvalue()
        assert "hidden" not in stream.getvalue()
        manager.reset()

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "lock-history.log"
        manager = LoggingManager()

        manager.configure_logging(
            level="INFO", enable_file_logging=True, log_file_path=log_file
        )
        manager.get_logger("tests").info("written to file")
        logger.complete()
        manager.reset()

        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_reset_allows_reconfiguration(self):
        manager = LoggingManager()
        manager.configure_logging(level="ERROR")
        manager.reset()

        assert not manager.configured

    def test_operation_logging_carries_context(self, monkeypatch):
        stream = io.StringIO()
        monkeypatch.setattr("sys.stderr", stream)
        manager = LoggingManager()
        manager.configure_logging(level="INFO", structured_format=True)

        manager.log_operation_start("analyze_lock_history", library="acme/foo")
        manager.log_operation_complete("analyze_lock_history", 0.25, entries=2)
        manager.log_operation_error(
            "analyze_lock_history", ValueError("bad rev"), library="acme/foo"
        )
        manager.reset()

        output = stream.getvalue()
        assert "Operation started" in output
        assert "Operation completed" in output
        assert "Operation failed" in output
        assert "'library': 'acme/foo'" in output
        assert "'entries': 2" in output
        assert "'error_type': 'ValueError'" in output
        assert "'error_message': 'bad rev'" in output


class TestTelemetryManager:
    """Test TelemetryManager spans."""

    def test_disabled_yields_no_span(self, monkeypatch):
        monkeypatch.setenv("LOCK_HISTORY_TELEMETRY", "false")
        manager = TelemetryManager()

        with manager.trace_operation("noop") as span:
            assert span is None

    def test_trace_function_returns_result(self, monkeypatch):
        monkeypatch.setenv("LOCK_HISTORY_TELEMETRY", "false")
        manager = TelemetryManager()

        @manager.trace_function("double", include_args=True)
        def double(value):
            return value * 2

        assert double(21) == 42
        assert double.__name__ == "double"

    def test_set_attribute_on_span(self, monkeypatch):
        monkeypatch.setenv("LOCK_HISTORY_TELEMETRY", "false")
        manager = TelemetryManager()
        span = Mock()

        manager.set_attribute(span, "timeline_entries", 3)
        span.set_attribute.assert_not_called()

        manager.enabled = True
        manager.set_attribute(span, "timeline_entries", 3)
        manager.set_attribute(None, "timeline_entries", 3)
        span.set_attribute.assert_called_once_with("timeline_entries", "3")
