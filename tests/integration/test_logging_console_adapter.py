"""Integration tests for ConsoleAdapter with real structlog.

Tests cover:
- JSON output to stdout
- Level filtering
- Error details from exceptions
- Context binding
- Credential redaction
- Client modules' `payrix_*` events share the adapter's configuration

Architecture:
- Integration tests with REAL structlog (not mocked)
- stdout patched before the adapter is built, so the configured
  PrintLoggerFactory writes into the capture buffer
"""

import json
import sys
from io import StringIO
from unittest.mock import patch

import pytest
import structlog

from payrix.infrastructure.logging import ConsoleAdapter
from payrix.infrastructure.logging.console_adapter import REDACTED


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def _lines(output: StringIO) -> list[dict]:
    return [json.loads(line) for line in output.getvalue().strip().splitlines()]


@pytest.mark.integration
class TestConsoleAdapterIntegration:
    """ConsoleAdapter writing real structlog output."""

    def test_json_mode_produces_valid_json(self):
        """JSON mode renders event, level, timestamp and context."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True)
            adapter.info("payrix_transport_created", environment="sandbox", count=2)

        (log_data,) = _lines(captured_output)
        assert log_data["event"] == "payrix_transport_created"
        assert log_data["level"] == "info"
        assert log_data["environment"] == "sandbox"
        assert log_data["count"] == 2
        assert "timestamp" in log_data

    def test_level_filters_lower_events(self):
        """Events below the configured level are dropped."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True, level="WARNING")
            adapter.debug("debug_event")
            adapter.info("info_event")
            adapter.warning("warning_event")
            adapter.critical("critical_event")

        events = [line["event"] for line in _lines(captured_output)]
        assert events == ["warning_event", "critical_event"]

    def test_unknown_level_defaults_to_info(self):
        """An unrecognized level name behaves like INFO."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True, level="chatty")
            adapter.debug("debug_event")
            adapter.info("info_event")

        assert [line["event"] for line in _lines(captured_output)] == ["info_event"]

    def test_error_with_exception_includes_error_details(self):
        """error() with an exception adds its type and message."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True)
            adapter.error(
                "payrix_api_retries_exhausted",
                error=TimeoutError("read timed out"),
                attempts=4,
            )

        (log_data,) = _lines(captured_output)
        assert log_data["error_type"] == "TimeoutError"
        assert log_data["error_message"] == "read timed out"
        assert log_data["attempts"] == 4

    def test_bind_keeps_original_unchanged(self):
        """bind() returns a new adapter; the original has no bound context."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True)
            bound = adapter.bind(chargeback_id="t1_chb_1").bind(merchant="t1_mer_1")
            adapter.info("original")
            bound.info("bound")

        original, bound_line = _lines(captured_output)
        assert "chargeback_id" not in original
        assert bound_line["chargeback_id"] == "t1_chb_1"
        assert bound_line["merchant"] == "t1_mer_1"

    def test_secrets_are_redacted(self):
        """Credential-looking keys are masked in the output."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True)
            adapter.info("payrix_request", APIKEY="pk_live_123", path="customers")

        (log_data,) = _lines(captured_output)
        assert log_data["APIKEY"] == REDACTED
        assert log_data["path"] == "customers"
        assert "pk_live_123" not in captured_output.getvalue()

    def test_module_loggers_use_adapter_configuration(self):
        """Events logged by client modules render through the adapter."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            ConsoleAdapter(use_json=True)
            structlog.get_logger("payrix_api").warning(
                "payrix_api_retry_scheduled", attempt=1, wait_seconds=2.0
            )

        (log_data,) = _lines(captured_output)
        assert log_data["event"] == "payrix_api_retry_scheduled"
        assert log_data["level"] == "warning"
        assert log_data["wait_seconds"] == 2.0

    def test_console_mode_is_human_readable(self):
        """Console mode renders text, not JSON."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=False)
            adapter.info("payrix_listing_completed", records=3)

        output = captured_output.getvalue()
        assert "payrix_listing_completed" in output
        assert "records" in output
        with pytest.raises(json.JSONDecodeError):
            json.loads(output)
