# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for error reporter implementations."""

import io
from unittest.mock import patch

import pytest

from copilot_gelf.console_error_reporter import ConsoleErrorReporter
from copilot_gelf.error_reporter import ErrorCode, ErrorReporter
from copilot_gelf.silent_error_reporter import SilentErrorReporter


def _raised(error):
    try:
        raise error
    except Exception as exc:
        return exc


class TestErrorReporterInterface:
    """Tests for the abstract interface."""

    def test_cannot_instantiate(self):
        """Test that ErrorReporter is abstract."""
        with pytest.raises(TypeError):
            ErrorReporter()

    def test_error_codes(self):
        """Test the failure classification values."""
        assert ErrorCode.GENERIC_FAILURE == 0
        assert ErrorCode.WRITE_FAILURE == 1
        assert ErrorCode.FLUSH_FAILURE == 2
        assert ErrorCode.CLOSE_FAILURE == 3
        assert ErrorCode.OPEN_FAILURE == 4
        assert ErrorCode.FORMAT_FAILURE == 5


class TestConsoleErrorReporter:
    """Tests for ConsoleErrorReporter."""

    def test_report_message_only(self):
        """Test output for a failure without a cause."""
        stream = io.StringIO()
        reporter = ConsoleErrorReporter(stream=stream)

        reporter.report("GELF hostname is empty", code=ErrorCode.WRITE_FAILURE)

        assert stream.getvalue() == "--- GELF handler error [WRITE_FAILURE]: GELF hostname is empty\n"

    def test_report_with_error_includes_traceback(self):
        """Test that the cause and its traceback are written."""
        stream = io.StringIO()
        reporter = ConsoleErrorReporter(stream=stream)

        reporter.report("Could not send", _raised(OSError("broken pipe")), ErrorCode.WRITE_FAILURE)

        output = stream.getvalue()
        assert "[WRITE_FAILURE]: Could not send | OSError: broken pipe" in output
        assert "Traceback (most recent call last)" in output

    def test_traceback_can_be_disabled(self):
        """Test include_traceback=False."""
        stream = io.StringIO()
        reporter = ConsoleErrorReporter(stream=stream, include_traceback=False)

        reporter.report("Could not send", _raised(OSError("broken pipe")))

        assert "Traceback" not in stream.getvalue()

    def test_defaults_to_stderr(self, capsys):
        """Test that output goes to stderr by default."""
        ConsoleErrorReporter().report("Could not close", code=ErrorCode.CLOSE_FAILURE)

        captured = capsys.readouterr()
        assert "[CLOSE_FAILURE]: Could not close" in captured.err
        assert captured.out == ""


class TestSilentErrorReporter:
    """Tests for SilentErrorReporter."""

    def test_stores_reports(self):
        """Test that reports are kept with their details."""
        reporter = SilentErrorReporter()
        error = ValueError("bad")

        reporter.report("Could not build GELF message", error, ErrorCode.FORMAT_FAILURE)

        assert reporter.reported_errors == [{
            "message": "Could not build GELF message",
            "error": error,
            "error_type": "ValueError",
            "code": ErrorCode.FORMAT_FAILURE,
        }]

    def test_filter_by_code(self):
        """Test get_errors and has_error with a code filter."""
        reporter = SilentErrorReporter()
        reporter.report("Could not send GELF message", code=ErrorCode.WRITE_FAILURE)
        reporter.report("Could not close GELF sender", code=ErrorCode.CLOSE_FAILURE)

        assert len(reporter.get_errors(ErrorCode.WRITE_FAILURE)) == 1
        assert reporter.has_error("could not SEND")
        assert not reporter.has_error("could not send", code=ErrorCode.CLOSE_FAILURE)
        assert reporter.has_error("could not close", code=ErrorCode.CLOSE_FAILURE)

    def test_clear(self):
        """Test clearing stored reports."""
        reporter = SilentErrorReporter()
        reporter.report("failure")

        reporter.clear()

        assert not reporter.has_errors()


class TestSentryErrorReporter:
    """Tests for SentryErrorReporter."""

    @pytest.fixture(autouse=True)
    def sentry_sdk(self):
        return pytest.importorskip("sentry_sdk")

    def test_message_captured_with_tags(self):
        """Test that failures without a cause are sent as messages."""
        from copilot_gelf.sentry_error_reporter import SentryErrorReporter

        with patch("sentry_sdk.capture_message") as capture_message:
            SentryErrorReporter().report("GELF hostname is empty", code=ErrorCode.WRITE_FAILURE)

        capture_message.assert_called_once_with(
            "GELF hostname is empty",
            level="error",
            tags={"gelf.error_code": "WRITE_FAILURE", "gelf.message": "GELF hostname is empty"},
        )

    def test_exception_captured(self):
        """Test that failures with a cause are sent as exceptions."""
        from copilot_gelf.sentry_error_reporter import SentryErrorReporter

        error = OSError("connection reset")
        with patch("sentry_sdk.capture_exception") as capture_exception:
            SentryErrorReporter().report("Could not send GELF message", error, ErrorCode.WRITE_FAILURE)

        capture_exception.assert_called_once()
        assert capture_exception.call_args.args[0] is error
        assert capture_exception.call_args.kwargs["tags"]["gelf.error_code"] == "WRITE_FAILURE"

    def test_dsn_initializes_sdk(self):
        """Test that a DSN triggers sentry_sdk.init."""
        from copilot_gelf.sentry_error_reporter import SentryErrorReporter

        with patch("sentry_sdk.init") as init:
            SentryErrorReporter(dsn="https://key@sentry.example/1", environment="test")

        init.assert_called_once_with(dsn="https://key@sentry.example/1", environment="test")
