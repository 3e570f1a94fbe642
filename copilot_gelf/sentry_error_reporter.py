# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Sentry error reporter implementation."""

from .error_reporter import ErrorCode, ErrorReporter


class SentryErrorReporter(ErrorReporter):
    """Sentry error reporter for cloud-based tracking of handler failures.

    Requires the ``sentry`` extra (``pip install copilot-gelf[sentry]``).

    Example:
        reporter = SentryErrorReporter(dsn="https://...@sentry.io/...")
        handler = GelfHandler(graylog_host="graylog", error_reporter=reporter)
    """

    def __init__(self, dsn: str | None = None, environment: str | None = None):
        """Initialize Sentry error reporter.

        Args:
            dsn: Sentry DSN (Data Source Name) for the project. When omitted
                the reporter assumes sentry_sdk was initialized elsewhere.
            environment: Environment name (production, staging, development)
        """
        self.dsn = dsn
        self.environment = environment
        self._initialized = False

        if dsn:
            self._initialize_sentry()

    def _initialize_sentry(self) -> None:
        """Initialize Sentry SDK."""
        try:
            import sentry_sdk
        except ImportError as exc:
            raise ImportError(
                "sentry-sdk is not installed. "
                "Install it with: pip install copilot-gelf[sentry]"
            ) from exc

        sentry_sdk.init(dsn=self.dsn, environment=self.environment)
        self._initialized = True

    def report(
        self,
        message: str,
        error: BaseException | None = None,
        code: ErrorCode = ErrorCode.GENERIC_FAILURE,
    ) -> None:
        """Send the failure to Sentry.

        Failures with a cause are captured as exceptions, the rest as
        messages. The failure code and message are attached as tags.

        Args:
            message: Human readable description of the failure
            error: Optional exception that caused the failure
            code: Failure classification
        """
        import sentry_sdk

        tags = {"gelf.error_code": code.name, "gelf.message": message}
        if error is not None:
            sentry_sdk.capture_exception(error, tags=tags)
        else:
            sentry_sdk.capture_message(message, level="error", tags=tags)
