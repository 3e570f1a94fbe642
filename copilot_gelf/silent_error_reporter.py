# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Silent error reporter implementation for testing."""

from typing import Any

from .error_reporter import ErrorCode, ErrorReporter


class SilentErrorReporter(ErrorReporter):
    """Silent error reporter that stores failures in memory for testing.

    Useful for unit tests that verify which failures the handler reports
    without producing output.
    """

    def __init__(self):
        """Initialize silent error reporter."""
        self.reported_errors: list[dict[str, Any]] = []

    def report(
        self,
        message: str,
        error: BaseException | None = None,
        code: ErrorCode = ErrorCode.GENERIC_FAILURE,
    ) -> None:
        """Store the failure.

        Args:
            message: Human readable description of the failure
            error: Optional exception that caused the failure
            code: Failure classification
        """
        self.reported_errors.append({
            "message": message,
            "error": error,
            "error_type": type(error).__name__ if error is not None else None,
            "code": code,
        })

    def get_errors(self, code: ErrorCode | None = None) -> list[dict[str, Any]]:
        """Get reported failures, optionally filtered by code.

        Args:
            code: Optional failure classification to filter by

        Returns:
            List of reported failure dictionaries
        """
        if code is None:
            return self.reported_errors
        return [e for e in self.reported_errors if e["code"] == code]

    def has_error(self, message: str, code: ErrorCode | None = None) -> bool:
        """Check if a failure containing the given text was reported.

        Args:
            message: Text to search for (case-insensitive substring match)
            code: Optional failure classification to filter by

        Returns:
            True if a matching failure was reported, False otherwise
        """
        needle = message.lower()
        return any(needle in e["message"].lower() for e in self.get_errors(code))

    def clear(self) -> None:
        """Clear all stored failures."""
        self.reported_errors.clear()

    def has_errors(self) -> bool:
        """Check if any failures have been reported."""
        return len(self.reported_errors) > 0
