# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Console-based error reporter implementation."""

import sys
import traceback
from typing import TextIO

from .error_reporter import ErrorCode, ErrorReporter


class ConsoleErrorReporter(ErrorReporter):
    """Console error reporter that writes failures to stderr.

    This is the default error reporter. It writes directly to a stream rather
    than through the logging system, so a failing GELF handler attached to the
    root logger cannot feed its own error reports back into itself.
    """

    def __init__(self, stream: TextIO | None = None, include_traceback: bool = True):
        """Initialize console error reporter.

        Args:
            stream: Stream to write to (defaults to the current sys.stderr)
            include_traceback: Whether to print the cause's stack trace
        """
        self._stream = stream
        self.include_traceback = include_traceback

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def report(
        self,
        message: str,
        error: BaseException | None = None,
        code: ErrorCode = ErrorCode.GENERIC_FAILURE,
    ) -> None:
        """Write the failure to the stream.

        Args:
            message: Human readable description of the failure
            error: Optional exception that caused the failure
            code: Failure classification
        """
        log_message = f"--- GELF handler error [{code.name}]: {message}"
        if error is not None:
            log_message += f" | {type(error).__name__}: {error}"

        stream = self.stream
        stream.write(log_message + "\n")
        if error is not None and self.include_traceback:
            stack_trace = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
            stream.write(stack_trace)
        stream.flush()
