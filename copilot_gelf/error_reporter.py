# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract error reporter interface."""

from abc import ABC, abstractmethod
from enum import IntEnum


class ErrorCode(IntEnum):
    """Classification of failures raised inside the GELF handler."""

    GENERIC_FAILURE = 0
    WRITE_FAILURE = 1
    FLUSH_FAILURE = 2
    CLOSE_FAILURE = 3
    OPEN_FAILURE = 4
    FORMAT_FAILURE = 5


class ErrorReporter(ABC):
    """Abstract base class for error reporters.

    Error reporters receive every failure detected by the handler. They are
    the only place those failures become visible, since the handler never
    raises into the application's logging call sites.
    """

    @abstractmethod
    def report(
        self,
        message: str,
        error: BaseException | None = None,
        code: ErrorCode = ErrorCode.GENERIC_FAILURE,
    ) -> None:
        """Report a failure.

        Args:
            message: Human readable description of the failure
            error: Optional exception that caused the failure
            code: Failure classification
        """
        pass
