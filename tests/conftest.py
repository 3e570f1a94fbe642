# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Test configuration for copilot_gelf.

These tests run the adapter without installing it: the package root is added
to `sys.path`. Shared fixtures build log records and stand-in transports.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest


def _add_path(path: Path) -> None:
    resolved = str(path.resolve())
    if resolved not in sys.path:
        sys.path.insert(0, resolved)


PACKAGE_ROOT = Path(__file__).resolve().parents[1]
_add_path(PACKAGE_ROOT)

from copilot_gelf.sender import GelfSender  # noqa: E402
from copilot_gelf.silent_error_reporter import SilentErrorReporter  # noqa: E402


class RecordingSender(GelfSender):
    """Sender that stores messages in memory instead of sending them."""

    instances: list["RecordingSender"] = []

    def __init__(self, result: bool = True, error: Exception | None = None):
        self.result = result
        self.error = error
        self.messages = []
        self.close_calls = 0
        RecordingSender.instances.append(self)

    def send_message(self, message):
        if self.error is not None:
            raise self.error
        self.messages.append(message)
        return self.result

    def close(self):
        self.close_calls += 1


class FailingSender(RecordingSender):
    """Sender whose every send reports failure."""

    def __init__(self):
        super().__init__(result=False)


@pytest.fixture(autouse=True)
def reset_recording_senders():
    """Forget senders created by earlier tests."""
    RecordingSender.instances = []
    yield
    RecordingSender.instances = []


@pytest.fixture
def reporter():
    """Error reporter that keeps failures in memory."""
    return SilentErrorReporter()


@pytest.fixture
def make_record():
    """Factory for log records."""

    def _make_record(
        msg="Test message",
        args=None,
        level=logging.INFO,
        name="copilot.test",
        func="handle_request",
        exc_info=None,
        created=None,
        **extra,
    ):
        record = logging.LogRecord(
            name=name,
            level=level,
            pathname=__file__,
            lineno=42,
            msg=msg,
            args=args,
            exc_info=exc_info,
            func=func,
        )
        if created is not None:
            record.created = created
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    return _make_record
