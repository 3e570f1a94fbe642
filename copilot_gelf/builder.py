# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Assembly of GELF messages from log records."""

import logging
import socket

from . import context
from .config import GelfConfig
from .error_reporter import ErrorCode, ErrorReporter
from .message import GelfMessage
from .renderer import RenderedMessage
from .severity import level_to_syslog_level

LOGGER_NAME_FIELD = "logger_name"
FUNCTION_NAME_FIELD = "function_name"
INSTANCE_FIELD = "instance"


class GelfMessageBuilder:
    """Builds GELF messages from rendered records and static configuration."""

    def __init__(self, config: GelfConfig, error_reporter: ErrorReporter | None = None):
        """Initialize the builder.

        Args:
            config: Handler configuration
            error_reporter: Receives local hostname resolution failures
        """
        self.config = config
        self.error_reporter = error_reporter
        self._local_hostname: str | None = None
        self._hostname_resolved = False

    def build(self, record: logging.LogRecord, rendered: RenderedMessage) -> GelfMessage:
        message = GelfMessage(
            short_message=rendered.short_message,
            full_message=rendered.full_message,
            timestamp_millis=int(record.created * 1000),
            level=level_to_syslog_level(record.levelno),
        )
        message.fields[LOGGER_NAME_FIELD] = record.name or ""
        message.fields[FUNCTION_NAME_FIELD] = record.funcName or ""

        message.host = self.origin_host
        message.facility = self.config.facility

        if self.config.instance_name is not None:
            message.add_field(INSTANCE_FIELD, self.config.instance_name)

        tag = self.config.mdc_tag
        if tag:
            message.add_field(tag, self.diagnostic_value(record, tag))

        # Static fields go last so configuration wins on collisions
        for key, value in self.config.additional_fields.items():
            message.add_field(key, value)

        return message

    @staticmethod
    def diagnostic_value(record: logging.LogRecord, key: str) -> str | None:
        """Look up a diagnostic value, preferring the record's own ``extra``."""
        value = getattr(record, key, None)
        if value is None:
            value = context.get(key)
        return None if value is None else str(value)

    @property
    def origin_host(self) -> str | None:
        """Configured origin host, else the local hostname (resolved once)."""
        if self.config.origin_host is not None:
            return self.config.origin_host
        if not self._hostname_resolved:
            self._hostname_resolved = True
            self._local_hostname = self._resolve_local_hostname()
        return self._local_hostname

    def _resolve_local_hostname(self) -> str | None:
        try:
            return socket.gethostname() or None
        except OSError as exc:
            if self.error_reporter is not None:
                self.error_reporter.report("Unknown local hostname", exc, ErrorCode.GENERIC_FAILURE)
            return None
