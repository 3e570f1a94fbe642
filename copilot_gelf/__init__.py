# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Copilot-for-Consensus GELF Logging Adapter.

A logging handler that forwards records from Python's standard logging
facility to a Graylog collector using GELF over UDP or TCP. Delivery
problems are routed to a pluggable error reporter and never raised into
the application's logging calls.

Example:
    >>> import logging
    >>> from copilot_gelf import create_gelf_handler
    >>>
    >>> handler = create_gelf_handler(graylog_host="tcp:graylog", facility="ingestion")
    >>> logging.getLogger().addHandler(handler)
    >>> logging.getLogger("ingestion").warning("retry %d of %d", 1, 5)
    >>>
    >>> # Tag messages with request-scoped data
    >>> from copilot_gelf import diagnostic_context
    >>> with diagnostic_context(remoteAddr="203.0.113.5"):
    ...     logging.getLogger("ingestion").info("Request accepted")
"""

__version__ = "0.1.0"

from .config import GelfConfig
from .context import diagnostic_context
from .dict_config import create_gelf_log_config
from .error_reporter import ErrorCode, ErrorReporter
from .factory import create_error_reporter, create_gelf_handler
from .handler import GelfHandler, PipelineState
from .message import GelfMessage
from .sender import GelfSender
from .severity import SyslogLevel, level_to_syslog_level
from .tcp_sender import GelfTCPSender
from .transport import create_sender
from .udp_sender import GelfUDPSender

__all__ = [
    "__version__",
    "ErrorCode",
    "ErrorReporter",
    "GelfConfig",
    "GelfHandler",
    "GelfMessage",
    "GelfSender",
    "GelfTCPSender",
    "GelfUDPSender",
    "PipelineState",
    "SyslogLevel",
    "create_error_reporter",
    "create_gelf_handler",
    "create_gelf_log_config",
    "create_sender",
    "diagnostic_context",
    "level_to_syslog_level",
]
