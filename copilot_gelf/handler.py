# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logging handler that forwards records to a GELF collector.

The handler renders each record, converts it to a GELF message and sends it
over a transport that is created on the first record. It never raises into
the code that logged: every failure goes to an ErrorReporter instead.

Example:
    >>> import logging
    >>> from copilot_gelf import GelfHandler
    >>>
    >>> handler = GelfHandler(graylog_host="tcp:graylog.internal", facility="ingestion")
    >>> logging.getLogger().addHandler(handler)
    >>> logging.getLogger("ingestion").info("user %s logged in", "alice")
"""

import logging
import socket
import sys
import threading
import traceback
from collections.abc import Callable
from enum import Enum
from typing import Any

from .builder import GelfMessageBuilder
from .config import GelfConfig
from .console_error_reporter import ConsoleErrorReporter
from .error_reporter import ErrorCode, ErrorReporter
from .message import GelfMessage
from .renderer import MessageRenderer
from .sender import GelfSender
from .transport import create_sender, resolve_object


class PipelineState(Enum):
    """Lifecycle of the handler's transport."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


class _GuardedErrorReporter(ErrorReporter):
    """Wraps a reporter so that its own failures cannot reach the caller."""

    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter

    def report(
        self,
        message: str,
        error: BaseException | None = None,
        code: ErrorCode = ErrorCode.GENERIC_FAILURE,
    ) -> None:
        try:
            self.reporter.report(message, error, code)
        except Exception:
            # Same last resort as logging.Handler.handleError
            if sys.stderr:
                try:
                    sys.stderr.write(f"--- GELF error reporter failed while reporting: {message}\n")
                    traceback.print_exc(file=sys.stderr)
                except OSError:
                    pass


class GelfHandler(logging.Handler):
    """Forwards log records to a Graylog collector using GELF."""

    def __init__(
        self,
        config: GelfConfig | None = None,
        error_reporter: ErrorReporter | None = None,
        sender_factory: Callable[[], GelfSender] | None = None,
        **settings: Any,
    ):
        """Initialize the handler.

        Args:
            config: Handler configuration. Keyword settings are layered on
                top of it (or on top of the defaults when omitted), which lets
                ``logging.config.dictConfig`` construct the handler directly.
            error_reporter: Receives every failure (defaults to stderr)
            sender_factory: Zero-argument callable creating the transport,
                used instead of resolving the configured host (tests only)
            **settings: GelfConfig fields, e.g. ``graylog_host="tcp:graylog"``

        Raises:
            TypeError: If a setting is not a GelfConfig field
            ValueError: If the configured level is not a known logging level
        """
        if config is None:
            config = GelfConfig.from_settings(**settings)
        elif settings:
            config = config.with_updates(**settings)
        self.config = config

        super().__init__(level=config.level)

        self.error_reporter: ErrorReporter = _GuardedErrorReporter(
            error_reporter if error_reporter is not None else ConsoleErrorReporter()
        )
        self.renderer = MessageRenderer(
            extract_stacktrace=config.extract_stacktrace,
            error_reporter=self.error_reporter,
        )
        self.builder = GelfMessageBuilder(config, self.error_reporter)

        self._sender: GelfSender | None = None
        self._state = PipelineState.UNINITIALIZED
        self._local = threading.local()

        self._sender_factory = sender_factory
        if self._sender_factory is None and config.sender_class:
            self._sender_factory = self._resolve_config_class(config.sender_class, "sender")

        if config.filter_class:
            filter_class = self._resolve_config_class(config.filter_class, "filter")
            if filter_class is not None:
                try:
                    self.addFilter(filter_class())
                except Exception as exc:
                    self.error_reporter.report(
                        f"Could not create GELF filter {config.filter_class}", exc, ErrorCode.GENERIC_FAILURE
                    )

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def sender(self) -> GelfSender | None:
        return self._sender

    def setFormatter(self, fmt: logging.Formatter | None) -> None:
        super().setFormatter(fmt)
        self.renderer.formatter = fmt

    def emit(self, record: logging.LogRecord) -> None:
        """Send a record to the collector.

        Failures are reported to the error reporter, never raised.
        """
        if record.levelno < self.level or self._state is PipelineState.CLOSED:
            return
        # Records logged from inside emit (e.g. transport debug logs) would recurse
        if getattr(self._local, "emitting", False):
            return

        self._local.emitting = True
        try:
            message = self.builder.build(record, self.renderer.render(record))
            self._deliver(message)
        except RecursionError:
            raise
        except Exception as exc:
            self.error_reporter.report("Could not build GELF message", exc, ErrorCode.FORMAT_FAILURE)
        finally:
            self._local.emitting = False

    def _deliver(self, message: GelfMessage) -> None:
        with self.lock:
            if self._state is PipelineState.CLOSED:
                return

            sender = self._ensure_sender()
            if sender is None:
                self.error_reporter.report(
                    "GELF hostname is empty or unresolved, message dropped",
                    None,
                    ErrorCode.WRITE_FAILURE,
                )
                return

            try:
                sent = sender.send_message(message)
            except Exception as exc:
                self.error_reporter.report("Could not send GELF message", exc, ErrorCode.WRITE_FAILURE)
                return

            if not sent:
                self.error_reporter.report("Could not send GELF message", None, ErrorCode.WRITE_FAILURE)

    def _ensure_sender(self) -> GelfSender | None:
        """Return the transport, creating it on first use.

        Must be called with the handler lock held. A failed attempt leaves the
        handler uninitialized so that the next record tries again.
        """
        if self._sender is not None:
            return self._sender

        if self._sender_factory is not None:
            try:
                sender = self._sender_factory()
            except Exception as exc:
                self.error_reporter.report("Could not create GELF sender", exc, ErrorCode.OPEN_FAILURE)
                return None
        else:
            host = self.config.graylog_host
            if not host:
                return None
            try:
                sender = create_sender(host, self.config.graylog_port, timeout=self.config.timeout)
            except socket.gaierror as exc:
                self.error_reporter.report(f"Unknown GELF hostname: {host}", exc, ErrorCode.OPEN_FAILURE)
                return None
            except ConnectionError as exc:
                self.error_reporter.report(
                    f"Could not connect to GELF host {host}:{self.config.graylog_port}",
                    exc,
                    ErrorCode.OPEN_FAILURE,
                )
                return None
            except OSError as exc:
                self.error_reporter.report("Socket error while creating GELF sender", exc, ErrorCode.OPEN_FAILURE)
                return None

        self._sender = sender
        self._state = PipelineState.READY
        return sender

    def _resolve_config_class(self, path: str, kind: str) -> Any:
        try:
            return resolve_object(path)
        except (ImportError, AttributeError, ValueError) as exc:
            self.error_reporter.report(f"Could not load GELF {kind} class {path}", exc, ErrorCode.GENERIC_FAILURE)
            return None

    def flush(self) -> None:
        """Nothing is buffered, so there is nothing to flush."""

    def close(self) -> None:
        """Close the transport. Safe to call more than once."""
        with self.lock:
            if self._state is not PipelineState.CLOSED:
                sender = self._sender
                self._sender = None
                self._state = PipelineState.CLOSED
                if sender is not None:
                    try:
                        sender.close()
                    except Exception as exc:
                        self.error_reporter.report("Could not close GELF sender", exc, ErrorCode.CLOSE_FAILURE)
        super().close()
