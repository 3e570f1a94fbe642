# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory functions for creating GELF handlers and error reporters."""

import os
from collections.abc import Iterable, Mapping

from .config import GelfConfig
from .error_reporter import ErrorReporter
from .handler import GelfHandler


def _default(value: str | None, env_var: str, fallback: str) -> str:
    """Helper to pick an explicit value, then env var, then fallback."""
    return (value or os.getenv(env_var) or fallback)


def create_error_reporter(reporter_type: str | None = None, **kwargs) -> ErrorReporter:
    """Factory function to create an error reporter.

    Args:
        reporter_type: Type of reporter. Options: "console", "silent",
            "sentry". Defaults to GELF_ERROR_REPORTER env or "console".
        **kwargs: Passed to the reporter constructor (e.g. ``dsn`` for Sentry)

    Returns:
        ErrorReporter instance

    Raises:
        ValueError: If reporter_type is not recognized
    """
    reporter_type = _default(reporter_type, "GELF_ERROR_REPORTER", "console").lower()

    if reporter_type == "console":
        from .console_error_reporter import ConsoleErrorReporter
        return ConsoleErrorReporter(**kwargs)
    elif reporter_type == "silent":
        from .silent_error_reporter import SilentErrorReporter
        return SilentErrorReporter(**kwargs)
    elif reporter_type == "sentry":
        from .sentry_error_reporter import SentryErrorReporter
        return SentryErrorReporter(**kwargs)
    else:
        raise ValueError(
            f"Unknown reporter_type: {reporter_type}. "
            f"Must be one of: console, silent, sentry"
        )


def create_gelf_handler(
    graylog_host: str | None = None,
    graylog_port: int | None = None,
    facility: str | None = None,
    level: str | int | None = None,
    additional_fields: Iterable[str] | Mapping[str, str] | None = None,
    error_reporter: ErrorReporter | None = None,
    environ: Mapping[str, str] | None = None,
    **settings,
) -> GelfHandler:
    """Factory function to create a GELF handler.

    Explicit arguments win over ``GELF_*`` environment variables, which win
    over the built-in defaults.

    Args:
        graylog_host: Collector host, optionally prefixed with ``tcp:`` or
            ``udp:``. Defaults to GELF_HOST env.
        graylog_port: Collector port. Defaults to GELF_PORT env or 12201.
        facility: Facility name. Defaults to GELF_FACILITY env.
        level: Minimum level. Defaults to GELF_LEVEL env or "INFO".
        additional_fields: Static fields (``key=value`` strings or a mapping)
        error_reporter: Reporter for handler failures. Defaults to the
            reporter selected by GELF_ERROR_REPORTER.
        environ: Environment mapping (defaults to os.environ)
        **settings: Any other GelfConfig field

    Returns:
        GelfHandler instance

    Example:
        >>> handler = create_gelf_handler(graylog_host="tcp:graylog", facility="parsing")
        >>> logging.getLogger().addHandler(handler)
    """
    config = GelfConfig.from_env(environ).with_updates(
        graylog_host=graylog_host,
        graylog_port=graylog_port,
        facility=facility,
        level=level,
        additional_fields=additional_fields,
        **settings,
    )
    if error_reporter is None:
        error_reporter = create_error_reporter()
    return GelfHandler(config, error_reporter=error_reporter)
