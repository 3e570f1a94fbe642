# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""``logging.config.dictConfig`` configuration that forwards logs to GELF.

This module builds a logging configuration for a service that keeps
console output and adds a GELF handler on the root logger.
"""

from typing import Any, Dict

GELF_HANDLER_FACTORY = "copilot_gelf.handler.GelfHandler"


def create_gelf_log_config(
    service_name: str,
    graylog_host: str,
    log_level: str = "INFO",
    graylog_port: int | None = None,
    facility: str | None = None,
    console: bool = True,
    **gelf_settings: Any,
) -> Dict[str, Any]:
    """Create a logging configuration with a GELF handler.

    This configuration:
    - Attaches a GELF handler to the root logger
    - Uses the service name as the GELF facility unless one is given
    - Optionally keeps a plain console handler on stdout
    - Leaves existing loggers enabled

    Args:
        service_name: Name of the service for log identification
        graylog_host: Collector host, optionally prefixed with ``tcp:``/``udp:``
        log_level: Root log level (DEBUG, INFO, WARNING, ERROR)
        graylog_port: Collector port (defaults to 12201)
        facility: GELF facility (defaults to service_name)
        console: Whether to keep a console handler
        **gelf_settings: Other GelfConfig fields, e.g. ``additional_fields``

    Returns:
        Dictionary compatible with logging.config.dictConfig

    Example:
        >>> import logging.config
        >>> from copilot_gelf import create_gelf_log_config
        >>>
        >>> logging.config.dictConfig(create_gelf_log_config("parsing", "tcp:graylog"))
    """
    gelf_handler: Dict[str, Any] = {
        "()": GELF_HANDLER_FACTORY,
        "level": log_level,
        "graylog_host": graylog_host,
        "facility": facility or service_name,
    }
    if graylog_port is not None:
        gelf_handler["graylog_port"] = graylog_port
    gelf_handler.update(gelf_settings)

    handlers: Dict[str, Any] = {"gelf": gelf_handler}
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "plain",
            "stream": "ext://sys.stdout",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": f"%(asctime)s {service_name} %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": sorted(handlers),
            "level": log_level,
        },
    }
