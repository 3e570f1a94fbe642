# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Transport selection for the GELF handler."""

import importlib
from typing import Any

from .config import DEFAULT_TIMEOUT
from .sender import GelfSender
from .tcp_sender import GelfTCPSender
from .udp_sender import GelfUDPSender

TCP_PREFIX = "tcp:"
UDP_PREFIX = "udp:"


def create_sender(host: str, port: int, timeout: float | None = DEFAULT_TIMEOUT) -> GelfSender:
    """Create the transport selected by the host string.

    Args:
        host: Collector host. ``tcp:host`` selects TCP, ``udp:host`` or a
            bare host selects UDP.
        port: Collector port
        timeout: TCP connect/send timeout in seconds

    Returns:
        A connected (TCP) or ready (UDP) sender

    Raises:
        socket.gaierror: If the host cannot be resolved
        OSError: If the socket cannot be created or connected
    """
    if host.startswith(TCP_PREFIX):
        return GelfTCPSender(host[len(TCP_PREFIX):], port, timeout=timeout)
    if host.startswith(UDP_PREFIX):
        return GelfUDPSender(host[len(UDP_PREFIX):], port)
    return GelfUDPSender(host, port)


def resolve_object(path: str) -> Any:
    """Import an object from a dotted path such as ``package.module.Name``.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the module has no such attribute
        ValueError: If the path has no module part
    """
    module_name, _, attribute = path.rpartition(".")
    if not module_name:
        raise ValueError(f"Not a dotted path: {path!r}")
    module = importlib.import_module(module_name)
    return getattr(module, attribute)
