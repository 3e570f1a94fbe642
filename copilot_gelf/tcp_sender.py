# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""GELF transport over TCP."""

import logging
import socket

from .message import GelfMessage
from .sender import GelfSender

logger = logging.getLogger(__name__)

MESSAGE_DELIMITER = b"\x00"


class GelfTCPSender(GelfSender):
    """Sends uncompressed, null-terminated GELF messages over a TCP stream.

    The connection is opened on construction. If a write fails the socket is
    dropped and the next message reconnects.
    """

    def __init__(self, host: str, port: int, timeout: float | None = 5.0):
        """Initialize the TCP sender and connect to the collector.

        Args:
            host: Collector host name or address
            port: Collector port
            timeout: Connect/send timeout in seconds (None blocks indefinitely)

        Raises:
            socket.gaierror: If the host cannot be resolved
            OSError: If the connection cannot be established
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self._closed = False
        self._sock: socket.socket | None = None
        self._connect()

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def _connect(self) -> socket.socket:
        sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        self._sock = sock
        logger.debug("GELF TCP sender connected to %s:%s", self.host, self.port)
        return sock

    def send_message(self, message: GelfMessage) -> bool:
        if self._closed:
            return False

        payload = message.encode() + MESSAGE_DELIMITER
        try:
            sock = self._sock if self._sock is not None else self._connect()
            sock.sendall(payload)
            return True
        except OSError:
            logger.debug("GELF TCP send to %s:%s failed", self.host, self.port, exc_info=True)
            self._drop_connection()
            return False

    def _drop_connection(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    def close(self) -> None:
        self._closed = True
        self._drop_connection()
