# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""GELF transport over UDP with compression and chunking."""

import logging
import math
import os
import socket
import zlib

from .message import GelfMessage
from .sender import GelfSender

logger = logging.getLogger(__name__)

CHUNK_MAGIC = b"\x1e\x0f"
CHUNK_HEADER_SIZE = 12
MAX_CHUNKS = 128
DEFAULT_CHUNK_SIZE = 8154


def split_into_chunks(payload: bytes, chunk_size: int, message_id: bytes) -> list[bytes]:
    """Split a payload into GELF chunks.

    Each chunk carries the magic bytes, the 8-byte message id, its sequence
    number and the total chunk count, followed by up to ``chunk_size`` bytes
    of payload.

    Raises:
        ValueError: If the payload needs more than MAX_CHUNKS chunks
    """
    if len(message_id) != 8:
        raise ValueError("GELF message id must be 8 bytes")

    count = max(1, math.ceil(len(payload) / chunk_size))
    if count > MAX_CHUNKS:
        raise ValueError(
            f"GELF message needs {count} chunks; at most {MAX_CHUNKS} are allowed"
        )

    chunks = []
    for sequence in range(count):
        body = payload[sequence * chunk_size:(sequence + 1) * chunk_size]
        chunks.append(CHUNK_MAGIC + message_id + bytes([sequence, count]) + body)
    return chunks


class GelfUDPSender(GelfSender):
    """Sends zlib-compressed GELF messages as (possibly chunked) datagrams."""

    def __init__(self, host: str, port: int, chunk_size: int = DEFAULT_CHUNK_SIZE, compress: bool = True):
        """Initialize the UDP sender.

        Args:
            host: Collector host name or address
            port: Collector port
            chunk_size: Maximum payload bytes per datagram
            compress: Whether to zlib-compress payloads

        Raises:
            socket.gaierror: If the host cannot be resolved
            OSError: If the socket cannot be created
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.host = host
        self.port = port
        self.chunk_size = chunk_size
        self.compress = compress

        family, _, _, _, address = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0]
        self.address = address
        self._sock: socket.socket | None = socket.socket(family, socket.SOCK_DGRAM)
        logger.debug("GELF UDP sender targeting %s:%s", host, port)

    def send_message(self, message: GelfMessage) -> bool:
        if self._sock is None:
            return False

        payload = message.encode()
        if self.compress:
            payload = zlib.compress(payload)

        if len(payload) <= self.chunk_size:
            self._sock.sendto(payload, self.address)
            return True

        try:
            chunks = split_into_chunks(payload, self.chunk_size, os.urandom(8))
        except ValueError:
            logger.debug("Dropping oversized GELF message (%d bytes)", len(payload))
            return False

        for chunk in chunks:
            self._sock.sendto(chunk, self.address)
        return True

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
