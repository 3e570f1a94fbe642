# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract GELF sender interface."""

from abc import ABC, abstractmethod

from .message import GelfMessage


class GelfSender(ABC):
    """Abstract base class for GELF transports."""

    @abstractmethod
    def send_message(self, message: GelfMessage) -> bool:
        """Send a message to the collector.

        Args:
            message: The message to send

        Returns:
            True if the message was handed to the network, False otherwise

        Raises:
            OSError: On socket failures the transport does not handle itself
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the transport's resources."""
        pass
