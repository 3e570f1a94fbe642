# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""GELF message model and JSON encoding."""

import json
from dataclasses import dataclass, field
from typing import Any

GELF_VERSION = "1.1"


@dataclass
class GelfMessage:
    """A structured message ready to be sent to a GELF collector.

    Attributes:
        short_message: Bounded summary of the message
        full_message: Complete message text, possibly with a stack trace
        timestamp_millis: Record time in epoch milliseconds
        level: Syslog severity (0-7)
        host: Originating host, omitted from the payload when None
        facility: Optional facility name
        fields: Additional fields, sent with a leading underscore
    """
    short_message: str
    full_message: str
    timestamp_millis: int
    level: int
    host: str | None = None
    facility: str | None = None
    fields: dict[str, str] = field(default_factory=dict)

    def add_field(self, key: str, value: Any) -> None:
        """Add an additional field; None values are ignored."""
        if value is None:
            return
        self.fields[key] = str(value)

    def to_dict(self) -> dict[str, Any]:
        """Build the GELF JSON document."""
        payload: dict[str, Any] = {
            "version": GELF_VERSION,
            "short_message": self.short_message,
            "full_message": self.full_message,
            "timestamp": self.timestamp_millis / 1000.0,
            "level": self.level,
        }
        if self.host is not None:
            payload["host"] = self.host
        if self.facility is not None:
            payload["facility"] = self.facility

        for key, value in self.fields.items():
            # _id is reserved by the collector
            name = "__id" if key == "id" else f"_{key}"
            payload[name] = value
        return payload

    def encode(self) -> bytes:
        """Serialize the message as UTF-8 JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str).encode("utf-8")
