# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Configuration for the GELF handler.

Configuration is read once when a handler is constructed and never changes
afterwards. It can come from keyword arguments (including a
``logging.config.dictConfig`` section), a dictionary, or environment
variables::

    GELF_HOST=tcp:graylog.internal
    GELF_PORT=12201
    GELF_FACILITY=ingestion
    GELF_ADDITIONAL_FIELD_0=environment=staging
    GELF_ADDITIONAL_FIELD_1=region=westeurope
"""

import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

DEFAULT_PORT = 12201
DEFAULT_LEVEL = "INFO"
DEFAULT_MDC_TAG = "remoteAddr"
DEFAULT_TIMEOUT = 5.0

ENV_PREFIX = "GELF_"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class EnvSettings:
    """Typed access to prefixed ``GELF_*`` style variables.

    Unset, empty and unparsable values all fall back to the caller's default,
    so a typo in one variable never stops the handler from being built.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX):
        self._environ = environ if environ is not None else os.environ
        self.prefix = prefix

    def get(self, name: str, default: str | None = None) -> str | None:
        value = self._environ.get(self.prefix + name)
        if value is None or not str(value).strip():
            return default
        return str(value)

    def get_bool(self, name: str, default: bool = False) -> bool:
        value = self.get(name)
        if value is None:
            return default
        value_lower = value.strip().lower()
        if value_lower in _TRUE_VALUES:
            return True
        if value_lower in _FALSE_VALUES:
            return False
        return default

    def get_int(self, name: str, default: int) -> int:
        value = self.get(name)
        try:
            return int(value) if value is not None else default
        except ValueError:
            return default

    def get_float(self, name: str, default: float) -> float:
        value = self.get(name)
        try:
            return float(value) if value is not None else default
        except ValueError:
            return default

    def iter_indexed(self, name: str) -> Iterator[str]:
        """Yield ``NAME_0``, ``NAME_1``, ... up to the first unset index."""
        index = 0
        while True:
            value = self._environ.get(f"{self.prefix}{name}_{index}")
            if value is None:
                return
            yield str(value)
            index += 1


def parse_additional_fields(entries: Iterable[str] | Mapping[str, Any] | str | None) -> dict[str, str]:
    """Parse static additional fields.

    Args:
        entries: Either a mapping, or ``key=value`` strings. Entries without
            an ``=`` are ignored. Only the first ``=`` separates key and value.

    Returns:
        Dictionary of field name to value, in input order
    """
    if entries is None:
        return {}
    if isinstance(entries, Mapping):
        return {str(key): str(value) for key, value in entries.items()}
    if isinstance(entries, str):
        entries = [entries]

    result: dict[str, str] = {}
    for entry in entries:
        key, sep, value = str(entry).partition("=")
        if sep:
            result[key] = value
    return result


@dataclass(frozen=True)
class GelfConfig:
    """Immutable GELF handler configuration.

    Attributes:
        graylog_host: Collector host; a ``tcp:`` or ``udp:`` prefix selects
            the transport (UDP when unprefixed)
        graylog_port: Collector port
        origin_host: Host reported in messages (defaults to the local hostname)
        facility: Optional facility name
        extract_stacktrace: Append tracebacks of attached exceptions
        level: Minimum logging level forwarded by the handler
        mdc_tag: Diagnostic-context key copied into each message
        additional_fields: Static fields added to every message
        instance_name: Optional instance/environment name field
        filter_class: Dotted path of a logging.Filter class to install
        sender_class: Dotted path of a GelfSender class used instead of a
            network transport (tests only)
        timeout: Connect/send timeout for the TCP transport, in seconds
    """
    graylog_host: str | None = None
    graylog_port: int = DEFAULT_PORT
    origin_host: str | None = None
    facility: str | None = None
    extract_stacktrace: bool = False
    level: int | str = DEFAULT_LEVEL
    mdc_tag: str = DEFAULT_MDC_TAG
    additional_fields: dict[str, str] = field(default_factory=dict)
    instance_name: str | None = None
    filter_class: str | None = None
    sender_class: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_settings(cls, **settings: Any) -> "GelfConfig":
        """Create a config from keyword arguments.

        Raises:
            TypeError: If a setting name is not a config field
        """
        return cls().with_updates(**settings)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX) -> "GelfConfig":
        """Create a config from ``GELF_*`` environment variables.

        Args:
            environ: Variables to read (defaults to os.environ)
            prefix: Variable name prefix (``GELF_`` by default)

        Returns:
            GelfConfig with defaults for anything that is unset
        """
        env = EnvSettings(environ, prefix)
        return cls(
            graylog_host=env.get("HOST"),
            graylog_port=env.get_int("PORT", DEFAULT_PORT),
            origin_host=env.get("ORIGIN_HOST"),
            facility=env.get("FACILITY"),
            extract_stacktrace=env.get_bool("EXTRACT_STACKTRACE", False),
            level=(env.get("LEVEL") or DEFAULT_LEVEL).strip().upper(),
            mdc_tag=env.get("MDC_TAG") or DEFAULT_MDC_TAG,
            additional_fields=parse_additional_fields(env.iter_indexed("ADDITIONAL_FIELD")),
            instance_name=env.get("INSTANCE_NAME"),
            filter_class=env.get("FILTER_CLASS"),
            sender_class=env.get("SENDER_CLASS"),
            timeout=env.get_float("TIMEOUT", DEFAULT_TIMEOUT),
        )

    def with_updates(self, **updates: Any) -> "GelfConfig":
        """Return a copy with the given fields replaced.

        None values are ignored so explicit arguments can be layered over
        environment defaults.

        Raises:
            TypeError: If an update key is not a config field
        """
        allowed = {f.name for f in fields(self)}
        unknown = sorted(set(updates) - allowed)
        if unknown:
            raise TypeError(f"Unknown GELF config keys: {unknown}. Allowed keys: {sorted(allowed)}")

        changes = {key: value for key, value in updates.items() if value is not None}
        if "additional_fields" in changes:
            changes["additional_fields"] = parse_additional_fields(changes["additional_fields"])
        if "graylog_port" in changes:
            changes["graylog_port"] = int(changes["graylog_port"])
        if "timeout" in changes:
            changes["timeout"] = float(changes["timeout"])
        if isinstance(changes.get("level"), str):
            changes["level"] = changes["level"].strip().upper()
        if isinstance(changes.get("extract_stacktrace"), str):
            changes["extract_stacktrace"] = changes["extract_stacktrace"].lower() in _TRUE_VALUES
        return replace(self, **changes)
