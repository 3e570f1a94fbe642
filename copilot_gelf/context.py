# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Diagnostic context for GELF messages.

A per-task mapping of string keys to string values (request-scoped
attributes such as a client's remote address). The GELF handler reads a
configured key from it when building each message. Values are stored in a
``contextvars.ContextVar``, so each thread and each asyncio task sees its
own copy.

Example:
    >>> from copilot_gelf import context
    >>> with context.diagnostic_context(remoteAddr="203.0.113.5"):
    ...     logger.info("Request accepted")
"""

import contextvars
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType

_EMPTY: Mapping[str, str] = MappingProxyType({})

_diagnostic_context: contextvars.ContextVar[Mapping[str, str]] = contextvars.ContextVar(
    "copilot_gelf_diagnostic_context", default=_EMPTY
)


def put(key: str, value: str) -> None:
    """Set a diagnostic value for the current context."""
    updated = dict(_diagnostic_context.get())
    updated[key] = str(value)
    _diagnostic_context.set(MappingProxyType(updated))


def get(key: str) -> str | None:
    """Get a diagnostic value, or None when unset."""
    return _diagnostic_context.get().get(key)


def remove(key: str) -> None:
    """Remove a diagnostic value if present."""
    current = _diagnostic_context.get()
    if key in current:
        updated = dict(current)
        del updated[key]
        _diagnostic_context.set(MappingProxyType(updated))


def clear() -> None:
    """Remove all diagnostic values for the current context."""
    _diagnostic_context.set(_EMPTY)


def get_context() -> dict[str, str]:
    """Return a copy of the current diagnostic context."""
    return dict(_diagnostic_context.get())


@contextmanager
def diagnostic_context(**values: str) -> Iterator[None]:
    """Temporarily add diagnostic values, restoring the previous context on exit."""
    merged = dict(_diagnostic_context.get())
    merged.update({key: str(value) for key, value in values.items()})
    token = _diagnostic_context.set(MappingProxyType(merged))
    try:
        yield
    finally:
        _diagnostic_context.reset(token)
