# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Rendering of log records into GELF message text.

Callers may format their messages either with positional templates
(``"user {0} logged in"``) or with printf-style conversions
(``"retry %d of %d"``). The renderer cannot know which was intended, so it
tries the template style first and falls back to printf style when the
template substitution leaves the text unchanged.
"""

import copy
import logging
import re
import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .error_reporter import ErrorCode, ErrorReporter

MAX_SHORT_MESSAGE_LENGTH = 250

STACKTRACE_SEPARATOR = "\n\r"

_TEMPLATE_PLACEHOLDER = re.compile(r"\{(\d+)\}")

_PRINTF_CONVERSION = re.compile(
    r"%(?:\((?P<key>[^)]*)\))?"
    r"(?P<flags>[#0\- +]*)"
    r"(?P<width>\*|\d+)?"
    r"(?:\.(?P<precision>\*|\d+))?"
    r"[hlL]?"
    r"(?P<type>[diouxXeEfFgGcrsa%])"
)

_INTEGER_CONVERSIONS = frozenset("oxX")
_NUMERIC_CONVERSIONS = frozenset("diueEfFgG")


@dataclass(frozen=True)
class RenderedMessage:
    """Text produced for a single record."""

    text: str
    short_message: str
    full_message: str


def shorten(text: str) -> str:
    """Bound a message to the GELF short message length."""
    if len(text) > MAX_SHORT_MESSAGE_LENGTH:
        return text[:MAX_SHORT_MESSAGE_LENGTH - 1]
    return text


def substitute_template(message: str, args: tuple[Any, ...]) -> str:
    """Replace ``{N}`` placeholders with the matching positional argument.

    Placeholders whose index has no argument are left as they are.
    """
    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(args):
            return str(args[index])
        return match.group(0)

    return _TEMPLATE_PLACEHOLDER.sub(_replace, message)


def _accepts(conversion: str, value: Any) -> bool:
    value_type = type(value)
    if conversion in "rsa":
        return True
    if conversion == "c":
        if isinstance(value, str):
            return len(value) == 1
        return hasattr(value_type, "__index__")
    if isinstance(value, (str, bytes, bytearray)):
        return False
    if conversion in _INTEGER_CONVERSIONS:
        return hasattr(value_type, "__index__")
    if conversion in _NUMERIC_CONVERSIONS:
        return any(hasattr(value_type, attr) for attr in ("__index__", "__int__", "__float__"))
    return True


def conversions_accept(message: str, args: tuple[Any, ...] | Mapping[str, Any]) -> bool:
    """Check that every printf conversion in ``message`` can format its argument.

    Only type compatibility is checked here. Arity problems are left to the
    actual formatting call.
    """
    position = 0
    for match in _PRINTF_CONVERSION.finditer(message):
        conversion = match.group("type")
        if conversion == "%":
            continue
        if match.group("width") == "*" or match.group("precision") == "*":
            # Star arguments shift positions; leave those to the % operator
            return True

        key = match.group("key")
        if key is not None:
            if not isinstance(args, Mapping) or key not in args:
                continue
            value = args[key]
        else:
            if isinstance(args, Mapping) or position >= len(args):
                continue
            value = args[position]
            position += 1

        if not _accepts(conversion, value):
            return False
    return True


def substitute_printf(message: str, args: tuple[Any, ...] | Mapping[str, Any]) -> str | None:
    """Apply printf-style formatting.

    Returns:
        The formatted text, or None when an argument's type cannot satisfy
        its conversion (the caller keeps the raw message in that case)

    Raises:
        TypeError, ValueError, KeyError: For other formatting defects such as
            a mismatched argument count
    """
    if not conversions_accept(message, args):
        return None
    return message % args


class MessageRenderer:
    """Turns a log record into short and full GELF message text."""

    def __init__(
        self,
        extract_stacktrace: bool = False,
        formatter: logging.Formatter | None = None,
        error_reporter: ErrorReporter | None = None,
    ):
        """Initialize the renderer.

        Args:
            extract_stacktrace: Append the formatted traceback of an attached
                exception to the full message
            formatter: Optional formatter whose output is used verbatim
            error_reporter: Receives formatting failures
        """
        self.extract_stacktrace = extract_stacktrace
        self.formatter = formatter
        self.error_reporter = error_reporter

    def render(self, record: logging.LogRecord) -> RenderedMessage:
        text = self.render_text(record)
        short_message = shorten(text)

        full_message = text
        if self.extract_stacktrace:
            stack_trace = self._format_exception(record)
            if stack_trace:
                full_message = text + STACKTRACE_SEPARATOR + stack_trace

        return RenderedMessage(text=text, short_message=short_message, full_message=full_message)

    def render_text(self, record: logging.LogRecord) -> str:
        """Render the record's message with its arguments substituted."""
        if self.formatter is not None:
            # Tracebacks are appended by render() only when extract_stacktrace is set
            plain = copy.copy(record)
            plain.exc_info = None
            plain.exc_text = None
            return self.formatter.format(plain)

        raw = "" if record.msg is None else str(record.msg)
        args = record.args
        if not args:
            return raw

        if isinstance(args, Mapping):
            message = raw
        else:
            message = substitute_template(raw, tuple(args))
            if message != raw:
                return message

        try:
            formatted = substitute_printf(raw, args)
        except (TypeError, ValueError, KeyError) as exc:
            self._report(f"Could not format log message: {raw!r}", exc)
            return message

        if formatted is None:
            return raw
        return formatted

    @staticmethod
    def _format_exception(record: logging.LogRecord) -> str | None:
        exc_info = record.exc_info
        if not exc_info or not isinstance(exc_info, tuple) or exc_info[0] is None:
            return None
        return "".join(traceback.format_exception(*exc_info))

    def _report(self, message: str, error: BaseException) -> None:
        if self.error_reporter is not None:
            self.error_reporter.report(message, error, ErrorCode.FORMAT_FAILURE)
