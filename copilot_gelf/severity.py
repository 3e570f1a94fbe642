# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Mapping from Python logging levels to syslog severities."""

import logging
from enum import IntEnum


class SyslogLevel(IntEnum):
    """Syslog severity scale used by GELF (0 is most severe)."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7


# The three standard tiers are matched by value
_TIER_LEVELS: dict[int, SyslogLevel] = {
    logging.ERROR: SyslogLevel.ERROR,
    logging.WARNING: SyslogLevel.WARNING,
    logging.INFO: SyslogLevel.INFORMATIONAL,
}

# Everything else is matched by level name (log4j-style names included)
_NAMED_LEVELS: dict[str, SyslogLevel] = {
    "CRITICAL": SyslogLevel.CRITICAL,
    "FATAL": SyslogLevel.CRITICAL,
    "ERROR": SyslogLevel.ERROR,
    "WARN": SyslogLevel.WARNING,
    "INFO": SyslogLevel.INFORMATIONAL,
    "DEBUG": SyslogLevel.DEBUG,
    "TRACE": SyslogLevel.DEBUG,
}


def level_to_syslog_level(level: int | str) -> int:
    """Convert a logging level to a syslog severity.

    Args:
        level: Numeric logging level (e.g. ``logging.WARNING``) or level name
            (e.g. ``"DEBUG"``, ``"WARN"``)

    Returns:
        Severity in the range 0-7. Unknown levels map to 7 (debug).
    """
    if isinstance(level, bool):
        return int(SyslogLevel.DEBUG)

    if isinstance(level, int):
        numeric: int | None = level
        name = logging.getLevelName(level)
    else:
        name = str(level).strip().upper()
        registered = logging.getLevelName(name)
        numeric = registered if isinstance(registered, int) else None

    if numeric is not None and numeric in _TIER_LEVELS:
        return int(_TIER_LEVELS[numeric])

    if isinstance(name, str):
        return int(_NAMED_LEVELS.get(name.upper(), SyslogLevel.DEBUG))
    return int(SyslogLevel.DEBUG)
