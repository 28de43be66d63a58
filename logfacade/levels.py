"""
Syslog severity table.

Eight fixed levels ranked 0 (most severe) to 7. Transports filter on the
rank; stdlib-backed transports additionally need a ``logging`` level number
where a *higher* number means *more* severe, so both views are kept here.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import UnknownLevelError

SYSLOG_LEVELS: Mapping[str, int] = MappingProxyType(
    {
        "emerg": 0,
        "alert": 1,
        "crit": 2,
        "error": 3,
        "warning": 4,
        "notice": 5,
        "info": 6,
        "debug": 7,
    }
)

LEVEL_NAMES: Tuple[str, ...] = tuple(sorted(SYSLOG_LEVELS, key=SYSLOG_LEVELS.__getitem__))

_STDLIB_LEVELS: Mapping[str, int] = MappingProxyType(
    {
        "emerg": 60,
        "alert": 55,
        "crit": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "notice": 25,
        "info": logging.INFO,
        "debug": logging.DEBUG,
    }
)


def rank(level: str) -> int:
    """Return the syslog rank of *level*.

    Raises:
        UnknownLevelError: If *level* is not a syslog severity name.
    """
    try:
        return SYSLOG_LEVELS[level]
    except (KeyError, TypeError):
        raise UnknownLevelError(
            f"Unknown log level {level!r}; expected one of {', '.join(LEVEL_NAMES)}"
        ) from None


def to_stdlib(level: str) -> int:
    """Map a syslog level name onto a ``logging`` level number."""
    rank(level)
    return _STDLIB_LEVELS[level]


def is_enabled(level: str, threshold: str) -> bool:
    """True when *level* is at least as severe as *threshold*."""
    return rank(level) <= rank(threshold)
