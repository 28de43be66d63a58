"""
Multi-transport logger.

Fans one ``(level, message, meta)`` triple out to every transport whose
threshold accepts the level. There is no queueing: each write happens on the
caller's thread before ``log`` returns, and transport exceptions propagate.
"""

import logging
from typing import Any, Iterable, List, Mapping

from .constants import DEFAULT_LOGGER_LEVEL, DEFAULT_LOGGER_NAME
from .levels import is_enabled, rank
from .transports.base import Transport

logger = logging.getLogger(__name__)


class Logger:
    """Ordered set of transports behind a logger-wide level threshold."""

    def __init__(
        self,
        transports: Iterable[Transport],
        *,
        level: str = DEFAULT_LOGGER_LEVEL,
        name: str = DEFAULT_LOGGER_NAME,
    ) -> None:
        rank(level)
        self.transports: List[Transport] = list(transports)
        self.level = level
        self.name = name
        for transport in self.transports:
            transport.bind(name)

    def log(self, level: str, message: str, meta: Mapping[str, Any]) -> None:
        if not is_enabled(level, self.level):
            return
        for transport in self.transports:
            if transport.accepts(level):
                transport.write(level, message, meta)

    def close(self) -> None:
        """Close every transport, in order."""
        for transport in self.transports:
            transport.close()
        logger.debug("Closed %d transport(s) for %s", len(self.transports), self.name)
