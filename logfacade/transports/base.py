"""
Transport interface.

A transport receives finished records as ``write(level, message, meta)``.
Each one carries its own optional level threshold; the logger only calls
``write`` for levels the transport ``accepts``.
"""

import logging
from typing import Any, Mapping, Optional

from ..constants import DEFAULT_LOGGER_NAME
from ..levels import is_enabled, rank, to_stdlib


class Transport:
    """Base class for all transports."""

    kind = "Transport"

    def __init__(self, level: Optional[str] = None) -> None:
        """
        Args:
            level: Least severe level to accept. ``None`` accepts everything.
        """
        if level is not None:
            rank(level)
        self.level = level
        self.name = DEFAULT_LOGGER_NAME

    def bind(self, name: str) -> None:
        """Record the owning logger's name."""
        self.name = name

    def accepts(self, level: str) -> bool:
        return self.level is None or is_enabled(level, self.level)

    def write(self, level: str, message: str, meta: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} level={self.level!r}>"


class RaisingHandlerMixin:
    """Re-raise write failures instead of printing them.

    Stdlib handlers catch errors in ``emit`` and pass them to
    ``handleError``; raising there hands the active exception back to the
    caller of ``Transport.write``.
    """

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        raise


class HandlerTransport(Transport):
    """Transport backed by a stdlib ``logging.Handler``.

    Records are turned into ``logging.LogRecord`` objects carrying the
    syslog level as ``syslog_level`` and the metadata as ``meta`` so the
    formatters in ``logfacade.formatters`` can render them.
    """

    def __init__(
        self,
        handler: logging.Handler,
        *,
        level: Optional[str] = None,
        formatter: Optional[logging.Formatter] = None,
    ) -> None:
        super().__init__(level)
        self.handler = handler
        if formatter is not None:
            handler.setFormatter(formatter)

    def make_record(self, level: str, message: str, meta: Mapping[str, Any]) -> logging.LogRecord:
        record = logging.LogRecord(
            name=self.name,
            level=to_stdlib(level),
            pathname="",
            lineno=0,
            msg=message,
            args=None,
            exc_info=None,
        )
        record.levelname = level.upper()
        record.syslog_level = level
        record.meta = dict(meta)
        return record

    def write(self, level: str, message: str, meta: Mapping[str, Any]) -> None:
        self.handler.handle(self.make_record(level, message, meta))

    def close(self) -> None:
        self.handler.close()
