"""Console transport: coloured lines in development, JSON when asked."""

import logging
import os
import sys
from typing import IO, Optional

from ..constants import LOG_FORMAT_VAR
from ..formatters import DevFormatter, JsonFormatter
from .base import HandlerTransport, RaisingHandlerMixin


class _StreamHandler(RaisingHandlerMixin, logging.StreamHandler):
    pass


class ConsoleTransport(HandlerTransport):
    kind = "Console"

    def __init__(
        self,
        level: Optional[str] = None,
        json: Optional[bool] = None,
        stream: Optional[IO[str]] = None,
    ) -> None:
        """
        Args:
            level: Threshold level.
            json: Force JSON output. Defaults to ``LOG_FORMAT=json``.
            stream: Output stream, ``sys.stderr`` by default.
        """
        if json is None:
            json = os.environ.get(LOG_FORMAT_VAR, "").lower() == "json"
        formatter = JsonFormatter() if json else DevFormatter()
        super().__init__(
            _StreamHandler(stream or sys.stderr),
            level=level,
            formatter=formatter,
        )
