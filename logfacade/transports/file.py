"""Rotating JSON-lines file transport."""

from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ..constants import LOG_BACKUP_COUNT, LOG_MAX_BYTES
from ..formatters import JsonFormatter
from .base import HandlerTransport, RaisingHandlerMixin


class _RotatingFileHandler(RaisingHandlerMixin, RotatingFileHandler):
    pass


class FileTransport(HandlerTransport):
    kind = "File"

    def __init__(
        self,
        filename: Union[str, Path],
        level: Optional[str] = None,
        max_bytes: int = LOG_MAX_BYTES,
        backup_count: int = LOG_BACKUP_COUNT,
    ) -> None:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.filename = path
        super().__init__(
            _RotatingFileHandler(
                path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            ),
            level=level,
            formatter=JsonFormatter(),
        )
