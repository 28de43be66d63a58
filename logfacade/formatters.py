"""
Formatters for stdlib-backed transports.

Every JSON line is a single object with guaranteed keys ``timestamp``,
``level``, ``logger``, ``message``, ``service`` and ``version``, followed by
the record's metadata. Metadata never overrides the guaranteed keys, so a
caller-supplied ``level`` hint stays out of the way of the real severity.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .constants import (
    APP_VERSION,
    DEFAULT_SERVICE_NAME,
    ERR_STACK_KEY,
    SERVICE_NAME_VAR,
)


def service_name() -> str:
    return os.environ.get(SERVICE_NAME_VAR, DEFAULT_SERVICE_NAME)


def record_level(record: logging.LogRecord) -> str:
    """Syslog name stamped by the transport, else the stdlib name."""
    return getattr(record, "syslog_level", record.levelname.lower())


def make_entry(
    name: str,
    level: str,
    message: str,
    meta: Optional[Mapping[str, Any]] = None,
    *,
    created: Optional[float] = None,
) -> Dict[str, Any]:
    """Build the JSON-ready dict for one log line."""
    when = (
        datetime.fromtimestamp(created, tz=timezone.utc)
        if created is not None
        else datetime.now(timezone.utc)
    )
    base = {
        "timestamp": when.isoformat(),
        "level": level,
        "logger": name,
        "message": message,
        "service": service_name(),
        "version": APP_VERSION,
    }
    entry: Dict[str, Any] = dict(meta or {})
    entry.update(base)
    return entry


# ── JSON Formatter ───────────────────────────────────────────────


class JsonFormatter(logging.Formatter):
    """Emit each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = make_entry(
            record.name,
            record_level(record),
            record.getMessage(),
            getattr(record, "meta", None),
            created=record.created,
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry.setdefault(ERR_STACK_KEY, self.formatException(record.exc_info))
        return json.dumps(entry, default=str, ensure_ascii=False)


# ── Plain Formatter (dev / console) ─────────────────────────────


class DevFormatter(logging.Formatter):
    """Human-readable coloured output for local development."""

    _COLORS = {
        "emerg": "\033[1;35m",   # bold magenta
        "alert": "\033[1;31m",   # bold red
        "crit": "\033[35m",      # magenta
        "error": "\033[31m",     # red
        "warning": "\033[33m",   # yellow
        "notice": "\033[34m",    # blue
        "info": "\033[32m",      # green
        "debug": "\033[36m",     # cyan
    }
    _RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        level = record_level(record)
        color = self._COLORS.get(level, "")
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        meta = dict(getattr(record, "meta", None) or {})
        stack = meta.pop(ERR_STACK_KEY, None)

        base = (
            f"{color}{ts} {level.upper():<8}{self._RESET} "
            f"{record.name} {record.getMessage()}"
        )
        if meta:
            base += " " + " ".join(f"{k}={v}" for k, v in meta.items())
        if stack:
            base += "\n" + stack
        return base


# ── Syslog Formatter ─────────────────────────────────────────────


class SyslogFormatter(logging.Formatter):
    """``name: message {json meta}``; syslog supplies timestamp and priority."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.name}: {record.getMessage()}"
        meta = getattr(record, "meta", None)
        if meta:
            line += " " + json.dumps(dict(meta), default=str, ensure_ascii=False)
        return line
