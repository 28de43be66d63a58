"""
Per-call log record builder.

A ``LogRecordBuilder`` collects metadata and error details for exactly one
logging call and then hands the finished record to a ``Logger``::

    record = LogRecordBuilder(logger, meta={"service": "api"})
    record.add_meta({"user_id": 7})
    record.add_error(exc)
    record.error("payment failed")

Emitting consumes the builder; touching it afterwards raises
``RecordConsumedError``.
"""

import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from .constants import ERR_MSG_KEY, ERR_STACK_KEY
from .errors import RecordConsumedError
from .levels import rank


def is_error_like(value: Any) -> bool:
    """True when *value* should be treated as an error rather than metadata.

    Error-like means a ``BaseException`` instance, or any non-mapping object
    exposing a string ``message`` attribute (an optional ``stack`` string is
    picked up by ``error_details``).
    """
    if isinstance(value, BaseException):
        return True
    if value is None or isinstance(value, Mapping):
        return False
    return isinstance(getattr(value, "message", None), str)


def error_details(error: Any) -> Tuple[str, Optional[str]]:
    """Return ``(message, stack)`` for an error-like value.

    Exceptions render their traceback (or just the exception line when they
    were never raised). Other objects use their ``message`` and ``stack``
    attributes; a missing stack comes back as ``None``.
    """
    if isinstance(error, BaseException):
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return str(error), stack.rstrip("\n")
    message = getattr(error, "message", None)
    stack = getattr(error, "stack", None)
    return (str(message) if message is not None else str(error)), stack


class LogRecordBuilder:
    """Accumulates message metadata and error fields for a single emission."""

    def __init__(
        self,
        logger,
        meta: Optional[Mapping] = None,
        opts: Optional[Mapping] = None,
    ) -> None:
        """
        Args:
            logger: Object with a ``log(level, message, meta)`` method.
            meta: Default metadata copied into the record.
            opts: Per-record options (``err_no_stack``).
        """
        self._logger = logger
        self._meta: Dict[str, Any] = dict(meta or {})
        self._opts: Dict[str, Any] = dict(opts or {})
        self._error: Optional[Tuple[str, Optional[str]]] = None
        self._emitted = False

    @property
    def emitted(self) -> bool:
        return self._emitted

    @property
    def meta(self) -> Mapping[str, Any]:
        """Read-only view of the metadata accumulated so far."""
        return MappingProxyType(self._meta)

    def _ensure_open(self) -> None:
        if self._emitted:
            raise RecordConsumedError("Log record has already been emitted")

    # ── Accumulation ─────────────────────────────────────────────

    def add_meta(self, meta: Mapping[str, Any]) -> "LogRecordBuilder":
        """Merge *meta* into the record; later keys win."""
        self._ensure_open()
        if not isinstance(meta, Mapping):
            raise TypeError(f"meta must be a mapping, not {type(meta).__name__}")
        self._meta.update(meta)
        return self

    def add_error(self, error: Any) -> "LogRecordBuilder":
        """Attach ``errMsg`` / ``errStack`` taken from *error*."""
        self._ensure_open()
        self._error = error_details(error)
        return self

    # ── Emission ─────────────────────────────────────────────────

    def build(self) -> Mapping[str, Any]:
        """Return the frozen metadata the record would be emitted with."""
        meta = dict(self._meta)
        if self._error is not None:
            message, stack = self._error
            meta[ERR_MSG_KEY] = message
            if stack is not None and not self._opts.get("err_no_stack"):
                meta[ERR_STACK_KEY] = stack
        return MappingProxyType(meta)

    def log(self, level: str, message: str) -> None:
        """Emit the record at *level* and consume the builder."""
        self._ensure_open()
        rank(level)
        meta = self.build()
        self._emitted = True
        self._logger.log(level, message, meta)

    def emerg(self, message: str) -> None:
        self.log("emerg", message)

    def alert(self, message: str) -> None:
        self.log("alert", message)

    def crit(self, message: str) -> None:
        self.log("crit", message)

    def error(self, message: str) -> None:
        self.log("error", message)

    def warning(self, message: str) -> None:
        self.log("warning", message)

    def notice(self, message: str) -> None:
        self.log("notice", message)

    def info(self, message: str) -> None:
        self.log("info", message)

    def debug(self, message: str) -> None:
        self.log("debug", message)
