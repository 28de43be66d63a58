"""
Per-call orchestration: one logging call → one record, maybe one report.

Callers may pass ``(message, meta)``, ``(message, error)`` or
``(message, meta, error)``. An error-like value in the meta position is
re-read as the error and meta becomes absent; see
``logfacade.record.is_error_like`` for what counts as error-like.

Only the meta passed to *this* call shapes the Sentry payload. Default meta
configured on the facade goes to transports but not to Sentry.
"""

from typing import Any, Callable, Mapping, Optional, Tuple

from .levels import rank
from .partition import partition
from .record import LogRecordBuilder, is_error_like
from .reporting import ErrorReporter


def split_payload(meta: Any = None, error: Any = None) -> Tuple[Optional[Mapping], Any]:
    """Resolve the ``meta`` / ``error`` positional overload.

    Returns:
        ``(meta, error)`` with an error-like *meta* moved into *error*.
    """
    if is_error_like(meta):
        return None, meta
    if meta is not None and not isinstance(meta, Mapping):
        raise TypeError(f"meta must be a mapping or an error, not {type(meta).__name__}")
    return meta, error


class Dispatcher:
    """Turns logging calls into emitted records and error reports."""

    def __init__(
        self,
        new_record: Callable[[], LogRecordBuilder],
        reporter: ErrorReporter,
    ) -> None:
        self.new_record = new_record
        self.reporter = reporter

    def dispatch(self, level: str, message: str, meta: Any = None, error: Any = None) -> None:
        rank(level)
        meta, error = split_payload(meta, error)

        record = self.new_record()
        if meta is not None:
            record.add_meta(meta)

        if error is not None:
            self.reporter.capture_exception(error, partition(meta))
            record.add_error(error)

        record.log(level, message)
