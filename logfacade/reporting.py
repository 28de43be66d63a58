"""
Error reporting to Sentry.

``ErrorReporter`` owns a private ``sentry_sdk.Client`` (never the global hub)
so two facades with different DSNs do not interfere. Default integrations
are off unless ``options`` turns them back on. Without a DSN the
reporter is a no-op: ``capture_exception`` returns ``None`` and nothing is
sent.

Events are handed to the client's background transport; the caller never
waits on delivery and nothing is retried here.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import sentry_sdk
from sentry_sdk.utils import event_from_exception, exc_info_from_error

from .partition import ErrorReport, partition, resolve_env
from .record import error_details

logger = logging.getLogger(__name__)

# Syslog names accepted as a ``level`` hint, translated to Sentry's vocabulary.
_SENTRY_LEVELS: Dict[str, str] = {
    "emerg": "fatal",
    "alert": "fatal",
    "crit": "fatal",
    "error": "error",
    "warning": "warning",
    "notice": "info",
    "info": "info",
    "debug": "debug",
}


class ErrorReporter:
    """Forwards errors plus their ``ErrorReport`` payload to Sentry.

    Usage::

        reporter = ErrorReporter(dsn, {"release": "1.2.3"})
        reporter.capture_exception(exc, partition({"tags": {"team": "billing"}}))
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[Any] = None,
    ) -> None:
        """
        Args:
            dsn: Sentry DSN. Falsy disables reporting.
            options: Keyword options for ``sentry_sdk.Client``.
            client: Pre-built client (anything with ``capture_event``,
                ``options``, ``flush`` and ``close``).
        """
        if client is None and dsn:
            opts = dict(options or {})
            opts.setdefault("environment", resolve_env())
            # Integrations patch logging, threading and sys.excepthook process-wide.
            opts.setdefault("default_integrations", False)
            client = sentry_sdk.Client(dsn, **opts)
        self._client = client

        if self._client is not None:
            logger.info("Sentry error reporting enabled")
        else:
            logger.debug("Sentry error reporting disabled (no DSN)")

    @property
    def enabled(self) -> bool:
        return self._client is not None

    # ── Capture ──────────────────────────────────────────────────

    def capture_exception(self, error: Any, payload: Optional[ErrorReport] = None) -> Optional[str]:
        """Send *error* to Sentry.

        Args:
            error: An exception or error-like object.
            payload: Tags / extra / fingerprint / level for the event.
                Defaults to ``partition(None)``.

        Returns:
            The Sentry event id, or ``None`` when reporting is disabled or
            the client dropped the event.
        """
        if self._client is None:
            return None
        if payload is None:
            payload = partition(None)

        event, hint = self._build_event(error)
        event["tags"] = dict(payload.tags)
        event.setdefault("extra", {}).update(payload.extra)
        if payload.fingerprint is not None:
            event["fingerprint"] = _fingerprint(payload.fingerprint)
        if payload.level is not None:
            event["level"] = _SENTRY_LEVELS.get(payload.level, payload.level)

        return self._client.capture_event(event, hint=hint)

    def _build_event(self, error: Any):
        if isinstance(error, BaseException):
            exc_info = exc_info_from_error(error)
            return event_from_exception(exc_info, client_options=self._client.options)

        message, stack = error_details(error)
        event: Dict[str, Any] = {"message": message, "level": "error", "extra": {}}
        if stack is not None:
            event["extra"]["stack"] = stack
        return event, None

    # ── Lifecycle ────────────────────────────────────────────────

    def flush(self, timeout: Optional[float] = None) -> None:
        if self._client is not None:
            self._client.flush(timeout=timeout)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def _fingerprint(value: Any) -> List[str]:
    """Sentry wants a list of strings; scalars become a one-item list."""
    if isinstance(value, (list, tuple)):
        return [str(x) for x in value]
    if isinstance(value, bytes):
        return [value.decode("utf-8", "replace")]
    return [str(value)]
