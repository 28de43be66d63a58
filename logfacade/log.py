"""
The public ``Log`` facade.

Usage::

    log = Log(
        transports=[{"Console": {"level": "info"}}, {"File": {"filename": "logs/app.log"}}],
        sentry={"dsn": os.environ["SENTRY_DSN"], "options": {"release": "1.2.3"}},
        meta={"service": "billing"},
    )
    log.info("started", {"port": 8080})
    log.error("charge failed", {"tags": {"team": "payments"}}, exc)
    log.middleware(info_404=True).init_app(app)

Each severity has its own method. All of them take ``(message, meta=None,
error=None)``; an exception passed as ``meta`` is treated as the error.
"""

import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Union

from flask import Flask

from .config import (
    LogDefaults,
    consume_default_transports,
    get_defaults,
    load_config,
    validate_config,
)
from .constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOGGER_LEVEL,
    DEFAULT_LOGGER_NAME,
    SENTRY_DSN_VAR,
)
from .dispatch import Dispatcher
from .errors import ConfigurationError
from .logger import Logger
from .middleware import RequestLogger
from .record import LogRecordBuilder
from .reporting import ErrorReporter
from .transports import Transport, resolve_transports

logger = logging.getLogger(__name__)


class Log:
    """Structured logger with Sentry error reporting."""

    def __init__(
        self,
        transports: Optional[List[Any]] = None,
        *,
        sentry: Optional[Mapping[str, Any]] = None,
        meta: Optional[Mapping[str, Any]] = None,
        opts: Optional[Mapping[str, Any]] = None,
        logger_opts: Optional[Mapping[str, Any]] = None,
        defaults: Optional[LogDefaults] = None,
        registry: Optional[Mapping[str, Callable[..., Transport]]] = None,
    ) -> None:
        """
        Args:
            transports: Transport descriptors such as
                ``[{"Console": {"level": "info"}}]`` (or ``Transport``
                instances). Falls back to the defaults' transports.
            sentry: ``{"dsn": ..., "options": {...}}``. Without a DSN
                errors are not reported.
            meta: Metadata attached to every record.
            opts: Per-record options (``err_no_stack``).
            logger_opts: Logger-wide options (``level``, ``name``).
            defaults: Factory defaults read once instead of the
                process-wide ones from ``set_defaults()``.
            registry: Extra transport kinds, by name.

        Raises:
            ConfigurationError: If no transports are configured or a
                descriptor cannot be resolved.
        """
        shared = defaults is None
        if shared:
            defaults = get_defaults()

        if transports is None:
            transports = consume_default_transports() if shared else defaults.transports
        if not transports:
            raise ConfigurationError("No transports found")

        merged_opts = {**defaults.without_transports().logger_opts, **(logger_opts or {})}
        merged_opts.pop("transports", None)
        level = merged_opts.pop("level", DEFAULT_LOGGER_LEVEL)
        name = merged_opts.pop("name", DEFAULT_LOGGER_NAME)
        if merged_opts:
            logger.warning("Ignoring unknown logger options: %s", ", ".join(sorted(merged_opts)))

        self._logger = Logger(resolve_transports(transports, registry), level=level, name=name)
        self.meta: Mapping[str, Any] = MappingProxyType({**defaults.meta, **(meta or {})})
        self.opts: Mapping[str, Any] = MappingProxyType({**defaults.opts, **(opts or {})})

        sentry = sentry or {}
        self.error_reporter = ErrorReporter(sentry.get("dsn"), sentry.get("options"))
        self._dispatcher = Dispatcher(self.new_record, self.error_reporter)

        logger.debug(
            "Log %s ready with %d transport(s), level=%s",
            name,
            len(self._logger.transports),
            level,
        )

    @classmethod
    def from_config(cls, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH, **kwargs: Any) -> "Log":
        """Build a ``Log`` from a JSON config file.

        ``$SENTRY_DSN`` is used when the file configures no DSN.

        Raises:
            ConfigurationError: If the file is missing, unparsable or invalid.
        """
        config = load_config(config_path)
        errors = validate_config(config)
        if errors:
            raise ConfigurationError(f"Invalid logging config {config_path}: " + "; ".join(errors))

        sentry = dict(config.get("sentry") or {})
        if not sentry.get("dsn") and os.environ.get(SENTRY_DSN_VAR):
            sentry["dsn"] = os.environ[SENTRY_DSN_VAR]

        return cls(
            config["transports"],
            sentry=sentry,
            meta=config.get("meta"),
            opts=config.get("opts"),
            logger_opts=config.get("logger_opts"),
            **kwargs,
        )

    # ── Collaborators ────────────────────────────────────────────

    @property
    def transports(self) -> List[Transport]:
        return self._logger.transports

    def new_record(self, **opts: Any) -> LogRecordBuilder:
        """Start a record carrying this logger's default meta and options."""
        return LogRecordBuilder(self._logger, self.meta, {**self.opts, **opts})

    def middleware(self, app: Optional[Flask] = None, **opts: Any) -> RequestLogger:
        """Request-logging middleware; see ``RequestLogger`` for options."""
        return RequestLogger(self.new_record, app, **opts)

    # ── Logging ──────────────────────────────────────────────────

    def log(self, level: str, message: str, meta: Any = None, error: Any = None) -> None:
        self._dispatcher.dispatch(level, message, meta, error)

    def emerg(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("emerg", message, meta, error)

    def alert(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("alert", message, meta, error)

    def crit(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("crit", message, meta, error)

    def error(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("error", message, meta, error)

    def warning(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("warning", message, meta, error)

    def notice(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("notice", message, meta, error)

    def info(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("info", message, meta, error)

    def debug(self, message: str, meta: Any = None, error: Any = None) -> None:
        self.log("debug", message, meta, error)

    # ── Lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        """Close transports and flush/close the Sentry client."""
        self._logger.close()
        self.error_reporter.close()

    def __enter__(self) -> "Log":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
