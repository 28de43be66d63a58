"""
Configuration loading, validation and process-wide defaults.

Three ways to configure a ``Log``:

1. Keyword arguments to the constructor.
2. An explicit ``LogDefaults`` passed as ``defaults=``; it is read once and
   not retained.
3. Process-wide defaults installed with ``set_defaults()``. Transports found
   there (under ``logger_opts["transports"]``) are consumed by the first
   ``Log`` that uses them, so a second construction never picks them up
   silently. Meta, opts and the other logger options stay in place.

Config files are JSON with ``${ENV_VAR:-default}`` placeholders resolved in
every string value.
"""

import json
import logging
import os
import re
import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from dotenv import load_dotenv

from .constants import DEFAULT_CONFIG_PATH
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# ── Defaults ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class LogDefaults:
    """Factory defaults merged underneath per-instance configuration.

    Attributes:
        logger_opts: Logger-wide options (``level``, ``name``) and
            optionally ``transports``.
        meta: Metadata attached to every record.
        opts: Per-record options.
    """

    logger_opts: Mapping[str, Any] = field(default_factory=dict)
    meta: Mapping[str, Any] = field(default_factory=dict)
    opts: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("logger_opts", "meta", "opts"):
            value = getattr(self, name)
            object.__setattr__(self, name, MappingProxyType(dict(value or {})))

    @property
    def transports(self) -> Optional[List[Any]]:
        return self.logger_opts.get("transports")

    def without_transports(self) -> "LogDefaults":
        opts = {k: v for k, v in self.logger_opts.items() if k != "transports"}
        return replace(self, logger_opts=opts)


_defaults = LogDefaults()
_defaults_lock = threading.Lock()


def set_defaults(
    logger_opts: Optional[Mapping[str, Any]] = None,
    meta: Optional[Mapping[str, Any]] = None,
    opts: Optional[Mapping[str, Any]] = None,
) -> LogDefaults:
    """Install process-wide defaults for subsequent ``Log`` constructions."""
    global _defaults
    with _defaults_lock:
        _defaults = LogDefaults(logger_opts=logger_opts, meta=meta, opts=opts)
        return _defaults


def get_defaults() -> LogDefaults:
    return _defaults


def reset_defaults() -> None:
    """Drop all process-wide defaults (for tests)."""
    global _defaults
    with _defaults_lock:
        _defaults = LogDefaults()


def consume_default_transports() -> Optional[List[Any]]:
    """Return the process-wide default transports and remove them."""
    global _defaults
    with _defaults_lock:
        transports = _defaults.transports
        if transports is not None:
            _defaults = _defaults.without_transports()
            logger.debug("Consumed %d default transport descriptor(s)", len(transports))
        return transports


# ── Config files ─────────────────────────────────────────────────


def load_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load a logging configuration from a JSON file and resolve
    ``${ENV_VAR:-default}`` placeholders in all string values.

    A ``.env`` file in the working directory is loaded first so its values
    can feed the placeholders.

    Args:
        config_path: Path to the config file.

    Returns:
        Fully-resolved configuration dictionary.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    load_dotenv()
    full_path = Path(config_path)

    if not full_path.exists():
        raise ConfigurationError(f"Configuration file not found: {full_path}")

    try:
        with open(full_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {full_path}: {exc}") from exc

    return _resolve(config)


def validate_config(config: Mapping[str, Any]) -> List[str]:
    """
    Validate a config dict.

    Returns:
        A list of human-readable error strings.  Empty means valid.
    """
    errors: List[str] = []

    transports = config.get("transports")
    if transports is None:
        errors.append("Missing required config key: 'transports'")
    elif not isinstance(transports, list) or not transports:
        errors.append("'transports' must be a non-empty list")
    else:
        for i, descriptor in enumerate(transports):
            if not isinstance(descriptor, dict) or len(descriptor) != 1:
                errors.append(f"transports[{i}] must be a single-key mapping of kind to options")

    for key in ("sentry", "meta", "opts", "logger_opts"):
        if key in config and config[key] is not None and not isinstance(config[key], dict):
            errors.append(f"'{key}' must be a mapping")

    sentry = config.get("sentry")
    if isinstance(sentry, dict) and "options" in sentry:
        if not isinstance(sentry["options"], dict):
            errors.append("'sentry.options' must be a mapping")

    return errors


# ── Private helpers ──────────────────────────────────────────────

_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _resolve(obj: Any) -> Any:
    """Recursively resolve ``${ENV_VAR:-default}`` in string values."""
    if isinstance(obj, str):
        return _PLACEHOLDER_RE.sub(_replace_match, obj)
    elif isinstance(obj, dict):
        return {k: _resolve(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_resolve(v) for v in obj]
    return obj


def _replace_match(m: re.Match) -> str:
    var = m.group(1)
    default = m.group(2) if m.group(2) is not None else ""
    return os.environ.get(var, default)
