"""
Split caller metadata into a Sentry error-report payload.

Caller meta is free-form. Three keys carry meaning for the error tracker and
are lifted out of it:

* ``tags``        : merged on top of ``{"env": <environment>}``
* ``fingerprint`` : grouping override, passed through
* ``level``       : severity override for the tracker, passed through

Everything else lands in ``extra``. The input mapping is never mutated.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .constants import DEFAULT_ENV, ENV_VAR, RESERVED_META_KEYS


@dataclass
class ErrorReport:
    """Optional attributes sent alongside a captured exception."""

    tags: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)
    fingerprint: Any = None
    level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"tags": self.tags, "extra": self.extra}
        if self.fingerprint is not None:
            data["fingerprint"] = self.fingerprint
        if self.level is not None:
            data["level"] = self.level
        return data


def resolve_env(tags: Optional[Mapping[str, Any]] = None) -> str:
    """Pick the ``env`` tag: explicit tag, then ``$APP_ENV``, then the fallback."""
    if tags and tags.get("env") is not None:
        return tags["env"]
    return os.environ.get(ENV_VAR) or DEFAULT_ENV


def partition(meta: Optional[Mapping[str, Any]] = None) -> ErrorReport:
    """Build the error-report payload for *meta*.

    Args:
        meta: Metadata supplied by the caller of a logging method, or ``None``.

    Returns:
        A fresh ``ErrorReport``; nothing in it aliases *meta* except the
        passthrough ``fingerprint`` and ``level`` values and extra values.
    """
    meta = meta or {}

    caller_tags = meta.get("tags")
    if not isinstance(caller_tags, Mapping):
        # Sentry tags must be a mapping; anything else is dropped.
        caller_tags = {}

    tags = dict(caller_tags)
    tags["env"] = resolve_env(caller_tags)

    return ErrorReport(
        tags=tags,
        extra={k: v for k, v in meta.items() if k not in RESERVED_META_KEYS},
        fingerprint=meta.get("fingerprint"),
        level=meta.get("level"),
    )
