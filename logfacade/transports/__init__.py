"""
Transports and the closed registry that resolves them by kind name.

A descriptor is a single-key mapping from kind to options::

    [{"Console": {"level": "info"}}, {"File": {"filename": "logs/app.log"}}]
"""

from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional

from ..errors import ConfigurationError
from .base import HandlerTransport, Transport
from .console import ConsoleTransport
from .file import FileTransport
from .shipping import HttpTransport
from .memory import MemoryTransport
from .syslog import SyslogTransport

TRANSPORTS: Mapping[str, Callable[..., Transport]] = MappingProxyType(
    {
        ConsoleTransport.kind: ConsoleTransport,
        FileTransport.kind: FileTransport,
        SyslogTransport.kind: SyslogTransport,
        HttpTransport.kind: HttpTransport,
        MemoryTransport.kind: MemoryTransport,
    }
)


def resolve_transport(
    descriptor: Any,
    registry: Mapping[str, Callable[..., Transport]] = TRANSPORTS,
) -> Transport:
    """Instantiate one transport from its descriptor.

    Ready-made ``Transport`` instances are returned unchanged.

    Raises:
        ConfigurationError: On a malformed descriptor, an unknown kind or
            options the transport does not accept.
    """
    if isinstance(descriptor, Transport):
        return descriptor
    if not isinstance(descriptor, Mapping) or len(descriptor) != 1:
        raise ConfigurationError(
            f"Transport descriptor must be a single-key mapping, got {descriptor!r}"
        )

    kind, options = next(iter(descriptor.items()))
    factory = registry.get(kind)
    if factory is None:
        raise ConfigurationError(
            f"Unknown transport kind {kind!r}; known kinds: {', '.join(sorted(registry))}"
        )
    if options is None:
        options = {}
    if not isinstance(options, Mapping):
        raise ConfigurationError(f"Options for transport {kind!r} must be a mapping")

    try:
        return factory(**options)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid options for transport {kind!r}: {exc}") from exc


def resolve_transports(
    descriptors: Iterable[Any],
    registry: Optional[Mapping[str, Callable[..., Transport]]] = None,
) -> List[Transport]:
    """Resolve descriptors in order against the built-ins plus *registry*."""
    kinds = dict(TRANSPORTS)
    if registry:
        kinds.update(registry)
    return [resolve_transport(d, kinds) for d in descriptors]


__all__ = [
    "TRANSPORTS",
    "Transport",
    "HandlerTransport",
    "ConsoleTransport",
    "FileTransport",
    "SyslogTransport",
    "HttpTransport",
    "MemoryTransport",
    "resolve_transport",
    "resolve_transports",
]
