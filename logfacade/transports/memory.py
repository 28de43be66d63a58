"""In-memory transport, mostly for tests."""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .base import Transport


class MemoryTransport(Transport):
    """Keeps every ``(level, message, meta)`` written to it."""

    kind = "Memory"

    def __init__(self, level: Optional[str] = None) -> None:
        super().__init__(level)
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []

    def write(self, level: str, message: str, meta: Mapping[str, Any]) -> None:
        self.records.append((level, message, dict(meta)))

    def clear(self) -> None:
        self.records.clear()
