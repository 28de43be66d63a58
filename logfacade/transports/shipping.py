"""
HTTP log-shipping transport.

Posts each record as a JSON document to a collector endpoint (Loggly,
Logstash HTTP input, Vector, ...). Delivery is synchronous; HTTP errors are
raised to the caller and never retried here.
"""

from typing import Any, Dict, Mapping, Optional

import requests

from ..constants import HTTP_TIMEOUT_SECONDS
from ..formatters import make_entry
from .base import Transport


class HttpTransport(Transport):
    kind = "Http"

    def __init__(
        self,
        url: str,
        level: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(level)
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(dict(headers or {}))
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def write(self, level: str, message: str, meta: Mapping[str, Any]) -> None:
        entry: Dict[str, Any] = make_entry(self.name, level, message, meta)
        response = self._session.post(self.url, json=entry, timeout=self.timeout)
        response.raise_for_status()

    def close(self) -> None:
        self._session.close()
