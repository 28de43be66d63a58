"""
Request logging for Flask.

``RequestLogger`` hooks into a Flask app and writes one record per request
when the request is torn down:

1. ``before_request`` stamps a start time and a request id (taken from
   ``X-Request-ID`` or freshly generated) onto the WSGI environ.
2. ``after_request`` remembers the response and echoes the request id.
3. ``teardown_request`` logs method, path, status and latency, plus the
   error for requests that raised.

Status 5xx and raised errors log at ``error``, other 4xx at ``warning``
(404 at ``info`` when ``info_404`` is set), everything else at ``info``.
"""

import time
import uuid
from typing import Any, Callable, Dict, Optional

from flask import Flask, request

from .record import LogRecordBuilder

_START_KEY = "logfacade.start"
_REQUEST_ID_KEY = "logfacade.request_id"
_RESPONSE_KEY = "logfacade.response"


class RequestLogger:
    """Flask extension logging every request through a ``Log``'s transports.

    Usage::

        log = Log(transports=[{"Console": {}}])
        log.middleware(type="server", info_404=True).init_app(app)
    """

    REQUEST_ID_HEADER = "X-Request-ID"

    def __init__(
        self,
        new_record: Callable[..., LogRecordBuilder],
        app: Optional[Flask] = None,
        *,
        type: str = "server",  # noqa: A002
        meta: Optional[Dict[str, Any]] = None,
        err_no_stack: bool = False,
        info_404: bool = False,
    ) -> None:
        """
        Args:
            new_record: Factory for log records; accepts record options.
            app: Optional Flask app to install on immediately.
            type: Tag describing the emitter, e.g. ``"server"`` or ``"client"``.
            meta: Fields attached to every request log.
            err_no_stack: Leave ``errStack`` out of error records.
            info_404: Log 404 responses at ``info`` instead of ``warning``.
        """
        self.new_record = new_record
        self.type = type
        self.meta = dict(meta or {})
        self.err_no_stack = err_no_stack
        self.info_404 = info_404
        if app is not None:
            self.init_app(app)

    # ── installation ─────────────────────────────────────────────

    def init_app(self, app: Flask) -> None:
        app.before_request(self._before)
        app.after_request(self._after)
        app.teardown_request(self._teardown)

    # ── hooks ────────────────────────────────────────────────────

    def _before(self) -> None:
        request.environ[_START_KEY] = time.monotonic()
        request.environ[_REQUEST_ID_KEY] = (
            request.headers.get(self.REQUEST_ID_HEADER) or uuid.uuid4().hex
        )

    def _after(self, response):
        request.environ[_RESPONSE_KEY] = response
        rid = request.environ.get(_REQUEST_ID_KEY)
        if rid:
            response.headers[self.REQUEST_ID_HEADER] = rid
        return response

    def _teardown(self, exc: Optional[BaseException] = None) -> None:
        self(request, request.environ.pop(_RESPONSE_KEY, None), exc)

    # ── logging ──────────────────────────────────────────────────

    def level_for(self, status: int, error: Optional[BaseException] = None) -> str:
        if error is not None or status >= 500:
            return "error"
        if status == 404:
            return "info" if self.info_404 else "warning"
        if status >= 400:
            return "warning"
        return "info"

    def __call__(self, request, response, error) -> None:
        """Write the record for one finished request."""
        status = response.status_code if response is not None else 500
        fields: Dict[str, Any] = {
            "type": self.type,
            "method": request.method,
            "path": request.path,
            "status_code": status,
            "remote_addr": request.remote_addr,
            "user_agent": request.headers.get("User-Agent", ""),
        }
        rid = request.environ.get(_REQUEST_ID_KEY)
        if rid:
            fields["request_id"] = rid
        start = request.environ.get(_START_KEY)
        if start is not None:
            fields["duration_ms"] = round((time.monotonic() - start) * 1000, 2)

        opts = {"err_no_stack": True} if self.err_no_stack else {}
        record = self.new_record(**opts)
        record.add_meta(self.meta)
        record.add_meta(fields)
        if error is not None:
            record.add_error(error)
        record.log(self.level_for(status, error), f"{request.method} {request.path} {status}")
