"""WSGI middleware that guarantees every request carries a trace id."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Callable, Iterable, MutableMapping

HTTP_TRACE_ID_HEADER = "X-Trace-Id"
TRACE_ID_KEY = "trace_id"

WSGIApp = Callable[[MutableMapping[str, Any], Callable[..., Any]], Iterable[bytes]]


def new_trace_id(now: datetime | None = None) -> str:
    """Build a trace id from a second-resolution timestamp and a random UUID."""
    moment = now or datetime.now()
    return f"{moment:%Y%m%d%H%M%S}-{uuid.uuid4()}"


def _environ_key(header_name: str) -> str:
    return "HTTP_" + header_name.upper().replace("-", "_")


class TraceIdMiddleware:
    """Give requests without a trace id header a freshly generated one.

    A generated id is written back into the request header and also stored
    in the environ under context_key; an id supplied by the client is left
    untouched.
    """

    def __init__(
        self,
        app: WSGIApp,
        header_name: str = HTTP_TRACE_ID_HEADER,
        context_key: str = TRACE_ID_KEY,
    ) -> None:
        self.app = app
        self.header_name = header_name
        self.context_key = context_key

    def __call__(
        self, environ: MutableMapping[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        key = _environ_key(self.header_name)
        if not environ.get(key):
            trace_id = new_trace_id()
            environ[key] = trace_id
            environ[self.context_key] = trace_id
        return self.app(environ, start_response)