"""
Album Catalog Backend: Request ID Middleware
=============================================

What:  Tags every request with a short id, returns it in X-Request-ID and
       makes it available to every log record emitted while handling it.
How:   The id lives in a ContextVar for the duration of the request.
       RequestIDLogFilter, installed on the root handler by setup_logging,
       copies it onto each record as `request_id`, so lines from the
       service and repository layers correlate with the access line.

Client-supplied ids:
    Echoed only when they are 1-64 characters of [A-Za-z0-9._-]. Anything
    else (overlong, spaces, control characters) is replaced by a fresh id
    rather than written back into a response header or the log.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one thread each see their own id.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_ACCEPTED_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accepted_request_id(candidate: Optional[str]) -> Optional[str]:
    """Return `candidate` if it is safe to echo, else None."""
    if candidate and _ACCEPTED_ID.fullmatch(candidate):
        return candidate
    return None


class RequestIDLogFilter(logging.Filter):
    """
    Stamps `record.request_id` from request_id_var.

    Records logged outside a request get "-". A request_id passed through
    `extra=` is left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request id and echoes it on the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accepted_request_id(request.headers.get(REQUEST_ID_HEADER)) or new_request_id()
        request.state.request_id = rid

        # Not reset afterwards: the catch-all 500 handler runs outside this
        # middleware and still needs it. Each request has its own context.
        request_id_var.set(rid)
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
