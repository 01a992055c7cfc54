"""
Album Catalog Backend: Request Logging Middleware
==================================================

What:  One access line per catalog request under `album_catalog.access`.
How:   Times call_next and logs "<method> <path> <status> <ms>". The request
       id is not part of the message: RequestIDLogFilter stamps it on the
       record and the log format prints it.

Levels follow the status class: 5xx → ERROR, 4xx → WARNING, else INFO.
A handler that raises is logged as 500 before the error propagates.

Skipped: /health probes and the /swagger docs assets.
Never logged: request bodies or form contents.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("album_catalog.access")

SKIPPED_PREFIXES = ("/health", "/swagger")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the HTML pages and the JSON API."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith(SKIPPED_PREFIXES):
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started)
            raise

        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            status,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
