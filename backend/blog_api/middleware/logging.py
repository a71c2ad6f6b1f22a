"""
Blog API Backend: Request Logging Middleware
=============================================

What:  One access-log line per HTTP request with status and duration.
How:   Measures time around call_next and logs on the `blog_api.access`
       logger at a level chosen by status class.
When:  After RequestIDMiddleware, so the request ID is available.

Logged: method, path, status, duration, client IP, request ID.
Not logged: request bodies (post content is user data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.middleware.request_id import request_id_var

logger = logging.getLogger("blog_api.access")


def level_for_status(status: int) -> int:
    """5xx -> ERROR, 4xx -> WARNING, everything else -> INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of each request.

    /health is skipped: probes hit it every few seconds.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
