"""
Blog API Backend: Request ID Middleware
========================================

What:  Assigns a correlation ID to each request and echoes it in the response.
How:   Uses the client's X-Request-ID header when present, otherwise a short
       generated UUID; stores it in a ContextVar for loggers and error handlers.
When:  Runs before request logging so every log line can carry the ID.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Reuse X-Request-ID from the client if sent
        2. Otherwise generate the first 8 chars of a UUID4
        3. Store in the ContextVar and in request.state
        4. Add X-Request-ID to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
