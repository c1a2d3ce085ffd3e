"""
Scholarship Portal Backend — Request ID Middleware
===================================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID. The ID is stored in a ContextVar for loggers
       and exception handlers, on request.state for route handlers, and in
       the X-Request-ID response header.
When:  Outermost middleware, runs before everything else.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local; concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request context and the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
