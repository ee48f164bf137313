"""
BlogNest Backend — Request ID Middleware
==========================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
How:   Uses the client's X-Request-ID header if present, otherwise a short
       UUID; stores it in a ContextVar for loggers and error handlers and in
       request.state for route handlers.
When:  Runs before the logging middleware, so every log line for a request
       carries the same ID.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Read X-Request-ID from the request, or generate an 8-char ID
        2. Store it in request_id_var and request.state.request_id
        3. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
