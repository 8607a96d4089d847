"""
Request context middleware.

Binds a request id to every log line written while a request is handled and
echoes it back to the caller, so a member's error report can be matched to
the server logs.
"""

import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware to bind request context into structlog.

    - Reuses the caller's X-Request-ID when present, otherwise generates one
    - Binds request_id, method and path as contextvars for the request
    - Adds X-Request-ID to the response
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        # Ballots and results are per-member and change while voting is open
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store"
        return response
