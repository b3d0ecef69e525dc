"""core/middleware.py — HTTP middleware for the University Sports API.

  RequestIDMiddleware  reuses or mints the X-Request-ID of each request and
                       exposes it to handlers and to every log record
  TimingMiddleware     one "request completed" log line per request

Both are Starlette BaseHTTPMiddleware classes, so they only see HTTP traffic;
the /ws/results socket is not wrapped.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging import request_id_ctx

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag the request with an id and echo it back in X-Request-ID.

    A caller-supplied X-Request-ID (load balancer, mobile client) wins over a
    fresh UUID. The id ends up on request.state (read by the error handlers
    in api/main.py) and in request_id_ctx (read by core.logging).
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Wall-clock time per request; 5xx responses are logged at WARNING."""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query or None,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
