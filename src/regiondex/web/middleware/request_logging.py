"""Structured request logging middleware for FastAPI.

Each request gets an ID bound into structlog's context variables, so every
record logged while handling it (upstream lookup failures included) carries
the same `request_id`. The ID is returned in the `X-Request-ID` header.
"""

import logging
import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATH_PREFIXES = ("/static/",)


class StructuredRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for each request and log one record when it completes."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle the request inside its own logging context."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            response.headers[REQUEST_ID_HEADER] = request_id

            if not request.url.path.startswith(QUIET_PATH_PREFIXES):
                self._log_request(request, response.status_code, duration_ms)

        return response

    @staticmethod
    def _log_request(request: Request, status_code: int, duration_ms: float) -> None:
        fields: dict[str, str | int | float] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        }
        if request.url.query:
            fields["query"] = str(request.url.query)
        if request.client:
            fields["client_host"] = request.client.host

        # Upstream outages surface as 502s
        level = logging.WARNING if status_code >= 500 else logging.INFO
        logger.log(
            level, "%s %s %s", request.method, request.url.path, status_code, extra=fields
        )
