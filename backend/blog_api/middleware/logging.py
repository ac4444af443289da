"""
Blog API Backend — Request Logging Middleware
==============================================

What:  One access-log line per API request, e.g.
           PUT /blogs/65f0c2a9e4b0a1b2c3d4e5f6 → 404 (3.2ms) client=127.0.0.1
How:   Times the rest of the stack around call_next. The request id comes
       from RequestIdFilter via the log format, not from the message.

Log level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("blog_api.access")


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Probes and static assets would drown out API traffic
    SKIPPED_PREFIXES = ("/health", "/static/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path.startswith(self.SKIPPED_PREFIXES):
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log(
            level_for_status(response.status_code),
            "%s %s → %d (%.1fms) client=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.client.host if request.client else "-",
        )
        return response
