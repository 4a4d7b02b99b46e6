"""
Footprints Backend — Access Logging Middleware
===============================================

What:  One log line per HTTP request with method, path, status and duration.
Who:   Applied to every request except GET /health (probe traffic).

Level by status class:
    5xx → ERROR
    4xx → WARNING
    else → INFO

Query strings and bodies are not logged: they carry owner ids and
signed URLs.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from footprints.middleware.request_id import request_id_var

logger = logging.getLogger("footprints.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by the request id from RequestIDMiddleware."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
