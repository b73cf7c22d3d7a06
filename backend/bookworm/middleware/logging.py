"""
Bookworm Backend - Request Logging Middleware
==============================================

What:  One access log line per API call, tagged with the catalog resource it
       touched (users, books, genres, tutorials, shelves, reviews).
How:   Times the request, then logs method, path, status, duration, request
       ID and client IP. Level follows the status: 5xx ERROR, 4xx WARNING,
       otherwise INFO. Bodies are never logged since register and login
       carry plaintext passwords.

Example line:
    POST /api/genres 400 (genres) 3.2ms [1f0c9a2e] from 127.0.0.1
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookworm.middleware.request_id import request_id_var

logger = logging.getLogger("bookworm.access")

API_PREFIX = "/api/"

# Polled by orchestrators every few seconds
QUIET_PATHS = {"/health"}


def resource_for(path: str) -> str:
    """
    Name of the collection a path addresses.

        /api/books/66a1...  → "books"
        /api/users/login    → "users"
        /api/               → "root"
        /docs               → "-"
    """
    if not path.startswith(API_PREFIX):
        return "-"
    segment = path[len(API_PREFIX):].split("/", 1)[0]
    return segment or "root"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        resource = resource_for(path)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d (%s) %.1fms [%s] from %s",
            method,
            path,
            status,
            resource,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "resource": resource,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
