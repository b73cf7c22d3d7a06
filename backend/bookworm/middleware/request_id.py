"""
Bookworm Backend - Request ID Middleware
=========================================

What:  Tags every request with a correlation ID, echoed in X-Request-ID and in
       400/500 error bodies.
How:   A client-supplied X-Request-ID is reused only when it is a short token
       of letters, digits, `.`, `_` or `-`; anything else (too long, spaces,
       control characters) is replaced with 8 hex characters from uuid4, so
       the value is always safe to write into a log line or response header.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Keep a well-formed inbound ID, otherwise mint a fresh one."""
    if supplied and SAFE_REQUEST_ID.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
