"""
Blog API — Request Context Middleware
======================================

What:  Gives each request a correlation ID, tags the response with it, and
       writes one access log line per request.
How:   The ID comes from a well-formed client X-Request-ID header or a fresh
       short UUID. It is stored in a ContextVar so the exception handlers in
       main.py can put it in error bodies and headers.

Access line:
    POST /posts 201 3.2ms [1f2e3d4c] from 10.0.0.7
    GET /posts/65a1...d0e1 404 1.1ms [trace-42] from 10.0.0.7 post=65a1...d0e1

Request bodies are never logged; post content stays out of the logs.
"""

import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("blog_api.access")

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs outside this shape are replaced, so headers and logs stay bounded
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
_POST_PATH = re.compile(r"^/posts/([^/]+)$")

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Returns the client's ID if it is safe to echo, otherwise a new 8-char ID."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return str(uuid.uuid4())[:8]


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Correlation ID + access logging for the posts API.

    An exception that escapes the route (and so bypasses the handled
    400/404/500 paths) is logged as a 500 access line and re-raised for the
    catch-all handler, which sets the response header itself.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log_access(request, rid, 500, start_time)
            raise

        response.headers[REQUEST_ID_HEADER] = rid
        self._log_access(request, rid, response.status_code, start_time)
        return response

    @staticmethod
    def _log_access(request: Request, rid: str, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        # request.client may be None in testing
        client_ip = request.client.host if request.client else "unknown"
        path = request.url.path

        match = _POST_PATH.match(path)
        post_id = match.group(1) if match else None

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s%s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            f" post={post_id}" if post_id else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "post_id": post_id,
            },
        )
