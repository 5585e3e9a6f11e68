"""
Record Shop Backend — Request Logging Middleware
==================================================

What:  One access-log line per HTTP request.
How:   Measures time around call_next and logs method, path, status, duration
       and request id under the `recordshop.access` logger. Catalog writes
       (POST/PUT/DELETE) also name the signed-in user, which the
       get_current_user_id dependency leaves on request.state.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Log level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Never logged: request bodies (passwords, catalog payloads) and cookies.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from recordshop.middleware.request_id import request_id_var

logger = logging.getLogger("recordshop.access")

QUIET_PATHS = {"/health"}
WRITE_METHODS = {"POST", "PUT", "DELETE"}


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _acting_user(request: Request) -> Optional[int]:
    if request.method not in WRITE_METHODS:
        return None
    return getattr(request.state, "user_id", None)


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        user_id = _acting_user(request)
        actor = f" user={user_id}" if user_id is not None else ""

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s]%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            actor,
            extra={
                "request_id": rid,
                "user_id": user_id,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
