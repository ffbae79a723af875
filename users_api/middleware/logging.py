"""
Users API - Request Logging Middleware
======================================

What:  One access log line per HTTP request, with status and duration.
How:   Times the downstream call and logs on the `users_api.access` logger.
When:  Runs inside RequestIDMiddleware so the request ID is available.

Log line:
    PUT /api/v1/users/{user_id} user=65a4f0c2e4b0a1b2c3d4e5f6 200 3.2ms [a1b2c3d4]

The route template rather than the raw path is logged, so lines for the same
endpoint group together; the addressed user id is logged separately.
Request bodies are never logged (they carry user names).
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from users_api.middleware.request_id import request_id_var

logger = logging.getLogger("users_api.access")


def _route_template(request: Request) -> str:
    # The router records the matched route in the shared scope
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _level_for(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    # Probes arrive every few seconds
    if path == "/health":
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, route, user id, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        route = _route_template(request)
        user_id: Optional[str] = request.scope.get("path_params", {}).get("user_id")
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            _level_for(route, status),
            "%s %s%s %d %.1fms [%s]",
            request.method,
            route,
            f" user={user_id}" if user_id else "",
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "user_id": user_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response
