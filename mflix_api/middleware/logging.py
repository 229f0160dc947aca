"""
Mflix API: Request Logging Middleware
=====================================

What:  One access-log line per request, correlated by request id.
Why:   uvicorn's access log has no request-id correlation or timing, so it is
       turned down to WARNING in main.setup_logging and replaced by this.

Line format:
    GET /api/movies/{movie_id}/comments 200 12.4ms [1f2e3d4c] from 10.0.0.7

The matched route template is logged rather than the raw path, so lines for
different movie ids group together. The raw path goes in `extra`.

Query strings and bodies are not logged (comment bodies carry emails).
"""

import logging
import time
from typing import FrozenSet

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from mflix_api.middleware.request_id import request_id_var

logger = logging.getLogger("mflix_api.access")

# Polled by load balancers every few seconds
DEFAULT_SKIP_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for everything except `skip_paths`."""

    def __init__(self, app: ASGIApp, skip_paths: FrozenSet[str] = DEFAULT_SKIP_PATHS):
        super().__init__(app)
        self.skip_paths = skip_paths

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        template = route_template(request)
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            template,
            response.status_code,
            elapsed_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": template,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
