"""
TaskLedger Backend — Access Log Middleware
==========================================

What:  One access-log line per request, naming the route-table entry that
       served it:

    GET /tasks/42 -> /tasks/{id} (parameterized) 200 3.1ms [a1b2c3d4] from 10.0.0.5
    PATCH /tasks/42 -> no route 404 0.4ms [...]
    GET /tasks -> not dispatched 401 0.2ms [...]

Route labels:
    <definition> (<kind>)  the gateway matched a route
    no route               the gateway ran and dispatch found nothing
    not dispatched         answered before the gateway (API key rejection,
                           API docs)

Levels: 5xx → ERROR, 4xx → WARNING, everything else → INFO.
Successful /health probes are not logged; a failing probe (503) is.

Never logged: request body, X-Api-Key header.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from taskledger.middleware.request_id import request_id_var
from taskledger.routing import Route

logger = logging.getLogger("taskledger.access")

NO_ROUTE = "no route"
NOT_DISPATCHED = "not dispatched"

_UNSET = object()

def route_label(request: Request) -> str:
    """Describe what the gateway recorded for this request."""
    route = getattr(request.state, "route", _UNSET)
    if route is _UNSET:
        return NOT_DISPATCHED
    if route is None:
        return NO_ROUTE
    return f"{route.definition} ({route.pattern.kind.value})"

def _route_definition(request: Request) -> Optional[str]:
    route = getattr(request.state, "route", None)
    return route.definition if isinstance(route, Route) else None

class RequestLoggingMiddleware(BaseHTTPMiddleware):

    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        path = request.url.path
        if path in self.QUIET_PATHS and status < 400:
            return response

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        label = route_label(request)

        logger.log(
            log_level,
            "%s %s -> %s %d %.1fms [%s] from %s",
            request.method,
            path,
            label,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "route": _route_definition(request),
                "route_label": label,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
