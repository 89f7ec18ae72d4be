"""
TaskLedger Backend — Route Table Gateway
=========================================

What:  Connects FastAPI to the application's own route table.
How:   One catch-all endpoint receives every request that is not API
       documentation, rebuilds the raw request URI from the ASGI scope and
       hands (method, uri) to `dispatch()`.

    match found → await handler(RequestContext(request, db), *params)
    no match    → 404 {"error": "Route not found"}

The catch-all accepts every method FastAPI can route, including PATCH and
HEAD, so a method with no bucket in the table gets the same 404 as an unknown
path instead of FastAPI's 405.

The outcome is recorded on `request.state.route` (the matched Route, or
None) so the access log can name the route pattern.

Exceptions raised by handlers are not caught here; the global exception
handlers in main.py render them.
"""

import logging
from typing import List

from fastapi import Depends, FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse, Response
from starlette.types import Scope

from taskledger.context import RequestContext
from taskledger.database import get_db_session
from taskledger.routing import RouteTable, dispatch

logger = logging.getLogger(__name__)

ALL_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"]

# Exact body existing clients depend on; not wrapped in the envelope
NOT_FOUND_BODY = {"error": "Route not found"}


def raw_request_uri(scope: Scope) -> str:
    """
    Path and query string exactly as the client sent them.

    Uses `raw_path` (still percent-encoded) when the server provides it and
    falls back to the decoded `path` otherwise.
    """
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope.get("path", "/")
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


async def route_request(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    table: RouteTable = request.app.state.route_table
    uri = raw_request_uri(request.scope)
    match = dispatch(table, request.method, uri)

    # Read by RequestLoggingMiddleware for the access line
    request.state.route = match.route if match is not None else None

    if match is None:
        logger.debug("No route for %s %s", request.method, uri)
        return JSONResponse(status_code=404, content=NOT_FOUND_BODY)

    logger.debug(
        "Dispatching %s %s to %s",
        request.method,
        uri,
        getattr(match.handler, "__qualname__", repr(match.handler)),
    )
    return await match.handler(RequestContext(request=request, db=db), *match.params)


def mount_route_table(app: FastAPI, table: RouteTable) -> None:
    """Install `table` on the app and register the catch-all endpoint."""
    app.state.route_table = table
    app.add_api_route(
        "/{path:path}",
        route_request,
        methods=ALL_METHODS,
        include_in_schema=False,
    )
