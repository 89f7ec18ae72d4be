"""
TaskLedger Backend — System Routes
===================================

What:  Endpoints that are not a resource:
    GET     /         API metadata (name, version, collection paths)
    GET     /health   Database probe, version, route count, uptime
    OPTIONS (.*)      Preflight fallback for any path, 204 No Content

Who:   GET / and /health are exempt from the API key (see
       middleware/api_key.py); so is every OPTIONS request.
"""

import logging
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from taskledger import __version__
from taskledger.config import settings
from taskledger.context import RequestContext
from taskledger.responses import send, success
from taskledger.routing import HttpMethod, RouteTable
from taskledger.schemas.system import ApiMetadata, HealthResponse

logger = logging.getLogger(__name__)

# Module-level: initialized once when the module loads
_start_time = time.time()

ENDPOINTS = {
    "tasks": "/tasks",
    "expenses": "/expenses",
    "incomes": "/incomes",
    "categories": "/categories",
}

ALLOWED_METHODS = ", ".join(method.value for method in HttpMethod)


async def api_metadata(ctx: RequestContext) -> Response:
    metadata = ApiMetadata(name=settings.app_name, version=__version__, endpoints=ENDPOINTS)
    return success(metadata.model_dump())


async def health_check(ctx: RequestContext) -> Response:
    """
    Check that the service can reach its database.

    Runs SELECT 1 on the request's session. Unreachable database → 503 with
    the same payload shape, so probes can read the reason.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await ctx.db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))
        # Leave the session clean for the dependency's commit
        await ctx.db.rollback()

    health = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        routes=len(ctx.request.app.state.route_table),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return send(health.model_dump(), status=200 if overall == "healthy" else 503)


async def preflight(ctx: RequestContext, path: str) -> Response:
    """Answer any OPTIONS request the CORS middleware did not already handle."""
    return Response(status_code=204, headers={"Allow": ALLOWED_METHODS})


def register(table: RouteTable) -> None:
    table.get("/", api_metadata)
    table.get("/health", health_check)
    table.options("(.*)", preflight)
