"""
TaskLedger Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the route table, the middleware
       chain and the exception handlers, then mounts the gateway.
Who:   uvicorn (taskledger.main:app), the `taskledger serve` command and the
       test suite.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                        │
    │  CORS → Request ID → Logging → GZip → API Key             │
    │                                                          │
    │  Gateway (catch-all):                                     │
    │  dispatch(route_table, method, raw_uri) → handler(ctx)    │
    │                                                          │
    │  Exception Handlers:                                      │
    │  ValidationError→400 │ NotFoundError→404 │ DB/other→500   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    create_app():
    1. Validate the API keys. An empty or blank APP_KEY raises ValueError.
    2. Build and freeze the route table. A bad route definition raises
       RouteDefinitionError here, before anything is served.

    Startup:
    1. Initialize logging
    2. Log the route count and listen address

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from taskledger import __version__
from taskledger.config import settings
from taskledger.database import dispose_engine
from taskledger.exceptions import DatabaseError, NotFoundError, ValidationError
from taskledger.gateway import mount_route_table
from taskledger.middleware.api_key import HEADER_NAME, ApiKeyMiddleware, validate_api_keys
from taskledger.middleware.logging import RequestLoggingMiddleware
from taskledger.middleware.request_id import RequestIDMiddleware, request_id_var
from taskledger.responses import error
from taskledger.routes import build_route_table
from taskledger.routing import RouteTable

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Access lines come from the "taskledger.access" logger (see
    middleware/logging.py); uvicorn's own access log is lowered to WARNING
    so each request is logged once.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.app_name, __version__)
    logger.info("Route table: %d routes (frozen)", len(app.state.route_table))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("%s shutting down...", settings.app_name)
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error envelopes.

    Handler hierarchy:
        ValidationError     → 400 (client can fix the input)
        NotFoundError       → 404
        DatabaseError       → 500 (generic message, details logged)
        Exception           → 500 (generic message, stack trace logged)

    Exception handlers NEVER put internal details (stack traces, SQL) in the
    response body. The request ID is returned in the X-Request-ID header.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return error(exc.message, status=400, details=exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.message)
        return error(exc.message, status=404)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error(GENERIC_SERVER_ERROR, status=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error(GENERIC_SERVER_ERROR, status=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(route_table: Optional[RouteTable] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        route_table: Use this table instead of the application routes.
            It is frozen before mounting. Tests pass small tables here.

    Raises:
        RouteDefinitionError: An application route does not compile.
        ValueError: APP_KEY is empty or contains a blank key.
    """
    # Starlette builds middleware lazily on the first request; check keys now
    api_keys = validate_api_keys(settings.api_keys)
    table = build_route_table() if route_table is None else route_table.freeze()

    app = FastAPI(
        title=settings.app_name,
        description="Task list and personal ledger (expenses, incomes, categories) API.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute. Execution order:
    # CORS → RequestID → Logging → GZip → ApiKey → gateway
    app.add_middleware(ApiKeyMiddleware, api_keys=api_keys)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["X-Requested-With", "Content-Type", HEADER_NAME],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Mount Route Table ─────────────────────────────────────────────────
    mount_route_table(app, table)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `taskledger.main:app` to be importable
app = create_app()
