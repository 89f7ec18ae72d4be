"""
TaskLedger Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       per-request session dependency.
How:   Creates an async engine with connection pooling and provides a session
       dependency that commits on success and rolls back on error.
Who:   The gateway endpoint receives a session through FastAPI's Depends() and
       hands it to route handlers inside their RequestContext.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    pool_size / max_overflow:  from settings (PostgreSQL only)
    pool_pre_ping:             validates connections before use
    pool_recycle=3600:         recycles connections every hour
    SQLite (tests, local dev) keeps SQLAlchemy's default pool for the dialect.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from taskledger.config import settings


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured database backend."""
    options: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
        "pool_pre_ping": settings.db_pool_pre_ping,
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so handlers
# can serialize rows after the transaction has been closed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata
    used by Alembic and by the test suite's create_all().
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the gateway, which passes it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """
    Create every table registered on Base.metadata.

    Used by the test suite and for throwaway SQLite databases. Real
    deployments run `alembic upgrade head` instead.
    """
    # Model modules must be imported so their tables exist on the metadata
    import taskledger.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """Drop every table registered on Base.metadata."""
    import taskledger.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
