"""
TaskLedger Backend — Application Package Initializer
=====================================================

What: Marks the `taskledger` directory as a Python package.
Who:  Imported by uvicorn, Alembic, pytest and the `taskledger` CLI.

Architecture Note:
    The backend is layered around a small routing core:

    ┌─────────────────────────────────────┐
    │      Gateway (FastAPI catch-all)    │  ← raw URI → dispatch → handler
    ├─────────────────────────────────────┤
    │   Routing (table, patterns, dispatch)│  ← first-match-wins route lookup
    ├─────────────────────────────────────┤
    │       Routes (handler callbacks)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← queries, not-found handling
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The routing layer has no database imports; it can be built and exercised
    on its own.
"""

__version__ = "1.0.0"
