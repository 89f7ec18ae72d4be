"""
TaskLedger Backend — Generic CRUD Service
==========================================

What:  The query layer shared by every resource: all, find, get, create,
       update, delete and where.
How:   Each method receives the request's AsyncSession and works through the
       ORM. Writes are flushed, never committed; the session dependency
       commits once the handler returns.
Who:   Subclassed in services/tasks.py, services/transactions.py and
       services/categories.py; called by route handlers.

Error Handling Strategy:
    - A missing row becomes NotFoundError (→ 404) in get/update/delete
    - IntegrityError becomes ValidationError (→ 400): the client sent data
      that violates a constraint
    - Any other SQLAlchemyError is logged and wrapped in DatabaseError (→ 500)
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.database import Base
from taskledger.exceptions import DatabaseError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudService(Generic[ModelT]):
    """
    CRUD operations for one ORM model.

    Attributes:
        model:     The mapped class, e.g. Task
        resource:  Human-readable name used in error messages, e.g. "task"
    """

    def __init__(self, model: Type[ModelT], resource: str):
        self.model = model
        self.resource = resource

    # ── Reads ─────────────────────────────────────────────────────────────
    async def all(self, db: AsyncSession) -> List[ModelT]:
        """Every row, oldest id first."""
        return await self._scalars(db, select(self.model).order_by(self.model.id))

    async def find(self, db: AsyncSession, record_id: int) -> Optional[ModelT]:
        """The row with this primary key, or None."""
        try:
            return await db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._database_error("find", e) from e

    async def get(self, db: AsyncSession, record_id: int) -> ModelT:
        """
        The row with this primary key.

        Raises:
            NotFoundError: No such row (→ 404)
        """
        record = await self.find(db, record_id)
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        return record

    async def where(self, db: AsyncSession, **conditions: Any) -> List[ModelT]:
        """Rows whose columns equal the given values, oldest id first."""
        statement = select(self.model).filter_by(**conditions).order_by(self.model.id)
        return await self._scalars(db, statement)

    # ── Writes ────────────────────────────────────────────────────────────
    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> ModelT:
        """Insert a row built from validated payload data and return it."""
        record = self.model(**data)
        db.add(record)
        await self._flush(db, "create")
        logger.info("Created %s %s", self.resource, record.id)
        return record

    async def update(
        self, db: AsyncSession, record_id: int, data: Dict[str, Any]
    ) -> ModelT:
        """
        Apply a partial update.

        Raises:
            NotFoundError: No such row (→ 404)
        """
        record = await self.get(db, record_id)
        for field, value in data.items():
            setattr(record, field, value)
        await self._flush(db, "update")
        logger.info("Updated %s %s (%s)", self.resource, record_id, ", ".join(sorted(data)))
        return record

    async def delete(self, db: AsyncSession, record_id: int) -> None:
        """
        Delete a row.

        Raises:
            NotFoundError: No such row (→ 404)
        """
        record = await self.get(db, record_id)
        try:
            await db.delete(record)
        except SQLAlchemyError as e:
            raise self._database_error("delete", e) from e
        await self._flush(db, "delete")
        logger.info("Deleted %s %s", self.resource, record_id)

    # ── Helpers ───────────────────────────────────────────────────────────
    async def _scalars(self, db: AsyncSession, statement: Select) -> List[ModelT]:
        try:
            result = await db.execute(statement)
        except SQLAlchemyError as e:
            raise self._database_error("query", e) from e
        return list(result.scalars().all())

    async def _flush(self, db: AsyncSession, operation: str) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            logger.warning("Constraint violation on %s %s: %s", operation, self.resource, e.orig)
            raise ValidationError(
                message=f"Could not {operation} {self.resource}: a constraint was violated",
                context={"operation": operation},
            ) from e
        except SQLAlchemyError as e:
            raise self._database_error(operation, e) from e

    def _database_error(self, operation: str, error: Exception) -> DatabaseError:
        logger.error(
            "Database error during %s on %s: %s", operation, self.resource, error, exc_info=True
        )
        return DatabaseError(
            message=f"Could not {operation} {self.resource}. Please try again.",
            context={"operation": operation, "error_type": type(error).__name__},
        )
