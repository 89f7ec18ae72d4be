"""
TaskLedger Backend — Expense & Income Service
==============================================

What:  CRUD for the two money tables plus category and date-range lookups.
How:   One TransactionService class, instantiated once per table
       (expense_service, income_service). `category_type` ties each instance
       to the matching side of the categories table.

Category checks (create/update):
    When a payload carries category_id, the category must exist and have the
    same type as the ledger ('expense' categories for expenses, 'income' for
    incomes). Otherwise the payload is rejected with ValidationError (→ 400).

Query plans:
    get_by_date_range:   WHERE transaction_date BETWEEN :start AND :end
                         → idx_<table>_transaction_date
    get_with_category:   LEFT OUTER JOIN categories, so uncategorized rows
                         are included with category_name = NULL
"""

from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.exceptions import ValidationError
from taskledger.models.category import Category
from taskledger.models.expense import Expense
from taskledger.models.income import Income
from taskledger.services.base import CrudService

TransactionT = TypeVar("TransactionT", Expense, Income)


class TransactionService(CrudService[TransactionT]):

    def __init__(self, model: Type[TransactionT], resource: str, category_type: str):
        super().__init__(model, resource)
        self.category_type = category_type

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> TransactionT:
        await self._check_category(db, data.get("category_id"))
        return await super().create(db, data)

    async def update(
        self, db: AsyncSession, record_id: int, data: Dict[str, Any]
    ) -> TransactionT:
        await self._check_category(db, data.get("category_id"))
        return await super().update(db, record_id, data)

    async def get_by_category(self, db: AsyncSession, category_id: int) -> List[TransactionT]:
        return await self.where(db, category_id=category_id)

    async def get_by_date_range(
        self, db: AsyncSession, start: date, end: date
    ) -> List[TransactionT]:
        """Rows whose transaction_date is within [start, end], oldest first."""
        statement = (
            select(self.model)
            .where(self.model.transaction_date.between(start, end))
            .order_by(self.model.transaction_date, self.model.id)
        )
        return await self._scalars(db, statement)

    async def get_with_category(
        self, db: AsyncSession
    ) -> List[Tuple[TransactionT, Optional[str]]]:
        """Every row paired with its category name (None when uncategorized)."""
        statement = (
            select(self.model, Category.name)
            .outerjoin(Category, self.model.category_id == Category.id)
            .order_by(self.model.id)
        )
        try:
            result = await db.execute(statement)
        except SQLAlchemyError as e:
            raise self._database_error("query", e) from e
        return [(row[0], row[1]) for row in result.all()]

    async def _check_category(
        self, db: AsyncSession, category_id: Optional[int]
    ) -> None:
        if category_id is None:
            return
        try:
            category = await db.get(Category, category_id)
        except SQLAlchemyError as e:
            raise self._database_error("find", e) from e
        if category is None:
            raise ValidationError(
                message=f"Category with ID '{category_id}' does not exist",
                field="category_id",
            )
        if category.type != self.category_type:
            raise ValidationError(
                message=(
                    f"Category '{category.name}' is an {category.type} category, "
                    f"not an {self.category_type} category"
                ),
                field="category_id",
            )


expense_service = TransactionService(Expense, "expense", "expense")
income_service = TransactionService(Income, "income", "income")
