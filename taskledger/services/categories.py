"""TaskLedger Backend — Category Service."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.models.category import CATEGORY_TYPES, Category
from taskledger.services.base import CrudService


class CategoryService(CrudService[Category]):

    def __init__(self) -> None:
        super().__init__(Category, "category")

    async def get_by_type(self, db: AsyncSession, category_type: str) -> List[Category]:
        """Categories of one ledger side; an unknown type returns []."""
        if category_type not in CATEGORY_TYPES:
            return []
        return await self.where(db, type=category_type)


category_service = CategoryService()
