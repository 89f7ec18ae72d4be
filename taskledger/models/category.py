"""
TaskLedger Backend — Category SQLAlchemy Model
================================================

What:  ORM model for the `categories` table.
How:   Each category belongs to exactly one ledger side: 'expense' or 'income'.
       Expenses and incomes reference it through a nullable foreign key.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from taskledger.database import Base

CATEGORY_TYPES = ("expense", "income")


class Category(Base):
    """A named bucket for expenses or incomes."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # 'expense' | 'income'
    type: Mapped[str] = mapped_column(String(20), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("type IN ('expense', 'income')", name="ck_categories_type"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', type='{self.type}')>"
