"""
TaskLedger Backend — Expense SQLAlchemy Model
===============================================

What:  ORM model representing the `expenses` table.

Table Design:
    - amount: NUMERIC(12, 2), never a float column (money)
    - category_id: nullable; deleting a category keeps its expenses
      (ON DELETE SET NULL) so "with category" listings use a LEFT JOIN
    - transaction_date: the day the money moved, not the row creation time

Index on transaction_date:
    Serves GET /expenses/range/{start}/{end} (BETWEEN scan).
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from taskledger.database import Base


class Expense(Base):
    """Money going out, optionally tagged with an 'expense' category."""

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_expenses_transaction_date", "transaction_date"),
        Index("idx_expenses_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Expense(id={self.id}, amount={self.amount}, "
            f"transaction_date='{self.transaction_date}')>"
        )
