"""
TaskLedger Backend — Income SQLAlchemy Model
==============================================

What:  ORM model representing the `incomes` table.
How:   Same layout as `expenses`; see models/expense.py for column notes.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from taskledger.database import Base


class Income(Base):
    """Money coming in, optionally tagged with an 'income' category."""

    __tablename__ = "incomes"

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
        Index("idx_incomes_transaction_date", "transaction_date"),
        Index("idx_incomes_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Income(id={self.id}, amount={self.amount}, "
            f"transaction_date='{self.transaction_date}')>"
        )
