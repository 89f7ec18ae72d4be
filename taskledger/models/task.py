"""
TaskLedger Backend — Task SQLAlchemy Model
============================================

What:  ORM model representing the `tasks` table.

Lifecycle:
    1. Created with status 'pending' unless the client says otherwise
    2. Moved through 'in_progress' → 'completed' with PUT /tasks/{id}
    3. Removed with DELETE /tasks/{id}

Query Patterns:
    - Pending tasks:   WHERE status = 'pending'   → idx_tasks_status
    - By priority:     WHERE priority = :priority
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from taskledger.database import Base

TASK_STATUSES = ("pending", "in_progress", "completed")
TASK_PRIORITIES = ("low", "medium", "high")


class Task(Base):
    """A to-do item with a status and a priority."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    # Values: 'pending' | 'in_progress' | 'completed'
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        server_default=text("'pending'"),
    )

    # Values: 'low' | 'medium' | 'high'
    priority: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="medium",
        server_default=text("'medium'"),
    )

    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_tasks_status", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Task(id={self.id}, status='{self.status}', "
            f"priority='{self.priority}')>"
        )
