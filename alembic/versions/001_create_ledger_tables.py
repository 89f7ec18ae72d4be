"""Create ledger tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates categories, tasks, expenses and incomes.
How:   categories first; expenses and incomes reference it with
       ON DELETE SET NULL.

Rollback: downgrade() drops all four tables (destructive, all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money_table(name: str) -> None:
    """expenses and incomes share one layout."""
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        # NUMERIC, never float: amounts are money
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"idx_{name}_transaction_date", name, ["transaction_date"])
    op.create_index(f"idx_{name}_category_id", name, ["category_id"])


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint("type IN ('expense', 'income')", name="ck_categories_type"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("priority", sa.String(10), nullable=False, server_default=sa.text("'medium'")),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # GET /tasks/pending filters on status
    op.create_index("idx_tasks_status", "tasks", ["status"])

    _money_table("expenses")
    _money_table("incomes")


def downgrade() -> None:
    """Drop every ledger table, dependents first."""
    for name in ("incomes", "expenses"):
        op.drop_index(f"idx_{name}_category_id", table_name=name)
        op.drop_index(f"idx_{name}_transaction_date", table_name=name)
        op.drop_table(name)
    op.drop_index("idx_tasks_status", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("categories")
