# Models package init
"""
TaskLedger Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`
(Alembic autogenerate and `create_tables()` rely on that).
"""

from taskledger.models.category import Category
from taskledger.models.expense import Expense
from taskledger.models.income import Income
from taskledger.models.task import Task

__all__ = ["Category", "Expense", "Income", "Task"]
