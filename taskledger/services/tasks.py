"""
TaskLedger Backend — Task Service
==================================

What:  CRUD for tasks plus the two task-specific lookups:
       pending tasks and tasks of a given priority.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.models.task import TASK_PRIORITIES, Task
from taskledger.services.base import CrudService


class TaskService(CrudService[Task]):

    def __init__(self) -> None:
        super().__init__(Task, "task")

    async def get_pending(self, db: AsyncSession) -> List[Task]:
        return await self.where(db, status="pending")

    async def get_by_priority(self, db: AsyncSession, priority: str) -> List[Task]:
        """
        Tasks with the given priority.

        An unknown priority is not an error: it simply matches nothing, so
        the query is skipped and an empty list is returned.
        """
        if priority not in TASK_PRIORITIES:
            return []
        return await self.where(db, priority=priority)


task_service = TaskService()
