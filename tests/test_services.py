"""
TaskLedger Backend — Service Unit Tests
========================================

What:  Service-layer behaviour against a mocked AsyncSession.

What we test:
    ✅ Missing rows raise NotFoundError for get, update and delete
    ✅ Partial updates touch only the given fields
    ✅ Unknown priorities and category types short-circuit to []
    ✅ Transactions reject missing or wrong-side categories
    ✅ SQLAlchemy failures become DatabaseError / ValidationError
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from taskledger.exceptions import DatabaseError, NotFoundError, ValidationError
from taskledger.models.category import Category
from taskledger.models.task import Task
from taskledger.services.categories import category_service
from taskledger.services.tasks import task_service
from taskledger.services.transactions import expense_service, income_service


def scalars_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


class TestCrudService:

    @pytest.mark.asyncio
    async def test_get_returns_row(self, mock_db_session):
        task = Task(id=1, title="Write report")
        mock_db_session.get.return_value = task

        assert await task_service.get(mock_db_session, 1) is task
        mock_db_session.get.assert_awaited_once_with(Task, 1)

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await task_service.get(mock_db_session, 99)
        assert exc_info.value.message == "Task with ID '99' was not found"

    @pytest.mark.asyncio
    async def test_create_adds_and_flushes(self, mock_db_session):
        task = await task_service.create(mock_db_session, {"title": "Buy milk"})

        assert isinstance(task, Task)
        assert task.title == "Buy milk"
        mock_db_session.add.assert_called_once_with(task)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_is_partial(self, mock_db_session):
        task = Task(id=1, title="Old", priority="low", status="pending")
        mock_db_session.get.return_value = task

        await task_service.update(mock_db_session, 1, {"status": "completed"})

        assert task.status == "completed"
        assert task.title == "Old"
        assert task.priority == "low"

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await task_service.update(mock_db_session, 5, {"title": "x"})
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await task_service.delete(mock_db_session, 5)
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_db_session):
        task = Task(id=3, title="Done")
        mock_db_session.get.return_value = task

        await task_service.delete(mock_db_session, 3)
        mock_db_session.delete.assert_awaited_once_with(task)

    @pytest.mark.asyncio
    async def test_query_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError) as exc_info:
            await task_service.all(mock_db_session)
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_validation_error(self, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("null"))

        with pytest.raises(ValidationError):
            await task_service.create(mock_db_session, {"title": "x"})


class TestLookups:

    @pytest.mark.asyncio
    async def test_pending_tasks(self, mock_db_session):
        pending = [Task(id=1, title="a", status="pending")]
        mock_db_session.execute.return_value = scalars_result(pending)

        assert await task_service.get_pending(mock_db_session) == pending

    @pytest.mark.asyncio
    async def test_unknown_priority_skips_query(self, mock_db_session):
        assert await task_service.get_by_priority(mock_db_session, "urgent") == []
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_category_type_skips_query(self, mock_db_session):
        assert await category_service.get_by_type(mock_db_session, "savings") == []
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_with_category_pairs_rows(self, mock_db_session):
        expense = SimpleNamespace(id=1)
        result = MagicMock()
        result.all.return_value = [(expense, "Food")]
        mock_db_session.execute.return_value = result

        assert await expense_service.get_with_category(mock_db_session) == [(expense, "Food")]


class TestTransactionCategoryCheck:

    @pytest.mark.asyncio
    async def test_missing_category_rejected(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(ValidationError) as exc_info:
            await expense_service.create(
                mock_db_session, {"amount": 10, "category_id": 7}
            )
        assert exc_info.value.field == "category_id"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_side_category_rejected(self, mock_db_session):
        mock_db_session.get.return_value = Category(id=2, name="Salary", type="income")

        with pytest.raises(ValidationError) as exc_info:
            await expense_service.create(mock_db_session, {"amount": 10, "category_id": 2})
        assert "Salary" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_matching_category_accepted(self, mock_db_session):
        mock_db_session.get.return_value = Category(id=2, name="Salary", type="income")

        income = await income_service.create(mock_db_session, {"amount": 10, "category_id": 2})
        assert income.category_id == 2

    @pytest.mark.asyncio
    async def test_update_without_category_skips_check(self, mock_db_session):
        record = SimpleNamespace(id=1, amount=5)
        mock_db_session.get.return_value = record

        await expense_service.update(mock_db_session, 1, {"amount": 8})

        assert record.amount == 8
        mock_db_session.get.assert_awaited_once()
