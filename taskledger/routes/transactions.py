"""
TaskLedger Backend — Expense & Income Route Handlers
=====================================================

What:  Handlers for /expenses and /incomes.
How:   Both collections behave identically, so `register_ledger()` builds the
       handler closures for one collection around its service and labels.

Route set per collection (registration order):
    GET    /<collection>
    POST   /<collection>
    GET    /<collection>/with-category
    GET    /<collection>/category/{categoryId}
    GET    /<collection>/range/{start}/{end}       (ISO dates, inclusive)
    GET    /<collection>/{id}
    PUT    /<collection>/{id}
    DELETE /<collection>/{id}

    with-category is a single segment and would be captured by `{id}`, so it
    is registered first.
"""

from starlette.responses import Response

from taskledger.context import RequestContext, date_param, int_param
from taskledger.exceptions import ValidationError
from taskledger.responses import success
from taskledger.routing import RouteTable
from taskledger.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionWithCategory,
)
from taskledger.services.transactions import (
    TransactionService,
    expense_service,
    income_service,
)


def serialize(record) -> dict:
    return TransactionResponse.model_validate(record).model_dump(mode="json")


def register_ledger(
    table: RouteTable,
    collection: str,
    service: TransactionService,
    label: str,
    created_verb: str = "recorded",
) -> None:
    """Register the full route set for one money collection."""

    async def list_records(ctx: RequestContext) -> Response:
        records = await service.all(ctx.db)
        return success([serialize(record) for record in records])

    async def create_record(ctx: RequestContext) -> Response:
        payload = await ctx.payload(TransactionCreate)
        record = await service.create(ctx.db, payload.model_dump())
        return success(serialize(record), f"{label} {created_verb}", 201)

    async def list_with_category(ctx: RequestContext) -> Response:
        rows = await service.get_with_category(ctx.db)
        return success([
            TransactionWithCategory.model_validate(
                {**serialize(record), "category_name": category_name}
            ).model_dump(mode="json")
            for record, category_name in rows
        ])

    async def list_by_category(ctx: RequestContext, category_id: str) -> Response:
        records = await service.get_by_category(ctx.db, int_param(category_id, "categoryId"))
        return success([serialize(record) for record in records])

    async def list_by_date_range(ctx: RequestContext, start: str, end: str) -> Response:
        start_date = date_param(start, "start")
        end_date = date_param(end, "end")
        if start_date > end_date:
            raise ValidationError(
                message=f"Range start {start_date} is after range end {end_date}",
                field="start",
            )
        records = await service.get_by_date_range(ctx.db, start_date, end_date)
        return success([serialize(record) for record in records])

    async def get_record(ctx: RequestContext, record_id: str) -> Response:
        record = await service.get(ctx.db, int_param(record_id))
        return success(serialize(record))

    async def update_record(ctx: RequestContext, record_id: str) -> Response:
        target_id = int_param(record_id)
        payload = await ctx.payload(TransactionUpdate)
        record = await service.update(ctx.db, target_id, payload.model_dump(exclude_unset=True))
        return success(serialize(record), f"{label} updated")

    async def delete_record(ctx: RequestContext, record_id: str) -> Response:
        await service.delete(ctx.db, int_param(record_id))
        return success(None, f"{label} deleted")

    table.get(f"/{collection}", list_records)
    table.post(f"/{collection}", create_record)
    table.get(f"/{collection}/with-category", list_with_category)
    table.get(f"/{collection}/category/{{categoryId}}", list_by_category)
    table.get(f"/{collection}/range/{{start}}/{{end}}", list_by_date_range)
    table.get(f"/{collection}/{{id}}", get_record)
    table.put(f"/{collection}/{{id}}", update_record)
    table.delete(f"/{collection}/{{id}}", delete_record)


def register(table: RouteTable) -> None:
    register_ledger(table, "expenses", expense_service, "Expense")
    register_ledger(table, "incomes", income_service, "Income")
