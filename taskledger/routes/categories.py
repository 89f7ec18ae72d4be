"""
TaskLedger Backend — Category Route Handlers
=============================================

What:  Handlers for /categories. /categories/type/{type} has two segments
       after the collection, so `{id}` never shadows it; it is still
       registered first to keep specific routes ahead of generic ones.
"""

from starlette.responses import Response

from taskledger.context import RequestContext, int_param
from taskledger.responses import success
from taskledger.routing import RouteTable
from taskledger.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from taskledger.services.categories import category_service


def serialize(category) -> dict:
    return CategoryResponse.model_validate(category).model_dump(mode="json")


async def list_categories(ctx: RequestContext) -> Response:
    categories = await category_service.all(ctx.db)
    return success([serialize(category) for category in categories])


async def create_category(ctx: RequestContext) -> Response:
    payload = await ctx.payload(CategoryCreate)
    category = await category_service.create(ctx.db, payload.model_dump())
    return success(serialize(category), "Category created", 201)


async def list_categories_by_type(ctx: RequestContext, category_type: str) -> Response:
    categories = await category_service.get_by_type(ctx.db, category_type)
    return success([serialize(category) for category in categories])


async def get_category(ctx: RequestContext, category_id: str) -> Response:
    category = await category_service.get(ctx.db, int_param(category_id))
    return success(serialize(category))


async def update_category(ctx: RequestContext, category_id: str) -> Response:
    record_id = int_param(category_id)
    payload = await ctx.payload(CategoryUpdate)
    category = await category_service.update(
        ctx.db, record_id, payload.model_dump(exclude_unset=True)
    )
    return success(serialize(category), "Category updated")


async def delete_category(ctx: RequestContext, category_id: str) -> Response:
    await category_service.delete(ctx.db, int_param(category_id))
    return success(None, "Category deleted")


def register(table: RouteTable) -> None:
    table.get("/categories", list_categories)
    table.post("/categories", create_category)
    table.get("/categories/type/{type}", list_categories_by_type)
    table.get("/categories/{id}", get_category)
    table.put("/categories/{id}", update_category)
    table.delete("/categories/{id}", delete_category)
