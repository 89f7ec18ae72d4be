"""
TaskLedger Backend — Task Route Handlers
=========================================

What:  Handlers for the /tasks resource.
How:   Each handler coerces its raw path parameters, delegates to
       task_service, and wraps the result in the JSON envelope. Missing rows
       and invalid input surface as NotFoundError / ValidationError and are
       rendered by the global exception handlers.

Registration order:
    /tasks/pending and /tasks/priority/{priority} are registered BEFORE
    /tasks/{id}. The router is first-match-wins and `{id}` matches any single
    segment, so registering /tasks/pending later would make it unreachable.
"""

from starlette.responses import Response

from taskledger.context import RequestContext, int_param
from taskledger.responses import success
from taskledger.routing import RouteTable
from taskledger.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskledger.services.tasks import task_service


def serialize(task) -> dict:
    return TaskResponse.model_validate(task).model_dump(mode="json")


async def list_tasks(ctx: RequestContext) -> Response:
    tasks = await task_service.all(ctx.db)
    return success([serialize(task) for task in tasks])


async def create_task(ctx: RequestContext) -> Response:
    payload = await ctx.payload(TaskCreate)
    task = await task_service.create(ctx.db, payload.model_dump())
    return success(serialize(task), "Task created", 201)


async def list_pending_tasks(ctx: RequestContext) -> Response:
    tasks = await task_service.get_pending(ctx.db)
    return success([serialize(task) for task in tasks])


async def list_tasks_by_priority(ctx: RequestContext, priority: str) -> Response:
    tasks = await task_service.get_by_priority(ctx.db, priority)
    return success([serialize(task) for task in tasks])


async def get_task(ctx: RequestContext, task_id: str) -> Response:
    task = await task_service.get(ctx.db, int_param(task_id))
    return success(serialize(task))


async def update_task(ctx: RequestContext, task_id: str) -> Response:
    record_id = int_param(task_id)
    payload = await ctx.payload(TaskUpdate)
    task = await task_service.update(ctx.db, record_id, payload.model_dump(exclude_unset=True))
    return success(serialize(task), "Task updated")


async def delete_task(ctx: RequestContext, task_id: str) -> Response:
    await task_service.delete(ctx.db, int_param(task_id))
    return success(None, "Task deleted")


def register(table: RouteTable) -> None:
    table.get("/tasks", list_tasks)
    table.post("/tasks", create_task)
    table.get("/tasks/pending", list_pending_tasks)
    table.get("/tasks/priority/{priority}", list_tasks_by_priority)
    table.get("/tasks/{id}", get_task)
    table.put("/tasks/{id}", update_task)
    table.delete("/tasks/{id}", delete_task)
