"""
TaskLedger Backend — Request Context
=====================================

What:  The first argument every route handler receives.
How:   Bundles the Starlette request with the per-request database session
       and offers the small helpers handlers need: reading the JSON body and
       coercing raw path parameters.

Handler signature:
    async def get_task(ctx: RequestContext, task_id: str) -> Response

Path parameters arrive as raw strings, exactly as captured by the router.
Coercion is the handler's job; `int_param` and `date_param` turn bad input
into ValidationError (→ 400) instead of letting a ValueError become a 500.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Type, TypeVar

import pydantic
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from taskledger.exceptions import ValidationError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)

# Largest value of the 32-bit INTEGER primary key columns
MAX_ID = 2**31 - 1


@dataclass
class RequestContext:
    """Request plus database session, handed to route handlers."""

    request: Request
    db: AsyncSession

    async def json_body(self) -> Dict[str, Any]:
        """
        Decode the request body as a JSON object.

        An empty body, invalid JSON, or JSON that is not an object all decode
        to {}; schema validation then reports what is missing.
        """
        raw = await self.request.body()
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Ignoring undecodable request body (%d bytes)", len(raw))
            return {}
        return data if isinstance(data, dict) else {}

    async def payload(self, schema: Type[SchemaT]) -> SchemaT:
        """
        Validate the JSON body against `schema`.

        Raises:
            ValidationError: The body does not satisfy the schema (→ 400).
                `details.errors` lists each failing field and its message.
        """
        data = await self.json_body()
        try:
            return schema.model_validate(data)
        except pydantic.ValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]) or None,
                    "message": err["msg"],
                }
                for err in e.errors()
            ]
            raise ValidationError(
                message=f"Invalid {schema.__name__} payload",
                context={"errors": errors},
            ) from e


def int_param(value: str, name: str = "id") -> int:
    """Coerce a raw path parameter to a positive integer that fits an INTEGER column."""
    # isdigit() alone accepts Unicode digits such as "²" that int() rejects;
    # the length check keeps int() away from its digit limit
    valid = value.isascii() and value.isdigit() and len(value) <= len(str(MAX_ID))
    if not valid or not 1 <= int(value) <= MAX_ID:
        raise ValidationError(
            message=f"Path parameter '{name}' must be an integer from 1 to {MAX_ID}, got '{value}'",
            field=name,
        )
    return int(value)


def date_param(value: str, name: str) -> date:
    """Coerce a raw path parameter to a date (YYYY-MM-DD)."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(
            message=f"Path parameter '{name}' must be an ISO date (YYYY-MM-DD), got '{value}'",
            field=name,
        ) from e
