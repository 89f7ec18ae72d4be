"""
TaskLedger Backend — Task Request/Response Schemas
===================================================

What:  Pydantic models for task payloads and task serialization.
How:   Route handlers validate the decoded JSON body with the Create/Update
       models (unknown fields are rejected) and serialize ORM rows with
       TaskResponse.model_validate(row).model_dump(mode="json").
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TaskStatus = Literal["pending", "in_progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    """Body of POST /tasks."""

    title: str = Field(min_length=1, max_length=255, description="Short task title")
    description: Optional[str] = Field(default=None, description="Free-form details")
    status: TaskStatus = Field(default="pending")
    priority: TaskPriority = Field(default="medium")
    due_date: Optional[date] = Field(default=None, description="ISO 8601 date")

    model_config = {"extra": "forbid"}


class TaskUpdate(BaseModel):
    """
    Body of PUT /tasks/{id}.

    Every field is optional; only the fields present in the body are written
    (model_dump(exclude_unset=True)).
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None

    model_config = {"extra": "forbid"}


class TaskResponse(BaseModel):
    """Serialized task row."""

    id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[date] = None
    created_at: datetime

    model_config = {"from_attributes": True}
