"""TaskLedger Backend — Category Schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

CategoryType = Literal["expense", "income"]


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: CategoryType

    model_config = {"extra": "forbid"}


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[CategoryType] = None

    model_config = {"extra": "forbid"}


class CategoryResponse(BaseModel):
    id: int
    name: str
    type: str
    created_at: datetime

    model_config = {"from_attributes": True}
