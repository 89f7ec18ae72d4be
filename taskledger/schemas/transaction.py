"""
TaskLedger Backend — Expense/Income Schemas
============================================

What:  Pydantic models shared by expenses and incomes.
Why shared: both tables have the same columns; only the route messages and
       the category type differ.

Amounts:
    Accepted as JSON numbers or strings, validated as Decimal with at most two
    decimal places and strictly positive. Serialized back as JSON numbers.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class TransactionCreate(BaseModel):
    """Body of POST /expenses and POST /incomes."""

    category_id: Optional[int] = Field(default=None, ge=1)
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None
    transaction_date: date = Field(description="ISO 8601 date of the movement")

    model_config = {"extra": "forbid"}


class TransactionUpdate(BaseModel):
    """Body of PUT /expenses/{id} and PUT /incomes/{id}. Partial update."""

    category_id: Optional[int] = Field(default=None, ge=1)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None
    transaction_date: Optional[date] = None

    model_config = {"extra": "forbid"}


class TransactionResponse(BaseModel):
    """Serialized expense or income row."""

    id: int
    category_id: Optional[int] = None
    amount: float
    description: Optional[str] = None
    transaction_date: date
    created_at: datetime

    model_config = {"from_attributes": True}


class TransactionWithCategory(TransactionResponse):
    """Row from the LEFT JOIN listing; category_name is null without a category."""

    category_name: Optional[str] = None
