import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from .base import RequestModel


class BudgetRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=255, description="Budget name")
    description: str | None = Field(default=None, description="Optional free-text description")

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        return v or None


class BudgetResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    description: str | None = None
    balance: Decimal = Field(..., description="Income minus expenses over all transactions")
    created_at: datetime


class DashboardSummary(BaseModel):
    """Totals across every budget of one owner."""

    budget_count: int = 0
    total_balance: Decimal = Decimal("0.00")
    total_income: Decimal = Decimal("0.00")
    total_expense: Decimal = Decimal("0.00")
    budgets: list[BudgetResponse] = Field(default_factory=list)
