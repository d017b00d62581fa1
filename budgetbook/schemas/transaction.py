from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, field_validator

from budgetbook.models.budget import CENTS, TransactionType

from .base import RequestModel


class TransactionRequest(RequestModel):
    """
    Input for appending a ledger entry. Amounts are exact decimals; a comma is
    accepted as the decimal separator, as typed into the web form.
    """

    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Non-negative amount")
    type: TransactionType = Field(..., description="income | expense")
    comment: str = Field(..., min_length=1, max_length=255, description="What the money was for")

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("Amount must be a valid number")
        if isinstance(v, float):
            # str() first, so 250.5 becomes Decimal("250.5") and not its binary expansion
            v = Decimal(str(v))
        elif isinstance(v, str):
            v = v.strip().replace(",", ".")
            try:
                v = Decimal(v)
            except InvalidOperation as exc:
                raise ValueError("Amount must be a valid number") from exc
        if isinstance(v, Decimal) and not v.is_finite():
            raise ValueError("Amount must be a valid number")
        return v

    @field_validator("amount")
    @classmethod
    def two_places(cls, v: Decimal) -> Decimal:
        # "-0" passes ge=0; store it unsigned
        return v.copy_abs().quantize(CENTS)


class TransactionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    amount: Decimal
    type: TransactionType
    comment: str
    created_at: datetime
