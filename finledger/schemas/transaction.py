"""Transaction Schemas: ledger entry input, patch, and response shapes.

Invariants:
    - amount is strictly positive with at most 2 decimal places
    - type is never accepted from the caller (unknown fields are ignored)
    - TransactionUpdate: amount/category/date may be omitted but not set to null;
      reason may be set to null or "" to clear it

Design Decisions:
    - Empty reason normalized to None so "cleared" has a single stored representation
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finledger.core.domain_types import TransactionCategory, TransactionType
from finledger.schemas.pagination import ResultsMetadata


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class TransactionCreate(BaseModel):
    """New ledger entry. date defaults to now when omitted."""
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    category: TransactionCategory
    reason: str | None = Field(None, max_length=1000)
    date: datetime | None = None

    @field_validator("reason")
    @classmethod
    def normalize_reason(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class TransactionUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""
    amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    category: TransactionCategory | None = None
    reason: str | None = Field(None, max_length=1000)
    date: datetime | None = None

    @field_validator("amount", "category", "date", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null; omit the field to keep the current value")
        return v

    @field_validator("reason")
    @classmethod
    def normalize_reason(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    def changes(self) -> dict:
        """Fields the caller actually sent, with their validated values."""
        return self.model_dump(exclude_unset=True)


class TransactionResponse(BaseModel):
    """Ledger entry as returned to its owner."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    amount: Decimal
    category: TransactionCategory
    type: TransactionType
    reason: str | None = None
    date: datetime
    created_at: datetime


class TransactionList(BaseModel):
    data: list[TransactionResponse]
    meta: ResultsMetadata


class AccountBalance(BaseModel):
    """Signed sum of credits minus debits."""
    balance: Decimal
