from __future__ import annotations
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from .constants import CATEGORIES


class ExpenseDraft(BaseModel):
    """A validated expense as produced by the form, before it has an id."""

    date: str
    category: str
    description: str = ""
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False)

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: str) -> str:
        if v not in CATEGORIES:
            raise ValueError("unsupported category")
        return v

    @field_serializer("amount", when_used="json")
    def amount_as_number(self, v: Decimal) -> float:
        # Apps Script appends numbers, not strings, to the sheet row
        return float(v)


class ExpenseRecord(ExpenseDraft):
    """Expense sent to the sheet; ``id`` is assigned once, at submission time."""

    id: str = Field(..., min_length=1)

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, record_id: str) -> "ExpenseRecord":
        return cls(
            id=record_id,
            date=draft.date,
            category=draft.category,
            description=draft.description,
            amount=draft.amount,
        )


class ExpenseFormIn(BaseModel):
    """Raw form fields as posted to the JSON API; validated by the form service."""

    date: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Union[str, float]] = None
