"""Expense form validation and form state.

The form checks amount first, then category; only the first failure is
reported, matching the single inline error slot of the page. Date and
description are taken as typed. The form never assigns an id; that is the
submitter's job once the configuration check has passed.
"""

from __future__ import annotations
import math
from dataclasses import asdict, dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from expense_sheets.models.constants import CATEGORIES, DEFAULT_CATEGORY
from expense_sheets.models.expense import ExpenseDraft
from expense_sheets.models.outcome import SubmissionOutcome
from expense_sheets.services.errors import ExpenseValidationError

AMOUNT_ERROR = "Please enter a valid, positive amount."
CATEGORY_ERROR = "Please select a category."


def today_iso() -> str:
    return date.today().isoformat()


def parse_amount(raw: Any) -> Decimal:
    if isinstance(raw, bool) or raw is None:
        raise ExpenseValidationError(AMOUNT_ERROR)
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ExpenseValidationError(AMOUNT_ERROR) from None
    if not value.is_finite() or value <= 0:
        raise ExpenseValidationError(AMOUNT_ERROR)
    # the amount goes out as a JSON number; it must survive the float cast
    as_float = float(value)
    if as_float <= 0 or not math.isfinite(as_float):
        raise ExpenseValidationError(AMOUNT_ERROR)
    return value


def validate_expense_draft(fields: Mapping[str, Any]) -> ExpenseDraft:
    """Validate raw form fields and return an id-less draft.

    Raises ExpenseValidationError with the message to show next to the form.
    """
    amount = parse_amount(fields.get("amount"))

    category = str(fields.get("category") or "").strip()
    if not category or category not in CATEGORIES:
        raise ExpenseValidationError(CATEGORY_ERROR)

    raw_date = fields.get("date")
    expense_date = str(raw_date).strip() if raw_date else ""
    description = fields.get("description")

    return ExpenseDraft(
        date=expense_date or today_iso(),
        category=category,
        description=str(description) if description is not None else "",
        amount=amount,
    )


@dataclass
class ExpenseFormState:
    """What the form shows: the field values as typed plus the inline error."""

    date: str
    category: str
    description: str = ""
    amount: str = ""
    error: Optional[str] = None

    @classmethod
    def defaults(cls) -> "ExpenseFormState":
        return cls(date=today_iso(), category=DEFAULT_CATEGORY)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "ExpenseFormState":
        def _s(key: str) -> str:
            val = fields.get(key)
            return "" if val is None else str(val)

        return cls(
            date=_s("date") or today_iso(),
            category=_s("category"),
            description=_s("description"),
            amount=_s("amount"),
        )

    def with_error(self, message: str) -> "ExpenseFormState":
        return replace(self, error=message)

    def after_outcome(self, outcome: SubmissionOutcome) -> "ExpenseFormState":
        # Successful saves start a fresh entry; failures keep the input for a retry
        if outcome.ok:
            return ExpenseFormState.defaults()
        return replace(self, error=None)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "AMOUNT_ERROR",
    "CATEGORY_ERROR",
    "ExpenseFormState",
    "parse_amount",
    "validate_expense_draft",
]
