"""Pydantic domain models for the expense form."""

from .constants import CATEGORIES, DEFAULT_CATEGORY  # re-export
from .endpoint import EndpointConfig, EndpointConfigOut
from .expense import ExpenseDraft, ExpenseFormIn, ExpenseRecord
from .notification import Notification, NotificationOut
from .outcome import Failure, SubmissionOutcome, Success

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "EndpointConfig",
    "EndpointConfigOut",
    "ExpenseDraft",
    "ExpenseFormIn",
    "ExpenseRecord",
    "Notification",
    "NotificationOut",
    "Success",
    "Failure",
    "SubmissionOutcome",
]
