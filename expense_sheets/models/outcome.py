"""Terminal result of one submission attempt.

``SubmissionOutcome`` is either :class:`Success` or :class:`Failure`. A failure
keeps the exception that produced it so callers can branch on its type; the
``message`` is always the text shown to the user.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from expense_sheets.services.errors import SubmissionError


@dataclass(frozen=True)
class Success:
    message: str
    record_id: Optional[str] = None

    ok = True

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": "success", "message": self.message}
        if self.record_id:
            data["id"] = self.record_id
        return data


@dataclass(frozen=True)
class Failure:
    message: str
    error: SubmissionError

    ok = False

    @classmethod
    def from_error(cls, error: SubmissionError) -> "Failure":
        return cls(message=error.message, error=error)

    def as_dict(self) -> Dict[str, Any]:
        return {"status": "error", "message": self.message, "error": self.error.kind}


SubmissionOutcome = Union[Success, Failure]
