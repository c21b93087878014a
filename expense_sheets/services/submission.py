"""Submission shell: owns the endpoint config, the in-flight flag and the
notification, and runs one submit-then-notify cycle per form post.

Lifecycle of a submission:
  idle -> validate -> check config -> in flight -> idle

Validation failures raise and leave the notification untouched (they are shown
inline). A missing endpoint shows an error notification, opens the settings
surface and returns a failure without touching the network. Otherwise the
record gets its id, the client is called once, and the outcome becomes the
one visible notification.
"""

from __future__ import annotations

import logging
import random
import string
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from expense_sheets.db.dal import Database
from expense_sheets.models.expense import ExpenseRecord
from expense_sheets.models.outcome import Failure, SubmissionOutcome
from expense_sheets.services import app_settings
from expense_sheets.services.errors import ConfigurationError, SubmissionInProgressError
from expense_sheets.services.expense_form import validate_expense_draft
from expense_sheets.services.notifications import NotificationCenter
from expense_sheets.services.sheets_client import SheetsClient

logger = logging.getLogger("expense_sheets.submission")

MISSING_ENDPOINT_MESSAGE = (
    "Please set your Google Sheets Web App URL in the Settings first."
)
IN_PROGRESS_MESSAGE = "An expense is already being saved. Please wait."

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_record_id() -> str:
    """UTC timestamp plus seven random base-36 characters."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"{stamp}{suffix}"


class ExpenseSubmitter:
    def __init__(
        self,
        db: Database,
        client: SheetsClient,
        notifications: Optional[NotificationCenter] = None,
    ):
        self.db = db
        self.client = client
        self.notifications = notifications or NotificationCenter()
        self.is_loading = False
        self.settings_open = False

    # ------------------------------------------------------------------
    # Endpoint configuration
    @property
    def endpoint_url(self) -> str:
        return app_settings.get_endpoint_url(self.db)

    def set_endpoint_url(self, url: Optional[str]) -> str:
        value = app_settings.set_endpoint_url(self.db, url)
        logger.info("endpoint url %s", "updated" if value else "cleared")
        return value

    def open_settings(self) -> None:
        self.settings_open = True

    def close_settings(self) -> None:
        self.settings_open = False

    # ------------------------------------------------------------------
    # Submission
    async def submit(self, fields: Mapping[str, Any]) -> SubmissionOutcome:
        if self.is_loading:
            raise SubmissionInProgressError(IN_PROGRESS_MESSAGE)

        draft = validate_expense_draft(fields)

        endpoint = self.endpoint_url
        if not endpoint:
            logger.info("submission blocked: no endpoint configured")
            self.notifications.error(MISSING_ENDPOINT_MESSAGE)
            self.open_settings()
            return Failure.from_error(ConfigurationError(MISSING_ENDPOINT_MESSAGE))

        # set before the first await so a concurrent submit sees it
        self.is_loading = True
        self.notifications.dismiss()
        try:
            record = ExpenseRecord.from_draft(draft, new_record_id())
            outcome = await self.client.submit(record, endpoint)
        finally:
            self.is_loading = False

        if outcome.ok:
            self.notifications.success(outcome.message)
        else:
            self.notifications.error(outcome.message)
        return outcome


__all__ = [
    "ExpenseSubmitter",
    "new_record_id",
    "MISSING_ENDPOINT_MESSAGE",
    "IN_PROGRESS_MESSAGE",
]
