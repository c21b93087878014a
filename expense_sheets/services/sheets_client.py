"""Client for the Google Apps Script web app that appends expenses to a sheet.

One POST per submission, no retries, no timeout override. The request body is
the JSON encoded record sent as ``text/plain`` so that browsers treat it as a
"simple request" and skip the CORS pre-flight, which Apps Script does not
answer; the script reads the payload from ``e.postData.contents``.

Expected response (any 2xx): ``{"status": "success"|"error", "message": str}``.
Every failure mode is normalized into :mod:`expense_sheets.services.errors`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from expense_sheets.models.expense import ExpenseRecord
from expense_sheets.models.outcome import Failure, SubmissionOutcome, Success
from expense_sheets.services.errors import (
    ApplicationError,
    ConfigurationError,
    NetworkError,
    SubmissionError,
    TransportError,
)

logger = logging.getLogger("expense_sheets.sheets_client")

DEFAULT_URL_PREFIX = "https://script.google.com/macros/s/"
CONTENT_TYPE = "text/plain;charset=utf-8"

DEFAULT_SUCCESS_MESSAGE = "Expense saved successfully!"
INVALID_URL_MESSAGE = (
    "Invalid or missing Google Sheets Web App URL. Please check the URL in Settings."
)
NETWORK_ERROR_MESSAGE = (
    "Could not reach the Google Sheets script. "
    "Please check your internet connection and try again."
)
REMOTE_ERROR_FALLBACK = "The Google Sheets script reported an error without details."


def _status_error_message(status_code: int) -> str:
    return (
        f"Network error: The script endpoint returned status {status_code}. "
        "Please check the URL and script deployment."
    )


def _invalid_body_message(status_code: int) -> str:
    return (
        f"The script endpoint returned an unreadable response (status {status_code}). "
        "Please check that the script returns JSON."
    )


def serialize_record(record: ExpenseRecord) -> str:
    """Encode every record field, ``id`` included, as a JSON object."""
    return json.dumps(record.model_dump(mode="json"), ensure_ascii=False)


class SheetsClient:
    """Posts expense records to an Apps Script endpoint.

    transport: optional httpx transport; tests pass ``httpx.MockTransport``.
    url_prefix: the only URL prefix accepted as a trusted endpoint.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        url_prefix: str = DEFAULT_URL_PREFIX,
    ):
        self._transport = transport
        self.url_prefix = url_prefix

    def check_endpoint(self, endpoint_url: Optional[str]) -> str:
        url = (endpoint_url or "").strip()
        if not url or not url.startswith(self.url_prefix):
            raise ConfigurationError(INVALID_URL_MESSAGE)
        return url

    async def save_expense(self, record: ExpenseRecord, endpoint_url: Optional[str]) -> str:
        """Send ``record`` and return the success message, raising on any failure."""
        url = self.check_endpoint(endpoint_url)
        body = serialize_record(record)

        try:
            async with httpx.AsyncClient(
                transport=self._transport, follow_redirects=True
            ) as http:
                response = await http.post(
                    url,
                    content=body.encode("utf-8"),
                    headers={"Content-Type": CONTENT_TYPE},
                )
        except httpx.RequestError as e:
            raise NetworkError(NETWORK_ERROR_MESSAGE) from e

        if not response.is_success:
            raise TransportError(
                _status_error_message(response.status_code),
                status_code=response.status_code,
            )

        result = self._parse_body(response)
        message = result.get("message")
        if result.get("status") == "error":
            if isinstance(message, str) and message:
                raise ApplicationError(message)
            raise ApplicationError(REMOTE_ERROR_FALLBACK)

        if isinstance(message, str) and message:
            return message
        return DEFAULT_SUCCESS_MESSAGE

    async def submit(
        self, record: ExpenseRecord, endpoint_url: Optional[str]
    ) -> SubmissionOutcome:
        """Single attempt; every failure comes back as a :class:`Failure`."""
        try:
            message = await self.save_expense(record, endpoint_url)
        except SubmissionError as e:
            logger.warning(
                "failed to save expense %s: %s",
                record.id,
                e.message,
                extra={"error_kind": e.kind},
            )
            return Failure.from_error(e)
        logger.info("expense %s saved", record.id)
        return Success(message=message, record_id=record.id)

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                _invalid_body_message(response.status_code),
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                _invalid_body_message(response.status_code),
                status_code=response.status_code,
            )
        return data


__all__ = [
    "SheetsClient",
    "serialize_record",
    "DEFAULT_SUCCESS_MESSAGE",
    "DEFAULT_URL_PREFIX",
    "CONTENT_TYPE",
]
