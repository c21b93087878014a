from __future__ import annotations

import asyncio
import json
from decimal import Decimal

import httpx
import pytest

from expense_sheets.models.expense import ExpenseRecord
from expense_sheets.models.outcome import Failure, Success
from expense_sheets.services.errors import (
    ApplicationError,
    ConfigurationError,
    NetworkError,
    TransportError,
)
from expense_sheets.services.sheets_client import (
    CONTENT_TYPE,
    DEFAULT_SUCCESS_MESSAGE,
    SheetsClient,
    serialize_record,
)

from tests.helpers.script_stub import SCRIPT_URL, ScriptStub


def _submit(stub: ScriptStub, record: ExpenseRecord, url: str | None = SCRIPT_URL):
    client = SheetsClient(transport=stub.transport)
    return asyncio.run(client.submit(record, url))


@pytest.mark.parametrize("url", ["", None, "   "])
def test_missing_endpoint_never_calls_network(record, url):
    stub = ScriptStub()
    outcome = _submit(stub, record, url)
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, ConfigurationError)
    assert stub.requests == []


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/macros/s/abc/exec",
        "http://script.google.com/macros/s/abc/exec",
        "https://script.google.com/a/macros/abc/exec",
    ],
)
def test_untrusted_endpoint_is_configuration_error(record, url):
    stub = ScriptStub()
    outcome = _submit(stub, record, url)
    assert isinstance(outcome.error, ConfigurationError)
    assert "Invalid or missing Google Sheets Web App URL" in outcome.message
    assert stub.requests == []


def test_posts_plain_text_json_with_every_field(record):
    stub = ScriptStub()
    outcome = _submit(stub, record)

    assert isinstance(outcome, Success)
    assert len(stub.requests) == 1
    sent = stub.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == SCRIPT_URL
    assert sent.headers["content-type"] == CONTENT_TYPE
    assert json.loads(sent.content) == {
        "id": record.id,
        "date": "2024-01-01",
        "category": "Food",
        "description": "Lunch",
        "amount": 12.5,
    }


@pytest.mark.parametrize(
    "body", [{"status": "success", "message": "ok"}, "<html>Internal error</html>", ""]
)
def test_non_2xx_is_transport_error_whatever_the_body(record, body):
    stub = ScriptStub(status_code=500, body=body)
    outcome = _submit(stub, record)
    assert isinstance(outcome.error, TransportError)
    assert outcome.error.status_code == 500
    assert "returned status 500" in outcome.message


def test_404_is_transport_error(record):
    outcome = _submit(ScriptStub(status_code=404, body="Not Found"), record)
    assert isinstance(outcome.error, TransportError)
    assert outcome.error.status_code == 404


def test_remote_error_message_is_passed_through_verbatim(record):
    stub = ScriptStub(body={"status": "error", "message": "X"})
    outcome = _submit(stub, record)
    assert isinstance(outcome.error, ApplicationError)
    assert outcome.message == "X"


def test_remote_error_without_message_still_reports_something(record):
    outcome = _submit(ScriptStub(body={"status": "error"}), record)
    assert isinstance(outcome.error, ApplicationError)
    assert outcome.message


def test_success_without_message_uses_default(record):
    outcome = _submit(ScriptStub(body={"status": "success"}), record)
    assert isinstance(outcome, Success)
    assert outcome.message == DEFAULT_SUCCESS_MESSAGE
    assert outcome.record_id == record.id


def test_success_message_from_script_is_used(record):
    stub = ScriptStub(body={"status": "success", "message": "Added to row 42"})
    outcome = _submit(stub, record)
    assert outcome.message == "Added to row 42"


@pytest.mark.parametrize("body", ["not json at all", "[1, 2, 3]", "\"just a string\""])
def test_unparseable_or_non_object_body_is_transport_error(record, body):
    stub = ScriptStub(handler=lambda request: httpx.Response(200, text=body))
    outcome = _submit(stub, record)
    assert isinstance(outcome.error, TransportError)
    assert outcome.error.status_code == 200


def test_connection_failure_is_network_error(record):
    stub = ScriptStub(error=httpx.ConnectError("Name or service not known"))
    outcome = _submit(stub, record)
    assert isinstance(outcome.error, NetworkError)
    assert "Name or service not known" not in outcome.message
    assert isinstance(outcome.error.__cause__, httpx.ConnectError)


def test_timeout_is_network_error(record):
    outcome = _submit(ScriptStub(error=httpx.ReadTimeout("timed out")), record)
    assert isinstance(outcome.error, NetworkError)


def test_follows_apps_script_redirect(record):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "script.google.com":
            return httpx.Response(
                302,
                headers={"Location": "https://script.googleusercontent.com/macros/echo?user_content_key=k"},
            )
        return httpx.Response(200, json={"status": "success", "message": "Saved"})

    stub = ScriptStub(handler=handler)
    outcome = _submit(stub, record)
    assert outcome.message == "Saved"
    assert [r.url.host for r in stub.requests] == [
        "script.google.com",
        "script.googleusercontent.com",
    ]


def test_redirect_loop_is_network_error(record):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": SCRIPT_URL})

    outcome = _submit(ScriptStub(handler=handler), record)
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, NetworkError)
    assert isinstance(outcome.error.__cause__, httpx.TooManyRedirects)


def test_undecodable_response_is_network_error(record):
    outcome = _submit(ScriptStub(error=httpx.DecodingError("bad gzip stream")), record)
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, NetworkError)
    assert "bad gzip stream" not in outcome.message


def test_save_expense_raises_typed_errors(record):
    client = SheetsClient(transport=ScriptStub(body={"status": "error", "message": "No access"}).transport)
    with pytest.raises(ApplicationError) as excinfo:
        asyncio.run(client.save_expense(record, SCRIPT_URL))
    assert str(excinfo.value) == "No access"


def test_record_round_trips_through_echoing_endpoint(record):
    stub = ScriptStub(echo=True)
    client = SheetsClient(transport=stub.transport)
    asyncio.run(client.submit(record, SCRIPT_URL))

    echoed = json.loads(stub.requests[0].content)
    recovered = ExpenseRecord.model_validate(echoed)
    assert recovered.date == "2024-01-01"
    assert recovered.category == "Food"
    assert recovered.description == "Lunch"
    assert recovered.amount == Decimal("12.5")
    assert recovered.id == record.id


def test_serialize_record_writes_amount_as_number(record):
    data = json.loads(serialize_record(record))
    assert isinstance(data["amount"], float)
    assert data["description"] == "Lunch"
