"""Smoke script for the submit -> notify cycle without a real Apps Script.

Sequence:
 1. Build an app on a temp DB with an echoing stub endpoint.
 2. Submit before configuring the URL (expect configuration error).
 3. Save the URL, submit again (expect success and the echoed row).
 4. Print the notification the page would show.
"""

import json
import sys
import os
import tempfile
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from expense_sheets.core.config import Settings
from expense_sheets.main import create_app

SCRIPT_URL = "https://script.google.com/macros/s/smoke-test/exec"


def _echo(request: httpx.Request) -> httpx.Response:
    row = json.loads(request.content)
    return httpx.Response(200, json={"status": "success", "message": f"Row appended for {row['id']}"})


def run():
    with tempfile.TemporaryDirectory() as d:
        settings = Settings(data_dir=Path(d), db_path=Path(d) / "smoke.sqlite3")
        client = TestClient(create_app(settings_override=settings, transport=httpx.MockTransport(_echo)))
        payload = {"date": "2024-01-01", "category": "Food", "description": "Lunch", "amount": 12.5}

        unconfigured = client.post("/api/expenses", json=payload)
        client.put("/api/settings/endpoint", json={"url": SCRIPT_URL})
        configured = client.post("/api/expenses", json=payload)

        print(
            json.dumps(
                {
                    "unconfigured": {"status": unconfigured.status_code, "body": unconfigured.json()},
                    "configured": {"status": configured.status_code, "body": configured.json()},
                    "notification": client.get("/api/notification").json(),
                },
                indent=2,
            )
        )


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
