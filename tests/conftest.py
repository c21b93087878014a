"""Pytest fixtures for test isolation.

Every test gets its own SQLite file under ``tmp_path`` so the stored endpoint
URL never leaks between tests, and the Apps Script endpoint is replaced by
``ScriptStub`` served through ``httpx.MockTransport``.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from expense_sheets.core.config import Settings
from expense_sheets.db.dal import Database
from expense_sheets.db.migrate import apply_migrations
from expense_sheets.models.expense import ExpenseRecord
from tests.helpers.script_stub import FakeClock, ScriptStub


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    s = Settings(data_dir=tmp_path, db_path=tmp_path / "test.sqlite3")
    s.init_post_load()
    return s


@pytest.fixture
def db(settings: Settings) -> Database:
    apply_migrations(settings.db_path)  # type: ignore[arg-type]
    return Database(settings.db_path)  # type: ignore[arg-type]


@pytest.fixture
def script_stub() -> ScriptStub:
    return ScriptStub()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def record() -> ExpenseRecord:
    return ExpenseRecord(
        id="2024-01-01T12:00:00.000+00:00abc1234",
        date="2024-01-01",
        category="Food",
        description="Lunch",
        amount=Decimal("12.5"),
    )
