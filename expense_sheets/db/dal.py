"""Data Access Layer for the metadata key/value store.

The store is the durable, process-wide home of user configuration. Values are
plain strings; typed accessors live in :mod:`expense_sheets.services.app_settings`.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Dict, Optional

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # ------------------------------------------------------------------
    # Metadata
    def get_metadata(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key = ?", (key,))
            row = cur.fetchone()
            return row["value"] if row else None

    def set_metadata(self, key: str, value: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO metadata (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = ({UTC_NOW_SQL})
                """,
                (key, value),
            )
            conn.commit()

    def delete_metadata(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM metadata WHERE key = ?", (key,))
            conn.commit()

    def list_metadata(self) -> Dict[str, str]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT key, value FROM metadata ORDER BY key")
            return {r["key"]: r["value"] for r in cur.fetchall()}
