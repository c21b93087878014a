"""Database migration utilities.

Schema evolution is keyed by an integer `schema_version` stored in the
metadata table. Version 1 is the bare metadata table; version 2 moves the
endpoint URL from the legacy `sheets_url` key to `googleSheetUrl`, the key the
browser build of the form used for its local storage.
"""

from __future__ import annotations
from pathlib import Path
import sqlite3
from typing import Optional

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"
LEGACY_ENDPOINT_KEY = "sheets_url"
ENDPOINT_KEY = "googleSheetUrl"


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Rename the legacy endpoint key unless the new key is already set."""
    cur = conn.cursor()
    try:
        cur.execute("SELECT value FROM metadata WHERE key=?", (LEGACY_ENDPOINT_KEY,))
        row = cur.fetchone()
        if row:
            cur.execute(
                "INSERT OR IGNORE INTO metadata (key, value) VALUES (?, ?)",
                (ENDPOINT_KEY, row[0]),
            )
            cur.execute("DELETE FROM metadata WHERE key=?", (LEGACY_ENDPOINT_KEY,))
        conn.commit()
    except Exception:
        conn.rollback()
        raise
