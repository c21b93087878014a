"""Application settings backed by the metadata table.

Metadata keys:
  - googleSheetUrl: str, the Apps Script web app URL (empty when unset)

The stored value is the single source of truth for the endpoint: it is read
on every access and written on every change.
"""

from __future__ import annotations
from typing import Optional, Protocol

from expense_sheets.db.migrate import ENDPOINT_KEY


class _MetadataStore(Protocol):  # minimal protocol to satisfy type checking
    def get_metadata(self, key: str) -> Optional[str]: ...  # noqa: D401

    def set_metadata(self, key: str, value: str) -> None: ...  # noqa: D401


def get_endpoint_url(db: _MetadataStore) -> str:
    return (db.get_metadata(ENDPOINT_KEY) or "").strip()


def set_endpoint_url(db: _MetadataStore, url: Optional[str]) -> str:
    value = (url or "").strip()
    db.set_metadata(ENDPOINT_KEY, value)
    return value


__all__ = ["get_endpoint_url", "set_endpoint_url"]
