"""SQLite-backed implementation of ``ISettingsRepo``.

Stores generic key/value settings as text rows with an ``updated_at``
timestamp. All write operations defer transaction commit to the Unit of Work.
"""

from __future__ import annotations

import sqlite3
from typing import Dict, Optional

from ..interfaces.repos import ISettingsRepo
from .helpers import _utcnow_iso


class SettingsRepoSqlite(ISettingsRepo):
    """SQLite-backed repository for key/value settings."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, key: str) -> Optional[str]:
        """Return the stored value for ``key`` or ``None`` when absent."""
        cur = self.conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
        row = cur.fetchone()
        return row[0] if row else None

    def get_all(self) -> Dict[str, str]:
        """Return every setting as a ``{key: value}`` mapping ordered by key."""
        cur = self.conn.execute("SELECT key, value FROM settings ORDER BY key")
        return {r[0]: r[1] for r in cur.fetchall()}

    def set(self, key: str, value: str) -> None:
        """Insert or replace a setting (no implicit commit)."""
        self.conn.execute(
            "INSERT INTO settings(key, value, updated_at) VALUES(?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
            (key, value, _utcnow_iso()),
        )

    def delete(self, key: str) -> bool:
        cur = self.conn.execute("DELETE FROM settings WHERE key = ?", (key,))
        return cur.rowcount > 0
