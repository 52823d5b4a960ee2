"""SQLite-backed implementation of ``IKeyStoreRepo``.

Rows live in the ``api_keys`` table and hold ``iv_hex:ciphertext_hex`` text
produced by the credential cipher. All write operations defer transaction
commit/rollback to the surrounding Unit of Work.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from ..interfaces.repos import IKeyStoreRepo, StoredCredential
from .helpers import _credential_from_row, _utcnow_iso


class KeyStoreRepoSqlite(IKeyStoreRepo):
    """SQLite-backed repository for encrypted provider credentials."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, provider: str) -> Optional[StoredCredential]:
        """Return the stored credential for ``provider`` (case-insensitive)."""
        cur = self.conn.execute(
            "SELECT provider, encrypted_key, created_at, updated_at FROM api_keys WHERE provider = ?",
            (provider.lower(),),
        )
        row = cur.fetchone()
        return _credential_from_row(row) if row else None

    def upsert(self, provider: str, encrypted_key: str) -> None:
        """Insert or overwrite the credential, preserving ``created_at``.

        Side Effects
        ------------
        Writes one ``api_keys`` row. Commit is deferred to the Unit of Work.
        """
        now = _utcnow_iso()
        self.conn.execute(
            "INSERT INTO api_keys(provider, encrypted_key, created_at, updated_at) VALUES(?, ?, ?, ?) "
            "ON CONFLICT(provider) DO UPDATE SET encrypted_key=excluded.encrypted_key, updated_at=excluded.updated_at",
            (provider.lower(), encrypted_key, now, now),
        )

    def delete(self, provider: str) -> bool:
        """Delete the credential for ``provider``; True when a row existed."""
        cur = self.conn.execute("DELETE FROM api_keys WHERE provider = ?", (provider.lower(),))
        return cur.rowcount > 0

    def list_all(self) -> List[StoredCredential]:
        cur = self.conn.execute(
            "SELECT provider, encrypted_key, created_at, updated_at FROM api_keys ORDER BY provider"
        )
        return [_credential_from_row(r) for r in cur.fetchall()]
