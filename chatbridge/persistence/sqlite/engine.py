"""SQLite engine helpers for the persistence layer.

Purpose
-------
Provide centralized helpers for opening SQLite connections and ensuring the
schema exists for the credential store, settings, chat history and metrics.

External dependencies
---------------------
- Standard library only (``sqlite3``). No side effects at import time.

Timeout and reliability strategy
--------------------------------
- Applies a standard ``busy_timeout`` (milliseconds) from
  ``chatbridge.config.defaults`` to mitigate lock contention.
- Enables WAL journaling and NORMAL synchronous mode for file databases.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from ...config import get_config
from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)

MEMORY_DB = ":memory:"


def _ensure_dir(p: Path) -> None:
    """Create directory ``p`` (and parents) if missing."""
    p.mkdir(parents=True, exist_ok=True)


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Return a concrete database file path.

    Parameters
    ----------
    db_path:
        Optional string path. When ``None``, the configured ``database_path``
        (``CHATBRIDGE_DB_PATH`` or the config file) is used. Values are passed
        through ``Path.expanduser()`` to allow ``~`` home shortcuts.
    """
    return Path(db_path or get_config()["database_path"]).expanduser()


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection and apply PRAGMA settings.

    Behavior
    --------
    - ``":memory:"`` opens a private in-memory database (tests, dry runs).
    - Otherwise ensures the parent directory exists prior to opening the file.
    - Avoids ``detect_types`` so that timestamp columns are returned as raw
      strings; repository code handles ISO8601 parsing explicitly.
    """
    if db_path == MEMORY_DB:
        conn = sqlite3.connect(MEMORY_DB)
    else:
        path = get_db_path(db_path)
        _ensure_dir(path.parent)
        conn = sqlite3.connect(str(path))
        conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
        conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")  # ms
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create required tables if they do not exist, then commit.

    Schema overview
    ---------------
    - ``api_keys``: provider -> ``iv_hex:ciphertext_hex`` credential
    - ``settings``: generic key/value settings
    - ``chat_logs``: persisted exchanges grouped by session
    - ``metrics``: per-dispatch metrics with optional token counts
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS api_keys (
            provider TEXT PRIMARY KEY,
            encrypted_key TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );
        """
    )

    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );
        """
    )

    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS chat_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            session_id TEXT NOT NULL,
            provider TEXT NOT NULL,
            model TEXT NOT NULL,
            prompt TEXT NOT NULL,
            content TEXT NOT NULL,
            content_type TEXT NOT NULL DEFAULT 'text',
            metadata_json TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL
        );
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_chat_logs_session ON chat_logs(session_id, created_at);")

    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS metrics (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            provider TEXT NOT NULL,
            model TEXT NOT NULL,
            latency_ms INTEGER NOT NULL,
            tokens_prompt INTEGER,
            tokens_completion INTEGER,
            success INTEGER NOT NULL,
            error_code TEXT,
            created_at TIMESTAMP NOT NULL
        );
        """
    )

    conn.commit()
