"""SQLite-backed implementation of ``IChatLogRepo``.

Persists and retrieves chat exchanges grouped by session, with ISO8601
timestamps (UTC assumed for naive values). All writes defer transaction commit
to the Unit of Work.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, List

from ..interfaces.repos import ChatLog, IChatLogRepo
from .helpers import _chatlog_from_row, _to_iso

_COLUMNS = "id, session_id, provider, model, prompt, content, content_type, metadata_json, created_at"


class ChatLogRepoSqlite(IChatLogRepo):
    """SQLite-backed chat transcript repository."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def add(self, log: ChatLog) -> int:
        """Insert a chat log and return its primary key.

        Stores ``created_at`` as an ISO8601 string (UTC-assumed if naive) to
        eliminate reliance on sqlite's deprecated datetime adapter.
        """
        cur = self.conn.execute(
            """
            INSERT INTO chat_logs(session_id, provider, model, prompt, content, content_type, metadata_json, created_at)
            VALUES(?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                log.session_id,
                log.provider,
                log.model,
                log.prompt,
                log.content,
                log.content_type,
                json.dumps(log.metadata, ensure_ascii=False, default=str),
                _to_iso(log.created_at),
            ),
        )
        return int(cur.lastrowid)

    def list_session(self, session_id: str) -> List[ChatLog]:
        """Return the session's exchanges oldest first."""
        cur = self.conn.execute(
            f"SELECT {_COLUMNS} FROM chat_logs WHERE session_id = ? ORDER BY created_at ASC, id ASC",  # nosec B608 - constant column list
            (session_id,),
        )
        return [_chatlog_from_row(r) for r in cur.fetchall()]

    def list_sessions(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Summarize sessions: message count, first/last activity, last model."""
        cur = self.conn.execute(
            """
            SELECT session_id, COUNT(*) AS message_count, MIN(created_at) AS started_at,
                   MAX(created_at) AS last_activity,
                   (SELECT model FROM chat_logs c2 WHERE c2.session_id = c1.session_id
                    ORDER BY created_at DESC, id DESC LIMIT 1) AS model
            FROM chat_logs c1
            GROUP BY session_id
            ORDER BY last_activity DESC
            LIMIT ?
            """,
            (limit,),
        )
        return [
            {
                "session_id": r[0],
                "message_count": int(r[1]),
                "started_at": r[2],
                "last_activity": r[3],
                "model": r[4],
            }
            for r in cur.fetchall()
        ]

    def delete_session(self, session_id: str) -> int:
        cur = self.conn.execute("DELETE FROM chat_logs WHERE session_id = ?", (session_id,))
        return int(cur.rowcount)

    def count_by_model(self) -> Dict[str, int]:
        cur = self.conn.execute(
            "SELECT model, COUNT(*) AS c FROM chat_logs GROUP BY model ORDER BY c DESC, model ASC"
        )
        return {r[0]: int(r[1]) for r in cur.fetchall()}
