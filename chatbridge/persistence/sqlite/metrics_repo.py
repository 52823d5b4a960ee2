"""SQLite-backed implementation of ``IMetricsRepo``.

Persists dispatch metrics and exposes simple aggregations. Timestamps are
stored as ISO8601 strings (UTC assumed for naive datetimes) to avoid sqlite's
deprecated datetime adapter and ensure explicit semantics.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, Iterable, Optional

from ..interfaces.repos import IMetricsRepo, MetricEntry
from .helpers import _metric_from_row, _to_iso


class MetricsRepoSqlite(IMetricsRepo):
    """SQLite-backed repository for metrics capture and aggregation.

    No implicit commits; Unit of Work governs transactions.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def add_metric(self, entry: MetricEntry) -> None:
        """Persist a metric entry with normalized timestamp semantics."""
        self.conn.execute(
            """
            INSERT INTO metrics(provider, model, latency_ms, tokens_prompt, tokens_completion, success, error_code, created_at)
            VALUES(?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.provider,
                entry.model,
                entry.latency_ms,
                entry.tokens_prompt,
                entry.tokens_completion,
                1 if entry.success else 0,
                entry.error_code,
                _to_iso(entry.created_at),
            ),
        )

    def recent_errors(self, limit: int = 50) -> Iterable[MetricEntry]:
        """Yield most recent error metric entries up to a limit."""
        cur = self.conn.execute(
            """
            SELECT provider, model, latency_ms, tokens_prompt, tokens_completion, success, error_code, created_at
            FROM metrics WHERE success = 0 ORDER BY created_at DESC, id DESC LIMIT ?
            """,
            (limit,),
        )
        for r in cur.fetchall():
            yield _metric_from_row(r)

    def summary(self) -> Dict[str, Any]:
        """Compute aggregate metrics summary.

        Average latency may be null when no rows exist for a group.
        """
        cur = self.conn.execute(
            "SELECT COUNT(*), COALESCE(SUM(success), 0), COALESCE(SUM(tokens_prompt), 0), "
            "COALESCE(SUM(tokens_completion), 0) FROM metrics"
        )
        total, success, prompt, completion = cur.fetchone()
        total = int(total or 0)
        success = int(success or 0)

        cur = self.conn.execute(
            "SELECT provider, COUNT(*) as c, AVG(latency_ms) as avg_ms "
            "FROM metrics GROUP BY provider ORDER BY c DESC, provider ASC"
        )
        by_provider = [
            {
                "provider": r[0],
                "count": int(r[1]) if r[1] is not None else 0,
                "avg_ms": float(r[2]) if r[2] is not None else None,
            }
            for r in cur.fetchall()
        ]

        cur = self.conn.execute(
            "SELECT model, COUNT(*) as c, AVG(latency_ms) as avg_ms "
            "FROM metrics GROUP BY model ORDER BY c DESC, model ASC LIMIT 10"
        )
        by_model = [
            {
                "model": r[0],
                "count": int(r[1]) if r[1] is not None else 0,
                "avg_ms": float(r[2]) if r[2] is not None else None,
            }
            for r in cur.fetchall()
        ]
        return {
            "total": total,
            "success": success,
            "failure": total - success,
            "tokens": {"prompt": int(prompt or 0), "completion": int(completion or 0)},
            "by_provider": by_provider,
            "by_model": by_model,
        }
