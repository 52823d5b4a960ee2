"""Shared helper functions for SQLite repository adapters.

Centralizes timestamp handling and row-to-DTO conversion used by the SQLite
repositories. All timestamps are normalized to timezone-aware UTC
``datetime`` objects on read.
"""

from __future__ import annotations

from contextlib import suppress
import json
from datetime import datetime, timezone
from typing import Any

from ..interfaces.repos import ChatLog, MetricEntry, StoredCredential


def _utcnow_iso() -> str:
    """Return the current UTC time as an ISO8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _to_iso(value: Any) -> str:
    """Serialize a timestamp for storage (naive datetimes are treated as UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


def _parse_created_at(raw: Any) -> datetime:
    """Parse a stored timestamp into an aware UTC ``datetime``.

    Strategy:
    - If ``raw`` is already a ``datetime``: ensure tz-aware (assume UTC if naive).
    - If ``raw`` is a string: attempt ISO8601 parse, coercing naive to UTC.
    - On malformed input: return epoch UTC.
    """
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)
    if isinstance(raw, str):
        with suppress(ValueError, TypeError):
            dt = datetime.fromisoformat(raw)
            return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(0, tz=timezone.utc)


def _credential_from_row(r: Any) -> StoredCredential:
    return StoredCredential(
        provider=r[0],
        encrypted_key=r[1],
        created_at=_parse_created_at(r[2]),
        updated_at=_parse_created_at(r[3]),
    )


def _metric_from_row(r: Any) -> MetricEntry:
    """Convert a metrics row into a ``MetricEntry`` DTO.

    Parameters
    ----------
    r:
        Sequence matching the metrics SELECT column order.
    """
    return MetricEntry(
        provider=r[0],
        model=r[1],
        latency_ms=int(r[2]),
        tokens_prompt=int(r[3]) if r[3] is not None else None,
        tokens_completion=int(r[4]) if r[4] is not None else None,
        success=bool(r[5]),
        error_code=r[6],
        created_at=_parse_created_at(r[7]),
    )


def _chatlog_from_row(r: Any) -> ChatLog:
    """Convert a chat_logs row into a ``ChatLog`` DTO.

    Parameters
    ----------
    r:
        Sequence matching the chat_logs SELECT column order.
    """
    return ChatLog(
        id=int(r[0]),
        session_id=r[1],
        provider=r[2],
        model=r[3],
        prompt=r[4],
        content=r[5],
        content_type=r[6],
        metadata=json.loads(r[7]) if r[7] else {},
        created_at=_parse_created_at(r[8]),
    )
