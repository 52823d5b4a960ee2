"""
Contract tests for SQLite repository adapters and UnitOfWork behavior.

These tests use an in-memory SQLite database and validate:
- Commit vs rollback through the Unit of Work
- Keystore provider normalization and deletion
- Metrics summary shape and recent errors
- Chat logs session grouping, ordering and deletion
- Schema creation on a file database
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from chatbridge.persistence.interfaces.repos import ChatLog, MetricEntry
from chatbridge.persistence.sqlite import get_uow
from chatbridge.persistence.sqlite.engine import init_schema
from chatbridge.persistence.sqlite.helpers import _parse_created_at

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _metric(provider="openai", model="gpt-4", latency=100, success=True, code=None, prompt=None, completion=None, at=T0):
    return MetricEntry(
        provider=provider,
        model=model,
        latency_ms=latency,
        tokens_prompt=prompt,
        tokens_completion=completion,
        success=success,
        error_code=code,
        created_at=at,
    )


def _chat(session="s1", model="gpt-4", prompt="hi", content="hello", at=T0, ctype="text"):
    return ChatLog(
        id=None,
        session_id=session,
        provider="openai",
        model=model,
        prompt=prompt,
        content=content,
        content_type=ctype,
        metadata={"usage": {"total_tokens": 3}},
        created_at=at,
    )


def test_settings_commit_and_rollback(uow):
    with uow:
        uow.settings.set("theme", "dark")
    with pytest.raises(RuntimeError):
        with uow:
            uow.settings.set("theme", "light")
            raise RuntimeError("abort")
    with uow:
        assert uow.settings.get("theme") == "dark"
        assert uow.settings.get_all() == {"theme": "dark"}
        assert uow.settings.delete("theme") is True
        assert uow.settings.delete("theme") is False


def test_keystore_normalizes_provider(uow):
    with uow:
        uow.keys.upsert("OpenAI", "00:11")
    with uow:
        row = uow.keys.get("openai")
        assert row is not None and row.provider == "openai"
        assert row.created_at.tzinfo is not None
        assert [r.provider for r in uow.keys.list_all()] == ["openai"]
        assert uow.keys.delete("OPENAI") is True
        assert uow.keys.get("openai") is None


def test_metrics_summary_and_aggregates(uow):
    with uow:
        uow.metrics.add_metric(_metric(latency=100, prompt=10, completion=5))
        uow.metrics.add_metric(_metric(latency=300, prompt=20, completion=7))
        uow.metrics.add_metric(_metric(model="gpt-3.5-turbo", latency=50, success=False, code="auth", at=T0 + timedelta(minutes=1)))
        uow.metrics.add_metric(_metric(provider="anthropic", model="claude-3-opus", latency=80))

    with uow:
        errors = list(uow.metrics.recent_errors())
        summary = uow.metrics.summary()

    assert [(e.model, e.error_code, e.success) for e in errors] == [("gpt-3.5-turbo", "auth", False)]
    assert summary["total"] == 4
    assert summary["success"] == 3
    assert summary["failure"] == 1
    assert summary["tokens"] == {"prompt": 30, "completion": 12}
    assert summary["by_provider"][0] == {"provider": "openai", "count": 3, "avg_ms": 150.0}
    assert summary["by_model"][0] == {"model": "gpt-4", "count": 2, "avg_ms": 200.0}


def test_empty_metrics_summary(uow):
    with uow:
        summary = uow.metrics.summary()
    assert summary == {
        "total": 0,
        "success": 0,
        "failure": 0,
        "tokens": {"prompt": 0, "completion": 0},
        "by_provider": [],
        "by_model": [],
    }


def test_chat_logs_sessions(uow):
    with uow:
        uow.chats.add(_chat(prompt="one", at=T0))
        uow.chats.add(_chat(prompt="two", at=T0 + timedelta(seconds=5)))
        uow.chats.add(_chat(session="s2", model="dall-e-3", ctype="image", content="https://img", at=T0 + timedelta(seconds=9)))

    with uow:
        history = uow.chats.list_session("s1")
        assert [c.prompt for c in history] == ["one", "two"]
        assert history[0].metadata == {"usage": {"total_tokens": 3}}
        sessions = uow.chats.list_sessions()
        assert [s["session_id"] for s in sessions] == ["s2", "s1"]
        assert sessions[1]["message_count"] == 2
        assert sessions[0]["model"] == "dall-e-3"
        assert uow.chats.count_by_model() == {"gpt-4": 2, "dall-e-3": 1}

    with uow:
        assert uow.chats.delete_session("s1") == 2
        assert uow.chats.delete_session("s1") == 0
        assert uow.chats.list_session("s1") == []


def test_file_database_is_created_with_schema(tmp_path):
    path = tmp_path / "nested" / "chatbridge.db"
    u = get_uow(str(path))
    try:
        with u:
            u.settings.set("k", "v")
    finally:
        u.close()
    assert path.exists()

    conn = sqlite3.connect(str(path))
    try:
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert {"api_keys", "settings", "chat_logs", "metrics"} <= tables
        assert conn.execute("SELECT value FROM settings WHERE key='k'").fetchone()[0] == "v"
    finally:
        conn.close()


def test_init_schema_is_idempotent():
    conn = sqlite3.connect(":memory:")
    init_schema(conn)
    init_schema(conn)
    conn.close()


def test_parse_created_at_variants():
    assert _parse_created_at("2024-01-01T12:00:00") == T0
    assert _parse_created_at(datetime(2024, 1, 1, 12, 0)) == T0
    assert _parse_created_at("garbage").year == 1970
