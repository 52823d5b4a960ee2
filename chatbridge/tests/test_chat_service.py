"""Session-aware chat: history replay, persistence, metrics and reporting."""

from __future__ import annotations

import uuid

import pytest

from chatbridge.base.credentials import CredentialStore
from chatbridge.base.dispatch import ChatDispatcher
from chatbridge.base.errors import ErrorCode, InvalidRequestError, ProviderCallError, ProviderNotConfiguredError
from chatbridge.service.chat_service import ChatService
from chatbridge.service.report import usage_report
from chatbridge.service.settings_service import SettingsService
from chatbridge.tests.payloads import anthropic_body, openai_chat_body

SECRET = "a-long-random-secret-of-at-least-32-chars"


def _service(uow, client, **keys):
    store = CredentialStore(uow, secret=SECRET)
    for provider, key in keys.items():
        store.set_key(provider, key)
    return ChatService(uow, credentials=store, dispatcher=ChatDispatcher(client=client))


def test_first_turn_creates_session_and_persists(uow, mock_client):
    client, transport = mock_client((200, openai_chat_body("Hello!", 10, 5)))
    svc = _service(uow, client, openai="sk-test-0123456789")

    out = svc.chat("gpt-4", "Hi")

    uuid.UUID(out["session_id"])
    assert out["response"]["content"] == "Hello!"
    assert out["response"]["usage"]["total_tokens"] == 15
    assert transport.requests[0].headers["Authorization"] == "Bearer sk-test-0123456789"

    history = svc.session_messages(out["session_id"])
    assert len(history) == 1
    assert history[0]["prompt"] == "Hi" and history[0]["content"] == "Hello!"
    assert history[0]["metadata"]["usage"]["prompt_tokens"] == 10


def test_history_is_replayed_for_text_models(uow, mock_client):
    client, transport = mock_client((200, openai_chat_body("First")), (200, openai_chat_body("Second")))
    svc = _service(uow, client, openai="sk-test-0123456789")

    sid = svc.chat("gpt-3.5-turbo", "Hi")["session_id"]
    svc.chat("gpt-3.5-turbo", "And again?", session_id=sid)

    assert transport.last_json["messages"] == [
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "First"},
        {"role": "user", "content": "And again?"},
    ]
    assert [m["content"] for m in svc.session_messages(sid)] == ["First", "Second"]


def test_image_turn_is_not_replayed(uow, mock_client):
    client, transport = mock_client(
        (200, {"data": [{"url": "https://img/1.png", "revised_prompt": "A red fox"}]}),
        (200, openai_chat_body("Nice fox")),
    )
    svc = _service(uow, client, openai="sk-test-0123456789")

    out = svc.chat("dall-e-3", "a fox", image_quality="hd")
    assert out["response"]["type"] == "image"
    assert out["response"]["revised_prompt"] == "A red fox"
    assert transport.last_json["quality"] == "hd"

    svc.chat("gpt-4", "describe it", session_id=out["session_id"])
    assert transport.last_json["messages"] == [{"role": "user", "content": "describe it"}]

    logs = svc.session_messages(out["session_id"])
    assert logs[0]["type"] == "image"
    assert logs[0]["metadata"] == {"revised_prompt": "A red fox"}


def test_settings_supply_defaults_and_explicit_values_win(uow, mock_client):
    client, transport = mock_client((200, anthropic_body()))
    SettingsService(uow).set_many({"temperature": "0.2", "max_tokens": "300"})
    svc = _service(uow, client, anthropic="sk-ant-0123456789")

    svc.chat("claude-3-haiku", "Hi", max_tokens=42)
    assert transport.last_json["temperature"] == 0.2
    assert transport.last_json["max_tokens"] == 42


def test_environment_key_is_used_when_nothing_is_stored(uow, mock_client, monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-env-0123456")
    client, transport = mock_client((200, anthropic_body()))
    svc = _service(uow, client)
    svc.chat("claude-3-sonnet", "Hi")
    assert transport.requests[0].headers["x-api-key"] == "sk-ant-env-0123456"


def test_failure_records_metric_and_skips_chat_log(uow, mock_client):
    client, _ = mock_client((401, {"error": {"message": "Invalid API key"}}))
    svc = _service(uow, client, openai="sk-test-0123456789")

    with pytest.raises(ProviderCallError) as ei:
        svc.chat("gpt-4", "Hi", session_id="s-fail")
    assert ei.value.code is ErrorCode.AUTH
    assert svc.session_messages("s-fail") == []

    report = usage_report(uow)
    assert report["total"] == 1 and report["failure"] == 1
    assert report["recent_errors"][0]["error_code"] == "auth"
    assert report["recent_errors"][0]["model"] == "gpt-4"


def test_not_configured_is_recorded(uow, mock_client):
    client, transport = mock_client((200, openai_chat_body()))
    svc = _service(uow, client)
    with pytest.raises(ProviderNotConfiguredError):
        svc.chat("gpt-4", "Hi")
    assert transport.requests == []
    assert usage_report(uow)["recent_errors"][0]["error_code"] == "not_configured"


@pytest.mark.parametrize("message", ["", "   ", None])
def test_blank_message_is_rejected(uow, mock_client, message):
    client, transport = mock_client((200, openai_chat_body()))
    with pytest.raises(InvalidRequestError):
        _service(uow, client, openai="sk-test-0123456789").chat("gpt-4", message)  # type: ignore[arg-type]
    assert transport.requests == []


def test_sessions_listing_and_delete(uow, mock_client):
    client, _ = mock_client((200, openai_chat_body()))
    svc = _service(uow, client, openai="sk-test-0123456789")
    a = svc.chat("gpt-4", "one")["session_id"]
    svc.chat("gpt-4", "two", session_id=a)
    b = svc.chat("gpt-4", "three")["session_id"]

    sessions = {s["session_id"]: s for s in svc.list_sessions()}
    assert sessions[a]["message_count"] == 2
    assert sessions[b]["message_count"] == 1

    assert svc.delete_session(a) == {"removed": True, "messages": 2}
    assert svc.delete_session(a) == {"removed": False, "messages": 0}
    assert [s["session_id"] for s in svc.list_sessions()] == [b]


def test_usage_report_totals(uow, mock_client):
    client, _ = mock_client((200, openai_chat_body("ok", 10, 5)), (200, anthropic_body("ok", 7, 3)))
    svc = _service(uow, client, openai="sk-test-0123456789", anthropic="sk-ant-0123456789")
    svc.chat("gpt-4", "a")
    svc.chat("claude-3-opus", "b")

    report = usage_report(uow, include_process=True)
    assert report["total"] == 2 and report["success"] == 2
    assert report["tokens"] == {"prompt": 17, "completion": 8}
    assert report["chats_by_model"] == {"gpt-4": 1, "claude-3-opus": 1}
    assert {p["provider"] for p in report["by_provider"]} == {"openai", "anthropic"}
    assert report["process"]["openai"]["success"] == 1
    assert report["process"]["anthropic"]["prompt_tokens"] == 7
