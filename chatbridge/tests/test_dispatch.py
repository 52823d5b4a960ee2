"""Dispatch facade: routing, pre-network validation and failure accounting."""

from __future__ import annotations

import httpx
import pytest

from chatbridge.base.dispatch import ChatDispatcher
from chatbridge.base.errors import (
    ErrorCode,
    InvalidRequestError,
    ProviderCallError,
    ProviderNotConfiguredError,
    UnsupportedModelError,
)
from chatbridge.base.metrics import get_counters
from chatbridge.base.models import DispatchOptions, Message
from chatbridge.tests.payloads import anthropic_body, openai_chat_body

OPENAI = {"openai": "sk-test-0123456789"}
BOTH = {"openai": "sk-test-0123456789", "anthropic": "sk-ant-0123456789"}


def test_end_to_end_text_dispatch(mock_client):
    client, transport = mock_client((200, openai_chat_body("Hello!", 10, 5)))
    resp = ChatDispatcher(client=client).send("gpt-4", [{"role": "user", "content": "Hi"}], OPENAI)

    assert resp.content == "Hello!"
    assert resp.model == "gpt-4"
    assert resp.usage is not None and resp.usage.total_tokens == 15
    assert len(transport.requests) == 1

    snap = get_counters("openai").snapshot()
    assert (snap.total, snap.success, snap.failure, snap.in_flight) == (1, 1, 0, 0)
    assert snap.prompt_tokens == 10 and snap.completion_tokens == 5


def test_routes_by_provider(mock_client):
    client, transport = mock_client((200, anthropic_body("Salut")))
    resp = ChatDispatcher(client=client).send("claude-3-haiku", [Message("user", "Hi")], BOTH)
    assert resp.provider == "anthropic"
    assert str(transport.requests[0].url).endswith("/v1/messages")


def test_image_uses_last_user_message_as_prompt(mock_client):
    client, transport = mock_client((200, {"data": [{"url": "https://img/x.png"}]}))
    resp = ChatDispatcher(client=client).send(
        "dall-e-3",
        [Message("system", "ignored"), Message("user", "a lighthouse at dusk")],
        OPENAI,
        {"image_quality": "hd", "image_style": "vivid"},
    )
    assert transport.last_json["prompt"] == "a lighthouse at dusk"
    assert transport.last_json["quality"] == "hd"
    assert transport.last_json["style"] == "vivid"
    assert resp.type == "image" and resp.prompt == "a lighthouse at dusk"


def test_image_requires_user_final_message_before_network(mock_client):
    client, transport = mock_client((200, {"data": [{"url": "u"}]}))
    with pytest.raises(InvalidRequestError) as ei:
        ChatDispatcher(client=client).send(
            "dall-e-3", [Message("user", "draw"), Message("assistant", "sure")], OPENAI
        )
    assert ei.value.message == "Image generation requires a user prompt"
    assert transport.requests == []
    assert get_counters("openai").snapshot().total == 0


def test_unsupported_model_never_calls_out(mock_client):
    client, transport = mock_client((200, openai_chat_body()))
    with pytest.raises(UnsupportedModelError):
        ChatDispatcher(client=client).send("gpt-9", [Message("user", "Hi")], OPENAI)
    assert transport.requests == []


def test_missing_credential_is_not_configured(mock_client):
    client, transport = mock_client((200, anthropic_body()))
    with pytest.raises(ProviderNotConfiguredError) as ei:
        ChatDispatcher(client=client).send("claude-3-opus", [Message("user", "Hi")], OPENAI)
    assert ei.value.code is ErrorCode.NOT_CONFIGURED
    assert ei.value.message == "Anthropic API key not configured"
    assert ei.value.to_dict()["operation"] == "chat"
    assert transport.requests == []


@pytest.mark.parametrize(
    "messages",
    [[], [{"role": "tool", "content": "x"}], [{"content": "no role"}], ["plain string"], [{"role": "user", "content": 3}]],
)
def test_malformed_messages(mock_client, messages):
    client, transport = mock_client((200, openai_chat_body()))
    with pytest.raises(InvalidRequestError):
        ChatDispatcher(client=client).send("gpt-4", messages, OPENAI)
    assert transport.requests == []


@pytest.mark.parametrize(
    "options",
    [{"temperature": 3}, {"max_tokens": 0}, {"image_size": "huge"}, {"temperature": True}, {"max_tokens": 5.0}, "not-options"],
)
def test_out_of_range_options(mock_client, options):
    client, transport = mock_client((200, openai_chat_body()))
    with pytest.raises(InvalidRequestError):
        ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], OPENAI, options)
    assert transport.requests == []


def test_zero_temperature_passes_through(mock_client):
    client, transport = mock_client((200, openai_chat_body()))
    ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], OPENAI, DispatchOptions(temperature=0.0))
    assert transport.last_json["temperature"] == 0.0


def test_provider_failure_is_counted_and_not_retried(mock_client):
    client, transport = mock_client((429, {"error": {"message": "Rate limit reached", "type": "requests"}}))
    with pytest.raises(ProviderCallError) as ei:
        ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], OPENAI)
    assert ei.value.code is ErrorCode.RATE_LIMIT
    assert ei.value.message == "OpenAI API error: Rate limit reached"
    assert len(transport.requests) == 1
    snap = get_counters("openai").snapshot()
    assert snap.failure == 1 and snap.failure_by_code == {"rate_limit": 1}


def test_error_without_body_message_uses_status(mock_client):
    client, _ = mock_client((502, {"unexpected": True}))
    with pytest.raises(ProviderCallError) as ei:
        ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], OPENAI)
    assert ei.value.message == "OpenAI API error: HTTP 502"


def test_timeout_is_classified_and_counted(mock_client):
    client, transport = mock_client(httpx.ReadTimeout("read timed out"))
    with pytest.raises(ProviderCallError) as ei:
        ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], OPENAI)
    assert ei.value.code is ErrorCode.TIMEOUT
    assert ei.value.message == "OpenAI API error: request timed out after 30s"
    assert len(transport.requests) == 1
    snap = get_counters("openai").snapshot()
    assert snap.timeout == 1 and snap.failure == 0


def test_translator_tables_can_be_overridden():
    calls = []

    def fake_chat(descriptor, messages, api_key, options, *, client=None):
        from chatbridge.base.models import NormalizedResponse

        calls.append((descriptor.id, api_key))
        return NormalizedResponse(content="stub", type="text", model=descriptor.id, provider=descriptor.provider)

    dispatcher = ChatDispatcher(text_translators={"openai": fake_chat, "anthropic": fake_chat})
    resp = dispatcher.send("gpt-3.5-turbo", [Message("user", "Hi")], OPENAI)
    assert resp.content == "stub"
    assert calls == [("gpt-3.5-turbo", "sk-test-0123456789")]


@pytest.mark.parametrize("key", ["sk-tést-0123456789", "sk-test\n0123456789", 12345678901])
def test_unusable_credential_is_rejected_before_network(mock_client, key):
    client, transport = mock_client((200, openai_chat_body()))
    with pytest.raises(InvalidRequestError) as ei:
        ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], {"openai": key})
    assert ei.value.to_dict()["provider"] == "openai"
    assert transport.requests == []
    snap = get_counters("openai").snapshot()
    assert snap.total == 0 and snap.in_flight == 0


def test_non_ascii_environment_key_is_rejected(mock_client, monkeypatch, uow):
    from chatbridge.base.credentials import CredentialStore

    monkeypatch.setenv("OPENAI_API_KEY", "sk-env-tést-0123")
    client, transport = mock_client((200, openai_chat_body()))
    store = CredentialStore(uow, secret="a-long-random-secret-of-at-least-32-chars")
    with pytest.raises(InvalidRequestError):
        ChatDispatcher(client=client).send("gpt-4", [Message("user", "Hi")], {"openai": store.resolve_key("openai")})
    assert transport.requests == []


def test_malformed_usage_counts_are_dropped(mock_client):
    body = {
        "choices": [{"message": {"role": "assistant", "content": "ok"}}],
        "usage": {"prompt_tokens": "10", "completion_tokens": 5, "total_tokens": True},
    }
    claude = {"content": [{"type": "text", "text": "ok"}], "usage": {"input_tokens": 4.5, "output_tokens": 2}}
    client, _ = mock_client((200, body), (200, claude))
    dispatcher = ChatDispatcher(client=client)

    resp = dispatcher.send("gpt-4", [Message("user", "Hi")], OPENAI)
    assert resp.usage is not None
    assert resp.usage.to_dict() == {"prompt_tokens": None, "completion_tokens": 5, "total_tokens": None}

    resp = dispatcher.send("claude-3-haiku", [Message("user", "Hi")], BOTH)
    assert resp.usage is not None and resp.usage.prompt_tokens is None and resp.usage.total_tokens is None
    assert get_counters("anthropic").snapshot().success == 1
