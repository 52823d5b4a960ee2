"""Unit tests for the shared httpx client pool and the single-shot POST helper.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- ``post_json`` error extraction for non-JSON and non-object bodies.
"""
from __future__ import annotations

import httpx
import pytest

from chatbridge.base.errors import ErrorCode, ProviderCallError
from chatbridge.base.http import close_all_clients, get_httpx_client, post_json, provider_error_message
from chatbridge.base.registry import resolve


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="image")
    assert c1 is not c2, "Different purposes should not share the same client instance"


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.other.com", purpose="chat")
    assert c1 is not c2, "Different base URLs should not share the same client instance"


def test_close_all_clients_empties_pool():
    c1 = get_httpx_client(None, purpose="openai.chat")
    close_all_clients()
    assert c1.is_closed
    assert get_httpx_client(None, purpose="openai.chat") is not c1


@pytest.mark.parametrize(
    "body,expected",
    [
        ({"error": {"message": "bad key", "type": "auth"}}, "bad key"),
        ({"error": {"type": "overloaded_error"}}, "overloaded_error"),
        ({"error": "plain text"}, "plain text"),
        ({"detail": "x"}, None),
    ],
)
def test_provider_error_message(body, expected):
    assert provider_error_message(body) == expected


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_non_json_body_is_invalid_response():
    with _client(lambda req: httpx.Response(200, text="<html>oops</html>")) as client:
        with pytest.raises(ProviderCallError) as ei:
            post_json(
                resolve("gpt-4"),
                headers={},
                payload={},
                timeout=1.0,
                operation="chat",
                error_prefix="OpenAI API error",
                client=client,
            )
    assert ei.value.code is ErrorCode.INVALID_RESPONSE
    assert "<html>" not in ei.value.message


def test_connect_error_is_transient():
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(boom) as client:
        with pytest.raises(ProviderCallError) as ei:
            post_json(
                resolve("claude-3-haiku"),
                headers={},
                payload={},
                timeout=1.0,
                operation="chat",
                error_prefix="Anthropic API error",
                client=client,
            )
    assert ei.value.code is ErrorCode.TRANSIENT
    assert ei.value.message == "Anthropic API error: connection refused"
    assert isinstance(ei.value.raw, httpx.ConnectError)


def test_non_ascii_header_is_wrapped_without_sending():
    seen = []

    with _client(lambda req: seen.append(req) or httpx.Response(200, json={})) as client:
        with pytest.raises(ProviderCallError) as ei:
            post_json(
                resolve("gpt-4"),
                headers={"Authorization": "Bearer sk-tést"},
                payload={},
                timeout=1.0,
                operation="chat",
                error_prefix="OpenAI API error",
                client=client,
            )
    assert ei.value.code is ErrorCode.VALIDATION
    assert ei.value.message == "OpenAI API error: request headers must be ASCII"
    assert seen == []
