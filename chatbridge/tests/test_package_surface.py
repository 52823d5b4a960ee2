"""Public package surface and the module-level ``send`` convenience."""

from __future__ import annotations

import chatbridge
from chatbridge.base import dispatch
from chatbridge.tests.payloads import openai_chat_body


def test_public_exports():
    assert chatbridge.__version__ == "0.1.0"
    for name in chatbridge.__all__:
        assert hasattr(chatbridge, name), name
    assert [m.id for m in chatbridge.list_models()][-1] == "claude-3-haiku"
    assert chatbridge.validate("dall-e-3")


def test_module_level_send_uses_default_dispatcher(mock_client, monkeypatch):
    client, transport = mock_client((200, openai_chat_body("pong")))
    monkeypatch.setattr(dispatch, "_DEFAULT", dispatch.ChatDispatcher(client=client))

    resp = chatbridge.send("gpt-4", [{"role": "user", "content": "ping"}], {"openai": "sk-test-0123456789"})
    assert resp.content == "pong"
    assert dispatch.get_dispatcher() is dispatch._DEFAULT
    assert len(transport.requests) == 1
