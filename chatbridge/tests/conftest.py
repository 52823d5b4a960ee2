"""Pytest configuration for the chatbridge test suite.

Every test runs with a scrubbed environment (no provider keys, no secret, no
``.env``), fresh process counters and an empty HTTP client pool. Outbound
calls are served by ``httpx.MockTransport``; no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterator, List

import httpx
import pytest

from chatbridge.base.http import close_all_clients
from chatbridge.base.metrics import reset_counters
from chatbridge.config import reset_config_cache
from chatbridge.persistence.sqlite import MEMORY_DB, UnitOfWorkSqlite, get_uow

_SCRUBBED_ENV = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "ENCRYPTION_KEY",
    "CHATBRIDGE_DB_PATH",
    "CHATBRIDGE_IMAGE_SIZE",
    "CHATBRIDGE_CONFIG_FILE",
    "CHATBRIDGE_LOG_LEVEL",
    "CHATBRIDGE_TIMEOUT_TEXT_SECONDS",
    "CHATBRIDGE_TIMEOUT_IMAGE_SECONDS",
    "CHATBRIDGE_TIMEOUT_IMAGE_EXTENDED_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip credentials and config overrides; point ``.env`` at a missing file."""
    for name in _SCRUBBED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    reset_counters()
    yield
    close_all_clients()
    reset_config_cache()
    reset_counters()


@pytest.fixture()
def uow() -> Iterator[UnitOfWorkSqlite]:
    """Unit of Work over a private in-memory database."""
    u = get_uow(MEMORY_DB)
    yield u
    u.close()


class RecordingTransport:
    """Callable for ``httpx.MockTransport`` that records requests.

    ``responses`` is consumed in order; the last entry is reused once the
    list is exhausted. Each entry is ``(status, json_body)`` or an exception
    instance to raise.
    """

    def __init__(self, responses: List[Any]) -> None:
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        status, body = item
        return httpx.Response(status, json=body)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def mock_client() -> Iterator[Callable[..., tuple]]:
    """Factory returning ``(client, transport)`` for scripted responses."""
    clients: List[httpx.Client] = []

    def _make(*responses: Any) -> tuple:
        transport = RecordingTransport(list(responses))
        client = httpx.Client(transport=httpx.MockTransport(transport))
        clients.append(client)
        return client, transport

    yield _make
    for c in clients:
        c.close()
