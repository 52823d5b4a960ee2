"""Repository & Unit of Work protocol definitions for the persistence layer.

This module declares the contracts used by the credential store, the settings
service and the chat service. Callers depend only on these abstractions;
concrete implementations live under `persistence/sqlite/`.

Design Principles:
- No concrete behavior; pure structural typing via `Protocol`.
- Dataclasses represent DTOs crossing repository boundaries.
- Transaction control is delegated to the `IUnitOfWork` implementation;
    repositories never commit.

Failure / Error Semantics:
- Repository methods raise backend-specific exceptions only in truly
    exceptional conditions (I/O failures, integrity errors).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol

# ---------- Data Transfer Objects ----------


@dataclass
class StoredCredential:
    """Encrypted provider credential row.

    Attributes
    ----------
    provider: Normalized provider identifier (lowercase).
    encrypted_key: ``iv_hex:ciphertext_hex`` text; never plaintext.
    created_at: UTC timestamp of the first write for this provider.
    updated_at: UTC timestamp of the latest overwrite.
    """

    provider: str
    encrypted_key: str
    created_at: datetime
    updated_at: datetime


@dataclass
class Setting:
    """Single key/value setting row."""

    key: str
    value: str
    updated_at: datetime


@dataclass
class MetricEntry:
    """Single dispatch metric record.

    Attributes
    ----------
    provider: Normalized provider identifier (lowercase).
    model: Logical model id used for the request.
    latency_ms: End-to-end latency in milliseconds.
    tokens_prompt: Optional prompt token count (if reported by the provider).
    tokens_completion: Optional completion token count.
    success: True when the dispatch returned a normalized response.
    error_code: Normalized error code when success is False.
    created_at: UTC timestamp of when the metric was recorded.
    """

    provider: str
    model: str
    latency_ms: int
    tokens_prompt: Optional[int]
    tokens_completion: Optional[int]
    success: bool
    error_code: Optional[str]
    created_at: datetime


@dataclass
class ChatLog:
    """Persisted chat exchange row.

    Attributes
    ----------
    id: Primary key (None until persisted).
    session_id: Conversation identifier (UUID string).
    provider: Provider name for the interaction.
    model: Logical model id used.
    prompt: User message content.
    content: Normalized response content (text, URL or data-URL).
    content_type: ``"text"`` or ``"image"``.
    metadata: Opaque structured data (JSON serialized), e.g. usage.
    created_at: UTC timestamp for ordering.
    """

    id: Optional[int]
    session_id: str
    provider: str
    model: str
    prompt: str
    content: str
    content_type: str
    metadata: Dict[str, Any]
    created_at: datetime


# ---------- Repository Protocols ----------


class IKeyStoreRepo(Protocol):
    """Encrypted credential storage abstraction.

    Provider identifiers are stored and returned lowercase. Values are opaque
    ciphertext strings; this layer never sees plaintext keys.
    """

    def get(self, provider: str) -> Optional[StoredCredential]:
        """Return the stored credential row for ``provider`` or ``None``."""
        ...

    def upsert(self, provider: str, encrypted_key: str) -> None:
        """Create or overwrite the credential for a provider.

        Notes
        -----
        ``created_at`` survives overwrites; ``updated_at`` is refreshed. No
        implicit commit is performed.
        """
        ...

    def delete(self, provider: str) -> bool:
        """Remove the credential; return True when a row was deleted."""
        ...

    def list_all(self) -> List[StoredCredential]:
        """Return every stored credential ordered by provider."""
        ...


class ISettingsRepo(Protocol):
    """Generic key/value settings abstraction."""

    def get(self, key: str) -> Optional[str]:
        ...

    def get_all(self) -> Dict[str, str]:
        ...

    def set(self, key: str, value: str) -> None:
        """Insert or replace one setting (no implicit commit)."""
        ...

    def delete(self, key: str) -> bool:
        ...


class IMetricsRepo(Protocol):
    """Metrics repository providing persistence & aggregate queries."""

    def add_metric(self, entry: MetricEntry) -> None:
        """Persist a single metric entry.

        Implementations perform an INSERT but MUST NOT commit; caller
        controls transaction via UnitOfWork boundary.
        """
        ...

    def recent_errors(self, limit: int = 50) -> Iterable[MetricEntry]:
        """Yield the most recent error entries, newest first."""
        ...

    def summary(self) -> Dict[str, Any]:  # pragma: no cover
        """Return aggregate usage summary across all metrics.

        Shape::

            {
                "total": int,
                "success": int,
                "failure": int,
                "tokens": {"prompt": int, "completion": int},
                "by_provider": [{"provider", "count", "avg_ms"}],
                "by_model": [{"model", "count", "avg_ms"}],
            }
        """
        ...


class IChatLogRepo(Protocol):
    """Chat transcript storage abstraction."""

    def add(self, log: ChatLog) -> int:
        """Persist a new chat log row returning its primary key."""
        ...

    def list_session(self, session_id: str) -> List[ChatLog]:
        """Return a session's exchanges in chronological order."""
        ...

    def list_sessions(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Return session summaries, most recently active first."""
        ...

    def delete_session(self, session_id: str) -> int:
        """Delete every row of a session; return the number removed."""
        ...

    def count_by_model(self) -> Dict[str, int]:
        ...


class IUnitOfWork(Protocol):
    """Transactional boundary aggregating repository instances.

    All write operations MUST be explicitly committed by calling `commit()`;
    otherwise they are subject to rollback semantics on scope exit.
    """

    keys: IKeyStoreRepo
    settings: ISettingsRepo
    metrics: IMetricsRepo
    chats: IChatLogRepo

    def __enter__(self) -> "IUnitOfWork":  # pragma: no cover
        ...

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        """Undo all uncommitted changes (idempotent)."""
        ...

    def close(self) -> None:
        """Release the underlying connection or session."""
        ...
