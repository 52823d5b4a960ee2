"""Conversation service: dispatch, history replay and persistence.

Purpose
-------
Glue between the core dispatcher and the SQLite store. A chat turn:

1. resolves the model and the provider credential (stored key, then
   environment);
2. replays the session's previous text exchanges as prior messages;
3. merges explicit options over the stored setting defaults;
4. dispatches once, records a metric row for success or failure;
5. persists the exchange and returns ``{session_id, response}``.

Fallback semantics
------------------
None beyond credential resolution. Dispatch errors propagate unchanged after
the failure metric is written.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..base.credentials import CredentialStore
from ..base.dispatch import ChatDispatcher, get_dispatcher
from ..base.errors import GatewayError, InvalidRequestError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import DispatchOptions, Message, ModelDescriptor, NormalizedResponse
from ..base.registry import resolve
from ..persistence.interfaces.repos import ChatLog, IUnitOfWork, MetricEntry
from ..persistence.sqlite import get_uow
from .settings_service import SettingsService


def _history_messages(logs: List[ChatLog]) -> List[Message]:
    """Rebuild user/assistant turns from stored text exchanges."""
    out: List[Message] = []
    for log in logs:
        if log.content_type != "text":
            continue
        out.append(Message(role="user", content=log.prompt))
        out.append(Message(role="assistant", content=log.content))
    return out


class ChatService:
    """Session-aware chat on top of :class:`ChatDispatcher`.

    Parameters
    ----------
    uow:
        Unit of Work for chat logs, metrics, keys and settings. Defaults to
        the configured SQLite database.
    credentials / settings / dispatcher:
        Optional collaborators; by default they share ``uow``.
    """

    def __init__(
        self,
        uow: Optional[IUnitOfWork] = None,
        *,
        credentials: Optional[CredentialStore] = None,
        settings: Optional[SettingsService] = None,
        dispatcher: Optional[ChatDispatcher] = None,
    ) -> None:
        self._uow = uow if uow is not None else get_uow()
        self._credentials = credentials or CredentialStore(self._uow)
        self._settings = settings or SettingsService(self._uow)
        self._dispatcher = dispatcher or get_dispatcher()
        self._logger = get_logger("chat")

    # -------------------------- Chat -------------------------- #
    def chat(
        self,
        model_id: str,
        message: str,
        session_id: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        *,
        image_size: Optional[str] = None,
        image_quality: Optional[str] = None,
        image_style: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run one chat turn and return ``{"session_id", "response"}``.

        Raises:
            InvalidRequestError: empty ``message``.
            GatewayError: any dispatch failure (after the metric is recorded).
        """
        if not isinstance(message, str) or not message.strip():
            raise InvalidRequestError("Message is required", model=model_id, operation="chat")
        descriptor = resolve(model_id)
        session_id = session_id or str(uuid.uuid4())
        ctx = LogContext(provider=descriptor.provider, model=descriptor.id, session_id=session_id)

        history: List[Message] = []
        if not descriptor.is_image:
            with self._uow as uow:
                history = _history_messages(uow.chats.list_session(session_id))
        messages = [*history, Message(role="user", content=message)]

        options = DispatchOptions(
            temperature=temperature,
            max_tokens=max_tokens,
            image_size=image_size,
            image_quality=image_quality,
            image_style=image_style,
        ).with_defaults(self._settings.dispatch_defaults())
        credentials = self._credentials.credentials(descriptor.provider)

        started = time.monotonic()
        try:
            response = self._dispatcher.send(descriptor.id, messages, credentials, options)
        except GatewayError as exc:
            self._record_metric(descriptor, started, None, error_code=exc.code.value)
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                error_code=exc.code.value,
                emitted=False,
                level=logging.WARNING,
                error=exc.message,
            )
            raise

        self._record_metric(descriptor, started, response)
        self._persist(session_id, descriptor, message, response)
        return {"session_id": session_id, "response": response.to_dict()}

    # -------------------------- Sessions -------------------------- #
    def list_sessions(self, limit: int = 50) -> List[Dict[str, Any]]:
        with self._uow as uow:
            return uow.chats.list_sessions(limit)

    def session_messages(self, session_id: str) -> List[Dict[str, Any]]:
        """Return a session's exchanges oldest first as plain dictionaries."""
        with self._uow as uow:
            logs = uow.chats.list_session(session_id)
        return [
            {
                "id": log.id,
                "model": log.model,
                "provider": log.provider,
                "prompt": log.prompt,
                "content": log.content,
                "type": log.content_type,
                "metadata": log.metadata,
                "created_at": log.created_at.isoformat(),
            }
            for log in logs
        ]

    def delete_session(self, session_id: str) -> Dict[str, Any]:
        with self._uow as uow:
            deleted = uow.chats.delete_session(session_id)
        return {"removed": deleted > 0, "messages": deleted}

    # -------------------------- Internals -------------------------- #
    def _record_metric(
        self,
        descriptor: ModelDescriptor,
        started: float,
        response: Optional[NormalizedResponse],
        *,
        error_code: Optional[str] = None,
    ) -> None:
        usage = response.usage if response is not None else None
        entry = MetricEntry(
            provider=descriptor.provider,
            model=descriptor.id,
            latency_ms=int((time.monotonic() - started) * 1000),
            tokens_prompt=usage.prompt_tokens if usage else None,
            tokens_completion=usage.completion_tokens if usage else None,
            success=response is not None,
            error_code=error_code,
            created_at=datetime.now(timezone.utc),
        )
        with self._uow as uow:
            uow.metrics.add_metric(entry)

    def _persist(
        self, session_id: str, descriptor: ModelDescriptor, prompt: str, response: NormalizedResponse
    ) -> None:
        metadata: Dict[str, Any] = {}
        if response.usage is not None:
            metadata["usage"] = response.usage.to_dict()
        if response.revised_prompt:
            metadata["revised_prompt"] = response.revised_prompt
        log = ChatLog(
            id=None,
            session_id=session_id,
            provider=response.provider,
            model=descriptor.id,
            prompt=prompt,
            content=response.content,
            content_type=response.type,
            metadata=metadata,
            created_at=datetime.now(timezone.utc),
        )
        with self._uow as uow:
            uow.chats.add(log)


__all__ = ["ChatService"]
