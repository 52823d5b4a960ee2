"""Dispatch facade: one entry point from logical model id to normalized result.

Flow
----
1. Resolve the model id through the static registry (unknown id ->
   :class:`UnsupportedModelError`).
2. Validate the messages; for image models the trailing message must be
   user-authored (else :class:`InvalidRequestError`).
3. Look up the provider credential in the supplied mapping (missing ->
   :class:`ProviderNotConfiguredError`; a key that is not printable ASCII ->
   :class:`InvalidRequestError`). Steps 1-3 never touch the network.
4. Pick the translator from the table keyed by modality (then provider) and
   perform exactly one outbound call.

There are no retries and no fallback between models or providers: every
failure propagates to the caller as a :class:`GatewayError`.
"""
from __future__ import annotations

import re
from dataclasses import asdict
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import httpx
from pydantic import ValidationError

from ..anthropic.chat_helpers import chat_impl as anthropic_chat
from ..openai.chat_helpers import chat_impl as openai_chat
from ..openai.image_helpers import image_impl as openai_image
from .dto import API_KEY_PATTERN, ChatOptionsDTO
from .errors import ErrorCode, GatewayError, InvalidRequestError, ProviderNotConfiguredError
from .logging import LogContext, get_logger, normalized_log_event
from .metrics import get_counters
from .models import ROLES, DispatchOptions, Message, ModelDescriptor, NormalizedResponse
from .registry import resolve

_API_KEY_RE = re.compile(API_KEY_PATTERN)

MessageLike = Union[Message, Mapping[str, Any]]
Translator = Callable[..., NormalizedResponse]

TEXT_TRANSLATORS: Mapping[str, Translator] = {
    "openai": openai_chat,
    "anthropic": anthropic_chat,
}
IMAGE_TRANSLATORS: Mapping[str, Translator] = {
    "openai": openai_image,
}


def _coerce_messages(messages: Iterable[MessageLike], model_id: str) -> List[Message]:
    out: List[Message] = []
    try:
        for raw in messages or ():
            msg = Message.coerce(raw)
            if msg.role not in ROLES or not isinstance(msg.content, str):
                raise ValueError(msg.role)
            out.append(msg)
    except (KeyError, TypeError, ValueError):
        raise InvalidRequestError(
            "Messages must be {role, content} objects with role system, user or assistant",
            model=model_id,
            operation="validate",
        ) from None
    if not out:
        raise InvalidRequestError("At least one message is required", model=model_id, operation="validate")
    return out


def _coerce_options(options: Any, model_id: str) -> DispatchOptions:
    """Return validated options; out-of-range values are client input faults."""
    try:
        opts = ChatOptionsDTO(**asdict(DispatchOptions.coerce(options))).to_options()
    except (TypeError, ValidationError) as exc:
        fields = sorted({str(e["loc"][0]) for e in exc.errors() if e.get("loc")}) if isinstance(exc, ValidationError) else []
        raise InvalidRequestError(
            f"Invalid options: {', '.join(fields) or 'unsupported options object'}",
            model=model_id,
            operation="validate",
        ) from None
    return opts


class ChatDispatcher:
    """Route a request to the translator for the model's modality.

    Parameters
    ----------
    client:
        Optional ``httpx.Client`` handed to every translator (tests inject
        one backed by ``httpx.MockTransport``). Defaults to the shared pool.
    text_translators / image_translators:
        Optional overrides of the per-provider translator tables.
    """

    def __init__(
        self,
        *,
        client: Optional[httpx.Client] = None,
        text_translators: Optional[Mapping[str, Translator]] = None,
        image_translators: Optional[Mapping[str, Translator]] = None,
    ) -> None:
        self._client = client
        self._logger = get_logger("dispatch")
        self._modalities: Dict[str, Callable[..., NormalizedResponse]] = {
            "text": self._send_text,
            "image": self._send_image,
        }
        self._text = dict(text_translators or TEXT_TRANSLATORS)
        self._image = dict(image_translators or IMAGE_TRANSLATORS)

    # -------------------------- Modality variants -------------------------- #
    def _send_text(
        self, descriptor: ModelDescriptor, messages: Sequence[Message], api_key: str, options: DispatchOptions
    ) -> NormalizedResponse:
        translator = self._text[descriptor.provider]
        return translator(descriptor, messages, api_key, options, client=self._client)

    def _send_image(
        self, descriptor: ModelDescriptor, messages: Sequence[Message], api_key: str, options: DispatchOptions
    ) -> NormalizedResponse:
        translator = self._image[descriptor.provider]
        return translator(descriptor, messages[-1].content, api_key, options, client=self._client)

    # -------------------------- Entry point -------------------------- #
    def send(
        self,
        model_id: str,
        messages: Iterable[MessageLike],
        credentials: Optional[Mapping[str, Optional[str]]] = None,
        options: Union[DispatchOptions, Mapping[str, Any], None] = None,
    ) -> NormalizedResponse:
        """Dispatch one request and return the normalized response.

        Raises:
            UnsupportedModelError: unknown ``model_id``.
            InvalidRequestError: malformed messages, or an image request whose
                final message is not user-authored, or a
                credential that is not printable ASCII.
            ProviderNotConfiguredError: no credential for the provider.
            ProviderCallError / MissingImageDataError: the outbound call failed.
        """
        descriptor = resolve(model_id)
        operation = "image" if descriptor.is_image else "chat"
        msgs = _coerce_messages(messages, descriptor.id)
        if descriptor.is_image and msgs[-1].role != "user":
            raise InvalidRequestError(
                "Image generation requires a user prompt",
                model=descriptor.id,
                provider=descriptor.provider,
                operation=operation,
            )
        api_key = (credentials or {}).get(descriptor.provider)
        if not api_key:
            raise ProviderNotConfiguredError(descriptor.provider, model=descriptor.id, operation=operation)
        if not isinstance(api_key, str) or not _API_KEY_RE.fullmatch(api_key):
            raise InvalidRequestError(
                "API key contains unsupported characters",
                model=descriptor.id,
                provider=descriptor.provider,
                operation=operation,
            )
        opts = _coerce_options(options, descriptor.id)

        ctx = LogContext(provider=descriptor.provider, model=descriptor.id, modality=descriptor.modality)
        counters = get_counters(descriptor.provider)
        counters.record_start()
        started = counters.monotonic_ms()
        normalized_log_event(self._logger, "dispatch.start", ctx, phase="start", messages=len(msgs))
        try:
            response = self._modalities[descriptor.modality](descriptor, msgs, api_key, opts)
        except GatewayError as exc:
            latency = counters.monotonic_ms() - started
            if exc.code is ErrorCode.TIMEOUT:
                counters.record_timeout(latency)
            else:
                counters.record_failure(exc.code.value, latency)
            normalized_log_event(
                self._logger,
                "dispatch.error",
                ctx,
                phase="finalize",
                error_code=exc.code.value,
                emitted=False,
                latency_ms=latency,
                error=exc.message,
            )
            raise

        latency = counters.monotonic_ms() - started
        usage = response.usage
        counters.record_success(
            latency,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )
        normalized_log_event(
            self._logger,
            "dispatch.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=usage,
            latency_ms=latency,
        )
        return response


_DEFAULT: Optional[ChatDispatcher] = None


def get_dispatcher() -> ChatDispatcher:
    """Return the process-wide dispatcher using the shared HTTP pool."""
    global _DEFAULT  # noqa: PLW0603 - module cache
    if _DEFAULT is None:
        _DEFAULT = ChatDispatcher()
    return _DEFAULT


def send(
    model_id: str,
    messages: Iterable[MessageLike],
    credentials: Optional[Mapping[str, Optional[str]]] = None,
    options: Union[DispatchOptions, Mapping[str, Any], None] = None,
) -> NormalizedResponse:
    """Module-level convenience for :meth:`ChatDispatcher.send`."""
    return get_dispatcher().send(model_id, messages, credentials, options)


__all__ = [
    "ChatDispatcher",
    "IMAGE_TRANSLATORS",
    "TEXT_TRANSLATORS",
    "get_dispatcher",
    "send",
]
