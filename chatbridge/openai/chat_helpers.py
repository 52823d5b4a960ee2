"""OpenAI chat-completions translator.

Purpose:
- Shape the ``/v1/chat/completions`` payload from provider-agnostic messages
  and normalize the first choice plus token usage into a
  :class:`NormalizedResponse`.

External dependencies:
- ``httpx`` through :func:`chatbridge.base.http.post_json` (no SDK).

Timeouts & Retries:
- One call per dispatch with the text timeout; no retries.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

import httpx

from ..base.errors import ErrorCode, ProviderCallError
from ..base.http import post_json
from ..base.models import DispatchOptions, Message, ModelDescriptor, NormalizedResponse, Usage
from ..base.timeouts import timeout_for
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE

ERROR_PREFIX = "OpenAI API error"


def build_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}


def build_payload(descriptor: ModelDescriptor, messages: Sequence[Message], options: DispatchOptions) -> Dict[str, Any]:
    """Pass messages through unchanged and fill ``max_tokens``/``temperature`` defaults."""
    return {
        "model": descriptor.wire_model,
        "messages": [m.to_dict() for m in messages],
        "max_tokens": options.max_tokens if options.max_tokens is not None else DEFAULT_MAX_TOKENS["openai"],
        "temperature": options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE,
    }


def extract_content(body: Mapping[str, Any]) -> Optional[str]:
    """Return ``choices[0].message.content`` or ``None`` when absent."""
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, Mapping) else None
    content = message.get("content") if isinstance(message, Mapping) else None
    return content if isinstance(content, str) else None


def normalize_response(descriptor: ModelDescriptor, body: Mapping[str, Any]) -> NormalizedResponse:
    """Map a chat-completions body to the normalized response shape.

    Raises:
        ProviderCallError: the first choice carries no text content.
    """
    content = extract_content(body)
    if not content:
        raise ProviderCallError(
            ErrorCode.INVALID_RESPONSE,
            f"{ERROR_PREFIX}: response contained no completion text",
            descriptor.provider,
            descriptor.id,
            operation="chat",
        )
    return NormalizedResponse(
        content=content,
        type="text",
        model=descriptor.id,
        provider=descriptor.provider,
        usage=Usage.from_openai(body.get("usage")),
    )


def chat_impl(
    descriptor: ModelDescriptor,
    messages: Sequence[Message],
    api_key: str,
    options: DispatchOptions,
    *,
    client: Optional[httpx.Client] = None,
) -> NormalizedResponse:
    """Send one chat completion and return the normalized result."""
    body = post_json(
        descriptor,
        headers=build_headers(api_key),
        payload=build_payload(descriptor, messages, options),
        timeout=timeout_for(descriptor),
        operation="chat",
        error_prefix=ERROR_PREFIX,
        client=client,
    )
    return normalize_response(descriptor, body)


__all__ = ["build_headers", "build_payload", "chat_impl", "extract_content", "normalize_response"]
