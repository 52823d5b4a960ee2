"""Anthropic messages translator.

Purpose:
- Lift the first ``system`` message into the top-level ``system`` field,
  coerce every remaining non-assistant role to ``user`` and normalize the
  first content block of the reply into a :class:`NormalizedResponse`.

External dependencies:
- ``httpx`` through :func:`chatbridge.base.http.post_json` (no SDK).

Timeouts & Retries:
- One call per dispatch with the text timeout; no retries.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import httpx

from ..base.errors import ErrorCode, ProviderCallError
from ..base.http import post_json
from ..base.models import DispatchOptions, Message, ModelDescriptor, NormalizedResponse, Usage
from ..base.timeouts import timeout_for
from ..config.defaults import ANTHROPIC_API_VERSION, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE

ERROR_PREFIX = "Anthropic API error"


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "x-api-key": api_key,
        "anthropic-version": ANTHROPIC_API_VERSION,
        "Content-Type": "application/json",
    }


def split_system(messages: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, str]]]:
    """Return ``(system, conversation)`` for the messages API.

    The first system message becomes ``system``; every other message keeps
    its order with roles coerced to ``assistant`` or ``user``.
    """
    system: Optional[str] = None
    conversation: List[Dict[str, str]] = []
    for msg in messages:
        if msg.role == "system" and system is None:
            system = msg.content
            continue
        role = "assistant" if msg.role == "assistant" else "user"
        conversation.append({"role": role, "content": msg.content})
    return system, conversation


def build_payload(descriptor: ModelDescriptor, messages: Sequence[Message], options: DispatchOptions) -> Dict[str, Any]:
    system, conversation = split_system(messages)
    payload: Dict[str, Any] = {
        "model": descriptor.wire_model,
        "max_tokens": options.max_tokens if options.max_tokens is not None else DEFAULT_MAX_TOKENS["anthropic"],
        "temperature": options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE,
        "messages": conversation,
    }
    if system is not None:
        payload["system"] = system
    return payload


def extract_text(body: Mapping[str, Any]) -> Optional[str]:
    """Return ``content[0].text`` or ``None`` when absent."""
    blocks = body.get("content")
    if not isinstance(blocks, list) or not blocks or not isinstance(blocks[0], Mapping):
        return None
    text = blocks[0].get("text")
    return text if isinstance(text, str) else None


def normalize_response(descriptor: ModelDescriptor, body: Mapping[str, Any]) -> NormalizedResponse:
    """Map a messages body to the normalized response shape.

    Raises:
        ProviderCallError: the first content block carries no text.
    """
    content = extract_text(body)
    if not content:
        raise ProviderCallError(
            ErrorCode.INVALID_RESPONSE,
            f"{ERROR_PREFIX}: response contained no text content",
            descriptor.provider,
            descriptor.id,
            operation="chat",
        )
    return NormalizedResponse(
        content=content,
        type="text",
        model=descriptor.id,
        provider=descriptor.provider,
        usage=Usage.from_anthropic(body.get("usage")),
    )


def chat_impl(
    descriptor: ModelDescriptor,
    messages: Sequence[Message],
    api_key: str,
    options: DispatchOptions,
    *,
    client: Optional[httpx.Client] = None,
) -> NormalizedResponse:
    """Send one messages request and return the normalized result."""
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


__all__ = ["build_headers", "build_payload", "chat_impl", "extract_text", "normalize_response", "split_system"]
