"""Single-shot JSON POST used by every translator.

Purpose:
    Perform exactly one outbound call for a dispatch and convert every failure
    into :class:`ProviderCallError` carrying the provider's own message when
    the response has one. Raw bodies are logged at DEBUG level only and never
    travel with the raised error.

Timeouts:
    The caller passes the fixed per-call timeout for the model family; there
    are no retries here or above.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from ..errors import ErrorCode, ProviderCallError, classify_exception, classify_status
from ..logging import LogContext, get_logger, log_event
from ..models import ModelDescriptor
from .client import get_httpx_client

ErrorExtractor = Callable[[Mapping[str, Any]], Optional[str]]

_logger = get_logger("http")


def provider_error_message(body: Mapping[str, Any]) -> Optional[str]:
    """Return ``error.message`` (or ``error.type``) from a provider error body.

    Both OpenAI and Anthropic wrap failures as ``{"error": {"message", "type"}}``.
    """
    err = body.get("error")
    if isinstance(err, Mapping):
        message = err.get("message") or err.get("type")
        return str(message) if message else None
    if isinstance(err, str) and err:
        return err
    return None


def _decode(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def post_json(
    descriptor: ModelDescriptor,
    *,
    headers: Mapping[str, str],
    payload: Mapping[str, Any],
    timeout: float,
    operation: str,
    error_prefix: str,
    client: Optional[httpx.Client] = None,
    extract_error: ErrorExtractor = provider_error_message,
) -> Dict[str, Any]:
    """POST ``payload`` to the descriptor endpoint and return the JSON body.

    Parameters:
        descriptor: Resolved model descriptor (endpoint, provider, id).
        headers: Auth and version headers for the provider.
        payload: JSON request body.
        timeout: Fixed per-call timeout in seconds.
        operation: ``"chat"`` or ``"image"``; recorded on raised errors.
        error_prefix: Human prefix for error messages, e.g. ``"OpenAI API error"``.
        client: Optional injected ``httpx.Client`` (tests); defaults to the pool.
        extract_error: Pulls the provider message out of an error body.

    Raises:
        ProviderCallError: transport failure, header values that cannot be
            encoded, non-2xx status, or a body that is not a JSON object.
    """
    ctx = LogContext(provider=descriptor.provider, model=descriptor.id, modality=descriptor.modality)
    http = client if client is not None else get_httpx_client(None, purpose=f"{descriptor.provider}.{operation}")
    try:
        resp = http.post(descriptor.endpoint, json=dict(payload), headers=dict(headers), timeout=timeout)
    except httpx.HTTPError as exc:
        code = classify_exception(exc)
        reason = f"request timed out after {timeout:g}s" if code is ErrorCode.TIMEOUT else (str(exc) or type(exc).__name__)
        raise ProviderCallError(
            code,
            f"{error_prefix}: {reason}",
            descriptor.provider,
            descriptor.id,
            operation=operation,
            raw=exc,
        ) from exc
    except UnicodeEncodeError as exc:
        # httpx encodes header values as ASCII before anything is sent.
        raise ProviderCallError(
            ErrorCode.VALIDATION,
            f"{error_prefix}: request headers must be ASCII",
            descriptor.provider,
            descriptor.id,
            operation=operation,
        ) from exc

    body = _decode(resp)
    log_event(
        _logger,
        "http.response",
        ctx,
        level=logging.DEBUG,
        status_code=resp.status_code,
        body=body if body is not None else resp.text[:2000],
    )

    if resp.is_error:
        message = extract_error(body) if isinstance(body, Mapping) else None
        raise ProviderCallError(
            classify_status(resp.status_code),
            f"{error_prefix}: {message or f'HTTP {resp.status_code}'}",
            descriptor.provider,
            descriptor.id,
            operation=operation,
            status_code=resp.status_code,
        )
    if not isinstance(body, dict):
        raise ProviderCallError(
            ErrorCode.INVALID_RESPONSE,
            f"{error_prefix}: response was not a JSON object",
            descriptor.provider,
            descriptor.id,
            operation=operation,
            status_code=resp.status_code,
        )
    return body


__all__ = ["post_json", "provider_error_message"]
