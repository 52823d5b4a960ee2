"""OpenAI image-generation translator.

Purpose:
- Shape the ``/v1/images/generations`` payload for the descriptor's image
  profile and normalize ``data[0]`` into a :class:`NormalizedResponse` whose
  ``content`` is a URL or a ``data:image/png;base64,`` data-URL.

Image profiles:
- ``dalle3``: ``quality`` (default ``standard``) and ``style`` (default
  ``natural``).
- ``dalle2``: size only.
- ``gpt_image``: quality remapped from ``standard|hd|low|medium|high`` to
  ``low|medium|high``; anything else becomes ``high``. The remapping tracks
  the provider's currently accepted vocabulary and must be revalidated when
  the provider changes it.

Failure semantics:
- A body without ``url`` and ``b64_json`` raises :class:`MissingImageDataError`.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx

from ..base.errors import MissingImageDataError
from ..base.http import post_json
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import DispatchOptions, ModelDescriptor, NormalizedResponse
from ..base.timeouts import timeout_for
from ..config import get_config
from ..config.defaults import DALLE3_DEFAULT_QUALITY, DALLE3_DEFAULT_STYLE, GPT_IMAGE_DEFAULT_QUALITY
from .chat_helpers import build_headers

ERROR_PREFIX = "Image generation failed"
DATA_URL_PREFIX = "data:image/png;base64,"

GPT_IMAGE_QUALITY_MAP: Mapping[str, str] = MappingProxyType(
    {
        "standard": "medium",
        "hd": "high",
        "low": "low",
        "medium": "medium",
        "high": "high",
    }
)

_logger = get_logger("openai.image")


def map_gpt_image_quality(quality: Optional[str]) -> str:
    """Return the gpt-image quality for a caller-supplied value."""
    if not isinstance(quality, str):
        return GPT_IMAGE_DEFAULT_QUALITY
    return GPT_IMAGE_QUALITY_MAP.get(quality.strip().lower(), GPT_IMAGE_DEFAULT_QUALITY)


def build_payload(descriptor: ModelDescriptor, prompt: str, options: DispatchOptions) -> Dict[str, Any]:
    """Build the generation payload for the descriptor's image profile."""
    payload: Dict[str, Any] = {
        "model": descriptor.wire_model,
        "prompt": prompt,
        "n": 1,
        "size": options.image_size or get_config()["image_size"],
    }
    if descriptor.image_profile == "dalle3":
        payload["quality"] = options.image_quality or DALLE3_DEFAULT_QUALITY
        payload["style"] = options.image_style or DALLE3_DEFAULT_STYLE
    elif descriptor.image_profile == "gpt_image":
        payload["quality"] = map_gpt_image_quality(options.image_quality)
    return payload


def normalize_response(descriptor: ModelDescriptor, body: Mapping[str, Any], prompt: str) -> NormalizedResponse:
    """Map an images body to the normalized response shape.

    Raises:
        MissingImageDataError: neither ``url`` nor ``b64_json`` is present.
    """
    data = body.get("data")
    item = data[0] if isinstance(data, list) and data and isinstance(data[0], Mapping) else {}
    url = item.get("url")
    b64 = item.get("b64_json")
    log_event(
        _logger,
        "image.response",
        LogContext(provider=descriptor.provider, model=descriptor.id, modality="image"),
        created=body.get("created"),
        data_count=len(data) if isinstance(data, list) else 0,
        has_url=bool(url),
        has_b64=bool(b64),
    )
    if url:
        content = str(url)
    elif b64:
        content = f"{DATA_URL_PREFIX}{b64}"
    else:
        log_event(
            _logger,
            "image.response.invalid",
            LogContext(provider=descriptor.provider, model=descriptor.id, modality="image"),
            level=logging.ERROR,
            fields=sorted(body.keys()),
        )
        raise MissingImageDataError(descriptor.id, descriptor.provider)
    return NormalizedResponse(
        content=content,
        type="image",
        model=descriptor.id,
        provider=descriptor.provider,
        revised_prompt=item.get("revised_prompt") or None,
        prompt=prompt,
    )


def image_impl(
    descriptor: ModelDescriptor,
    prompt: str,
    api_key: str,
    options: DispatchOptions,
    *,
    client: Optional[httpx.Client] = None,
) -> NormalizedResponse:
    """Generate one image and return the normalized result."""
    body = post_json(
        descriptor,
        headers=build_headers(api_key),
        payload=build_payload(descriptor, prompt, options),
        timeout=timeout_for(descriptor),
        operation="image",
        error_prefix=ERROR_PREFIX,
        client=client,
    )
    return normalize_response(descriptor, body, prompt)


__all__ = [
    "DATA_URL_PREFIX",
    "GPT_IMAGE_QUALITY_MAP",
    "build_payload",
    "image_impl",
    "map_gpt_image_quality",
    "normalize_response",
]
