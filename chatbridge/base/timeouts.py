"""Unified timeout values for outbound provider calls.

This module centralizes the per-call timeouts used by the translators. There
is no user-supplied cancellation: the only cancellation boundary of a dispatch
is the fixed timeout chosen here for the model family.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the overrides change). Supported environment
    variables (all optional):
        CHATBRIDGE_TIMEOUT_TEXT_SECONDS
        CHATBRIDGE_TIMEOUT_IMAGE_SECONDS
        CHATBRIDGE_TIMEOUT_IMAGE_EXTENDED_SECONDS

timeout_for(descriptor)
    Picks the timeout for a model descriptor: text, image, or the extended
    image budget for families with highly variable synthesis latency.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config.defaults import (
    IMAGE_EXTENDED_TIMEOUT_SECONDS,
    IMAGE_TIMEOUT_SECONDS,
    TEXT_TIMEOUT_SECONDS,
)

if TYPE_CHECKING:
    from .models import ModelDescriptor


_ENV_NAMES = (
    "CHATBRIDGE_TIMEOUT_TEXT_SECONDS",
    "CHATBRIDGE_TIMEOUT_IMAGE_SECONDS",
    "CHATBRIDGE_TIMEOUT_IMAGE_EXTENDED_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        text_timeout_seconds: Timeout for chat completions.
        image_timeout_seconds: Timeout for ordinary image generations.
        image_extended_timeout_seconds: Timeout for image families flagged
            with ``extended_timeout`` in the registry.
    """

    text_timeout_seconds: float = TEXT_TIMEOUT_SECONDS
    image_timeout_seconds: float = IMAGE_TIMEOUT_SECONDS
    image_extended_timeout_seconds: float = IMAGE_EXTENDED_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        text_timeout_seconds=_parse_env_float(_ENV_NAMES[0], TEXT_TIMEOUT_SECONDS),
        image_timeout_seconds=_parse_env_float(_ENV_NAMES[1], IMAGE_TIMEOUT_SECONDS),
        image_extended_timeout_seconds=_parse_env_float(_ENV_NAMES[2], IMAGE_EXTENDED_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


def timeout_for(descriptor: "ModelDescriptor") -> float:
    """Return the fixed per-call timeout for a model descriptor."""
    cfg = get_timeout_config()
    if descriptor.modality == "text":
        return cfg.text_timeout_seconds
    if descriptor.extended_timeout:
        return cfg.image_extended_timeout_seconds
    return cfg.image_timeout_seconds


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "timeout_for",
]
