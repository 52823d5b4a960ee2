"""Static model registry.

The model table is data, not code branches: one immutable mapping from logical
model id to :class:`ModelDescriptor`, built once at import time. Every lookup
is a pure read; unknown ids are a client input fault
(:class:`UnsupportedModelError`), never a provider error.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

from ..config.defaults import (
    ANTHROPIC_MESSAGES_ENDPOINT,
    OPENAI_CHAT_ENDPOINT,
    OPENAI_IMAGES_ENDPOINT,
)
from .errors import UnsupportedModelError
from .models import Modality, ModelDescriptor

SUPPORTED_PROVIDERS: Tuple[str, ...] = ("openai", "anthropic")


def _openai_chat(model_id: str, name: str) -> ModelDescriptor:
    return ModelDescriptor(
        id=model_id,
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        wire_model=model_id,
        modality="text",
        display_name=name,
    )


def _openai_image(model_id: str, name: str, profile: str, *, extended_timeout: bool = False) -> ModelDescriptor:
    return ModelDescriptor(
        id=model_id,
        provider="openai",
        endpoint=OPENAI_IMAGES_ENDPOINT,
        wire_model=model_id,
        modality="image",
        display_name=name,
        image_profile=profile,  # type: ignore[arg-type]
        extended_timeout=extended_timeout,
    )


def _anthropic(model_id: str, wire_model: str, name: str) -> ModelDescriptor:
    return ModelDescriptor(
        id=model_id,
        provider="anthropic",
        endpoint=ANTHROPIC_MESSAGES_ENDPOINT,
        wire_model=wire_model,
        modality="text",
        display_name=name,
    )


_DESCRIPTORS: Tuple[ModelDescriptor, ...] = (
    _openai_chat("gpt-3.5-turbo", "GPT-3.5 Turbo"),
    _openai_chat("gpt-4", "GPT-4"),
    _openai_chat("gpt-4-turbo-preview", "GPT-4 Turbo"),
    _openai_image("dall-e-3", "DALL-E 3", "dalle3"),
    _openai_image("dall-e-2", "DALL-E 2", "dalle2"),
    _openai_image("gpt-image-1", "GPT-Image-1", "gpt_image", extended_timeout=True),
    _anthropic("claude-3-sonnet", "claude-3-sonnet-20240229", "Claude 3 Sonnet"),
    _anthropic("claude-3-opus", "claude-3-opus-20240229", "Claude 3 Opus"),
    _anthropic("claude-3-haiku", "claude-3-haiku-20240307", "Claude 3 Haiku"),
)

MODEL_TABLE: Mapping[str, ModelDescriptor] = MappingProxyType({d.id: d for d in _DESCRIPTORS})


def resolve(model_id: str) -> ModelDescriptor:
    """Return the descriptor for ``model_id``.

    Raises:
        UnsupportedModelError: when the id is not in the table.
    """
    try:
        return MODEL_TABLE[model_id]
    except (KeyError, TypeError):
        raise UnsupportedModelError(model_id) from None


def list_models() -> List[ModelDescriptor]:
    """Return every descriptor in table order (a fresh list on each call)."""
    return list(MODEL_TABLE.values())


def iter_models(provider: Optional[str] = None) -> Iterator[ModelDescriptor]:
    """Yield descriptors, optionally restricted to one provider."""
    for descriptor in MODEL_TABLE.values():
        if provider is None or descriptor.provider == provider:
            yield descriptor


def validate(model_id: str) -> bool:
    """Return True when ``model_id`` is a supported model."""
    return isinstance(model_id, str) and model_id in MODEL_TABLE


def model_type(model_id: str) -> Optional[Modality]:
    """Return the modality of ``model_id`` or None when unknown."""
    descriptor = MODEL_TABLE.get(model_id) if isinstance(model_id, str) else None
    return descriptor.modality if descriptor else None


def is_image_model(model_id: str) -> bool:
    return model_type(model_id) == "image"


def display_name(model_id: str) -> str:
    """Return the human display name, or the id itself when unknown."""
    descriptor = MODEL_TABLE.get(model_id) if isinstance(model_id, str) else None
    return descriptor.display_name if descriptor else model_id


__all__ = [
    "MODEL_TABLE",
    "SUPPORTED_PROVIDERS",
    "display_name",
    "is_image_model",
    "iter_models",
    "list_models",
    "model_type",
    "resolve",
    "validate",
]
