"""Pydantic DTO validating an API key submission."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ...config.defaults import API_KEY_MAX_LENGTH, API_KEY_MIN_LENGTH

# Printable ASCII only; keys round-trip byte for byte.
API_KEY_PATTERN = r"^[\x20-\x7e]+$"


class ApiKeyDTO(BaseModel):
    """Provider credential as submitted by the settings collaborator.

    Attributes:
        provider: ``"openai"`` or ``"anthropic"`` (case-insensitive on input).
        api_key: Plaintext key, 10 to 200 printable ASCII characters. The
            value is stored exactly as given.
    """

    provider: Literal["openai", "anthropic"]
    api_key: str = Field(
        ...,
        min_length=API_KEY_MIN_LENGTH,
        max_length=API_KEY_MAX_LENGTH,
        pattern=API_KEY_PATTERN,
    )

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


__all__ = ["API_KEY_PATTERN", "ApiKeyDTO"]
