"""
Pydantic DTO for chat dispatch options.

Purpose
-------
Enforce the numeric bounds on ``temperature`` and ``max_tokens`` and the
shape of the image knobs so that out-of-range values are rejected as client
input faults rather than being forwarded to a provider.

External dependencies: Pydantic only (no network calls).

Failure semantics: validation either succeeds or raises
``pydantic.ValidationError``; the dispatcher converts it into
:class:`~chatbridge.base.errors.InvalidRequestError`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from ...config.defaults import MAX_TOKENS_MAX, MAX_TOKENS_MIN, TEMPERATURE_MAX, TEMPERATURE_MIN
from ..models import DispatchOptions


class ChatOptionsDTO(BaseModel):
    """Optional dispatch knobs with their accepted ranges.

    Parameters:
        temperature: Sampling temperature in ``[0, 2]``.
        max_tokens: Completion budget in ``[1, 8000]``.
        image_size: Provider size string such as ``"1024x1024"``.
        image_quality: Quality hint; remapped per image family.
        image_style: Style hint (``dall-e-3`` only).
    """

    temperature: Optional[float] = Field(default=None, ge=TEMPERATURE_MIN, le=TEMPERATURE_MAX)
    max_tokens: Optional[int] = Field(default=None, ge=MAX_TOKENS_MIN, le=MAX_TOKENS_MAX)
    image_size: Optional[str] = Field(default=None, pattern=r"^\d+x\d+$")
    image_quality: Optional[str] = Field(default=None, min_length=1, max_length=20)
    image_style: Optional[str] = Field(default=None, min_length=1, max_length=20)

    @field_validator("temperature", "max_tokens", mode="before")
    @classmethod
    def _numeric_only(cls, value: object, info: ValidationInfo) -> object:
        # Stored settings arrive as strings and still parse; bools never do.
        if isinstance(value, bool):
            raise ValueError(f"{info.field_name} must be a number, not a boolean")
        if info.field_name == "max_tokens" and isinstance(value, float):
            raise ValueError("max_tokens must be an integer")
        return value

    def to_options(self) -> DispatchOptions:
        return DispatchOptions(**self.model_dump())


__all__ = [
    "ChatOptionsDTO",
]
