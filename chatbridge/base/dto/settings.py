"""Pydantic DTO validating generic settings writes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

SETTING_KEY_PATTERN = r"^[A-Za-z0-9_-]+$"


class SettingDTO(BaseModel):
    """A single ``key = value`` setting.

    Keys are 1 to 100 characters of letters, digits, ``_`` or ``-``. Values
    of any scalar type are stored as text.
    """

    key: str = Field(..., min_length=1, max_length=100, pattern=SETTING_KEY_PATTERN)
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


__all__ = ["SETTING_KEY_PATTERN", "SettingDTO"]
