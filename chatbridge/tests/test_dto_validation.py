"""Tests for chatbridge.base.dto.

Covers option bounds, API key submissions and setting keys.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chatbridge.base.dto import ApiKeyDTO, ChatOptionsDTO, SettingDTO
from chatbridge.base.models import DispatchOptions


@pytest.mark.parametrize(
    "field,value",
    [
        ("temperature", -0.1),
        ("temperature", 2.5),
        ("max_tokens", 0),
        ("max_tokens", 8001),
        ("image_size", "large"),
        ("image_quality", ""),
        ("temperature", True),
        ("max_tokens", False),
        ("max_tokens", 5.0),
    ],
)
def test_option_bounds(field, value):
    with pytest.raises(ValidationError):
        ChatOptionsDTO(**{field: value})


def test_option_bounds_are_inclusive():
    opts = ChatOptionsDTO(temperature=2.0, max_tokens=8000, image_size="1792x1024")
    assert opts.temperature == 2.0 and opts.max_tokens == 8000


def test_api_key_dto_normalizes_provider_and_keeps_key_verbatim():
    dto = ApiKeyDTO(provider=" OpenAI ", api_key="sk-test 1234567890")
    assert dto.provider == "openai"
    assert dto.api_key == "sk-test 1234567890"


@pytest.mark.parametrize("key", ["short", "x" * 201, "sk-ünicode-key-123", "sk-tab\tkey-12345"])
def test_api_key_dto_rejects_bad_keys(key):
    with pytest.raises(ValidationError):
        ApiKeyDTO(provider="openai", api_key=key)


def test_api_key_dto_rejects_unknown_provider():
    with pytest.raises(ValidationError):
        ApiKeyDTO(provider="gemini", api_key="k" * 20)


def test_setting_dto_key_pattern_and_value_stringify():
    assert SettingDTO(key="max_tokens", value=512).value == "512"
    assert SettingDTO(key="dark-mode", value=True).value == "true"
    for bad in ("", "has space", "x" * 101, "semi;colon"):
        with pytest.raises(ValidationError):
            SettingDTO(key=bad, value="v")


def test_options_convert_to_dispatch_options():
    opts = ChatOptionsDTO(temperature=0.0, max_tokens=128)
    assert opts.to_options() == DispatchOptions(temperature=0.0, max_tokens=128)


def test_numeric_strings_still_parse():
    opts = ChatOptionsDTO(temperature="0.2", max_tokens="300")
    assert opts.temperature == 0.2 and opts.max_tokens == 300
