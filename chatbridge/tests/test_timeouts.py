from __future__ import annotations

from chatbridge.base.registry import resolve
from chatbridge.base.timeouts import TimeoutConfig, get_timeout_config, timeout_for


def test_defaults_per_model_family():
    assert timeout_for(resolve("gpt-4")) == 30.0
    assert timeout_for(resolve("claude-3-sonnet")) == 30.0
    assert timeout_for(resolve("dall-e-3")) == 60.0
    assert timeout_for(resolve("gpt-image-1")) == 300.0


def test_env_overrides_are_picked_up(monkeypatch):
    monkeypatch.setenv("CHATBRIDGE_TIMEOUT_TEXT_SECONDS", "12.5")
    monkeypatch.setenv("CHATBRIDGE_TIMEOUT_IMAGE_EXTENDED_SECONDS", "600")
    cfg = get_timeout_config()
    assert cfg.text_timeout_seconds == 12.5
    assert cfg.image_extended_timeout_seconds == 600.0
    assert cfg.image_timeout_seconds == TimeoutConfig().image_timeout_seconds


def test_invalid_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("CHATBRIDGE_TIMEOUT_TEXT_SECONDS", "abc")
    monkeypatch.setenv("CHATBRIDGE_TIMEOUT_IMAGE_SECONDS", "-4")
    cfg = get_timeout_config()
    assert cfg.text_timeout_seconds == 30.0
    assert cfg.image_timeout_seconds == 60.0
