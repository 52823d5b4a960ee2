"""Unified configuration layer for chatbridge.

Goals
-----
* Centralize defaults (encryption secret, database path, image size).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by CHATBRIDGE_CONFIG_FILE
    3. Environment variables (e.g. ENCRYPTION_KEY, CHATBRIDGE_DB_PATH)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_config()``.

External Config File (Optional)
-------------------------------
If CHATBRIDGE_CONFIG_FILE is set to a path, we attempt to load JSON first and
fall back to YAML. Structure example:

```
encryption_key: a-long-random-secret-of-at-least-32-chars
database_path: ~/.local/share/chatbridge/chatbridge.db
image_size: 1792x1024
```

Public API
----------
* get_config(overrides: dict | None = None) -> dict
* load_dotenv_once() -> None
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_DB_FILENAME, DEFAULT_ENCRYPTION_KEY, DEFAULT_IMAGE_SIZE
from .env import is_placeholder


DEFAULTS: Dict[str, Any] = {
    "encryption_key": DEFAULT_ENCRYPTION_KEY,
    "database_path": str(Path.home() / ".chatbridge" / DEFAULT_DB_FILENAME),
    "image_size": DEFAULT_IMAGE_SIZE,
}

# config field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "encryption_key": "ENCRYPTION_KEY",
    "database_path": "CHATBRIDGE_DB_PATH",
    "image_size": "CHATBRIDGE_IMAGE_SIZE",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if they are
    unset or hold placeholder values.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("CHATBRIDGE_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val:
            out[field] = val
    return out


def get_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= {k: v for k, v in _load_external_config().items() if k in DEFAULTS}
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def reset_config_cache() -> None:
    """Forget the cached external config file and the .env loaded flag."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "get_config",
    "load_dotenv_once",
    "reset_config_cache",
]
