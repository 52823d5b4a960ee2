"""chatbridge.config.defaults
==========================

Central place for small, stable default values used across the chatbridge
package. These defaults can be overridden via environment variables or an
external configuration file, but provide sensible fallbacks for local
development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep provider adapters and the service layer free of magic literals.

This module intentionally avoids importing from other chatbridge packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Provider endpoints ----
OPENAI_CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
OPENAI_IMAGES_ENDPOINT = "https://api.openai.com/v1/images/generations"
ANTHROPIC_MESSAGES_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_API_VERSION = "2023-06-01"


# ---- Request defaults ----
DEFAULT_TEMPERATURE = 0.7
# Per-provider completion budget when the caller does not set max_tokens.
DEFAULT_MAX_TOKENS = {
    "openai": 2000,
    "anthropic": 1024,
}
DEFAULT_IMAGE_SIZE = "1024x1024"
DALLE3_DEFAULT_QUALITY = "standard"
DALLE3_DEFAULT_STYLE = "natural"
GPT_IMAGE_DEFAULT_QUALITY = "high"


# ---- Timeouts (seconds) ----
TEXT_TIMEOUT_SECONDS = 30.0
IMAGE_TIMEOUT_SECONDS = 60.0
# gpt-image-1 synthesis latency is highly variable.
IMAGE_EXTENDED_TIMEOUT_SECONDS = 300.0


# ---- Credentials ----
DEFAULT_ENCRYPTION_KEY = "default-key-change-in-production-32-chars"  # pragma: allowlist secret - documented insecure default
MIN_ENCRYPTION_KEY_LENGTH = 32
API_KEY_MIN_LENGTH = 10
API_KEY_MAX_LENGTH = 200


# ---- Request bounds ----
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0
MAX_TOKENS_MIN = 1
MAX_TOKENS_MAX = 8000


# ---- SQLite config (infrastructure) ----
DEFAULT_DB_FILENAME = "chatbridge.db"
# Standard busy timeout to mitigate lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


__all__ = [
    "OPENAI_CHAT_ENDPOINT",
    "OPENAI_IMAGES_ENDPOINT",
    "ANTHROPIC_MESSAGES_ENDPOINT",
    "ANTHROPIC_API_VERSION",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_IMAGE_SIZE",
    "DALLE3_DEFAULT_QUALITY",
    "DALLE3_DEFAULT_STYLE",
    "GPT_IMAGE_DEFAULT_QUALITY",
    "TEXT_TIMEOUT_SECONDS",
    "IMAGE_TIMEOUT_SECONDS",
    "IMAGE_EXTENDED_TIMEOUT_SECONDS",
    "DEFAULT_ENCRYPTION_KEY",
    "MIN_ENCRYPTION_KEY_LENGTH",
    "API_KEY_MIN_LENGTH",
    "API_KEY_MAX_LENGTH",
    "TEMPERATURE_MIN",
    "TEMPERATURE_MAX",
    "MAX_TOKENS_MIN",
    "MAX_TOKENS_MAX",
    "DEFAULT_DB_FILENAME",
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
