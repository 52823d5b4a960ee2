"""chatbridge.config.env
=====================

Centralized environment variable mapping and helpers for provider credentials
and startup checks.

Purpose
-------
- Provide a single source of truth for mapping provider identifiers to the
  environment variables that hold their fallback API keys.
- Offer small utilities to look up those keys and to report weak or missing
  configuration at startup.

Failure Modes
-------------
- Lookups return ``None`` when a provider is unknown or no value is present.
- ``validate_environment`` never raises and never exits; findings are logged
  as warnings and returned to the caller.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional, Tuple

from .defaults import DEFAULT_ENCRYPTION_KEY, MIN_ENCRYPTION_KEY_LENGTH

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

ENCRYPTION_KEY_ENV = "ENCRYPTION_KEY"

RECOMMENDED_ENV_VARS: Tuple[str, ...] = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    ENCRYPTION_KEY_ENV,
)


_PLACEHOLDER_TOKENS = frozenset({"placeholder", "changeme", "change-me", "example", "xxx", "todo"})


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string is a template placeholder.

    Only whole values count: a bare token such as ``changeme`` or ``example``,
    a ``your-...`` / ``your_...`` hint, or an ``<...>`` marker. Real keys that
    merely contain one of those words are kept. Case-insensitive, ignores
    surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    if v in _PLACEHOLDER_TOKENS or v.startswith(("your-", "your_")):
        return True
    return len(v) > 2 and v.startswith("<") and v.endswith(">")


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the environment variable name for a provider, or None if unknown."""
    return ENV_MAP.get(provider.lower().strip()) if provider else None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when unknown or unset.
        Placeholder values are treated as unset.
    """
    from . import load_dotenv_once

    load_dotenv_once()
    name = get_env_var_name(provider or "")
    if not name:
        return None, None
    val = os.environ.get(name)
    if not val or is_placeholder(val):
        return None, None
    return val, name


def validate_environment() -> List[str]:
    """Check recommended configuration and log a warning per finding.

    The checks mirror what an operator needs before exposing the service:
    fallback provider keys, and a non-default encryption secret of adequate
    length.

    Returns
    -------
    List[str]
        Human-readable findings; empty when the environment looks complete.
    """
    from . import load_dotenv_once
    from ..base.logging import get_logger, log_event

    load_dotenv_once()
    logger = get_logger("chatbridge.config")
    findings: List[str] = []

    missing = [name for name in RECOMMENDED_ENV_VARS if not os.environ.get(name)]
    if missing:
        findings.append("missing recommended environment variables: " + ", ".join(missing))

    secret = os.environ.get(ENCRYPTION_KEY_ENV)
    if secret and len(secret) < MIN_ENCRYPTION_KEY_LENGTH:
        findings.append(
            f"{ENCRYPTION_KEY_ENV} should be at least {MIN_ENCRYPTION_KEY_LENGTH} characters"
        )
    if not secret or secret == DEFAULT_ENCRYPTION_KEY:
        findings.append(
            f"using the default encryption key; set {ENCRYPTION_KEY_ENV} for production"
        )

    for finding in findings:
        logger.warning(finding)
    log_event(logger, "env.validation", findings=len(findings))
    return findings


__all__ = [
    "ENV_MAP",
    "ENCRYPTION_KEY_ENV",
    "RECOMMENDED_ENV_VARS",
    "is_placeholder",
    "get_env_var_name",
    "resolve_provider_key",
    "validate_environment",
]
