"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used across translators, the dispatcher
and the credential store. Values are lowercase snake_case and are considered a
stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    NOT_CONFIGURED = "not_configured"
    INVALID_RESPONSE = "invalid_response"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
