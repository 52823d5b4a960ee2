"""
Root exception type for every error the chatbridge core raises.

Carries the normalized shape callers rely on: a code, a human-readable
message, the logical model id, the provider and the failing operation.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .error_code import ErrorCode


class GatewayError(Exception):
    """Base class for normalized chatbridge errors.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable reason, safe to show to end users.
        model: Logical model id associated with the failure, when known.
        provider: Provider key (``"openai"``/``"anthropic"``), when known.
        operation: Name of the operation that failed (e.g. ``"chat"``).
    """

    code: ErrorCode = ErrorCode.UNKNOWN
    operation: str = "send"

    def __init__(
        self,
        message: str,
        *,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.model = model
        self.provider = provider
        if operation is not None:
            self.operation = operation

    def to_dict(self) -> Dict[str, Any]:
        """Return the externally visible error object (no raw payloads)."""
        return {
            "error": self.code.value,
            "operation": self.operation,
            "message": self.message,
            "model": self.model,
            "provider": self.provider,
        }

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


__all__ = ["GatewayError"]
