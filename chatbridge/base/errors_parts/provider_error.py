"""
Structured provider error exception type.

Wraps transport and provider failures with a normalized `ErrorCode` for
consistent handling and structured logging.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .gateway_error import GatewayError


class ProviderError(GatewayError):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for end users.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Logical model id associated with the failure.
        operation: Translator entry point that failed (``"chat"``/``"image"``).
        status_code: HTTP status returned by the provider, when any.
        raw: Optional original exception, kept server side for diagnostics.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        provider: str,
        model: Optional[str] = None,
        *,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        raw: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, model=model, provider=provider, operation=operation)
        self.code = code
        self.status_code = status_code
        self.raw = raw

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
