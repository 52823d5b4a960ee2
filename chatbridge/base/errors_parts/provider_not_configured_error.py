"""No credential available for the resolved provider."""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .gateway_error import GatewayError

_DISPLAY_NAMES = {"openai": "OpenAI", "anthropic": "Anthropic"}


class ProviderNotConfiguredError(GatewayError):
    """Raised when neither a stored nor an environment key exists.

    Detected before any outbound call is attempted.
    """

    code = ErrorCode.NOT_CONFIGURED

    def __init__(self, provider: str, *, model: Optional[str] = None, operation: Optional[str] = None) -> None:
        label = _DISPLAY_NAMES.get(provider, provider)
        super().__init__(
            f"{label} API key not configured",
            model=model,
            provider=provider,
            operation=operation,
        )


__all__ = ["ProviderNotConfiguredError"]
