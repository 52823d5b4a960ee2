"""Unknown logical model id (client input fault)."""
from __future__ import annotations

from .error_code import ErrorCode
from .gateway_error import GatewayError


class UnsupportedModelError(GatewayError):
    """Raised when a model id is not present in the provider registry."""

    code = ErrorCode.UNSUPPORTED
    operation = "resolve"

    def __init__(self, model_id: str) -> None:
        super().__init__(f"Unsupported model: {model_id}", model=model_id)


__all__ = ["UnsupportedModelError"]
