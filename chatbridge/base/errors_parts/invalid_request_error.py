"""Malformed or semantically invalid caller input (client input fault)."""
from __future__ import annotations

from .error_code import ErrorCode
from .gateway_error import GatewayError


class InvalidRequestError(GatewayError):
    """Raised before any network call when a request cannot be honoured."""

    code = ErrorCode.VALIDATION


__all__ = ["InvalidRequestError"]
