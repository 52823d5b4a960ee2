"""Image response that carried neither a URL nor inline base64 data."""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class MissingImageDataError(ProviderError):
    """Hard failure for image dispatch; never replaced by an empty image."""

    def __init__(self, model: Optional[str] = None, provider: str = "openai") -> None:
        super().__init__(
            ErrorCode.INVALID_RESPONSE,
            f"Image generation failed for {model or 'image model'}: no image URL or data found in API response",
            provider,
            model,
            operation="image",
        )


__all__ = ["MissingImageDataError"]
