"""Transport failure or non-success response from a provider."""
from __future__ import annotations

from .provider_error import ProviderError


class ProviderCallError(ProviderError):
    """Raised by translators; carries the provider's message when present.

    ``message`` never embeds the raw response body; the body is only logged
    server side at debug level.
    """


__all__ = ["ProviderCallError"]
