"""Internal signal that a stored credential could not be decrypted."""
from __future__ import annotations


class DecryptionError(ValueError):
    """Raised by the credential cipher; converted into an env fallback.

    Never propagates past the credential store.
    """


__all__ = ["DecryptionError"]
