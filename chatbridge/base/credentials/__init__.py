"""Credential encryption and storage."""

from .cipher import decrypt, derive_key, encrypt
from .key_resolution import KeyResolution
from .store import CredentialStore

__all__ = [
    "CredentialStore",
    "KeyResolution",
    "decrypt",
    "derive_key",
    "encrypt",
]
