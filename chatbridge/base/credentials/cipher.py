"""Symmetric cipher for stored provider credentials.

Scheme
------
- Key: SHA-256 digest of the configured secret (32 bytes, AES-256). The same
  secret always derives the same key; a new secret makes every previously
  stored ciphertext undecryptable.
- Cipher: AES-256-CBC with PKCS7 padding and a random 16-byte IV per call.
- Stored text: ``iv_hex ":" ciphertext_hex``.

External dependencies
---------------------
- ``cryptography`` (hazmat primitives) for AES and PKCS7.

Failure semantics
-----------------
``decrypt`` raises :class:`DecryptionError` for malformed text, bad padding,
non-UTF-8 output or output that is not printable ASCII (plaintext keys are
printable ASCII by contract, so garbage from a wrong key is rejected). The
error message never contains key material.
"""
from __future__ import annotations

import hashlib
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import DecryptionError

IV_BYTES = 16
_BLOCK_BITS = algorithms.AES.block_size


def derive_key(secret: str) -> bytes:
    """Return the 32-byte AES key for ``secret`` (deterministic one-way hash)."""
    return hashlib.sha256(secret.encode("utf-8")).digest()


def _is_printable_ascii(text: str) -> bool:
    return all(0x20 <= ord(ch) <= 0x7E for ch in text)


def encrypt(plaintext: str, key: bytes) -> str:
    """Encrypt ``plaintext`` and return ``iv_hex:ciphertext_hex``.

    Raises:
        ValueError: when ``plaintext`` is empty or not printable ASCII.
    """
    if not plaintext or not _is_printable_ascii(plaintext):
        raise ValueError("credential must be non-empty printable ASCII")
    iv = os.urandom(IV_BYTES)
    padder = padding.PKCS7(_BLOCK_BITS).padder()
    padded = padder.update(plaintext.encode("ascii")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return f"{iv.hex()}:{ciphertext.hex()}"


def decrypt(stored: str, key: bytes) -> str:
    """Decrypt ``iv_hex:ciphertext_hex`` text produced by :func:`encrypt`.

    Raises:
        DecryptionError: when the text cannot be decrypted with ``key``.
    """
    iv_hex, sep, ct_hex = (stored or "").partition(":")
    if not sep:
        raise DecryptionError("malformed credential encoding")
    try:
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(ct_hex)
        if len(iv) != IV_BYTES or not ciphertext or len(ciphertext) % IV_BYTES:
            raise ValueError("bad lengths")
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        plaintext = (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
    except ValueError:
        raise DecryptionError("credential could not be decrypted") from None
    if not plaintext or not _is_printable_ascii(plaintext):
        raise DecryptionError("credential could not be decrypted")
    return plaintext


__all__ = ["IV_BYTES", "decrypt", "derive_key", "encrypt"]
