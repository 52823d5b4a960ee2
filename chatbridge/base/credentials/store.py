"""Encrypted credential store with environment fallback.

Purpose
-------
Own every provider API key persisted by chatbridge. Keys are encrypted with
:mod:`chatbridge.base.credentials.cipher` before they reach the ``api_keys``
table and are only decrypted in-process when a dispatch needs them.

Resolution order
----------------
1. Stored credential, decrypted with the key derived from the configured
   secret.
2. Provider environment variable (``OPENAI_API_KEY`` / ``ANTHROPIC_API_KEY``).
3. ``None``; the dispatcher treats this as "provider not configured".

A stored value that cannot be decrypted (typically because the secret
changed) is not an error: a ``credentials.fallback`` event is logged with a
reason tag only, the provider's fallback counter is incremented and
resolution continues with step 2.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ...config import get_config
from ...config.env import resolve_provider_key
from ...persistence.interfaces.repos import IUnitOfWork, StoredCredential
from ...persistence.sqlite import get_uow
from ..dto import ApiKeyDTO
from ..errors import DecryptionError, InvalidRequestError
from ..logging import LogContext, get_logger, log_event
from ..metrics import get_counters
from ..registry import SUPPORTED_PROVIDERS
from .cipher import decrypt, derive_key, encrypt
from .key_resolution import KeyResolution


def _normalize(provider: str) -> str:
    return (provider or "").strip().lower()


class CredentialStore:
    """Encrypts, persists and resolves provider API keys.

    Parameters
    ----------
    uow:
        Unit of Work exposing a ``keys`` repository. Defaults to the SQLite
        database from configuration.
    secret:
        Key-derivation secret. Defaults to the configured ``encryption_key``
        (``ENCRYPTION_KEY``). The derived key is fixed for the lifetime of
        the store.
    """

    def __init__(self, uow: Optional[IUnitOfWork] = None, *, secret: Optional[str] = None) -> None:
        self._uow = uow if uow is not None else get_uow()
        self._key = derive_key(secret if secret is not None else get_config()["encryption_key"])
        self._logger = get_logger("credentials")

    # -------------------------- Writes -------------------------- #
    def set_key(self, provider: str, plaintext: str) -> None:
        """Encrypt and upsert the key for ``provider``.

        Raises:
            InvalidRequestError: unknown provider or key outside 10-200
                printable ASCII characters.
        """
        try:
            dto = ApiKeyDTO(provider=provider, api_key=plaintext)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            raise InvalidRequestError(
                f"Invalid API key submission: {', '.join(fields) or 'input'}",
                provider=_normalize(provider) or None,
                operation="set_key",
            ) from None
        with self._uow as uow:
            uow.keys.upsert(dto.provider, encrypt(dto.api_key, self._key))
        log_event(self._logger, "credentials.set", LogContext(provider=dto.provider))

    def delete_key(self, provider: str) -> Dict[str, bool]:
        """Remove the stored key for ``provider``; returns ``{"removed": bool}``."""
        with self._uow as uow:
            removed = uow.keys.delete(_normalize(provider))
        return {"removed": removed}

    # -------------------------- Reads -------------------------- #
    def has_key(self, provider: str) -> bool:
        """Return True when a stored credential exists (never decrypts)."""
        with self._uow as uow:
            return uow.keys.get(_normalize(provider)) is not None

    def resolve_key(self, provider: str) -> Optional[str]:
        """Return the plaintext key for ``provider`` or ``None``.

        For in-process dispatch only; never hand the result to an external
        surface.
        """
        return self.get_resolution(provider).value

    def get_resolution(self, provider: str) -> KeyResolution:
        """Resolve ``provider`` through the stored value then the environment."""
        name = _normalize(provider)
        with self._uow as uow:
            row = uow.keys.get(name)

        fallback = False
        if row is not None:
            stored = self._try_decrypt(row)
            if stored is not None:
                return KeyResolution(value=stored, source="stored")
            fallback = True

        value, env_var = resolve_provider_key(name)
        if value:
            return KeyResolution(value=value, source="env", env_var=env_var, fallback=fallback)
        return KeyResolution(value=None, fallback=fallback)

    def credentials(self, *providers: str) -> Dict[str, str]:
        """Return ``{provider: key}`` for every resolvable provider requested.

        With no arguments all supported providers are tried.
        """
        out: Dict[str, str] = {}
        for provider in providers or SUPPORTED_PROVIDERS:
            value = self.resolve_key(provider)
            if value is not None:
                out[_normalize(provider)] = value
        return out

    def list_keys(self) -> Dict[str, Dict[str, Any]]:
        """Describe each supported provider without exposing key material.

        Returns ``{provider: {"is_set", "created_at", "updated_at"}}`` where
        the timestamps are ISO8601 strings or ``None``.
        """
        with self._uow as uow:
            rows = {row.provider: row for row in uow.keys.list_all()}
        out: Dict[str, Dict[str, Any]] = {}
        for provider in SUPPORTED_PROVIDERS:
            row = rows.get(provider)
            out[provider] = {
                "is_set": row is not None,
                "created_at": row.created_at.isoformat() if row else None,
                "updated_at": row.updated_at.isoformat() if row else None,
            }
        return out

    # -------------------------- Internals -------------------------- #
    def _try_decrypt(self, row: StoredCredential) -> Optional[str]:
        """Decrypt a stored row; on failure record the fallback and return None."""
        try:
            return decrypt(row.encrypted_key, self._key)
        except DecryptionError:
            get_counters(row.provider).record_credential_fallback()
            log_event(
                self._logger,
                "credentials.fallback",
                LogContext(provider=row.provider),
                level=logging.WARNING,
                reason="undecryptable_stored_key",
            )
            return None


__all__ = ["CredentialStore"]
