"""Outcome of resolving a provider credential."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class KeyResolution:
    """Which source supplied a provider key, if any.

    Attributes:
        value: Plaintext key or ``None`` when the provider is not configured.
        source: ``"stored"``, ``"env"`` or ``None``.
        env_var: Environment variable name when ``source == "env"``.
        fallback: True when a stored key existed but could not be decrypted.
    """

    value: Optional[str]
    source: Optional[Literal["stored", "env"]] = None
    env_var: Optional[str] = None
    fallback: bool = False

    @property
    def configured(self) -> bool:
        return self.value is not None

    def __repr__(self) -> str:  # keep plaintext out of logs and tracebacks
        return (
            f"KeyResolution(configured={self.configured}, source={self.source!r}, "
            f"env_var={self.env_var!r}, fallback={self.fallback})"
        )


__all__ = ["KeyResolution"]
