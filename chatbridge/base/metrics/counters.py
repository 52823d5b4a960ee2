"""Provider invocation counters and the process-wide counter registry.

Re-exports the one-class-per-file implementations from ``counters_parts`` and
keeps a registry with one :class:`ProviderInvocationCounters` per provider so
the dispatcher, the credential store and the usage report observe the same
numbers.
"""
from __future__ import annotations

from threading import RLock
from typing import Dict

from .counters_parts import (
    LatencyStatsSnapshot,
    ProviderCountersSnapshot,
    ProviderInvocationCounters,
)

_REGISTRY: Dict[str, ProviderInvocationCounters] = {}
_LOCK = RLock()


def get_counters(provider: str) -> ProviderInvocationCounters:
    """Return (creating on first use) the counters for ``provider``."""
    with _LOCK:
        counters = _REGISTRY.get(provider)
        if counters is None:
            counters = ProviderInvocationCounters(provider)
            _REGISTRY[provider] = counters
        return counters


def all_counters() -> Dict[str, ProviderInvocationCounters]:
    """Return a shallow copy of the registry keyed by provider."""
    with _LOCK:
        return dict(_REGISTRY)


def reset_counters() -> None:
    """Drop every registered counter (tests and long-running shells)."""
    with _LOCK:
        _REGISTRY.clear()


__all__ = [
    "LatencyStatsSnapshot",
    "ProviderCountersSnapshot",
    "ProviderInvocationCounters",
    "all_counters",
    "get_counters",
    "reset_counters",
]
