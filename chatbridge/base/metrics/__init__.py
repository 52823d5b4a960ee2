"""Dispatch metrics package.

Exports per-provider invocation counters, their snapshots and the process-wide
counter registry used by the dispatcher and the credential store.
"""

from .counters import (
    LatencyStatsSnapshot,
    ProviderCountersSnapshot,
    ProviderInvocationCounters,
    all_counters,
    get_counters,
    reset_counters,
)

__all__ = [
    "LatencyStatsSnapshot",
    "ProviderCountersSnapshot",
    "ProviderInvocationCounters",
    "all_counters",
    "get_counters",
    "reset_counters",
]
