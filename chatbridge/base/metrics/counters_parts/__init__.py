"""One-class-per-file parts for provider invocation counters metrics."""

from .latency_stats_snapshot import LatencyStatsSnapshot
from .provider_counters_snapshot import ProviderCountersSnapshot
from .provider_invocation_counters import ProviderInvocationCounters

__all__ = [
    "LatencyStatsSnapshot",
    "ProviderCountersSnapshot",
    "ProviderInvocationCounters",
]
