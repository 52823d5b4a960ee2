"""Provider counters snapshot dataclass.

Immutable snapshot of provider invocation counters, designed for serialization
and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, Any

from .latency_stats_snapshot import LatencyStatsSnapshot


@dataclass(frozen=True)
class ProviderCountersSnapshot:
    """Immutable point-in-time snapshot of provider invocation counters.

    Includes dispatch outcomes, classified failure counts, token totals,
    credential fallbacks and latency stats.
    """

    provider: str
    total: int
    success: int
    failure: int
    timeout: int
    in_flight: int
    credential_fallback: int
    prompt_tokens: int
    completion_tokens: int
    failure_by_code: Dict[str, int]
    latency: LatencyStatsSnapshot
    generated_at_ms: int

    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation suitable for JSON serialization."""
        return asdict(self)


__all__ = ["ProviderCountersSnapshot"]
