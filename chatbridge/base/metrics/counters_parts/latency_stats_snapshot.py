"""Latency statistics snapshot dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LatencyStatsSnapshot:
    """Immutable snapshot of aggregated dispatch latency.

    Attributes:
        count: Number of finished dispatches with recorded latency.
        total_ms: Sum of all observed latencies in milliseconds.
        min_ms: Minimum observed latency (ms) or None if no samples.
        max_ms: Maximum observed latency (ms) or None if no samples.
        avg_ms: Arithmetic mean (ms) or None if no samples.
    """

    count: int
    total_ms: int
    min_ms: Optional[int]
    max_ms: Optional[int]
    avg_ms: Optional[float]


__all__ = ["LatencyStatsSnapshot"]
