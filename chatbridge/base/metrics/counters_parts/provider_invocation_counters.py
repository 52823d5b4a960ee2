"""Thread-safe in-memory counters for provider dispatches."""

from __future__ import annotations

from threading import RLock
from typing import Dict, Optional, Any
import time

from .latency_stats_snapshot import LatencyStatsSnapshot
from .provider_counters_snapshot import ProviderCountersSnapshot


class ProviderInvocationCounters:
    """Thread-safe in-memory counters for one provider.

    The dispatcher records ``start`` before the translator runs and exactly one
    of ``success``/``failure``/``timeout`` afterwards. The credential store
    records environment fallbacks separately; they are not dispatches.
    """

    __slots__ = (
        "_provider",
        "_lock",
        "_total",
        "_success",
        "_failure",
        "_timeout",
        "_in_flight",
        "_credential_fallback",
        "_prompt_tokens",
        "_completion_tokens",
        "_failure_by_code",
        "_latency_count",
        "_latency_total",
        "_latency_min",
        "_latency_max",
    )

    def __init__(self, provider: str):
        self._provider = provider
        self._lock = RLock()
        self._reset_locked()
        self._in_flight = 0

    def _reset_locked(self) -> None:
        self._total = 0
        self._success = 0
        self._failure = 0
        self._timeout = 0
        self._credential_fallback = 0
        self._prompt_tokens = 0
        self._completion_tokens = 0
        self._failure_by_code: Dict[str, int] = {}
        self._latency_count = 0
        self._latency_total = 0
        self._latency_min: Optional[int] = None
        self._latency_max: Optional[int] = None

    @staticmethod
    def monotonic_ms() -> int:
        """Return current monotonic time in milliseconds for latency measurement."""
        return int(time.monotonic() * 1000)

    # -------------------------- Record Methods -------------------------- #
    def record_start(self) -> None:
        """Record the start of a dispatch."""
        with self._lock:
            self._total += 1
            self._in_flight += 1

    def record_success(
        self,
        latency_ms: int,
        prompt_tokens: Optional[int] = None,
        completion_tokens: Optional[int] = None,
    ) -> None:
        """Record a successful completion and any reported token usage."""
        with self._lock:
            self._success += 1
            self._in_flight = max(0, self._in_flight - 1)
            self._prompt_tokens += prompt_tokens or 0
            self._completion_tokens += completion_tokens or 0
            self._update_latency(latency_ms)

    def record_failure(self, error_code: str, latency_ms: Optional[int] = None) -> None:
        """Record a failed dispatch under its canonical error code."""
        with self._lock:
            self._failure += 1
            self._failure_by_code[error_code] = self._failure_by_code.get(error_code, 0) + 1
            self._in_flight = max(0, self._in_flight - 1)
            if latency_ms is not None:
                self._update_latency(latency_ms)

    def record_timeout(self, latency_ms: Optional[int] = None) -> None:
        """Record a dispatch that hit its fixed timeout."""
        with self._lock:
            self._timeout += 1
            self._in_flight = max(0, self._in_flight - 1)
            if latency_ms is not None:
                self._update_latency(latency_ms)

    def record_credential_fallback(self) -> None:
        """Record a stored key that could not be decrypted."""
        with self._lock:
            self._credential_fallback += 1

    def _update_latency(self, latency_ms: int) -> None:
        if latency_ms < 0:
            return
        if self._latency_min is None or latency_ms < self._latency_min:
            self._latency_min = latency_ms
        if self._latency_max is None or latency_ms > self._latency_max:
            self._latency_max = latency_ms
        self._latency_count += 1
        self._latency_total += latency_ms

    # -------------------------- Snapshot API -------------------------- #
    def snapshot(self, reset: bool = False) -> ProviderCountersSnapshot:
        """Return an immutable snapshot of current counters.

        Args:
            reset: If True, zero counters & latency aggregates after creating
                the snapshot (``in_flight`` is preserved).
        """
        with self._lock:
            avg_ms = self._latency_total / self._latency_count if self._latency_count else None
            snapshot = ProviderCountersSnapshot(
                provider=self._provider,
                total=self._total,
                success=self._success,
                failure=self._failure,
                timeout=self._timeout,
                in_flight=self._in_flight,
                credential_fallback=self._credential_fallback,
                prompt_tokens=self._prompt_tokens,
                completion_tokens=self._completion_tokens,
                failure_by_code=dict(self._failure_by_code),
                latency=LatencyStatsSnapshot(
                    count=self._latency_count,
                    total_ms=self._latency_total,
                    min_ms=self._latency_min,
                    max_ms=self._latency_max,
                    avg_ms=avg_ms,
                ),
                generated_at_ms=self.monotonic_ms(),
            )
            if reset:
                self._reset_locked()
            return snapshot

    def as_dict(self, reset: bool = False) -> Dict[str, Any]:
        """Convenience wrapper returning snapshot converted to dictionary."""
        return self.snapshot(reset=reset).to_dict()


__all__ = ["ProviderInvocationCounters"]
