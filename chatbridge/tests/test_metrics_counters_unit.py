"""Focused tests for ProviderInvocationCounters behavior.

Covers lifecycle counters, latency aggregation, failure code bucketing,
token sums, snapshot reset semantics and the per-provider registry.
"""
from __future__ import annotations

from chatbridge.base.metrics import (
    ProviderInvocationCounters,
    all_counters,
    get_counters,
    reset_counters,
)


def test_counters_lifecycle_and_latency_aggregation():
    c = ProviderInvocationCounters(provider="openai")

    c.record_start()
    c.record_start()
    c.record_start()
    c.record_success(latency_ms=120, prompt_tokens=10, completion_tokens=5)
    c.record_failure("rate_limit", latency_ms=80)
    c.record_timeout()
    c.record_credential_fallback()

    snap = c.snapshot(reset=False)
    assert snap.provider == "openai"
    assert snap.total == 3
    assert snap.success == 1
    assert snap.failure == 1
    assert snap.timeout == 1
    assert snap.in_flight == 0
    assert snap.credential_fallback == 1
    assert snap.failure_by_code == {"rate_limit": 1}
    assert (snap.prompt_tokens, snap.completion_tokens) == (10, 5)

    lat = snap.latency
    assert lat.count == 2 and lat.total_ms == 200
    assert lat.min_ms == 80 and lat.max_ms == 120
    assert lat.avg_ms == 100


def test_snapshot_reset_preserves_in_flight():
    c = ProviderInvocationCounters(provider="anthropic")
    c.record_start()
    c.record_start()
    c.record_success(latency_ms=5)
    first = c.snapshot(reset=True)
    assert first.total == 2 and first.in_flight == 1

    second = c.snapshot()
    assert second.total == 0 and second.success == 0
    assert second.in_flight == 1
    assert second.latency.count == 0 and second.latency.avg_ms is None


def test_as_dict_is_json_friendly():
    c = ProviderInvocationCounters(provider="openai")
    c.record_start()
    c.record_failure("auth")
    d = c.as_dict()
    assert d["provider"] == "openai"
    assert d["failure_by_code"] == {"auth": 1}
    assert d["latency"]["count"] == 0


def test_negative_latency_is_ignored():
    c = ProviderInvocationCounters(provider="openai")
    c.record_start()
    c.record_success(latency_ms=-1)
    assert c.snapshot().latency.count == 0


def test_registry_returns_shared_instances():
    a = get_counters("openai")
    assert get_counters("openai") is a
    assert set(all_counters()) == {"openai"}
    reset_counters()
    assert all_counters() == {}
    assert get_counters("openai") is not a


def test_monotonic_ms_is_non_decreasing():
    t1 = ProviderInvocationCounters.monotonic_ms()
    t2 = ProviderInvocationCounters.monotonic_ms()
    assert t2 >= t1
