from __future__ import annotations

import threading

from tokengate.infrastructure.auth.rate_limiter import FixedWindowRateLimiter

from conftest import FakeMonotonic


def _limiter(monotonic: FakeMonotonic, limit: int = 10, window: float = 900.0) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(limit=limit, window_seconds=window, clock=monotonic)


def test_eleventh_attempt_in_window_is_throttled(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic)

    decisions = [limiter.check("10.0.0.1") for _ in range(11)]

    assert all(d.allowed for d in decisions[:10])
    assert not decisions[10].allowed
    assert [d.remaining for d in decisions[:3]] == [9, 8, 7]
    assert decisions[9].remaining == 0


def test_throttled_decision_reports_time_until_reset(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic, limit=1)
    limiter.check("10.0.0.1")

    monotonic.advance(600)
    decision = limiter.check("10.0.0.1")

    assert not decision.allowed
    assert decision.reset_in == 300
    assert decision.retry_after == 300


def test_window_boundary_resets_counter(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic, limit=2)
    limiter.check("10.0.0.1")
    limiter.check("10.0.0.1")
    assert not limiter.check("10.0.0.1").allowed

    monotonic.advance(900)

    decision = limiter.check("10.0.0.1")
    assert decision.allowed
    assert decision.remaining == 1


def test_throttled_attempts_are_not_counted(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic, limit=2)
    for _ in range(2):
        limiter.check("10.0.0.1")
    for _ in range(5):
        assert not limiter.check("10.0.0.1").allowed

    monotonic.advance(900)

    assert limiter.check("10.0.0.1").allowed
    assert limiter.check("10.0.0.1").allowed
    assert not limiter.check("10.0.0.1").allowed


def test_addresses_have_independent_windows(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic, limit=1)

    assert limiter.check("10.0.0.1").allowed
    assert not limiter.check("10.0.0.1").allowed
    assert limiter.check("10.0.0.2").allowed


def test_stale_windows_are_evicted(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic, limit=5, window=60)
    for i in range(20):
        limiter.check(f"10.0.0.{i}")
    assert limiter.tracked_addresses() == 20

    monotonic.advance(61)
    limiter.check("192.168.0.1")

    assert limiter.tracked_addresses() == 1


def test_reset_clears_single_address(monotonic: FakeMonotonic) -> None:
    limiter = _limiter(monotonic, limit=1)
    limiter.check("10.0.0.1")
    limiter.check("10.0.0.2")

    limiter.reset("10.0.0.1")

    assert limiter.check("10.0.0.1").allowed
    assert not limiter.check("10.0.0.2").allowed


def test_concurrent_burst_from_one_address_is_not_undercounted() -> None:
    limiter = FixedWindowRateLimiter(limit=10, window_seconds=900)
    barrier = threading.Barrier(50)
    results: list[bool] = []
    results_lock = threading.Lock()

    def attempt() -> None:
        barrier.wait()
        decision = limiter.check("10.0.0.1")
        with results_lock:
            results.append(decision.allowed)

    threads = [threading.Thread(target=attempt) for _ in range(50)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 50
    assert results.count(True) == 10
