# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from tokengate.shared.logging import logger


@dataclass
class RateWindow:
    window_start: float
    count: int = 0


@dataclass(slots=True, frozen=True)
class RateDecision:
    allowed: bool
    remaining: int
    reset_in: float

    @property
    def retry_after(self) -> int:
        return max(1, math.ceil(self.reset_in))


class FixedWindowRateLimiter:
    """Counts attempts per client address in fixed, non-overlapping windows.

    Only allowed attempts are counted. A throttled caller stays throttled until
    its window ends, then starts over with a fresh budget. Windows of other
    addresses that have gone stale are swept at most once per window length.
    """

    def __init__(
        self,
        limit: int = 10,
        window_seconds: float = 15 * 60,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._windows: dict[str, RateWindow] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window

    def check(self, address: str) -> RateDecision:
        with self._lock:
            now = self._clock()
            self._sweep(now)

            window = self._windows.get(address)
            if window is None or now - window.window_start >= self._window:
                window = RateWindow(window_start=now)
                self._windows[address] = window

            reset_in = max(0.0, window.window_start + self._window - now)
            if window.count >= self._limit:
                logger.warning(
                    f"rate_limit: throttled address={address} "
                    f"attempts={window.count} reset_in={reset_in:.0f}s"
                )
                return RateDecision(allowed=False, remaining=0, reset_in=reset_in)

            window.count += 1
            return RateDecision(
                allowed=True,
                remaining=self._limit - window.count,
                reset_in=reset_in,
            )

    def reset(self, address: str | None = None) -> None:
        with self._lock:
            if address is None:
                self._windows.clear()
            else:
                self._windows.pop(address, None)

    def tracked_addresses(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self._window:
            return
        stale = [
            address
            for address, window in self._windows.items()
            if now - window.window_start >= self._window
        ]
        for address in stale:
            del self._windows[address]
        self._last_sweep = now
        if stale:
            logger.debug(f"rate_limit: evicted {len(stale)} stale windows")


__all__ = ["FixedWindowRateLimiter", "RateDecision", "RateWindow"]
