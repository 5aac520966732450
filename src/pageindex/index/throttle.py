"""Rate limiters protecting the index backend from write bursts."""

from __future__ import annotations

import threading
import time
from typing import Callable, Protocol


class RateLimiter(Protocol):
    def wait(self) -> None:
        """Block until the caller may issue its next write."""


class FixedDelay:
    """Sleep a constant interval after every write."""

    def __init__(self, interval: float = 0.1, *, sleep: Callable[[float], None] = time.sleep) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._sleep = sleep

    def wait(self) -> None:
        if self.interval:
            self._sleep(self.interval)


class TokenBucket:
    """Thread-safe token bucket shared by concurrent publishers.

    ``rate`` tokens are added per second up to ``capacity``; each ``wait``
    consumes one token, sleeping until one is available.
    """

    def __init__(
        self,
        rate: float,
        capacity: int = 1,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate <= 0:
            raise ValueError("rate must be > 0")
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.rate = rate
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._updated = clock()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(now - self._updated, 0.0)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._updated = now

    def wait(self) -> None:
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= 1:
                    self._tokens -= 1
                    return
                delay = (1 - self._tokens) / self.rate
            self._sleep(delay)


def limiter_for(throttle_seconds: float, workers: int) -> RateLimiter:
    """Pick the limiter matching a throttle interval and worker count."""
    if workers <= 1 or throttle_seconds <= 0:
        return FixedDelay(max(throttle_seconds, 0.0))
    return TokenBucket(rate=1.0 / throttle_seconds)
