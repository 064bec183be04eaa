"""
Call spacing and retry helpers for outbound Gemini calls.

The registry is created once per process (see blog-summarizer/main.py) and
handed to whichever client makes outbound calls. Clock and sleep are
injectable so tests never actually wait.
"""

import time
from typing import Callable, Dict, Optional


class RateLimiter:
    """Blocking minimum-interval gate between consecutive calls."""

    def __init__(self, min_interval: float = 1.0, clock: Callable = time.monotonic,
                 sleep: Callable = time.sleep):
        self.min_interval = min_interval
        self.last_call: Optional[float] = None
        self._clock = clock
        self._sleep = sleep

    def wait(self) -> float:
        """Block until min_interval has passed since the previous call. Returns seconds waited."""
        waited = 0.0
        if self.last_call is not None:
            elapsed = self._clock() - self.last_call
            if elapsed < self.min_interval:
                waited = self.min_interval - elapsed
                self._sleep(waited)

        self.last_call = self._clock()
        return waited


class RateLimiterRegistry:
    """Named rate limiters, one per outbound service."""

    def __init__(self, default_interval: float = 1.0, clock: Callable = time.monotonic,
                 sleep: Callable = time.sleep):
        self.default_interval = default_interval
        self._clock = clock
        self._sleep = sleep
        self._limiters: Dict[str, RateLimiter] = {}

    def get(self, key: str, min_interval: Optional[float] = None) -> RateLimiter:
        """Return the limiter for key, creating it on first use."""
        if key not in self._limiters:
            interval = self.default_interval if min_interval is None else min_interval
            self._limiters[key] = RateLimiter(interval, clock=self._clock, sleep=self._sleep)
        return self._limiters[key]


def retry_with_backoff(fn: Callable, max_attempts: int = 2, base_delay: float = 1.0,
                       sleep: Callable = time.sleep, label: str = 'operation'):
    """
    Call fn until it succeeds or max_attempts is reached.

    Waits base_delay * 2**attempt between attempts (1s, 2s, 4s, ...).
    The last exception is re-raised.
    """
    if max_attempts < 1:
        raise ValueError('max_attempts must be at least 1')

    last_error = None

    for attempt in range(max_attempts):
        try:
            return fn()
        except Exception as e:
            last_error = e
            print(f"{label} failed (attempt {attempt + 1}/{max_attempts}): {e}")
            if attempt < max_attempts - 1:
                sleep(base_delay * (2 ** attempt))

    raise last_error
