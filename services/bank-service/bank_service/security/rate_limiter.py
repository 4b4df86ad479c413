"""In-memory sliding window limiter for form submissions."""

from __future__ import annotations

import math
import time
from collections import deque
from threading import Lock
from typing import Deque, Dict


class SlidingWindowRateLimiter:
    """Thread-safe sliding window limiter keyed by submitting client or account."""

    def __init__(self, max_requests: int, window_seconds: int) -> None:
        """Initialise limiter parameters and per-key submission history."""
        self._max_requests = max_requests
        self._window = window_seconds
        self._submissions: Dict[str, Deque[float]] = {}
        self._lock = Lock()
        self._last_sweep = time.monotonic()

    def _expire(self, key: str, now: float) -> Deque[float] | None:
        """Drop events older than the window; forget ``key`` once none are left."""
        history = self._submissions.get(key)
        if history is None:
            return None
        while history and now - history[0] > self._window:
            history.popleft()
        if not history:
            del self._submissions[key]
            return None
        return history

    def _sweep(self, now: float) -> None:
        """Evict every key whose window has passed, at most once per window."""
        if now - self._last_sweep < self._window:
            return
        self._last_sweep = now
        for key in list(self._submissions):
            self._expire(key, now)

    def allow(self, key: str) -> bool:
        """Record a submission for ``key`` and return ``False`` if it exceeds the limit."""
        now = time.monotonic()
        with self._lock:
            self._sweep(now)
            history = self._expire(key, now)
            if history is None:
                history = self._submissions[key] = deque()
            elif len(history) >= self._max_requests:
                return False
            history.append(now)
            return True

    def retry_after(self, key: str) -> int:
        """Seconds until ``key`` may submit again, never less than one."""
        now = time.monotonic()
        with self._lock:
            history = self._expire(key, now)
            if history is None or len(history) < self._max_requests:
                return 1
            return max(1, math.ceil(history[0] + self._window - now))
