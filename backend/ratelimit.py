"""
ratelimit.py
------------
Per-client sliding-window limiter. One instance per app; thread-safe.
"""

import threading
import time
from collections import deque


class RateLimiter:
    """Allows at most `max_requests` per `window_seconds` for each client key."""

    def __init__(self, max_requests: int = 10, window_seconds: float = 300, clock=time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._requests: dict[str, deque] = {}
        self._last_sweep = None

    def _prune(self, recent: deque, cutoff: float) -> None:
        while recent and recent[0] <= cutoff:
            recent.popleft()

    def _sweep(self, now: float, cutoff: float) -> None:
        """Drop clients with no request inside the window. At most once per window."""
        if self._last_sweep is not None and now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        for key in list(self._requests):
            self._prune(self._requests[key], cutoff)
            if not self._requests[key]:
                del self._requests[key]

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            cutoff = now - self.window_seconds
            self._sweep(now, cutoff)

            recent = self._requests.get(key, deque())
            self._prune(recent, cutoff)
            if len(recent) >= self.max_requests:
                return False
            recent.append(now)
            self._requests[key] = recent
            return True
