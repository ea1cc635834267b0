import os
import time
import threading
from collections import deque
from typing import Deque, Dict, Optional

RATE_LIMIT_PER_MINUTE = int(os.getenv("A11Y_RATE_LIMIT_PER_MINUTE", "60"))
WINDOW_SECONDS = 60.0


class RateLimiter:
    """Rolling-window request counter keyed by client address.

    A limit of 0 disables throttling. Clients with no hit inside the window
    are forgotten: once per window every tracked client is swept.
    """

    def __init__(self, limit: int = RATE_LIMIT_PER_MINUTE, window: float = WINDOW_SECONDS, clock=time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def _prune(self, key: str, now: float) -> Optional[Deque[float]]:
        hits = self._hits.get(key)
        if hits is None:
            return None
        while hits and now - hits[0] >= self.window:
            hits.popleft()
        if not hits:
            del self._hits[key]
            return None
        return hits

    def _sweep(self, now: float) -> None:
        for key in list(self._hits):
            self._prune(key, now)
        self._last_sweep = now

    def hit(self, key: str) -> Optional[int]:
        """Record one request. Returns None when allowed, else seconds until retry."""
        if self.limit <= 0:
            return None
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)
            hits = self._prune(key, now)
            if hits is None:
                hits = self._hits[key] = deque()
            if len(hits) >= self.limit:
                return max(1, int(self.window - (now - hits[0]) + 0.999))
            hits.append(now)
            return None

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()
