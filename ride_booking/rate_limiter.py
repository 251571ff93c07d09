"""
Rate limiting for the booking endpoint
"""
import math
import time
from typing import Optional, Tuple

from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import MovingWindowRateLimiter

RATE_LIMIT_MESSAGE = "Too many booking attempts. Please try again later."


class RateLimiter:
    """
    Moving-window limiter keyed by client address.

    Counters live in a ``limits`` storage backend: ``memory://`` by default,
    or e.g. ``redis://localhost:6379`` to share them between workers. The
    backend expires idle keys on its own.
    """

    def __init__(self, max_attempts: int = 10, window_seconds: int = 15 * 60,
                 storage_uri: str = "memory://"):
        self.item = RateLimitItemPerSecond(max_attempts, window_seconds)
        self.storage = storage_from_string(storage_uri)
        self.strategy = MovingWindowRateLimiter(self.storage)

    def check(self, key: str) -> Tuple[bool, Optional[int]]:
        """
        Record an attempt for ``key``.

        Returns:
            (is_allowed, retry_after_seconds)
        """
        if self.strategy.hit(self.item, "booking", key):
            return True, None

        reset_time = self.strategy.get_window_stats(self.item, "booking", key)[0]
        retry_after = max(1, math.ceil(reset_time - time.time()))
        return False, retry_after
