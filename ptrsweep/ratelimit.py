"""
Global query rate limiting
"""

import threading
import time
from typing import Callable


class NullRateLimiter:
    """Rate limiter used when no limit is configured"""

    rate = 0

    def acquire(self):
        return None


class RateLimiter:
    """
    Shared ticking gate: one permit every 1/rate seconds.

    All workers compete for the same stream of permits, so the pool as a
    whole starts at most `rate` lookups per second regardless of its size.
    Unused ticks are not banked: after an idle period the next caller gets
    a permit immediately and the following one waits a full interval.
    """

    def __init__(
        self,
        rate: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        if rate <= 0:
            raise ValueError("rate must be positive")
        self.rate = rate
        self.interval = 1.0 / rate
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_permit = None

    def acquire(self):
        """Block until a permit is granted"""
        with self._lock:
            now = self._clock()
            if self._next_permit is None or self._next_permit < now:
                slot = now
            else:
                slot = self._next_permit
            self._next_permit = slot + self.interval

        delay = slot - now
        if delay > 0:
            self._sleep(delay)


def create_rate_limiter(rate: int):
    """RateLimiter for rate > 0, otherwise a no-op limiter"""
    if rate > 0:
        return RateLimiter(rate)
    return NullRateLimiter()
