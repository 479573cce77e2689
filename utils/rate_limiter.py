"""Minimum-interval throttle for external API clients.

Each client owns one RateLimiter, so Jikan, Kitsu and WatchMode keep
independent state. Calls through the same limiter are spaced at least
``min_interval`` seconds apart; this is not a token bucket or a queue.
"""

import threading
import time
from collections.abc import Callable

from utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Serializes calls at least ``min_interval`` seconds apart.

    Args:
        min_interval: Seconds between consecutive calls
        clock: Monotonic time source (injectable for tests)
        sleep: Blocking sleep function (injectable for tests)
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._next_allowed: float | None = None
        self._lock = threading.Lock()

    def acquire(self) -> float:
        """Block until a call is allowed.

        Returns:
            Seconds spent waiting
        """
        with self._lock:
            now = self._clock()
            waited = 0.0
            if self._next_allowed is not None and now < self._next_allowed:
                waited = self._next_allowed - now
                logger.debug(f"Rate limit: waiting {waited:.2f}s")
                self._sleep(waited)
                now = self._clock()
            self._next_allowed = now + self.min_interval
            return waited

    def reset(self) -> None:
        with self._lock:
            self._next_allowed = None

    def __repr__(self) -> str:
        return f"<RateLimiter(min_interval={self.min_interval})>"
