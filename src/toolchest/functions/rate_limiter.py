"""Token-bucket rate limiter.

A bucket starts full with ``capacity`` tokens and refills continuously at
``refill_per_second`` tokens per second, never exceeding ``capacity``. Each
admitted call consumes one token. Refill is lazy: it is computed from the
elapsed time on every :meth:`RateLimiter.allow` call, so the limiter owns no
background thread and never sleeps.

Thread-safety: refill and consumption happen in one critical section, so
concurrent callers can never spend the same token twice.
"""

from __future__ import annotations

import logging
import threading

from toolchest.adapters.clocks import MonotonicClock
from toolchest.interfaces.clock import Clock
from toolchest.utils.durations import require_int

__all__ = ["RateLimiter"]

logger = logging.getLogger(__name__)


class RateLimiter:
    """Non-blocking token-bucket gate.

    Args:
        capacity: Maximum number of tokens (>= 1). The bucket starts full.
        refill_per_second: Tokens added per elapsed second (>= 0). Zero means
            the bucket never refills.
        clock: Time source; defaults to :class:`MonotonicClock`.

    Example:
        ```py
        limiter = RateLimiter(2, 10)
        limiter.allow()  # True
        limiter.allow()  # True
        limiter.allow()  # False
        ```
    """

    def __init__(
        self, capacity: int, refill_per_second: int, clock: Clock | None = None
    ) -> None:
        self._capacity = require_int(capacity, name="capacity", minimum=1)
        self._refill_per_sec = float(
            require_int(refill_per_second, name="refill_per_second", minimum=0)
        )
        self._clock = clock or MonotonicClock()
        self._lock = threading.Lock()
        self._tokens = float(self._capacity)
        self._last_refill = self._clock.now()

    @property
    def capacity(self) -> int:
        """Maximum number of tokens the bucket can hold."""
        return self._capacity

    @property
    def refill_per_second(self) -> float:
        """Tokens added per second of elapsed time."""
        return self._refill_per_sec

    @property
    def tokens(self) -> float:
        """Current token balance, after applying any pending refill."""
        with self._lock:
            self._refill()
            return self._tokens

    def _refill(self) -> None:
        # caller holds self._lock
        now = self._clock.now()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(
                self._tokens + elapsed * self._refill_per_sec, float(self._capacity)
            )
            self._last_refill = now

    def allow(self) -> bool:
        """Try to consume one token.

        Returns:
            bool: ``True`` if a token was available and consumed, ``False``
            otherwise (the balance is left unchanged apart from the refill).
        """
        with self._lock:
            self._refill()
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            remaining = self._tokens
        logger.debug("Rate limit reached (%.3f tokens available)", remaining)
        return False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._capacity}, "
            f"refill_per_second={self._refill_per_sec:g})"
        )
