"""Function combinators.

Each combinator wraps a caller-supplied operation, tracks a small piece of
lock-protected state (timestamps, counters, cached results), and decides
whether or when to invoke the operation. The combinators are independent of
each other.

Admission rejections are reported separately from operation failures:

- :class:`RateLimiter` returns ``False``; :class:`Throttled` silently drops
  the call; :class:`CircuitBreaker` raises
  :class:`~toolchest.errors.CircuitOpenError`.
- :func:`with_timeout` returns ``None`` when no result arrives in time.
- The wrapped operation's own exceptions always reach the caller.
"""

from .backoff import retry_with_backoff
from .circuit_breaker import BreakerState, CircuitBreaker
from .compose import (
    compose,
    constant,
    flip,
    identity,
    negate,
    noop,
    partial,
    pipe,
    tap,
    times,
    until,
)
from .debounce import Debounced, debounce
from .memoize import memoize
from .once import once
from .rate_limiter import RateLimiter
from .retry import retry
from .throttle import Throttled, throttle
from .timeout import with_timeout

__all__ = [
    "BreakerState",
    "CircuitBreaker",
    "Debounced",
    "RateLimiter",
    "Throttled",
    "compose",
    "constant",
    "debounce",
    "flip",
    "identity",
    "memoize",
    "negate",
    "noop",
    "once",
    "partial",
    "pipe",
    "retry",
    "retry_with_backoff",
    "tap",
    "throttle",
    "times",
    "until",
    "with_timeout",
]
