"""TOOLCHEST

A general-purpose utility library. Its core is a suite of thread-safe function
combinators (debounce, throttle, rate limiter, circuit breaker, memoize,
retry/backoff, timeout) that wrap caller-supplied operations with timing- or
state-based gating logic.
"""

import logging

__all__ = ["__version__"]
__version__ = "0.1.0"

# Library logging stays silent unless the application configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())
