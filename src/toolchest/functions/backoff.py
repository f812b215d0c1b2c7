"""Retry with exponential backoff.

Identical to :func:`~toolchest.functions.retry.retry` except that the wait
doubles after every failed attempt: the delay before retry ``i`` (1-based) is
``base_delay * 2 ** (i - 1)``, optionally capped at ``max_delay``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TypeVar

from toolchest.adapters.clocks import MonotonicClock
from toolchest.interfaces.clock import Clock
from toolchest.utils.durations import (
    MAX_WAIT_SECONDS,
    Duration,
    require_int,
    to_seconds,
)

from .retry import RetryOn, run_attempts

__all__ = ["backoff_delays", "retry_with_backoff"]

T = TypeVar("T")


def backoff_delays(
    base_delay: float, max_delay: float | None = None
) -> Iterator[float]:
    """Yield ``base_delay``, ``2 * base_delay``, ``4 * base_delay``, ...

    Values saturate at ``max_delay`` (or at the longest wait ``threading``
    accepts when no cap is given) instead of growing without bound.
    """
    ceiling = MAX_WAIT_SECONDS if max_delay is None else min(max_delay, MAX_WAIT_SECONDS)
    delay = base_delay
    while True:
        yield min(delay, ceiling)
        if delay < ceiling:
            delay *= 2


def retry_with_backoff(
    attempts: int,
    base_delay: Duration,
    op: Callable[[], T],
    *,
    retry_on: RetryOn = Exception,
    max_delay: Duration | None = None,
    clock: Clock | None = None,
) -> T:
    """Call ``op`` until it succeeds, doubling the wait after each failure.

    Args:
        attempts: Total number of tries (>= 1).
        base_delay: Wait before the first retry.
        op: Zero-argument operation; raising means failure.
        retry_on: Exception type(s) that count as retryable failures.
        max_delay: Optional cap on any single wait.
        clock: Time source used for sleeping.

    Returns:
        The first successful result of ``op``.

    Raises:
        InvalidArgumentError: On out-of-range arguments.
        BaseException: The last exception raised by ``op`` once attempts are
            exhausted, or any non-retryable exception immediately.
    """
    require_int(attempts, name="attempts", minimum=1)
    base = to_seconds(base_delay, name="base_delay")
    cap = None if max_delay is None else to_seconds(max_delay, name="max_delay")
    return run_attempts(
        attempts, backoff_delays(base, cap), op, retry_on, clock or MonotonicClock()
    )
