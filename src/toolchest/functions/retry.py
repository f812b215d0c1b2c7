"""Retry with a fixed number of attempts and an optional fixed delay.

Operations signal failure by raising. Only exceptions matching ``retry_on``
are retried; anything else propagates immediately. When every attempt has
failed, the last exception is re-raised unchanged, so callers see the
operation's own error and nothing synthesized by the combinator.

Retries are blocking: the calling thread sleeps between attempts. Whether it
is safe to run ``op`` more than once is the caller's responsibility.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from toolchest.adapters.clocks import MonotonicClock
from toolchest.interfaces.clock import Clock
from toolchest.utils.durations import Duration, clamp_wait, require_int, to_seconds

__all__ = ["retry"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryOn = type[BaseException] | tuple[type[BaseException], ...]


def run_attempts(
    attempts: int,
    delays: Iterator[float | None],
    op: Callable[[], T],
    retry_on: RetryOn,
    clock: Clock,
) -> T:
    """Run ``op`` up to ``attempts`` times, sleeping ``next(delays)`` between tries.

    Shared loop behind :func:`retry` and
    :func:`~toolchest.functions.backoff.retry_with_backoff`. A ``None`` delay
    means "retry immediately".
    """
    remaining = attempts
    attempt = 0
    while True:
        attempt += 1
        try:
            return op()
        except retry_on as exc:
            remaining -= 1
            if remaining <= 0:
                logger.warning(
                    "Giving up on %r after %d attempt(s): %r", op, attempt, exc
                )
                raise
            delay = next(delays)
            logger.debug(
                "Attempt %d of %d for %r failed (%r); retrying in %s",
                attempt,
                attempts,
                op,
                exc,
                "0s" if delay is None else f"{delay:.3f}s",
            )
            if delay is not None:
                clock.sleep(clamp_wait(delay))


def _fixed(delay: float | None) -> Iterator[float | None]:
    while True:
        yield delay


def retry(
    attempts: int,
    delay: Duration | None,
    op: Callable[[], T],
    *,
    retry_on: RetryOn = Exception,
    clock: Clock | None = None,
) -> T:
    """Call ``op`` until it succeeds or ``attempts`` tries have failed.

    Args:
        attempts: Total number of tries (>= 1).
        delay: Fixed wait between tries, or ``None`` for no wait.
        op: Zero-argument operation; raising means failure.
        retry_on: Exception type(s) that count as retryable failures.
        clock: Time source used for sleeping; defaults to
            :class:`MonotonicClock`.

    Returns:
        The first successful result of ``op``.

    Raises:
        InvalidArgumentError: If ``attempts`` < 1 or ``delay`` is negative.
        BaseException: The last exception raised by ``op`` once attempts are
            exhausted, or any non-retryable exception immediately.
    """
    require_int(attempts, name="attempts", minimum=1)
    seconds = None if delay is None else to_seconds(delay, name="delay")
    return run_attempts(
        attempts, _fixed(seconds), op, retry_on, clock or MonotonicClock()
    )
