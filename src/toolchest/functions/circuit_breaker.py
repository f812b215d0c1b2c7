"""Circuit breaker with a consecutive-failure threshold and a cooldown.

State machine::

    CLOSED --(failures >= threshold)--> OPEN --(cooldown elapsed)--> HALF_OPEN
    HALF_OPEN --(probe succeeds)--> CLOSED
    HALF_OPEN --(probe fails)--> OPEN

The OPEN -> HALF_OPEN transition is lazy: it happens on the first
:meth:`CircuitBreaker.call` made after ``open_until``.

Two distinct errors reach the caller:

- :class:`~toolchest.errors.CircuitOpenError` when the breaker rejected the
  call and the operation was **not** attempted.
- :class:`~toolchest.errors.CircuitOperationError` when the operation ran and
  raised; the original exception is on ``.error`` and chained as the cause.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from toolchest.adapters.clocks import MonotonicClock
from toolchest.errors import CircuitOpenError, CircuitOperationError
from toolchest.interfaces.clock import Clock
from toolchest.utils.durations import Duration, require_int, to_seconds

__all__ = ["BreakerState", "CircuitBreaker"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BreakerState(enum.Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    """Calls pass through; failures are counted."""
    OPEN = "open"
    """Calls are rejected until the cooldown elapses."""
    HALF_OPEN = "half_open"
    """Probing after the cooldown; the next outcome decides the state."""


class CircuitBreaker:
    """Thread-safe circuit breaker.

    Every read-modify-write of the state record (state, failure counter,
    ``open_until``) happens under one lock, so concurrent callers observe a
    linear history of transitions. The guarded operation runs outside the
    lock.

    Args:
        threshold: Consecutive failures that trip the breaker (>= 1).
        cooldown: How long the breaker stays open before probing.
        clock: Time source; defaults to :class:`MonotonicClock`.
        name: Label used in log messages.
    """

    def __init__(
        self,
        threshold: int,
        cooldown: Duration,
        clock: Clock | None = None,
        name: str = "circuit",
    ) -> None:
        self._threshold = require_int(threshold, name="threshold", minimum=1)
        self._cooldown = to_seconds(cooldown, name="cooldown")
        self._clock = clock or MonotonicClock()
        self.name = name
        self._lock = threading.Lock()
        self._state = BreakerState.CLOSED
        self._failures = 0
        self._open_until: float | None = None

    @property
    def threshold(self) -> int:
        """Consecutive failures needed to open the breaker."""
        return self._threshold

    @property
    def cooldown(self) -> float:
        """Seconds the breaker stays open before probing."""
        return self._cooldown

    @property
    def state(self) -> BreakerState:
        """Current state as seen by the next caller.

        An OPEN breaker whose cooldown has elapsed reports ``HALF_OPEN``. The
        stored transition (and its log line) still happens in :meth:`call`.
        """
        with self._lock:
            if self._cooldown_elapsed(self._clock.now()):
                return BreakerState.HALF_OPEN
            return self._state

    @property
    def failures(self) -> int:
        """Current consecutive-failure count."""
        with self._lock:
            return self._failures

    @property
    def open_until(self) -> float | None:
        """Clock reading at which an open breaker starts probing."""
        with self._lock:
            return self._open_until

    def call(self, op: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run ``op(*args, **kwargs)`` guarded by the breaker.

        Returns:
            The operation's return value.

        Raises:
            CircuitOpenError: If the breaker is open; ``op`` was not invoked.
            CircuitOperationError: If ``op`` raised an ``Exception``.
        """
        self._before_call()
        try:
            result = op(*args, **kwargs)
        except Exception as exc:
            self._record_failure()
            raise CircuitOperationError(exc) from exc
        self._record_success()
        return result

    def _cooldown_elapsed(self, now: float) -> bool:
        # caller holds self._lock
        return (
            self._state is BreakerState.OPEN
            and self._open_until is not None
            and now >= self._open_until
        )

    def _before_call(self) -> None:
        with self._lock:
            now = self._clock.now()
            if self._cooldown_elapsed(now):
                self._state = BreakerState.HALF_OPEN
                logger.info("Circuit %r half-open; probing", self.name)
            if self._state is BreakerState.OPEN:
                open_until = self._open_until if self._open_until is not None else now
                raise CircuitOpenError(open_until, max(open_until - now, 0.0))

    def _record_success(self) -> None:
        with self._lock:
            self._failures = 0
            if self._state is BreakerState.HALF_OPEN:
                self._state = BreakerState.CLOSED
                self._open_until = None
                logger.info("Circuit %r closed after successful probe", self.name)

    def _record_failure(self) -> None:
        with self._lock:
            self._failures += 1
            if self._failures >= self._threshold:
                self._state = BreakerState.OPEN
                self._open_until = self._clock.now() + self._cooldown
                logger.warning(
                    "Circuit %r opened after %d consecutive failures (cooldown %.3fs)",
                    self.name,
                    self._failures,
                    self._cooldown,
                )

    def reset(self) -> None:
        """Force the breaker back to CLOSED with a zero failure count."""
        with self._lock:
            self._state = BreakerState.CLOSED
            self._failures = 0
            self._open_until = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, threshold={self._threshold}, "
            f"cooldown={self._cooldown:g}, state={self.state.value})"
        )
