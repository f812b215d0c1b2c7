"""Clocks for TOOLCHEST."""

import threading
import time

from toolchest.interfaces.clock import Clock


class MonotonicClock(Clock):
    """Wall-clock independent time source backed by ``time.monotonic``."""

    def now(self) -> float:
        """Return ``time.monotonic()``."""
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds`` using ``time.sleep``."""
        time.sleep(seconds)


class ManualClock(Clock):
    """A clock that only moves when told to.

    ``sleep`` advances the reading instantly instead of blocking, and every
    sleep is recorded in ``sleeps`` so callers can assert on schedules.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._lock = threading.Lock()
        self._now = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        """Return the current manual reading."""
        with self._lock:
            return self._now

    def sleep(self, seconds: float) -> None:
        """Record the sleep and advance the reading by ``seconds``."""
        with self._lock:
            self.sleeps.append(seconds)
            self._now += seconds

    def advance(self, seconds: float) -> None:
        """Move the reading forward by ``seconds`` without recording a sleep."""
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        with self._lock:
            self._now += seconds
