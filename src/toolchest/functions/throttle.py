"""Throttle: run at most once per cooldown window.

The first call always executes. Afterwards a call executes only when at least
``delay`` has elapsed since the last *executed* call; everything else is
dropped, not deferred. The wrapped function runs synchronously on the
caller's thread.
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from typing import Any

from toolchest.adapters.clocks import MonotonicClock
from toolchest.interfaces.clock import Clock
from toolchest.utils.durations import Duration, to_seconds

__all__ = ["Throttled", "throttle"]

logger = logging.getLogger(__name__)


class Throttled:
    """A throttled function wrapper.

    The admission decision (read last-call time, compare, record "now") is a
    single critical section; ``func`` itself runs outside the lock so a slow
    callback never blocks other callers from being rejected.

    Share one instance across threads; every caller observes the same
    gating decisions.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        delay: Duration,
        clock: Clock | None = None,
    ) -> None:
        self._func = func
        self._delay = to_seconds(delay, name="delay")
        self._clock = clock or MonotonicClock()
        self._lock = threading.Lock()
        self._last_call: float | None = None
        functools.update_wrapper(self, func, updated=())

    @property
    def delay(self) -> float:
        """Cooldown between executions, in seconds."""
        return self._delay

    @property
    def last_call(self) -> float | None:
        """Clock reading of the last executed call, or ``None`` if never run."""
        with self._lock:
            return self._last_call

    def _admit(self) -> bool:
        with self._lock:
            now = self._clock.now()
            if self._last_call is None or now - self._last_call >= self._delay:
                self._last_call = now
                return True
            return False

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Invoke the wrapped function if the cooldown has elapsed."""
        if self._admit():
            self._func(*args, **kwargs)
        else:
            logger.debug("Throttled call to %r suppressed", self._func)

    __call__ = call


def throttle(func: Callable[..., Any], delay: Duration) -> Throttled:
    """Create a throttled version of ``func`` with the given cooldown."""
    return Throttled(func, delay)
