"""Debounce: collapse a burst of calls into one delayed execution.

Every :meth:`Debounced.call` pushes a shared deadline to ``now + delay`` and
wakes a single background worker (spawned lazily on the first call). The
worker waits until real time reaches the *current* deadline; if the deadline
moves while it waits, it simply waits again. Once the deadline passes with no
further calls, the worker clears it and runs the wrapped function exactly
once, with the arguments of the most recent call in the burst.

Lifecycle
---------
- :meth:`Debounced.cancel` drops a pending execution and keeps the handle usable.
- :meth:`Debounced.stop` cancels, tells the worker to exit, and joins it, so no
  execution can happen after it returns. Further calls raise
  :class:`~toolchest.errors.DebouncerStoppedError`.
- The handle is a context manager that stops on exit. A handle that is
  garbage-collected without ``stop()`` still signals its worker to exit.

Exceptions raised by the wrapped function are logged and do not terminate the
worker.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
import weakref
from collections.abc import Callable
from typing import Any

from toolchest.errors import DebouncerStoppedError
from toolchest.utils.durations import Duration, clamp_wait, to_seconds

__all__ = ["Debounced", "debounce"]

logger = logging.getLogger(__name__)


class _DebounceState:
    """State shared between a handle and its worker thread."""

    def __init__(self) -> None:
        self.cond = threading.Condition(threading.Lock())
        self.deadline: float | None = None
        self.args: tuple[Any, ...] = ()
        self.kwargs: dict[str, Any] = {}
        self.stopping = False

    def take_pending(self) -> tuple[tuple[Any, ...], dict[str, Any]]:
        # caller holds self.cond
        args, kwargs = self.args, self.kwargs
        self.deadline = None
        self.args, self.kwargs = (), {}
        return args, kwargs


def _signal_stop(state: _DebounceState) -> None:
    with state.cond:
        state.stopping = True
        state.take_pending()
        state.cond.notify_all()


def _wait_for_deadline(
    state: _DebounceState,
) -> tuple[tuple[Any, ...], dict[str, Any]] | None:
    """Block until the deadline elapses; ``None`` means the worker must exit."""
    with state.cond:
        while True:
            if state.stopping:
                return None
            if state.deadline is None:
                state.cond.wait()
                continue
            remaining = state.deadline - time.monotonic()
            if remaining <= 0:
                return state.take_pending()
            # woken early when the deadline is pushed forward; loop re-reads it
            state.cond.wait(clamp_wait(remaining))


def _run_worker(state: _DebounceState, func: Callable[..., Any]) -> None:
    logger.debug("Debounce worker started for %r", func)
    while (pending := _wait_for_deadline(state)) is not None:
        args, kwargs = pending
        try:
            func(*args, **kwargs)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Debounced function %r raised", func)
    logger.debug("Debounce worker stopped for %r", func)


class Debounced:
    """A debounced function handle.

    Args:
        func: Callback to run once per burst.
        delay: Quiet period (seconds or ``timedelta``) that must follow the
            last call of a burst before ``func`` runs.
    """

    def __init__(self, func: Callable[..., Any], delay: Duration) -> None:
        self._func = func
        self._delay = to_seconds(delay, name="delay")
        self._state = _DebounceState()
        self._start_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        # the finalizer must not reference self, only the shared state
        self._finalizer = weakref.finalize(self, _signal_stop, self._state)
        functools.update_wrapper(self, func, updated=())

    @property
    def delay(self) -> float:
        """Quiet period in seconds."""
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether an execution is currently scheduled."""
        with self._state.cond:
            return self._state.deadline is not None

    @property
    def stopped(self) -> bool:
        """Whether :meth:`stop` has been called."""
        with self._state.cond:
            return self._state.stopping

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Schedule ``func`` to run ``delay`` after this call.

        Raises:
            DebouncerStoppedError: If the handle has been stopped.
        """
        state = self._state
        with state.cond:
            if state.stopping:
                raise DebouncerStoppedError
            state.deadline = time.monotonic() + self._delay
            state.args, state.kwargs = args, kwargs
            state.cond.notify_all()
        self._ensure_worker()

    __call__ = call

    def _ensure_worker(self) -> None:
        with self._start_lock:
            if self._thread is not None or self._state.stopping:
                return
            self._thread = threading.Thread(
                target=_run_worker,
                args=(self._state, self._func),
                name=f"debounce-{getattr(self._func, '__name__', 'func')}",
                daemon=True,
            )
            self._thread.start()

    def cancel(self) -> bool:
        """Drop the pending execution, if any, without stopping the handle.

        Returns:
            bool: ``True`` if an execution was pending and has been dropped.
        """
        with self._state.cond:
            was_pending = self._state.deadline is not None
            self._state.take_pending()
            self._state.cond.notify_all()
        return was_pending

    def stop(self, timeout: float | None = None) -> None:
        """Cancel any pending execution and reclaim the worker thread.

        Idempotent. When called from inside the debounced function itself the
        worker is signalled but not joined.

        Args:
            timeout: Optional bound on the join, in seconds.
        """
        self._finalizer()
        with self._start_lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def __enter__(self) -> Debounced:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._func!r}, delay={self._delay:g})"


def debounce(func: Callable[..., Any], delay: Duration) -> Debounced:
    """Create a debounced version of ``func``."""
    return Debounced(func, delay)
