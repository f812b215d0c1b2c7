"""Bounded wait on an operation running in a worker thread.

:func:`with_timeout` starts ``op`` on a fresh daemon thread and waits up to
``duration`` for it. This bounds the *wait*, not the work: on timeout the
worker keeps running to completion and its result is discarded. Operations
that need real cancellation must check a flag of their own.
"""

from __future__ import annotations

import concurrent.futures as cf
import logging
import threading
from collections.abc import Callable
from typing import TypeVar

from toolchest.utils.durations import Duration, clamp_wait, to_seconds

__all__ = ["with_timeout"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run_into(future: cf.Future, op: Callable[[], T]) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = op()
    except BaseException as exc:  # pylint: disable=broad-exception-caught
        future.set_exception(exc)
    else:
        future.set_result(result)


def with_timeout(duration: Duration, op: Callable[[], T]) -> T | None:
    """Run ``op`` with a bounded wait.

    Args:
        duration: Maximum time to wait for the result.
        op: Zero-argument operation.

    Returns:
        ``op()``'s result if it finished within ``duration``, else ``None``.

    Raises:
        BaseException: Whatever ``op`` raised, if it raised within ``duration``.
    """
    seconds = to_seconds(duration, name="duration")
    future: cf.Future = cf.Future()
    worker = threading.Thread(
        target=_run_into,
        args=(future, op),
        name=f"timeout-{getattr(op, '__name__', 'op')}",
        daemon=True,
    )
    worker.start()
    done, _ = cf.wait([future], timeout=clamp_wait(seconds))
    if not done:
        logger.debug("Operation %r timed out after %.3fs", op, seconds)
        return None
    return future.result()
