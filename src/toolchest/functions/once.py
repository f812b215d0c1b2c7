"""Once: ensure a function runs at most once."""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable
from typing import Any, TypeVar

__all__ = ["once"]

R = TypeVar("R")


def once(func: Callable[..., R]) -> Callable[..., R | None]:
    """Wrap ``func`` so it runs at most once across all threads.

    The first caller runs ``func``; concurrent callers block until it has
    finished. Every later call returns the first call's result without running
    ``func`` again. If the first call raised, the exception reaches only that
    caller and later calls return ``None``.

    The wrapper exposes a ``called`` attribute (a zero-argument callable)
    reporting whether ``func`` has been run.
    """
    # reentrant so a recursive call from func returns instead of deadlocking
    lock = threading.RLock()
    done = False
    result: R | None = None

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> R | None:
        nonlocal done, result
        with lock:
            if done:
                return result
            done = True
            result = func(*args, **kwargs)
            return result

    def called() -> bool:
        with lock:
            return done

    wrapper.called = called  # type: ignore[attr-defined]
    return wrapper
