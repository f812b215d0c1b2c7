"""Unbounded memoization for pure functions.

The cache maps call arguments to previously computed results and only ever
grows: there is no eviction and no TTL. Lookups and inserts are serialized on
a lock, but the wrapped function runs outside it, so two threads missing on
the same key at the same time may both compute it (the last writer wins). The
guarantee is "eventually cached", not "computed exactly once".
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable, Hashable
from typing import Any, Protocol, TypeVar

__all__ = ["memoize"]

R = TypeVar("R", covariant=True)

_MISSING = object()
# separates positional from keyword arguments in a cache key
_KWD_MARK = object()


class Memoized(Protocol[R]):
    """A memoized callable."""

    def __call__(self, *args: Any, **kwargs: Any) -> R: ...

    def cache_len(self) -> int:
        """Number of cached results."""
        ...


def _make_key(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Hashable:
    if not kwargs:
        return args
    return (*args, _KWD_MARK, *sorted(kwargs.items()))


def memoize(func: Callable[..., R]) -> Memoized[R]:
    """Memoize ``func`` keyed by its arguments.

    Arguments must be hashable; a ``TypeError`` is raised otherwise. Keyword
    arguments are part of the key regardless of their order.

    Example:
        ```py
        double = memoize(lambda x: x * 2)
        double(2)  # computes 4
        double(2)  # returns the cached 4
        ```
    """
    cache: dict[Hashable, Any] = {}
    lock = threading.Lock()

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> R:
        key = _make_key(args, kwargs)
        with lock:
            result = cache.get(key, _MISSING)
        if result is not _MISSING:
            return result
        result = func(*args, **kwargs)
        with lock:
            cache[key] = result
        return result

    def cache_len() -> int:
        with lock:
            return len(cache)

    wrapper.cache_len = cache_len  # type: ignore[attr-defined]
    return wrapper  # type: ignore[return-value]
