"""Function composition helpers."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

__all__ = [
    "compose",
    "constant",
    "flip",
    "identity",
    "negate",
    "noop",
    "partial",
    "pipe",
    "tap",
    "times",
    "until",
]

T = TypeVar("T")
R = TypeVar("R")


def compose(*funcs: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose functions right to left: ``compose(g, f)(x) == g(f(x))``.

    With no functions the result is :func:`identity`.
    """
    if not funcs:
        return identity

    def composed(value: Any) -> Any:
        for func in reversed(funcs):
            value = func(value)
        return value

    return composed


def pipe(value: Any, *funcs: Callable[[Any], Any]) -> Any:
    """Pass ``value`` through ``funcs`` left to right: ``pipe(x, f, g) == g(f(x))``."""
    for func in funcs:
        value = func(value)
    return value


def tap(value: T, func: Callable[[T], Any]) -> T:
    """Run ``func(value)`` for its side effect and return ``value`` unchanged."""
    func(value)
    return value


def identity(value: T) -> T:
    """Return ``value``."""
    return value


def constant(value: T) -> Callable[..., T]:
    """Return a function that ignores its arguments and returns ``value``."""

    def _constant(*_: Any, **__: Any) -> T:
        return value

    return _constant


def noop(*_: Any, **__: Any) -> None:
    """Do nothing."""


def negate(pred: Callable[..., bool]) -> Callable[..., bool]:
    """Return the logical negation of ``pred``."""

    @functools.wraps(pred)
    def negated(*args: Any, **kwargs: Any) -> bool:
        return not pred(*args, **kwargs)

    return negated


def flip(func: Callable[..., R]) -> Callable[..., R]:
    """Swap the first two positional arguments of ``func``."""

    @functools.wraps(func)
    def flipped(a: Any, b: Any, *rest: Any, **kwargs: Any) -> R:
        return func(b, a, *rest, **kwargs)

    return flipped


def partial(func: Callable[..., R], *args: Any, **kwargs: Any) -> Callable[..., R]:
    """Bind leading positional (and keyword) arguments of ``func``."""
    return functools.partial(func, *args, **kwargs)


def times(n: int, func: Callable[[int], Any]) -> None:
    """Call ``func(i)`` for ``i`` in ``0..n-1``."""
    for i in range(n):
        func(i)


def until(value: T, pred: Callable[[T], bool], step: Callable[[T], T]) -> T:
    """Apply ``step`` to ``value`` repeatedly until ``pred(value)`` holds."""
    while not pred(value):
        value = step(value)
    return value
