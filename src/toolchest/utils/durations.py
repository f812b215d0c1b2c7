"""Duration helpers.

Combinators accept durations either as seconds (``int``/``float``) or as
``datetime.timedelta``. This module converts both to float seconds and
validates ranges, raising :class:`~toolchest.errors.InvalidArgumentError` on
bad input.
"""

from __future__ import annotations

import math
import threading
from datetime import timedelta
from typing import TypeAlias

from toolchest.errors import InvalidArgumentError

Duration: TypeAlias = float | int | timedelta

# Largest timeout accepted by threading waits; longer sleeps are clamped.
MAX_WAIT_SECONDS = threading.TIMEOUT_MAX


def to_seconds(value: Duration, *, name: str = "duration") -> float:
    """Convert ``value`` to non-negative float seconds.

    Args:
        value: Seconds as a number, or a ``timedelta``.
        name: Argument name used in error messages.

    Returns:
        float: The duration in seconds.

    Raises:
        InvalidArgumentError: If ``value`` is negative or NaN. Infinity is
            accepted and means "wait forever" (see :func:`clamp_wait`).
        TypeError: If ``value`` is not a number or ``timedelta``.
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be seconds or a timedelta, got {type(value).__name__}")
    else:
        seconds = float(value)
    if math.isnan(seconds) or seconds < 0:
        raise InvalidArgumentError(name, value, "must be a non-negative duration")
    return seconds


def clamp_wait(seconds: float) -> float:
    """Clamp ``seconds`` to the range accepted by ``threading`` timed waits."""
    return min(max(seconds, 0.0), MAX_WAIT_SECONDS)


def require_int(value: int, *, name: str, minimum: int) -> int:
    """Validate that ``value`` is an ``int`` no smaller than ``minimum``.

    Raises:
        InvalidArgumentError: If ``value`` is below ``minimum``.
        TypeError: If ``value`` is not an ``int`` (``bool`` is rejected).
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise InvalidArgumentError(name, value, f"must be >= {minimum}")
    return value
