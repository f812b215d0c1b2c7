"""Adapters for TOOLCHEST.

Provide concrete implementations of the ports in `toolchest.interfaces`.

Dependency rule: may import `toolchest.interfaces`; the interfaces must not
import this package.
"""

from .clocks import ManualClock, MonotonicClock

__all__ = ["ManualClock", "MonotonicClock"]
