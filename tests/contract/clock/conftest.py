"""Fixtures for clock contract tests."""

from collections.abc import Iterable

import pytest

from toolchest.adapters.clocks import ManualClock, MonotonicClock
from toolchest.interfaces.clock import Clock


@pytest.fixture(params=["monotonic", "manual"])
def clock_impl(request: pytest.FixtureRequest) -> Iterable[Clock]:
    """Return a fresh Clock instance for the requested backend.

    Supported params:
      - `"monotonic"` → MonotonicClock
      - `"manual"` → ManualClock
    """

    match request.param:
        case "monotonic":
            yield MonotonicClock()
        case "manual":
            yield ManualClock(start=50.0)
        case _:
            raise ValueError(f"unknown clock type: {request.param}")
