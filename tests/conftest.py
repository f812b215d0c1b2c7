"""Global pytest fixtures for TOOLCHEST."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from toolchest.adapters.clocks import ManualClock

TESTS_ROOT = Path(__file__).parent.resolve()

# top-level test directory -> marker applied to every test collected from it
DEFAULT_MARKS = {"unit": "unit", "contract": "contract", "e2e": "e2e"}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config,  # pylint: disable=unused-argument
    items: list[pytest.Item],
) -> None:
    """Mark tests by the top-level directory they live in (`unit`, `contract`, `e2e`)."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if TESTS_ROOT not in path.parents:
            continue
        top = path.relative_to(TESTS_ROOT).parts[0]
        if (marker := DEFAULT_MARKS.get(top)) is None:
            continue
        if not any(m.name == marker for m in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, marker))


@pytest.fixture
def clock() -> ManualClock:
    """A fresh manual clock starting at t=1000.0 seconds."""
    return ManualClock(start=1000.0)


class Recorder:
    """Thread-safe call recorder used as a combinator callback."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.calls: list[tuple[tuple, dict]] = []

    def __call__(self, *args, **kwargs) -> None:
        with self._lock:
            self.calls.append((args, kwargs))

    @property
    def count(self) -> int:
        """Number of recorded calls."""
        with self._lock:
            return len(self.calls)


@pytest.fixture
def recorder() -> Recorder:
    """A fresh call recorder."""
    return Recorder()
