"""Unit tests for once."""

import concurrent.futures as cf
import threading
import time

import pytest

from toolchest.functions import once


def test_runs_only_once_and_returns_first_result():
    """Later calls return the first result without running again."""
    calls = []

    @once
    def init(value: int) -> int:
        calls.append(value)
        return value

    assert init(1) == 1
    assert init(2) == 1
    assert calls == [1]
    assert init.called()


def test_not_called_initially():
    """`called` is False until the first invocation."""
    wrapped = once(lambda: None)
    assert not wrapped.called()


def test_exception_reaches_first_caller_only():
    """If the first call raises, later calls return None without rerunning."""
    calls = []

    def boom() -> None:
        calls.append(1)
        raise RuntimeError("init failed")

    wrapped = once(boom)
    with pytest.raises(RuntimeError):
        wrapped()
    assert wrapped() is None
    assert calls == [1]


def test_concurrent_callers_block_until_first_finishes():
    """Exactly one thread runs the function; all see its result."""
    calls = []
    barrier = threading.Barrier(8)

    def slow() -> str:
        calls.append(1)
        time.sleep(0.05)
        return "ready"

    wrapped = once(slow)

    def worker() -> str:
        barrier.wait(timeout=5)
        return wrapped()

    with cf.ThreadPoolExecutor(max_workers=8) as ex:
        results = [f.result() for f in [ex.submit(worker) for _ in range(8)]]

    assert results == ["ready"] * 8
    assert calls == [1]


def test_recursive_call_does_not_deadlock():
    """A re-entrant call from inside the function returns immediately."""
    inner: list[object] = []

    @once
    def recurse() -> str:
        inner.append(recurse())
        return "outer"

    assert recurse() == "outer"
    assert inner == [None]
