"""Unit tests for CircuitBreaker."""

import concurrent.futures as cf
import logging
import threading

import pytest

from toolchest.errors import (
    CircuitBreakerError,
    CircuitOpenError,
    CircuitOperationError,
    InvalidArgumentError,
)
from toolchest.functions import BreakerState, CircuitBreaker


class Boom(Exception):
    """Failure raised by test operations."""


def fail() -> None:
    raise Boom("down")


def trip(breaker: CircuitBreaker, times: int) -> None:
    """Feed ``times`` failing calls through ``breaker``."""
    for _ in range(times):
        with pytest.raises(CircuitOperationError):
            breaker.call(fail)


def test_starts_closed(clock):
    """A new breaker is closed with no failures."""
    breaker = CircuitBreaker(3, 1.0, clock=clock)
    assert breaker.state is BreakerState.CLOSED
    assert breaker.failures == 0
    assert breaker.open_until is None


def test_success_passes_result_through(clock):
    """Successful operations return their value; arguments are forwarded."""
    breaker = CircuitBreaker(1, 1.0, clock=clock)
    assert breaker.call(lambda a, b=0: a + b, 2, b=3) == 5


def test_operation_error_is_wrapped_and_chained(clock):
    """The operation's own exception is tagged, kept on .error and chained."""
    breaker = CircuitBreaker(5, 1.0, clock=clock)
    with pytest.raises(CircuitOperationError) as excinfo:
        breaker.call(fail)
    assert isinstance(excinfo.value.error, Boom)
    assert excinfo.value.__cause__ is excinfo.value.error
    assert isinstance(excinfo.value, CircuitBreakerError)


def test_single_failure_opens_and_rejects_without_invoking(clock):
    """CircuitBreaker(1, 10ms): one failure opens; the next call is rejected unrun."""
    breaker = CircuitBreaker(1, 0.01, clock=clock)
    trip(breaker, 1)
    assert breaker.state is BreakerState.OPEN

    invoked = []
    with pytest.raises(CircuitOpenError) as excinfo:
        breaker.call(lambda: invoked.append(True))
    assert invoked == []
    assert not isinstance(excinfo.value, CircuitOperationError)
    assert excinfo.value.remaining == pytest.approx(0.01)


def test_opens_only_at_threshold(clock):
    """threshold - 1 failures keep the breaker closed."""
    breaker = CircuitBreaker(3, 1.0, clock=clock)
    trip(breaker, 2)
    assert breaker.state is BreakerState.CLOSED
    assert breaker.failures == 2
    trip(breaker, 1)
    assert breaker.state is BreakerState.OPEN
    assert breaker.open_until == pytest.approx(1001.0)


def test_success_resets_consecutive_failures(clock):
    """Failures must be consecutive to trip the breaker."""
    breaker = CircuitBreaker(2, 1.0, clock=clock)
    trip(breaker, 1)
    breaker.call(lambda: None)
    assert breaker.failures == 0
    trip(breaker, 1)
    assert breaker.state is BreakerState.CLOSED


def test_half_open_probe_success_closes(clock):
    """After the cooldown the next call probes; success closes the breaker."""
    breaker = CircuitBreaker(1, 0.5, clock=clock)
    trip(breaker, 1)
    clock.advance(0.5)
    assert breaker.call(lambda: "ok") == "ok"
    assert breaker.state is BreakerState.CLOSED
    assert breaker.failures == 0
    assert breaker.open_until is None


def test_half_open_probe_failure_reopens(clock):
    """A failed probe sends the breaker back to OPEN with a fresh cooldown."""
    breaker = CircuitBreaker(2, 0.5, clock=clock)
    trip(breaker, 2)
    clock.advance(0.5)
    trip(breaker, 1)
    assert breaker.state is BreakerState.OPEN
    assert breaker.open_until == pytest.approx(1001.0)
    with pytest.raises(CircuitOpenError):
        breaker.call(lambda: None)


def test_still_open_before_cooldown(clock):
    """Calls before open_until are rejected."""
    breaker = CircuitBreaker(1, 1.0, clock=clock)
    trip(breaker, 1)
    clock.advance(0.75)
    with pytest.raises(CircuitOpenError) as excinfo:
        breaker.call(lambda: None)
    assert excinfo.value.remaining == pytest.approx(0.25)


def test_state_reports_open_only_until_cooldown_ends(clock):
    """`state` reads OPEN while now < open_until and HALF_OPEN from then on."""
    breaker = CircuitBreaker(1, 0.5, clock=clock)
    trip(breaker, 1)
    clock.advance(0.25)
    assert breaker.state is BreakerState.OPEN
    clock.advance(0.25)
    assert breaker.state is BreakerState.HALF_OPEN


def test_reading_state_is_silent_and_leaves_next_call_admitted(clock, caplog):
    """Reading `state` after the cooldown leaves the transition to the next call."""
    breaker = CircuitBreaker(1, 0.5, clock=clock)
    trip(breaker, 1)
    clock.advance(5)
    with caplog.at_level(logging.INFO, logger="toolchest.functions.circuit_breaker"):
        assert breaker.state is BreakerState.HALF_OPEN
    assert not caplog.records
    assert breaker.call(lambda: "ok") == "ok"
    assert breaker.state is BreakerState.CLOSED


def test_half_open_is_observable_during_probe(clock):
    """While the probe runs, the breaker reports HALF_OPEN."""
    breaker = CircuitBreaker(1, 0.5, clock=clock)
    trip(breaker, 1)
    clock.advance(0.5)
    seen = breaker.call(lambda: breaker.state)
    assert seen is BreakerState.HALF_OPEN


def test_base_exceptions_are_not_wrapped_or_counted(clock):
    """Only Exception subclasses count as operation failures."""
    breaker = CircuitBreaker(1, 1.0, clock=clock)

    def interrupt() -> None:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        breaker.call(interrupt)
    assert breaker.failures == 0
    assert breaker.state is BreakerState.CLOSED


def test_reset_forces_closed(clock):
    """reset() clears state regardless of the cooldown."""
    breaker = CircuitBreaker(1, 60, clock=clock)
    trip(breaker, 1)
    breaker.reset()
    assert breaker.state is BreakerState.CLOSED
    assert breaker.call(lambda: 1) == 1


def test_transitions_are_logged(clock, caplog):
    """Opening logs a warning; closing after a probe logs at INFO."""
    breaker = CircuitBreaker(1, 0.5, clock=clock, name="payments")
    with caplog.at_level(logging.INFO, logger="toolchest.functions.circuit_breaker"):
        trip(breaker, 1)
        clock.advance(0.5)
        breaker.call(lambda: None)
    messages = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert any(lvl == logging.WARNING and "'payments' opened" in m for lvl, m in messages)
    assert any(lvl == logging.INFO and "closed" in m for lvl, m in messages)


@pytest.mark.parametrize(("threshold", "cooldown"), [(0, 1.0), (1, -1.0)])
def test_invalid_configuration(threshold, cooldown):
    """threshold must be >= 1 and cooldown non-negative."""
    with pytest.raises(InvalidArgumentError):
        CircuitBreaker(threshold, cooldown)


def test_concurrent_failures_count_exactly(clock):
    """Concurrent failing callers never lose counter updates."""
    breaker = CircuitBreaker(10_000, 1.0, clock=clock)
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait(timeout=5)
        for _ in range(100):
            try:
                breaker.call(fail)
            except CircuitOperationError:
                pass

    with cf.ThreadPoolExecutor(max_workers=8) as ex:
        for f in [ex.submit(worker) for _ in range(8)]:
            f.result()

    assert breaker.failures == 800
    assert breaker.state is BreakerState.CLOSED
