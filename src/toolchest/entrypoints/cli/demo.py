"""TOOLCHEST demo CLI - runnable demonstrations of the combinators.

Each subcommand drives one combinator with a small synthetic workload and
prints what happened, one observation per line, to **stdout**. Status lines
(success/warnings) go to **stderr** so the observations stay easy to pipe.

Failure modes
- Out-of-range arguments (e.g. a negative delay) are reported as a
  ``ClickException`` carrying the library's error message.
- ``demo retry`` exits non-zero when every attempt failed.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

import click
import click_extra as clickx

from toolchest.errors import CircuitOpenError, CircuitOperationError, ToolchestError
from toolchest.functions import (
    CircuitBreaker,
    RateLimiter,
    debounce,
    retry_with_backoff,
    throttle,
    with_timeout,
)

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class DemoFailure(Exception):
    """Synthetic failure raised by demo operations."""


def _reporting_errors(func: F) -> F:
    """Log the demo start and turn library errors into ``ClickException``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger.info("Running %s with %s", func.__name__, kwargs)
        try:
            return func(*args, **kwargs)
        except ToolchestError as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]


@click.group(cls=clickx.ExtraGroup)
def demo() -> None:
    """Run small demonstrations of the function combinators."""


@demo.command("debounce")
@click.option("--calls", type=click.IntRange(min=1), default=3, show_default=True)
@click.option("--delay", type=float, default=0.1, show_default=True, help="Quiet period (s).")
@click.option("--spacing", type=click.FloatRange(min=0), default=0.01, show_default=True, help="Gap between calls (s).")
@_reporting_errors
def debounce_cmd(calls: int, delay: float, spacing: float) -> None:
    """Fire a burst of calls and count how many executions happen."""
    executed = threading.Event()
    runs: list[int] = []

    def on_settled(index: int) -> None:
        runs.append(index)
        executed.set()

    with debounce(on_settled, delay) as debounced:
        for i in range(calls):
            debounced(i)
            time.sleep(spacing)
        executed.wait(timeout=delay + calls * spacing + 1.0)

    click.echo(f"calls: {calls}")
    click.echo(f"executions: {len(runs)}")
    if runs:
        click.echo(f"executed with argument of call #{runs[-1] + 1}")
    success("Debounce demo finished.")


@demo.command("throttle")
@click.option("--calls", type=click.IntRange(min=1), default=5, show_default=True)
@click.option("--delay", type=float, default=0.05, show_default=True, help="Cooldown (s).")
@click.option("--spacing", type=click.FloatRange(min=0), default=0.02, show_default=True, help="Gap between calls (s).")
@_reporting_errors
def throttle_cmd(calls: int, delay: float, spacing: float) -> None:
    """Call a throttled function repeatedly and report which calls ran."""
    ran: list[int] = []
    throttled = throttle(ran.append, delay)
    for i in range(calls):
        throttled(i)
        time.sleep(spacing)

    for i in range(calls):
        click.echo(f"call {i + 1}: {'executed' if i in ran else 'suppressed'}")
    success(f"Throttle demo finished ({len(ran)} of {calls} executed).")


@demo.command("rate-limit")
@click.option("--capacity", type=int, default=2, show_default=True)
@click.option("--refill", type=int, default=10, show_default=True, help="Tokens per second.")
@click.option("--requests", type=click.IntRange(min=1), default=5, show_default=True)
@_reporting_errors
def rate_limit_cmd(capacity: int, refill: int, requests: int) -> None:
    """Issue back-to-back requests against a token bucket."""
    limiter = RateLimiter(capacity, refill)
    allowed = 0
    for i in range(requests):
        ok = limiter.allow()
        allowed += ok
        click.echo(f"request {i + 1}: {'allowed' if ok else 'denied'}")
    success(f"Rate-limit demo finished ({allowed} of {requests} allowed).")


@demo.command("breaker")
@click.option("--threshold", type=int, default=2, show_default=True)
@click.option("--cooldown", type=float, default=0.05, show_default=True, help="Open period (s).")
@_reporting_errors
def breaker_cmd(threshold: int, cooldown: float) -> None:
    """Trip a circuit breaker, get rejected, then recover after the cooldown."""
    breaker = CircuitBreaker(threshold, cooldown, name="demo")

    def failing() -> None:
        raise DemoFailure("dependency unavailable")

    for i in range(threshold):
        try:
            breaker.call(failing)
        except CircuitOperationError as e:
            click.echo(f"call {i + 1}: failed ({e.error}); state={breaker.state.value}")

    try:
        breaker.call(lambda: "unreachable")
    except CircuitOpenError as e:
        click.echo(f"call {threshold + 1}: rejected; state={breaker.state.value}")
        warn(f"Circuit is open for another {e.remaining:.3f}s.")

    time.sleep(cooldown)
    result = breaker.call(lambda: "ok")
    click.echo(f"probe: {result}; state={breaker.state.value}")
    success("Breaker demo finished.")


@demo.command("retry")
@click.option("--attempts", type=int, default=3, show_default=True)
@click.option("--base-delay", type=float, default=0.01, show_default=True, help="First backoff (s).")
@click.option("--fail-times", type=click.IntRange(min=0), default=2, show_default=True)
@_reporting_errors
def retry_cmd(attempts: int, base_delay: float, fail_times: int) -> None:
    """Retry an operation that fails a fixed number of times before succeeding."""
    calls = 0

    def flaky() -> int:
        nonlocal calls
        calls += 1
        if calls <= fail_times:
            raise DemoFailure(f"failure #{calls}")
        return 7

    try:
        value = retry_with_backoff(attempts, base_delay, flaky, retry_on=DemoFailure)
    except DemoFailure as e:
        click.echo(f"invocations: {calls}")
        error(f"All {attempts} attempt(s) failed; last error: {e}")
        raise click.exceptions.Exit(1) from e
    click.echo(f"invocations: {calls}")
    click.echo(f"result: {value}")
    success("Retry demo finished.")


@demo.command("timeout")
@click.option("--duration", type=float, default=0.05, show_default=True, help="Wait bound (s).")
@click.option("--work", type=click.FloatRange(min=0), default=0.01, show_default=True, help="Simulated work (s).")
@_reporting_errors
def timeout_cmd(duration: float, work: float) -> None:
    """Run simulated work under a bounded wait."""
    def job() -> int:
        time.sleep(work)
        return 42

    result = with_timeout(duration, job)
    if result is None:
        click.echo("result: timed out")
        warn(f"No result within {duration}s; the worker keeps running in the background.")
    else:
        click.echo(f"result: {result}")
    success("Timeout demo finished.")
