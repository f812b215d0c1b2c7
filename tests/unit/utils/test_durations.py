"""Unit tests for toolchest.utils.durations."""

from datetime import timedelta

import pytest

from toolchest.errors import InvalidArgumentError
from toolchest.utils.durations import (
    MAX_WAIT_SECONDS,
    clamp_wait,
    require_int,
    to_seconds,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, 0.0),
        (1, 1.0),
        (0.25, 0.25),
        (timedelta(milliseconds=10), 0.01),
        (timedelta(minutes=1), 60.0),
        (float("inf"), float("inf")),
    ],
)
def test_to_seconds_accepts_numbers_and_timedeltas(value, expected):
    """Numbers are seconds; timedeltas are converted."""
    assert to_seconds(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value", [-1, -0.001, timedelta(seconds=-1), float("nan")]
)
def test_to_seconds_rejects_negative_and_nan(value):
    """Negative and NaN durations raise InvalidArgumentError (a ValueError)."""
    with pytest.raises(InvalidArgumentError) as excinfo:
        to_seconds(value, name="delay")
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.name == "delay"


@pytest.mark.parametrize("value", ["1", None, True, [1]])
def test_to_seconds_rejects_other_types(value):
    """Only numbers and timedeltas are durations."""
    with pytest.raises(TypeError):
        to_seconds(value)


def test_clamp_wait():
    """Waits are clamped to [0, threading.TIMEOUT_MAX]."""
    assert clamp_wait(-5) == 0.0
    assert clamp_wait(1.5) == 1.5
    assert clamp_wait(float("inf")) == MAX_WAIT_SECONDS


def test_require_int():
    """require_int enforces type and minimum."""
    assert require_int(3, name="n", minimum=1) == 3
    with pytest.raises(InvalidArgumentError, match="must be >= 1"):
        require_int(0, name="n", minimum=1)
    with pytest.raises(TypeError):
        require_int(True, name="n", minimum=0)
    with pytest.raises(TypeError):
        require_int(2.0, name="n", minimum=0)  # type: ignore[arg-type]
