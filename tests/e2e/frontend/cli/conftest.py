"""Fixtures for end-to-end tests of the `toolchest` command."""

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner():
    """A CliRunner with a wide terminal so Rich never wraps a log line."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def fs(runner):
    """Run the test inside the runner's isolated filesystem."""
    with runner.isolated_filesystem():
        yield
