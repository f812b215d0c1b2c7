"""Configuration utilities for TOOLCHEST.

This module centralizes small helpers and constants related to application
configuration. Only the command-line interface reads configuration; the
combinators themselves are configured through constructor arguments.
"""

import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "toolchest"

LOG_PATH_ENV = "TOOLCHEST_LOG_PATH"  # pragma: no mutate
FLIGHT_RECORDER_CAPACITY_ENV = "TOOLCHEST_FLIGHT_RECORDER_CAPACITY"  # pragma: no mutate
LOGGER_LEVELS_ENV = "TOOLCHEST_LOGGER_LEVELS"  # pragma: no mutate

DEFAULT_FLIGHT_RECORDER_CAPACITY = 2000
LOG_FILE_NAME = "latest.log"


def default_log_path() -> Path:
    """Return the per-user flight-recorder log file, creating its directory.

    Returns:
        ``<user log dir>/toolchest/latest.log`` as resolved by `platformdirs`.
    """
    return Path(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True)) / LOG_FILE_NAME


def get_log_path() -> Path:
    """Get the flight-recorder log path.

    Returns:
        The value of `TOOLCHEST_LOG_PATH` if set, otherwise `default_log_path()`.
    """
    if raw := os.environ.get(LOG_PATH_ENV):
        return Path(raw)
    return default_log_path()

