"""Parsing of ``-L NAME=LEVEL`` logger-level options.

Values arrive either as repeated CLI flags (a tuple of strings) or as a single
environment-variable string; both may hold several comma- or space-separated
``NAME=LEVEL`` items. Later items override earlier ones.
"""

import logging
import re

import click

# Loggers quietened unless the user says otherwise.
DEFAULT_LIB_LEVELS = {"click_extra": logging.WARNING, "asyncio": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def _split_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def _to_level(level_str: str) -> int:
    lvl = logging.getLevelName(level_str.strip().upper())
    if not isinstance(lvl, int):
        raise click.BadParameter(f"Invalid log level: {level_str}")
    return lvl


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback turning ``NAME=LEVEL`` items into a name -> level mapping.

    The result starts from ``DEFAULT_LIB_LEVELS``; level names are matched
    case-insensitively.

    Raises:
        click.BadParameter: If an item is not ``NAME=LEVEL`` or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _split_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = _to_level(level_str)
    return levels
