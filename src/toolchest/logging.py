"""Log handling for the ``toolchest`` command.

The combinators only create module loggers; this module decides where their
records go when the CLI runs:

- a Rich console handler on stderr whose level follows ``-v``/``-q``. Each
  line is tagged with the combinator that emitted it (``[retry]``,
  ``[circuit_breaker]``) or the top-level package of a third-party logger;
- an optional flight recorder: a bounded in-memory buffer of every record,
  written to a file when a WARNING arrives (a breaker opening, retries running
  out) or, with ``force_flush``, when the command exits.

:func:`configure` installs both from a :class:`LoggingOptions` and
:func:`log_startup` records what was installed.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "toolchest"
COMBINATOR_PACKAGE = "toolchest.functions"

CONSOLE_FORMAT = "%(tag)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s [%(threadName)s] %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] %(threadName)s %(levelname)s %(name)s:%(lineno)d: %(message)s"
)

# loggers whose level the last configure() call changed
_overridden: set[str] = set()


@dataclass(frozen=True)
class LoggingOptions:
    """Everything :func:`configure` needs, as parsed from the command line.

    ``log_path=None`` disables the flight recorder.
    """

    level: int = logging.WARNING
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    recorder_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def flight_recorder(self) -> bool:
        """Whether records are buffered for the log file."""
        return self.log_path is not None


def source_tag(name: str) -> str:
    """Return the console tag for logger ``name``.

    ``toolchest.functions.retry`` -> ``[retry]``; ``urllib3.connectionpool``
    -> ``[urllib3]``; any other ``toolchest`` logger gets no tag.
    """
    if name.startswith(f"{COMBINATOR_PACKAGE}."):
        return f"[{name.rsplit('.', 1)[1]}]"
    if name == PROJECT_PREFIX or name.startswith(f"{PROJECT_PREFIX}."):
        return ""
    return f"[{name.split('.', 1)[0]}]"


class SourceTagFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Set ``record.tag`` (see :func:`source_tag`); never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tag = source_tag(record.name)
        return True


def console_handler(
    level: int, *, debug: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr handler.

    In debug mode every record is shown with its time, thread and source
    location, which is what you want when following a debounce worker or a
    timeout thread.
    """
    console = Console(color_system="auto" if color else None, stderr=True)
    handler = RichHandler(
        level=logging.DEBUG if debug else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug,
        enable_link_path=debug,
    )
    if debug:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(SourceTagFilter())
    return handler


def flight_recorder(
    path: Path, *, capacity: int, flush_on_close: bool = False
) -> MemoryHandler:
    """Buffer up to ``capacity`` records and dump them to ``path`` on WARNING.

    The file is truncated when the recorder is created, so it only ever holds
    the latest run.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=flush_on_close,
    )


def configure(options: LoggingOptions) -> list[logging.Handler]:
    """Install the console handler and, if enabled, the flight recorder.

    The root logger is opened to DEBUG so the recorder sees everything; the
    handlers do the filtering. Per-logger levels from an earlier call are
    cleared before ``options.logger_levels`` is applied.

    Returns:
        The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [
        console_handler(options.level, debug=options.debug, color=options.color)
    ]
    if options.log_path is not None:
        handlers.append(
            flight_recorder(
                options.log_path,
                capacity=options.recorder_capacity,
                flush_on_close=options.force_flush,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name in _overridden - options.logger_levels.keys():
        logging.getLogger(name).setLevel(logging.NOTSET)
    for name, level in options.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    _overridden.clear()
    _overridden.update(options.logger_levels)
    return handlers


def _dist_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "<not installed>"


def log_startup(
    logger: logging.Logger,
    *,
    app_version: str,
    options: LoggingOptions,
    handlers: list[logging.Handler],
) -> None:
    """Log a one-line summary at INFO and the runtime details at DEBUG.

    The DEBUG lines only reach the console with ``-vv`` but always land in the
    flight recorder, so a dumped log says which versions produced it.
    """
    logger.info(
        "toolchest %s starting (console=%s, flight recorder %s)",
        app_version,
        logging.getLevelName(options.level),
        "on" if options.flight_recorder else "off",
    )
    logger.debug(
        "Runtime: Python %s on %s %s, pid %d, cwd %s",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
        os.getpid(),
        Path.cwd(),
    )
    logger.debug(
        "Libraries: click %s, click-extra %s, rich %s",
        _dist_version("click"),
        _dist_version("click-extra"),
        _dist_version("rich"),
    )
    logger.debug("Handlers: %s", ", ".join(type(h).__name__ for h in handlers))
    if options.flight_recorder:
        logger.debug(
            "Flight recorder: %s (capacity %d, flush on exit: %s)",
            options.log_path,
            options.recorder_capacity,
            "yes" if options.force_flush else "no",
        )
    logger.debug(
        "Logger levels: %s",
        ", ".join(
            f"{name}={logging.getLevelName(level)}"
            for name, level in sorted(options.logger_levels.items())
        )
        or "<none>",
    )
