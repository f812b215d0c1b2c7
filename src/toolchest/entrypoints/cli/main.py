"""``toolchest`` command.

The top-level group only sets up logging (console verbosity, the flight
recorder, per-logger levels) before dispatching to ``toolchest demo``. The
combinators log what they decide (a breaker opening, a retry attempt
failing, a timeout expiring), so the verbosity flags are how you watch a
demo from the inside.

Examples
    $ toolchest demo retry --fail-times 2
    $ toolchest -vv demo breaker --threshold 1
    $ toolchest -L toolchest.functions.retry=INFO -vv demo retry
"""

import logging
from pathlib import Path

import click
import click_extra as clickx

from toolchest import __version__, config
from toolchest.logging import LoggingOptions, configure, log_startup

from .demo import demo as demo_group
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """Run and observe the TOOLCHEST function combinators.

    Every demo drives one combinator (debounce, throttle, rate limiter,
    circuit breaker, retry with backoff, timeout) and prints what it did.
    Raise the verbosity to see the combinator's own log lines.
    """


def _console_level(verbose: int, quiet: int) -> int:
    """WARNING, moved one level per -v (down) or -q (up), within DEBUG..CRITICAL."""
    level = logging.WARNING - 10 * verbose + 10 * quiet
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "-v",
    "--verbose",
    "verbose",
    count=True,
    help="Show more log lines on stderr: -v for INFO, -vv for DEBUG.",
)
@click.option(
    "-q",
    "--quiet",
    "quiet",
    count=True,
    help="Show fewer log lines on stderr: -q for ERROR, -qq for CRITICAL.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log everything with time, thread name and source line.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=config.get_log_path,
    envvar=config.LOG_PATH_ENV,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=config.DEFAULT_FLIGHT_RECORDER_CAPACITY,
    envvar=config.FLIGHT_RECORDER_CAPACITY_ENV,
    show_envvar=True,
    hidden=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Buffer every log record in memory and write the buffer to --log-path "
        "when a WARNING is logged, e.g. when a circuit opens."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Also write the flight-recorder buffer when the command exits.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar=config.LOGGER_LEVELS_ENV,
    show_envvar=True,
    help=(
        "Minimum level for one logger, as NAME=LEVEL "
        "(e.g. toolchest.functions.retry=INFO). Repeatable."
    ),
)
@clickx.pass_context
def toolchest(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose: int,
    quiet: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Run and observe the TOOLCHEST function combinators."""
    options = LoggingOptions(
        level=_console_level(verbose, quiet),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure(options)
    log_startup(logger, app_version=__version__, options=options, handlers=handlers)
    ctx.call_on_close(logging.shutdown)


toolchest.add_command(demo_group)
