"""Terminal message helpers for the TOOLCHEST CLI.

User-facing status lines carry a glyph that degrades to ASCII on terminals
that cannot encode emoji. They go to stderr, leaving stdout for the demo
observations.
"""

import click

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
ERROR = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded by the current stderr stream.

    The stream is looked up on every call so redirected or replaced streams
    are honoured.
    """
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    try:
        character.encode(getattr(stream, "encoding"))
    except UnicodeEncodeError:
        return False
    return True


def glyph(pair: tuple[str, str]) -> str:
    """Pick the emoji of ``(emoji, fallback)`` when stderr can encode it."""
    emoji, fallback = pair
    return emoji if _supports_character(emoji) else fallback


def _emit(pair: tuple[str, str], msg: str, color: str) -> None:
    click.secho(f"{glyph(pair)}  {msg}", fg=color, bold=True, err=True)


def warn(msg: str) -> None:
    """Write a bold yellow warning line to stderr, e.g. ``⚠️  Circuit is open.``"""
    _emit(CAUTION, msg, "yellow")


def success(msg: str) -> None:
    """Write a bold green success line to stderr, e.g. ``✅  Demo finished.``"""
    _emit(SUCCESS, msg, "green")


def error(msg: str) -> None:
    """Write a bold red error line to stderr, e.g. ``❌  Operation failed.``"""
    _emit(ERROR, msg, "red")
