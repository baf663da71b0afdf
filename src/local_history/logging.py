"""Logging setup for the lhist CLI.

Log records and human readable command output share one rich console on
stderr. Stdout only carries --json documents and revision content, so it
stays safe to pipe.
"""

import logging
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers that flood DEBUG with one record per filesystem event
QUIET_LOGGERS = ("watchdog",)


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_level(verbosity: int = 0, quiet: bool = False) -> LogLevel:
    """Map the -v count and -q flag to a log level. -q wins."""
    if quiet:
        return LogLevel.QUIET
    if verbosity >= 1:
        return LogLevel.VERBOSE
    return LogLevel.NORMAL


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
) -> Console:
    """Install a rich handler on the root logger.

    Args:
        verbosity: Number of -v flags; -vv adds time and source location
        quiet: Only show warnings and errors
        no_color: Disable colored output

    Returns:
        Configured Rich console for output
    """
    level = resolve_level(verbosity, quiet)
    detailed = verbosity >= 2

    console = Console(
        stderr=True,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )
    handler = RichHandler(
        console=console,
        show_time=detailed,
        show_path=detailed,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    return console
