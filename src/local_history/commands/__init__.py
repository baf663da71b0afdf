"""CLI command implementations for lhist.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .browse import list_cmd, show
from .diff import diff
from .init import init
from .purge import purge
from .record import edit, record
from .restore import restore
from .status import status
from .watch import watch

__all__ = [
    "diff",
    "edit",
    "init",
    "list_cmd",
    "purge",
    "record",
    "restore",
    "show",
    "status",
    "watch",
]
