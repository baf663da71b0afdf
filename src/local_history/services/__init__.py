"""External integrations for local-history.

This package provides interfaces to the host environment:
- filesystem: Common file I/O operations
- editor: Launching the user's editor on a file
- watcher: Filesystem events as save notifications
"""

from .editor import edit_file
from .filesystem import ensure_directory, modified_time, read_bytes, write_bytes
from .watcher import HistoryWatcher, SaveEventHandler

__all__ = [
    "HistoryWatcher",
    "SaveEventHandler",
    "edit_file",
    "ensure_directory",
    "modified_time",
    "read_bytes",
    "write_bytes",
]
