"""Enumeration of the stored revisions of a file."""

import glob
import logging
import os
from collections.abc import Callable
from pathlib import Path, PurePath

from ..models import HistoryFile
from .path_codec import PathCodec

logger = logging.getLogger(__name__)

# Given an absolute glob (wildcards only in the file name), return matches
Enumerator = Callable[[Path], list[Path]]


def glob_enumerator(pattern: Path) -> list[Path]:
    """Enumerate files matching a revision pattern, in ascending lexical order."""
    full_pattern = os.path.join(glob.escape(str(pattern.parent)), pattern.name)
    return sorted(Path(match) for match in glob.glob(full_pattern))


class HistoryIndex:
    """Lists revisions of workspace files, oldest first."""

    def __init__(self, codec: PathCodec, enumerator: Enumerator = glob_enumerator) -> None:
        self.codec = codec
        self._enumerate = enumerator

    def list_entries(
        self, relative_path: PurePath, max_count: int | None = None
    ) -> list[HistoryFile]:
        """Get decoded revisions of a file.

        Args:
            relative_path: File path relative to the workspace root
            max_count: Keep only the newest max_count revisions (None or 0
                keeps all)

        Returns:
            Revisions sorted by capture time, oldest first. Files whose
            names do not decode are skipped.
        """
        pattern = self.codec.encode(relative_path, pattern=True)
        entries = []
        for path in self._enumerate(pattern):
            entry = self.codec.decode(path)
            if entry is None or entry.timestamp is None:
                logger.debug("Skipping malformed history file: %s", path)
                continue
            entries.append(entry)

        # Enumerators are expected to sort, but order by the decoded instant anyway
        entries.sort(key=lambda e: e.timestamp)
        if max_count:
            entries = entries[-max_count:]
        return entries

    def list_revisions(self, relative_path: PurePath, max_count: int | None = None) -> list[Path]:
        """Get revision paths of a file, oldest first."""
        return [entry.path for entry in self.list_entries(relative_path, max_count)]
