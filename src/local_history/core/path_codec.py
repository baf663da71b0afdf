"""Mapping between workspace files and their revision files.

A revision of <workspace>/<dir>/<name><ext> captured at a local wall-clock
instant is stored as <history root>/<dir>/<name>_YYYYMMDDHHMMSS<ext>. The
suffix is fixed width and zero padded, so lexical order of revision names
is chronological order. Timestamps have second granularity: two captures
within the same second map to the same file and the later one overwrites.
"""

import glob
import re
from datetime import datetime
from pathlib import Path, PurePath

from ..constants import HISTORY_DIR, TIMESTAMP_DIGITS, TIMESTAMP_SEPARATOR
from ..models import HistoryFile

# Wildcard suffix used to search for every revision of a file
REVISION_PATTERN = TIMESTAMP_SEPARATOR + "[0-9]" * TIMESTAMP_DIGITS

REVISION_SUFFIX_RE = re.compile(r"_(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})$")


def format_timestamp(timestamp: datetime) -> str:
    """Format the revision suffix for a capture instant, e.g. "_20230601101530"."""
    date_part = 10000 * timestamp.year + 100 * timestamp.month + timestamp.day
    time_part = 10000 * timestamp.hour + 100 * timestamp.minute + timestamp.second
    return f"{TIMESTAMP_SEPARATOR}{date_part:08d}{time_part:06d}"


def parse_revision_name(name: str) -> tuple[str, datetime] | None:
    """Split a revision base name into the original name and its timestamp.

    Args:
        name: File name without extension, e.g. "a_20230601101530"

    Returns:
        (original name, timestamp), or None if the name carries no valid
        14 digit suffix or the digits are not a real calendar instant
    """
    match = REVISION_SUFFIX_RE.search(name)
    if match is None:
        return None
    try:
        timestamp = datetime(*(int(group) for group in match.groups()))
    except ValueError:
        return None
    return name[: match.start()], timestamp


def split_name(file_name: str) -> tuple[str, str]:
    """Split a file name into base name and extension.

    The extension runs from the last dot to the end and keeps its dot. Dots
    leading the name never start an extension, and a trailing dot is an
    extension of its own:

        "a.ts" -> ("a", ".ts")
        "archive.tar.gz" -> ("archive.tar", ".gz")
        "notes." -> ("notes", ".")
        ".bashrc" -> (".bashrc", "")
    """
    leading = len(file_name) - len(file_name.lstrip("."))
    dot = file_name.rfind(".", leading)
    if dot == -1:
        return file_name, ""
    return file_name[:dot], file_name[dot:]


def join_path(
    directory: Path,
    name: str,
    extension: str,
    history: bool | None = None,
    timestamp: datetime | None = None,
) -> Path:
    """Join a file path, adding the revision suffix when requested.

    Args:
        directory: Target directory
        name: Base name without extension
        extension: Extension including the leading dot
        history: When True and no timestamp is given, add the wildcard suffix
        timestamp: Capture instant; adds the concrete suffix

    Returns:
        Concrete revision path, search pattern or plain path
    """
    if timestamp is not None:
        return directory / f"{name}{format_timestamp(timestamp)}{extension}"
    if history is True:
        return directory / f"{glob.escape(name)}{REVISION_PATTERN}{glob.escape(extension)}"
    return directory / f"{name}{extension}"


class PathCodec:
    """Encodes and decodes revision paths for one workspace."""

    def __init__(self, workspace_root: Path, history_root: Path) -> None:
        self.workspace_root = workspace_root
        self.history_root = history_root

    def is_history_path(self, path: Path) -> bool:
        """Return True if the path lives in a shadow history tree."""
        return path.is_relative_to(self.history_root) or HISTORY_DIR in path.parts

    def encode(
        self,
        relative_path: PurePath,
        timestamp: datetime | None = None,
        *,
        pattern: bool = False,
    ) -> Path:
        """Build the history path for a workspace-relative file.

        Args:
            relative_path: File path relative to the workspace root
            timestamp: Capture instant of the revision
            pattern: Build a glob matching every revision instead

        Returns:
            <history root>/<relative dir>/<name>[suffix]<ext>
        """
        relative_path = PurePath(relative_path)
        name, extension = split_name(relative_path.name)
        return join_path(
            self.history_root / relative_path.parent,
            name,
            extension,
            history=pattern,
            timestamp=timestamp,
        )

    def decode(self, path: Path, history: bool | None = None) -> HistoryFile | None:
        """Parse a workspace or history path.

        Args:
            path: Absolute workspace file or revision file path
            history: Target space of the resolved path. None keeps the path
                as is; True resolves to the revision search pattern; False
                resolves to the workspace file.

        Returns:
            Decoded components, or None when a history path has a malformed
            revision suffix or lies outside the root it must be mapped from
        """
        path = Path(path)
        directory = path.parent
        name, extension = split_name(path.name)
        timestamp = None

        is_history = self.is_history_path(path)
        if is_history:
            parsed = parse_revision_name(name)
            if parsed is None:
                return None
            name, timestamp = parsed

        if history is None:
            resolved = path
        else:
            if history != is_history:
                source, target = (
                    (self.workspace_root, self.history_root)
                    if history
                    else (self.history_root, self.workspace_root)
                )
                try:
                    directory = target / directory.relative_to(source)
                except ValueError:
                    return None
            resolved = join_path(directory, name, extension, history=history)

        return HistoryFile(
            directory=directory,
            name=name,
            extension=extension,
            timestamp=timestamp,
            path=resolved,
        )
