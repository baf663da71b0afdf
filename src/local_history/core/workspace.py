"""Workspace root discovery and file search."""

import logging
from pathlib import Path

from ..constants import CONFIG_FILE
from .globs import GlobMatcher

logger = logging.getLogger(__name__)

# Files or directories whose presence marks a workspace root
WORKSPACE_MARKERS = (CONFIG_FILE, ".git")


def find_workspace_root(start: Path | None = None) -> Path | None:
    """Find the workspace root containing a path.

    Walks up from start looking for a .lhist.toml file or a .git entry.

    Args:
        start: File or directory to start from (defaults to cwd)

    Returns:
        Resolved workspace root, or None if no marker was found
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent

    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in WORKSPACE_MARKERS):
            return candidate
    return None


class Workspace:
    """A workspace root and the files it contains."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()
        self._matchers: dict[str, GlobMatcher] = {}

    def relative_path(self, file_path: Path) -> Path | None:
        """Get a file's path relative to the workspace root.

        Returns:
            Relative path, or None for files outside the workspace
        """
        try:
            return file_path.resolve().relative_to(self.root)
        except ValueError:
            return None

    def is_excluded(self, relative_path: Path, exclude: str) -> bool:
        """Return True if the file or one of its folders matches exclude."""
        matcher = self._matchers.get(exclude)
        if matcher is None:
            matcher = self._matchers[exclude] = GlobMatcher(exclude)
        return matcher.match_path_or_parent(relative_path)

    def find_files(self, relative_path: Path, exclude: str = "") -> list[Path]:
        """Search the workspace for a relative path, honouring exclusions.

        Args:
            relative_path: Workspace-relative file path
            exclude: Glob of excluded files and folders

        Returns:
            [absolute path] when the file exists and is not excluded, else []
        """
        if exclude and self.is_excluded(relative_path, exclude):
            logger.debug("Excluded by %s: %s", exclude, relative_path)
            return []

        absolute = self.root / relative_path
        if not absolute.is_file():
            return []
        return [absolute]
