"""Errors raised by local-history."""


class LocalHistoryError(Exception):
    """Base exception for local-history errors."""


class WorkspaceError(LocalHistoryError):
    """Raised when no workspace root can be resolved."""


class HistoryDirectoryError(LocalHistoryError):
    """Raised when a mirrored history directory cannot be created."""


class RevisionNotFoundError(LocalHistoryError):
    """Raised when a revision selector matches no stored revision."""


class EditorError(LocalHistoryError):
    """Raised when the editor cannot be launched or exits with an error."""
