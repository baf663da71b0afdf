"""Pydantic models for local-history."""

from .document import DocumentState, PendingOriginal
from .history_file import HistoryFile
from .revision import RevisionResult, RevisionStatus

__all__ = [
    "DocumentState",
    "HistoryFile",
    "PendingOriginal",
    "RevisionResult",
    "RevisionStatus",
]
