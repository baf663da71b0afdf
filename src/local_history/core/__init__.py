"""Core revision engine for local-history.

This package maps workspace files to revision files, records revisions on
save and purges expired ones.
"""

from .document_tracker import DocumentTracker
from .globs import GlobMatcher, expand_braces
from .history import LocalHistory
from .history_index import HistoryIndex, glob_enumerator
from .path_codec import (
    PathCodec,
    format_timestamp,
    join_path,
    parse_revision_name,
    split_name,
)
from .retention import RetentionPolicy, revision_birth_time
from .revision_store import RevisionStore
from .workspace import Workspace, find_workspace_root

__all__ = [
    "DocumentTracker",
    "GlobMatcher",
    "HistoryIndex",
    "LocalHistory",
    "PathCodec",
    "RetentionPolicy",
    "RevisionStore",
    "Workspace",
    "expand_braces",
    "find_workspace_root",
    "format_timestamp",
    "glob_enumerator",
    "join_path",
    "parse_revision_name",
    "revision_birth_time",
    "split_name",
]
