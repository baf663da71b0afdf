"""Per-file transient state kept while the process runs."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel


class PendingOriginal(BaseModel):
    """On-disk state of a file captured just before a save.

    Attributes:
        content: File bytes before the save overwrote them
        modified_at: Modification time of those bytes
    """

    content: bytes
    modified_at: datetime


class DocumentState(BaseModel):
    """Tracking state for one file.

    Attributes:
        path: Absolute resolved path, the tracker key
        relative_path: Workspace-relative path, resolved once then cached
        original: Snapshot awaiting the next post-save, if any
        excluded: Set once the file fails the workspace search; permanent
    """

    path: Path
    relative_path: Path | None = None
    original: PendingOriginal | None = None
    excluded: bool = False
