"""Decoded view of a workspace or history file path."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class HistoryFile(BaseModel):
    """Components of a file path, with the revision instant when present.

    Attributes:
        directory: Directory component in the resolved space
        name: Base name without revision suffix or extension
        extension: Extension including the leading dot (may be empty)
        timestamp: Capture instant for revision files, None otherwise
        path: Resolved path (revision, search pattern or workspace file)
    """

    model_config = ConfigDict(frozen=True)

    directory: Path
    name: str
    extension: str = ""
    timestamp: datetime | None = Field(default=None, description="Revision capture time")
    path: Path

    @property
    def file_name(self) -> str:
        """Base name plus extension, without revision suffix."""
        return self.name + self.extension

    @property
    def label(self) -> str:
        """Human readable capture time."""
        if self.timestamp is None:
            return "current"
        return self.timestamp.strftime("%Y-%m-%d %H:%M:%S")
