"""Outcome of a post-save revision flow."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class RevisionStatus(str, Enum):
    """Why a post-save flow did or did not write a revision."""

    RECORDED = "recorded"
    DISABLED = "disabled"
    UNTRACKED = "untracked"
    EXCLUDED = "excluded"


class RevisionResult(BaseModel):
    """Result of recording a revision for one file.

    Attributes:
        file: The saved workspace file
        status: Outcome of the flow
        revision: Revision written for the saved content
        original: Baseline revision written from the pending original
        purged: Revisions removed by retention
        errors: Copy failures, one message per failed step
    """

    file: Path
    status: RevisionStatus
    revision: Path | None = None
    original: Path | None = None
    purged: list[Path] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def recorded(self) -> bool:
        """True when the new revision was written."""
        return self.status is RevisionStatus.RECORDED and self.revision is not None
