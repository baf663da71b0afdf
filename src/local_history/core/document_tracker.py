"""Per-file tracking state for the lifetime of the process."""

from pathlib import Path

from ..models import DocumentState


class DocumentTracker:
    """Table of DocumentState keyed by resolved absolute path.

    Entries are created lazily and never evicted: every file saved while
    the process runs keeps its (small) entry until exit.
    """

    def __init__(self) -> None:
        self._documents: dict[Path, DocumentState] = {}

    def get(self, file_path: Path) -> DocumentState | None:
        """Get the state of a file, if tracked."""
        return self._documents.get(file_path.resolve())

    def get_or_create(self, file_path: Path) -> DocumentState:
        """Get the state of a file, creating an empty entry on first use."""
        key = file_path.resolve()
        state = self._documents.get(key)
        if state is None:
            state = self._documents[key] = DocumentState(path=key)
        return state

    def __len__(self) -> int:
        return len(self._documents)
