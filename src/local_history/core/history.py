"""LocalHistory: the long-lived service behind every save and query."""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..config import HistoryConfig, LocalHistoryConfig, SaveMode, load_config, resolve_history_root
from ..errors import RevisionNotFoundError, WorkspaceError
from ..models import HistoryFile, RevisionResult, RevisionStatus
from ..services.filesystem import ensure_directory, read_bytes, write_bytes
from .document_tracker import DocumentTracker
from .history_index import Enumerator, HistoryIndex, glob_enumerator
from .path_codec import PathCodec, parse_revision_name, split_name
from .retention import RetentionPolicy
from .revision_store import RevisionStore
from .workspace import Workspace, find_workspace_root

logger = logging.getLogger(__name__)


class LocalHistory:
    """Revision history of one workspace.

    Owns the document tracker, so one instance should live as long as the
    host process that delivers save notifications.
    """

    def __init__(
        self,
        workspace_root: Path,
        config: LocalHistoryConfig | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
        enumerator: Enumerator = glob_enumerator,
        retention: RetentionPolicy | None = None,
    ) -> None:
        self.config = config or LocalHistoryConfig()
        self.workspace = Workspace(workspace_root)
        self.history_root = resolve_history_root(self.workspace.root, self.settings)
        self.codec = PathCodec(self.workspace.root, self.history_root)
        self.index = HistoryIndex(self.codec, enumerator)
        self.tracker = DocumentTracker()
        self.store = RevisionStore(
            self.settings,
            self.workspace,
            self.codec,
            self.index,
            self.tracker,
            clock=clock,
            retention=retention,
        )

    @classmethod
    def from_workspace(cls, root: Path | None = None, **kwargs) -> "LocalHistory":
        """Open the history of a workspace, loading its .lhist.toml.

        Args:
            root: Workspace root, or None to search upwards from cwd

        Raises:
            WorkspaceError: If no workspace root can be found
        """
        if root is None:
            root = find_workspace_root()
            if root is None:
                raise WorkspaceError("No workspace found (no .lhist.toml or .git above cwd)")
        elif not root.is_dir():
            raise WorkspaceError(f"Workspace directory not found: {root}")
        return cls(root, load_config(root), **kwargs)

    @property
    def settings(self) -> HistoryConfig:
        return self.config.history

    @property
    def save_mode(self) -> SaveMode:
        return self.settings.save_mode

    def will_save(
        self,
        file_path: Path,
        content: bytes | None = None,
        modified_at: datetime | None = None,
    ) -> bool:
        """Pre-save notification: capture the file's on-disk state."""
        if not self.settings.enabled:
            return False
        return self.store.capture_original(file_path, content, modified_at)

    def did_save(self, file_path: Path, content: bytes | None = None) -> RevisionResult:
        """Post-save notification: record a revision of the file."""
        if not self.settings.enabled:
            return RevisionResult(file=file_path, status=RevisionStatus.DISABLED)
        return self.store.record_revision(file_path, content)

    def find_all_history(self, file_path: Path, no_limit: bool = False) -> list[HistoryFile]:
        """Get revisions of a file, oldest first.

        Args:
            file_path: Workspace file, or any revision of it
            no_limit: Ignore the max_display setting

        Returns:
            Revisions, or [] if the path cannot be mapped into the history
        """
        relative = self._relative_path(file_path)
        if relative is None:
            return []
        max_count = None if no_limit else self.settings.max_display
        return self.index.list_entries(relative, max_count)

    def find_current(self, file_path: Path) -> Path:
        """Map a revision path to its workspace file.

        Plain paths and undecodable names are returned unchanged.
        """
        decoded = self.codec.decode(Path(file_path).resolve(), history=False)
        if decoded is None:
            return file_path
        return decoded.path

    def select_revision(self, file_path: Path, selector: str | None = None) -> HistoryFile:
        """Pick one revision of a file.

        Args:
            file_path: Workspace file, or any revision of it
            selector: None for the newest revision, a 14 digit timestamp
                (YYYYMMDDHHMMSS) or the path of a revision file

        Raises:
            RevisionNotFoundError: If nothing matches
        """
        entries = self.find_all_history(file_path, no_limit=True)
        if not entries:
            raise RevisionNotFoundError(f"No history for {file_path}")
        if selector is None:
            return entries[-1]

        parsed = parse_revision_name(f"_{selector}")
        if parsed is not None and not parsed[0]:
            wanted = [e for e in entries if e.timestamp == parsed[1]]
        else:
            selected = Path(selector).resolve()
            wanted = [e for e in entries if e.path.resolve() == selected]
        if not wanted:
            raise RevisionNotFoundError(f"No revision {selector} for {file_path}")
        return wanted[-1]

    def previous_revision(self, entry: HistoryFile) -> HistoryFile | None:
        """Get the revision saved just before entry, if any."""
        entries = self.find_all_history(entry.path, no_limit=True)
        earlier = [e for e in entries if e.timestamp < entry.timestamp]
        return earlier[-1] if earlier else None

    def restore(self, revision: HistoryFile) -> RevisionResult:
        """Replace a workspace file with the content of a revision.

        The replaced content is captured as a pending original and the
        restored content is recorded as a new revision, as for any save.
        """
        current = self.find_current(revision.path)
        content = read_bytes(revision.path)
        if current.exists():
            self.will_save(current)
        else:
            ensure_directory(current.parent)
        write_bytes(current, content)
        return self.did_save(current, content)

    def purge(
        self,
        file_path: Path | None = None,
        days_limit: int | None = None,
        dry_run: bool = False,
    ) -> list[Path]:
        """Delete expired revisions of one file or of the whole history tree.

        Args:
            file_path: Workspace file (or a revision of it); None purges all
            days_limit: Override the configured limit
            dry_run: Only report what would be deleted

        Returns:
            Deleted (or, for a dry run, expired) revision files
        """
        policy = self.store.retention
        if days_limit is not None:
            policy = policy.with_days(days_limit)

        if file_path is None:
            if not self.history_root.is_dir():
                return []
            candidates = [
                p
                for p in sorted(self.history_root.rglob("*"))
                if parse_revision_name(split_name(p.name)[0]) is not None
            ]
        else:
            candidates = [e.path for e in self.find_all_history(file_path, no_limit=True)]
        if dry_run:
            return policy.expired(candidates)
        return policy.purge(candidates)

    def count_revisions(self) -> int:
        """Count decodable revision files in the history tree."""
        if not self.history_root.is_dir():
            return 0
        return sum(
            1
            for p in self.history_root.rglob("*")
            if p.is_file() and parse_revision_name(split_name(p.name)[0]) is not None
        )

    def _relative_path(self, file_path: Path) -> Path | None:
        file_path = Path(file_path).resolve()
        if self.codec.is_history_path(file_path):
            decoded = self.codec.decode(file_path, history=False)
            if decoded is None:
                return None
            file_path = decoded.path
        state = self.tracker.get(file_path)
        if state is not None and state.relative_path is not None:
            return state.relative_path
        return self.workspace.relative_path(file_path)
