"""Writing revisions on save.

The pre-save hook captures the on-disk state of a file as its pending
original. The post-save hook writes that original as the earliest revision
when the file has no history yet, always writes the saved content as a new
revision, then purges expired revisions.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..config import HistoryConfig
from ..errors import HistoryDirectoryError
from ..models import PendingOriginal, RevisionResult, RevisionStatus
from ..services.filesystem import ensure_directory, modified_time, read_bytes, write_bytes
from .document_tracker import DocumentTracker
from .history_index import HistoryIndex
from .path_codec import PathCodec
from .retention import RetentionPolicy
from .workspace import Workspace

logger = logging.getLogger(__name__)


class RevisionStore:
    """Captures originals and records revisions for workspace files."""

    def __init__(
        self,
        config: HistoryConfig,
        workspace: Workspace,
        codec: PathCodec,
        index: HistoryIndex,
        tracker: DocumentTracker,
        clock: Callable[[], datetime] = datetime.now,
        retention: RetentionPolicy | None = None,
    ) -> None:
        self.config = config
        self.workspace = workspace
        self.codec = codec
        self.index = index
        self.tracker = tracker
        self._clock = clock
        self.retention = retention or RetentionPolicy(config.days_limit, clock=clock)

    def capture_original(
        self,
        file_path: Path,
        content: bytes | None = None,
        modified_at: datetime | None = None,
    ) -> bool:
        """Remember the on-disk state of a file before it is saved.

        Only the first capture after a recorded revision is kept; later
        captures are ignored until the next post-save consumes it.

        Args:
            file_path: Absolute path of the file about to be saved
            content: Bytes currently on disk (read from the file if None)
            modified_at: Modification time of those bytes (stat'ed if None)

        Returns:
            True if a new original is now pending
        """
        state = self.tracker.get_or_create(file_path)
        if state.excluded or state.original is not None:
            return False

        try:
            if content is None:
                content = read_bytes(file_path)
            if modified_at is None:
                modified_at = modified_time(file_path)
        except OSError as e:
            logger.warning("Original file %s cannot be saved: %s", file_path, e)
            return False

        state.original = PendingOriginal(content=content, modified_at=modified_at)
        return True

    def record_revision(self, file_path: Path, content: bytes | None = None) -> RevisionResult:
        """Record a revision of a saved file.

        Args:
            file_path: Absolute path of the saved file
            content: Saved bytes (read from the file if None)

        Returns:
            Outcome of the flow; copy failures are listed in errors

        Raises:
            HistoryDirectoryError: If the mirrored directory cannot be created.
                Nothing is written in that case.
        """
        state = self.tracker.get_or_create(file_path)
        if state.excluded:
            return RevisionResult(file=state.path, status=RevisionStatus.EXCLUDED)

        if state.relative_path is None:
            state.relative_path = self.workspace.relative_path(state.path)
            if state.relative_path is None:
                logger.debug("Not in workspace, ignoring: %s", state.path)
                return RevisionResult(file=state.path, status=RevisionStatus.UNTRACKED)
        relative = state.relative_path

        if not self.workspace.find_files(relative, self.config.exclude):
            state.original = None
            state.excluded = True
            logger.debug("Excluded from history: %s", relative)
            return RevisionResult(file=state.path, status=RevisionStatus.EXCLUDED)

        now = self._clock()
        revision_path = self.codec.encode(relative, now)
        try:
            ensure_directory(revision_path.parent)
        except OSError as e:
            raise HistoryDirectoryError(
                f"Cannot create history directory {revision_path.parent}: {e}"
            ) from e

        result = RevisionResult(file=state.path, status=RevisionStatus.RECORDED)
        history = None

        # Only the first revision ever may be preceded by the original
        if state.original is not None:
            original, state.original = state.original, None
            history = self.index.list_revisions(relative)
            if not history:
                original_path = self.codec.encode(relative, original.modified_at)
                if self._copy(state.path, original.content, original_path, result):
                    result.original = original_path

        if content is None:
            try:
                content = read_bytes(state.path)
            except OSError as e:
                self._fail(result, state.path, revision_path, e)
        if content is not None and self._copy(state.path, content, revision_path, result):
            result.revision = revision_path
            logger.debug("Recorded revision %s", revision_path)

        if self.config.days_limit > 0:
            if history is None:
                history = self.index.list_revisions(relative)
            result.purged = self.retention.purge(history)

        return result

    def _copy(self, source: Path, content: bytes, target: Path, result: RevisionResult) -> bool:
        try:
            write_bytes(target, content)
        except OSError as e:
            self._fail(result, source, target, e)
            return False
        return True

    def _fail(self, result: RevisionResult, source: Path, target: Path, error: OSError) -> None:
        message = f"Error copying {source} => {target}: {error}"
        logger.error(message)
        result.errors.append(message)
