"""Filesystem events as save notifications.

The watcher only sees files after they were written, so it delivers
post-save notifications; no original is captured before the first save.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ..constants import CONFIG_FILE, WATCH_STOP_TIMEOUT
from ..errors import HistoryDirectoryError
from ..models import RevisionResult

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

    from ..core.history import LocalHistory

logger = logging.getLogger(__name__)


class SaveEventHandler(FileSystemEventHandler):
    """Records a revision whenever a workspace file is written."""

    def __init__(
        self,
        history: LocalHistory,
        on_result: Callable[[RevisionResult], None] | None = None,
    ) -> None:
        super().__init__()
        self.history = history
        self._on_result = on_result

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.handle_save(Path(os.fsdecode(event.src_path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.handle_save(Path(os.fsdecode(event.src_path)))

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save atomically write a temp file and rename it
        if not event.is_directory:
            self.handle_save(Path(os.fsdecode(event.dest_path)))

    def handle_save(self, path: Path) -> RevisionResult | None:
        """Record a revision for a written file.

        Returns:
            The flow's result, or None if the event was ignored
        """
        if self.history.codec.is_history_path(path) or path.name == CONFIG_FILE:
            return None
        # Gone again (temp file, or mid-way through an atomic save)
        if not path.is_file():
            return None

        try:
            result = self.history.did_save(path)
        except HistoryDirectoryError as e:
            logger.error("%s", e)
            return None

        if result.recorded:
            logger.info("Recorded %s", result.revision)
        if self._on_result is not None:
            self._on_result(result)
        return result


class HistoryWatcher:
    """Watches a workspace and records revisions of written files."""

    def __init__(
        self,
        history: LocalHistory,
        on_result: Callable[[RevisionResult], None] | None = None,
    ) -> None:
        self.history = history
        self.handler = SaveEventHandler(history, on_result)
        self._observer: BaseObserver | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        """Start watching the workspace. Safe to call when already running."""
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(self.handler, str(self.history.workspace.root), recursive=True)
        observer.start()
        self._observer = observer
        logger.info("Watching %s", self.history.workspace.root)

    def stop(self) -> None:
        """Stop watching. Safe to call multiple times."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=WATCH_STOP_TIMEOUT)
        self._observer = None
        logger.info("Stopped watching %s", self.history.workspace.root)

    def __enter__(self) -> HistoryWatcher:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
