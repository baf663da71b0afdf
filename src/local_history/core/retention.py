"""Age based purging of revision files."""

import logging
import os
import stat
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from pathlib import Path

logger = logging.getLogger(__name__)


def revision_birth_time(st: os.stat_result) -> float:
    """Get a revision file's creation time from its stat result.

    Falls back to the modification time where the platform does not
    report a birth time; revision files are not rewritten after creation.
    """
    birth_time = getattr(st, "st_birthtime", None)
    if birth_time:
        return birth_time
    return st.st_mtime


class RetentionPolicy:
    """Deletes revisions older than a number of days.

    Each file is judged on its own creation time. A days_limit of 0
    disables purging.
    """

    def __init__(
        self,
        days_limit: int,
        clock: Callable[[], datetime] = datetime.now,
        birth_time: Callable[[os.stat_result], float] = revision_birth_time,
    ) -> None:
        self.days_limit = days_limit
        self._clock = clock
        self._birth_time = birth_time

    def is_expired(self, st: os.stat_result) -> bool:
        """Return True if a file with this stat result is past the limit."""
        born = datetime.fromtimestamp(self._birth_time(st))
        return self._clock() - born > timedelta(days=self.days_limit)

    def with_days(self, days_limit: int) -> "RetentionPolicy":
        """Copy of this policy with another age limit."""
        return RetentionPolicy(days_limit, clock=self._clock, birth_time=self._birth_time)

    def expired(self, files: Iterable[Path]) -> list[Path]:
        """Select expired regular files.

        Files that cannot be stat'ed are treated as already gone.
        """
        if self.days_limit <= 0:
            return []

        selected = []
        for path in files:
            try:
                st = path.stat()
            except OSError:
                continue
            if stat.S_ISREG(st.st_mode) and self.is_expired(st):
                selected.append(path)
        return selected

    def purge(self, files: Iterable[Path]) -> list[Path]:
        """Delete expired regular files.

        Failed deletions are logged and skipped. There is no retry.

        Args:
            files: Candidate revision files

        Returns:
            Files that were deleted
        """
        deleted = []
        for path in self.expired(files):
            try:
                path.unlink()
            except OSError as e:
                logger.warning("Failed to delete expired revision %s: %s", path, e)
                continue
            logger.debug("Purged expired revision %s", path)
            deleted.append(path)
        return deleted
