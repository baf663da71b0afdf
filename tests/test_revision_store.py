"""Tests for the save flow: capturing originals and recording revisions."""

import os
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import FakeClock, age_file, make_history
from local_history.core import LocalHistory
from local_history.errors import HistoryDirectoryError
from local_history.models import RevisionStatus


def set_mtime(path: Path, when: datetime) -> None:
    stamp = when.timestamp()
    os.utime(path, (stamp, stamp))


def revision_names(history: LocalHistory, relative: str = "src") -> list[str]:
    directory = history.history_root / relative
    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir())


@pytest.fixture
def source(workspace: Path) -> Path:
    return workspace / "src" / "a.ts"


class TestRecordRevision:
    """Tests for the post-save flow."""

    @pytest.mark.unit
    def test_writes_revision_at_mirrored_path(
        self, history: LocalHistory, source: Path, workspace: Path
    ) -> None:
        result = history.did_save(source)

        expected = workspace / ".history" / "src" / "a_20230601101530.ts"
        assert result.status is RevisionStatus.RECORDED
        assert result.recorded
        assert result.revision == expected
        assert expected.read_bytes() == source.read_bytes()
        assert result.original is None
        assert result.errors == []

    @pytest.mark.unit
    def test_saved_content_argument_wins_over_disk(
        self, history: LocalHistory, source: Path
    ) -> None:
        result = history.did_save(source, b"buffer contents")
        assert result.revision is not None
        assert result.revision.read_bytes() == b"buffer contents"

    @pytest.mark.unit
    def test_original_preserved_exactly_once(
        self, history: LocalHistory, source: Path, clock: FakeClock
    ) -> None:
        original_time = clock() - timedelta(hours=1)
        source.write_text("O")
        set_mtime(source, original_time)

        assert history.will_save(source)
        source.write_text("A")
        first = history.did_save(source)

        assert first.original is not None
        assert first.original.name == "a_20230601091530.ts"
        assert first.original.read_text() == "O"
        assert first.revision is not None
        assert first.revision.read_text() == "A"

        clock.advance(seconds=10)
        assert history.will_save(source)
        source.write_text("B")
        second = history.did_save(source)

        assert second.original is None
        assert revision_names(history) == [
            "a_20230601091530.ts",
            "a_20230601101530.ts",
            "a_20230601101540.ts",
        ]

    @pytest.mark.unit
    def test_existing_history_discards_original(
        self, history: LocalHistory, source: Path, clock: FakeClock
    ) -> None:
        history.did_save(source)
        clock.advance(minutes=1)

        history.will_save(source)
        result = history.did_save(source)

        assert result.original is None
        assert history.tracker.get(source).original is None
        assert len(revision_names(history)) == 2

    @pytest.mark.unit
    def test_original_without_post_save_is_kept_pending(
        self, history: LocalHistory, source: Path
    ) -> None:
        history.will_save(source, b"first", datetime(2023, 1, 1))
        assert not history.will_save(source, b"second", datetime(2023, 1, 2))

        pending = history.tracker.get(source).original
        assert pending is not None
        assert pending.content == b"first"

    @pytest.mark.unit
    def test_capture_reads_disk(self, history: LocalHistory, source: Path) -> None:
        history.will_save(source)
        pending = history.tracker.get(source).original
        assert pending is not None
        assert pending.content == source.read_bytes()

    @pytest.mark.unit
    def test_capture_failure_leaves_nothing_pending(
        self, history: LocalHistory, workspace: Path
    ) -> None:
        missing = workspace / "src" / "missing.ts"
        assert not history.will_save(missing)
        assert history.tracker.get(missing).original is None

    @pytest.mark.unit
    def test_same_second_saves_overwrite(self, history: LocalHistory, source: Path) -> None:
        history.did_save(source, b"one")
        result = history.did_save(source, b"two")

        assert revision_names(history) == ["a_20230601101530.ts"]
        assert result.revision is not None
        assert result.revision.read_bytes() == b"two"


class TestSkippedFiles:
    """Tests for files that never get revisions."""

    @pytest.mark.unit
    def test_excluded_folder(self, history: LocalHistory, workspace: Path) -> None:
        module = workspace / "node_modules" / "lib" / "x.js"
        module.parent.mkdir(parents=True)
        module.write_text("module.exports = 1;\n")

        history.will_save(module)
        result = history.did_save(module)

        assert result.status is RevisionStatus.EXCLUDED
        assert not result.recorded
        assert not (workspace / ".history").exists()
        state = history.tracker.get(module)
        assert state.excluded
        assert state.original is None

    @pytest.mark.unit
    def test_exclusion_is_permanent(self, history: LocalHistory, workspace: Path) -> None:
        module = workspace / "node_modules" / "x.js"
        module.parent.mkdir()
        module.write_text("x")
        history.did_save(module)

        assert not history.will_save(module)
        assert history.did_save(module).status is RevisionStatus.EXCLUDED
        assert not (workspace / ".history").exists()

    @pytest.mark.unit
    def test_custom_exclude(self, workspace: Path, clock: FakeClock) -> None:
        history = make_history(workspace, clock, exclude="**/*.log")
        log = workspace / "debug.log"
        log.write_text("x")
        assert history.did_save(log).status is RevisionStatus.EXCLUDED

    @pytest.mark.unit
    def test_outside_workspace(self, history: LocalHistory, tmp_path: Path) -> None:
        outside = tmp_path / "outside.txt"
        outside.write_text("x")

        result = history.did_save(outside)

        assert result.status is RevisionStatus.UNTRACKED
        assert result.revision is None

    @pytest.mark.unit
    def test_disabled(self, workspace: Path, clock: FakeClock, source: Path) -> None:
        history = make_history(workspace, clock, enabled=False)

        assert not history.will_save(source)
        assert history.did_save(source).status is RevisionStatus.DISABLED
        assert not (workspace / ".history").exists()


class TestFailures:
    """Tests for I/O failures during the save flow."""

    @pytest.mark.unit
    def test_history_directory_failure_aborts(
        self, history: LocalHistory, source: Path, workspace: Path
    ) -> None:
        (workspace / ".history").write_text("not a directory")

        with pytest.raises(HistoryDirectoryError):
            history.did_save(source)

        assert (workspace / ".history").read_text() == "not a directory"

    @pytest.mark.unit
    def test_copy_failure_is_reported(self, history: LocalHistory, source: Path) -> None:
        with patch(
            "local_history.core.revision_store.write_bytes", side_effect=OSError("disk full")
        ):
            result = history.did_save(source)

        assert result.status is RevisionStatus.RECORDED
        assert result.revision is None
        assert not result.recorded
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Error copying")
        assert "disk full" in result.errors[0]

    @pytest.mark.unit
    def test_original_copy_failure_still_records(
        self, history: LocalHistory, source: Path
    ) -> None:
        history.will_save(source, b"old", datetime(2023, 6, 1, 9, 0, 0))
        calls = []

        def fail_first(path: Path, content: bytes) -> None:
            calls.append(path)
            if len(calls) == 1:
                raise OSError("read-only")
            path.write_bytes(content)

        with patch("local_history.core.revision_store.write_bytes", side_effect=fail_first):
            result = history.did_save(source, b"new")

        assert result.original is None
        assert result.revision is not None
        assert result.revision.read_bytes() == b"new"
        assert len(result.errors) == 1


class TestRetentionOnSave:
    """Tests for purging during the save flow."""

    @pytest.mark.unit
    def test_purges_expired_revisions(
        self, history: LocalHistory, source: Path, clock: FakeClock
    ) -> None:
        directory = history.history_root / "src"
        directory.mkdir(parents=True)
        old = directory / "a_20230401000000.ts"
        recent = directory / "a_20230520000000.ts"
        for path, days in ((old, 31), (recent, 29)):
            path.write_text("x")
            age_file(path, clock(), days)

        result = history.did_save(source)

        assert result.purged == [old]
        assert not old.exists()
        assert recent.exists()
        assert result.revision is not None and result.revision.exists()

    @pytest.mark.unit
    def test_zero_days_keeps_everything(
        self, workspace: Path, clock: FakeClock, source: Path
    ) -> None:
        history = make_history(workspace, clock, days_limit=0)
        directory = history.history_root / "src"
        directory.mkdir(parents=True)
        old = directory / "a_20200101000000.ts"
        old.write_text("x")
        age_file(old, clock(), 1000)

        result = history.did_save(source)

        assert result.purged == []
        assert old.exists()

    @pytest.mark.unit
    def test_other_files_untouched(
        self, history: LocalHistory, source: Path, clock: FakeClock
    ) -> None:
        directory = history.history_root / "src"
        directory.mkdir(parents=True)
        other = directory / "b_20230401000000.ts"
        other.write_text("x")
        age_file(other, clock(), 90)

        history.did_save(source)

        assert other.exists()
