"""Tests for retention purging."""

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from conftest import FakeClock, age_file, mtime_birth_time
from local_history.core.retention import RetentionPolicy, revision_birth_time


def make_policy(clock: FakeClock, days_limit: int = 30) -> RetentionPolicy:
    return RetentionPolicy(days_limit, clock=clock, birth_time=mtime_birth_time)


@pytest.fixture
def revisions(tmp_path: Path, clock: FakeClock) -> dict[str, Path]:
    """Revision files aged 31, 29 and 0 days."""
    files = {}
    for label, days in (("old", 31), ("recent", 29), ("new", 0)):
        path = tmp_path / f"a_{label}.ts"
        path.write_text(label)
        age_file(path, clock(), days)
        files[label] = path
    return files


class TestRevisionBirthTime:
    """Tests for revision_birth_time."""

    @pytest.mark.unit
    def test_prefers_birth_time(self) -> None:
        st = SimpleNamespace(st_birthtime=5.0, st_mtime=10.0)
        assert revision_birth_time(st) == 5.0

    @pytest.mark.unit
    def test_falls_back_to_mtime(self) -> None:
        st = SimpleNamespace(st_mtime=10.0)
        assert revision_birth_time(st) == 10.0


class TestPurge:
    """Tests for RetentionPolicy.purge."""

    @pytest.mark.unit
    def test_deletes_only_expired(self, revisions: dict[str, Path], clock: FakeClock) -> None:
        deleted = make_policy(clock).purge(revisions.values())

        assert deleted == [revisions["old"]]
        assert not revisions["old"].exists()
        assert revisions["recent"].exists()
        assert revisions["new"].exists()

    @pytest.mark.unit
    def test_zero_days_deletes_nothing(
        self, revisions: dict[str, Path], clock: FakeClock
    ) -> None:
        assert make_policy(clock, days_limit=0).purge(revisions.values()) == []
        assert all(p.exists() for p in revisions.values())

    @pytest.mark.unit
    def test_age_is_per_file_not_latest_save(
        self, revisions: dict[str, Path], clock: FakeClock
    ) -> None:
        clock.advance(days=2)
        deleted = make_policy(clock).purge(revisions.values())
        assert set(deleted) == {revisions["old"], revisions["recent"]}

    @pytest.mark.unit
    def test_skips_missing_files(
        self, revisions: dict[str, Path], clock: FakeClock, tmp_path: Path
    ) -> None:
        files = [tmp_path / "gone.ts", *revisions.values()]
        assert make_policy(clock).purge(files) == [revisions["old"]]

    @pytest.mark.unit
    def test_ignores_directories(self, tmp_path: Path, clock: FakeClock) -> None:
        directory = tmp_path / "a_20230101000000.ts"
        directory.mkdir()
        age_file(directory, clock(), 100)

        assert make_policy(clock).purge([directory]) == []
        assert directory.is_dir()

    @pytest.mark.unit
    def test_failed_delete_does_not_stop_others(self, tmp_path: Path, clock: FakeClock) -> None:
        first, second = tmp_path / "a_1.ts", tmp_path / "a_2.ts"
        for path in (first, second):
            path.write_text("x")
            age_file(path, clock(), 40)

        real_unlink = Path.unlink

        def flaky_unlink(self: Path, missing_ok: bool = False) -> None:
            if self == first:
                raise PermissionError("denied")
            real_unlink(self, missing_ok=missing_ok)

        with patch.object(Path, "unlink", flaky_unlink):
            deleted = make_policy(clock).purge([first, second])

        assert deleted == [second]
        assert first.exists()
        assert not second.exists()


class TestExpired:
    """Tests for RetentionPolicy.expired."""

    @pytest.mark.unit
    def test_selects_without_deleting(
        self, revisions: dict[str, Path], clock: FakeClock
    ) -> None:
        assert make_policy(clock).expired(revisions.values()) == [revisions["old"]]
        assert revisions["old"].exists()

    @pytest.mark.unit
    def test_with_days_keeps_clock(self, revisions: dict[str, Path], clock: FakeClock) -> None:
        policy = make_policy(clock).with_days(1)
        assert set(policy.expired(revisions.values())) == {revisions["old"], revisions["recent"]}

    @pytest.mark.unit
    def test_real_clock(self, tmp_path: Path) -> None:
        path = tmp_path / "a.ts"
        path.write_text("x")
        age_file(path, datetime.now(), 5)
        policy = RetentionPolicy(3, birth_time=mtime_birth_time)
        assert policy.expired([path]) == [path]
