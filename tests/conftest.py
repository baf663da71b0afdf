"""Shared test fixtures for local-history tests."""

import os
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from local_history.config import HistoryConfig, LocalHistoryConfig
from local_history.core import LocalHistory, RetentionPolicy


class FakeClock:
    """Settable clock returning naive local datetimes."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def mtime_birth_time(st: os.stat_result) -> float:
    """Birth time reader that uses mtime, so tests can age files with os.utime."""
    return st.st_mtime


def age_file(path: Path, now: datetime, days: float) -> None:
    """Set a file's modification time to a number of days before now."""
    stamp = (now - timedelta(days=days)).timestamp()
    os.utime(path, (stamp, stamp))


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at 2023-06-01 10:15:30."""
    return FakeClock(datetime(2023, 6, 1, 10, 15, 30))


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a workspace with a .git marker and one source file.

    Returns the resolved workspace root.
    """
    root = tmp_path / "proj"
    (root / ".git").mkdir(parents=True)
    (root / "src").mkdir()
    (root / "src" / "a.ts").write_text("export const a = 1;\n")
    return root.resolve()


def make_history(
    root: Path,
    clock: FakeClock,
    days_limit: int = 30,
    **settings: object,
) -> LocalHistory:
    """Create a LocalHistory with a fake clock and mtime based retention."""
    config = LocalHistoryConfig(history=HistoryConfig(days_limit=days_limit, **settings))
    retention = RetentionPolicy(days_limit, clock=clock, birth_time=mtime_birth_time)
    return LocalHistory(root, config, clock=clock, retention=retention)


@pytest.fixture
def history(workspace: Path, clock: FakeClock) -> LocalHistory:
    """LocalHistory for the workspace fixture with default settings."""
    return make_history(workspace, clock)


@pytest.fixture
def in_workspace(workspace: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change cwd to the workspace for the duration of the test."""
    monkeypatch.chdir(workspace)
    return workspace
