"""Common file I/O operations."""

from datetime import datetime
from pathlib import Path


def ensure_directory(path: Path) -> Path:
    """Create a directory and its parents if missing.

    Raises:
        OSError: If the directory cannot be created
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_bytes(path: Path) -> bytes:
    """Read a file's bytes."""
    return path.read_bytes()


def write_bytes(path: Path, content: bytes) -> None:
    """Write bytes to a file, replacing any existing content."""
    path.write_bytes(content)


def modified_time(path: Path) -> datetime:
    """Get a file's modification time as a local datetime."""
    return datetime.fromtimestamp(path.stat().st_mtime)
