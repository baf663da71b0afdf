"""Launching the user's editor on a file."""

import os
import shlex
import subprocess
import sys
from pathlib import Path

from ..errors import EditorError


def resolve_editor(configured: str | None = None) -> str:
    """Get the editor command line.

    Order: configured value, $VISUAL, $EDITOR, then a platform default.
    """
    if configured:
        return configured
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var)
        if value:
            return value
    return "notepad" if sys.platform == "win32" else "vi"


def edit_file(path: Path, editor: str | None = None) -> None:
    """Open a file in an editor and wait until the editor exits.

    Args:
        path: File to edit
        editor: Editor command line (resolved from the environment if None)

    Raises:
        EditorError: If the editor is not found or exits with non-zero status
    """
    cmd = [*shlex.split(resolve_editor(editor)), str(path)]
    try:
        result = subprocess.run(cmd, check=False)
    except FileNotFoundError:
        raise EditorError(f"Editor not found: {cmd[0]}") from None
    if result.returncode != 0:
        raise EditorError(f"{cmd[0]} exited with status {result.returncode}")
