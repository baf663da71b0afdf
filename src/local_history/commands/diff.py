"""Diff command: compare a revision with the current file or its predecessor."""

import difflib
from pathlib import Path

import typer
from rich.markup import escape

from ..errors import RevisionNotFoundError
from ..output import get_output_context
from .common import display_path, open_history, revision_data

LINE_STYLES = {"+": "green", "-": "red", "@": "cyan"}


def _read_text(path: Path) -> list[str]:
    """Read a file as lines, treating a missing file as empty."""
    try:
        return path.read_bytes().decode(errors="replace").splitlines(keepends=True)
    except FileNotFoundError:
        return []


def diff(
    file: Path = typer.Argument(..., help="Workspace file or one of its revisions"),
    revision: str | None = typer.Option(
        None,
        "--revision",
        "-r",
        help="Timestamp (YYYYMMDDHHMMSS) or revision path; newest if omitted",
    ),
    previous: bool = typer.Option(
        False, "--previous", "-p", help="Compare with the revision before it instead"
    ),
) -> None:
    """Show a unified diff between a revision and the current file."""
    ctx = get_output_context()
    history = open_history(ctx)

    try:
        entry = history.select_revision(file, revision)
    except RevisionNotFoundError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    if previous:
        earlier = history.previous_revision(entry)
        if earlier is None:
            ctx.error(f"No revision before {entry.label}")
            raise typer.Exit(1)
        old_path, new_path = earlier.path, entry.path
    else:
        old_path, new_path = entry.path, history.find_current(entry.path)

    lines = list(
        difflib.unified_diff(
            _read_text(old_path),
            _read_text(new_path),
            fromfile=display_path(history, old_path),
            tofile=display_path(history, new_path),
        )
    )

    if ctx.json_mode:
        ctx.print_json(
            {
                **revision_data(entry),
                "against": str(old_path if previous else new_path),
                "diff": "".join(lines),
            }
        )
        return

    if not lines:
        ctx.print("No differences")
        return
    for line in lines:
        style = LINE_STYLES.get(line[:1])
        if line.startswith(("+++", "---")):
            style = "bold"
        ctx.console.print(escape(line.rstrip("\r\n")), style=style, highlight=False)
