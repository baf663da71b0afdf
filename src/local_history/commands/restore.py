"""Restore command: bring back a revision as the current file."""

from pathlib import Path

import typer
from rich.markup import escape

from ..errors import HistoryDirectoryError, RevisionNotFoundError
from ..output import get_output_context
from .common import display_path, open_history, report_result


def restore(
    file: Path = typer.Argument(..., help="Workspace file or one of its revisions"),
    revision: str = typer.Option(
        ..., "--revision", "-r", help="Timestamp (YYYYMMDDHHMMSS) or revision path"
    ),
) -> None:
    """Overwrite a file with one of its revisions."""
    ctx = get_output_context()
    history = open_history(ctx)

    try:
        entry = history.select_revision(file, revision)
    except RevisionNotFoundError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    current = history.find_current(entry.path)
    if ctx.dry_run:
        ctx.dry_run_notice(f"Would restore {display_path(history, current)} from {entry.label}")
        ctx.result({"file": str(current), "revision": str(entry.path), "dry_run": True})
        return

    try:
        result = history.restore(entry)
    except (HistoryDirectoryError, OSError) as e:
        ctx.error(f"Restore failed: {e}")
        raise typer.Exit(1) from None

    restored = escape(display_path(history, current))
    ctx.print(f"[green]Restored[/green] {restored} from {entry.label}")
    report_result(ctx, history, result)
