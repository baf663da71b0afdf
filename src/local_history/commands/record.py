"""Commands that save revisions: record and edit."""

from pathlib import Path
from typing import Any

import typer

from ..errors import EditorError, HistoryDirectoryError
from ..output import get_output_context
from ..services import edit_file
from .common import open_history, report_result


def record(
    files: list[Path] = typer.Argument(..., help="Saved files to record"),
) -> None:
    """Record a revision of each file as it is now on disk.

    With --json every file is reported in one document, under "results".
    """
    ctx = get_output_context()
    history = open_history(ctx)

    results: list[dict[str, Any]] = []
    failed = False
    for file in files:
        error = None
        if not file.is_file():
            error = f"File not found: {file}"
        elif ctx.dry_run:
            ctx.dry_run_notice(f"Would record {file}")
            results.append({"file": str(file), "dry_run": True})
            continue
        else:
            try:
                result = history.did_save(file)
            except HistoryDirectoryError as e:
                error = str(e)

        if error is not None:
            failed = True
            if ctx.json_mode:
                results.append({"file": str(file), "error": error})
            else:
                ctx.error(error)
            continue

        if ctx.json_mode:
            results.append(result.model_dump(mode="json"))
        else:
            report_result(ctx, history, result)
        failed = failed or bool(result.errors)

    ctx.print_json({"results": results})
    if failed:
        raise typer.Exit(1)


def edit(
    file: Path = typer.Argument(..., help="File to edit"),
    editor: str | None = typer.Option(
        None, "--editor", "-e", help="Editor command (defaults to config, $VISUAL, $EDITOR)"
    ),
) -> None:
    """Edit a file, keeping its original and the edited version in history."""
    ctx = get_output_context()
    history = open_history(ctx)

    existed = file.is_file()
    before = file.stat().st_mtime_ns if existed else None
    if existed:
        history.will_save(file)

    try:
        edit_file(file, editor or history.config.editor.exec)
    except EditorError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    if not file.is_file():
        ctx.warning("File was not saved")
        return
    if existed and file.stat().st_mtime_ns == before:
        ctx.print("[dim]No changes saved[/dim]")
        return

    try:
        result = history.did_save(file)
    except HistoryDirectoryError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None
    report_result(ctx, history, result)
    if result.errors:
        raise typer.Exit(1)
