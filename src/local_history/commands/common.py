"""Helpers shared by lhist commands."""

import tomllib
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.markup import escape

from ..core import LocalHistory
from ..errors import WorkspaceError
from ..models import HistoryFile, RevisionResult, RevisionStatus
from ..output import OutputContext

# Workspace root given with --workspace (set by cli.py main callback)
_workspace: Path | None = None


def get_workspace_override() -> Path | None:
    """Get the workspace root given on the command line, if any."""
    return _workspace


def set_workspace_override(path: Path | None) -> None:
    """Set the workspace root override. Called by CLI main callback."""
    global _workspace
    _workspace = path.resolve() if path is not None else None


def open_history(ctx: OutputContext) -> LocalHistory:
    """Open the current workspace's history or exit with an error.

    Exit codes: 3 when no workspace is found, 1 for an invalid config.
    """
    try:
        return LocalHistory.from_workspace(_workspace)
    except WorkspaceError as e:
        ctx.error(str(e))
        raise typer.Exit(3) from None
    except (ValidationError, tomllib.TOMLDecodeError) as e:
        ctx.error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from None


def display_path(history: LocalHistory, path: Path) -> str:
    """Shorten a path relative to the workspace or history root for display."""
    for root in (history.history_root, history.workspace.root):
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            continue
    return str(path)


def revision_data(entry: HistoryFile) -> dict[str, Any]:
    """JSON representation of a revision."""
    return {
        "timestamp": entry.timestamp.isoformat() if entry.timestamp else None,
        "path": str(entry.path),
    }


def report_result(ctx: OutputContext, history: LocalHistory, result: RevisionResult) -> None:
    """Print the outcome of a post-save flow."""
    if ctx.json_mode:
        ctx.print_json(result.model_dump(mode="json"))
        return

    name = display_path(history, result.file)
    if result.status is RevisionStatus.DISABLED:
        ctx.warning("History is disabled in configuration")
    elif result.status is RevisionStatus.UNTRACKED:
        ctx.warning("Not in workspace:", name)
    elif result.status is RevisionStatus.EXCLUDED:
        ctx.warning("Excluded:", name)
    else:
        if result.original is not None:
            original = escape(display_path(history, result.original))
            ctx.print(f"[cyan]Saved original:[/cyan] {original}")
        if result.revision is not None:
            revision = escape(display_path(history, result.revision))
            ctx.print(f"[green]Recorded:[/green] {revision}")
        if result.purged:
            ctx.print(f"[dim]Purged {len(result.purged)} expired revision(s)[/dim]")

    for message in result.errors:
        ctx.error(message)
