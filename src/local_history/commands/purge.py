"""Purge command: delete expired revisions."""

from pathlib import Path

import typer
from rich.markup import escape

from ..output import get_output_context
from .common import display_path, open_history


def purge(
    file: Path | None = typer.Argument(None, help="Only purge revisions of this file"),
    days: int | None = typer.Option(
        None, "--days", "-d", min=0, help="Age limit in days (defaults to days_limit)"
    ),
) -> None:
    """Delete revisions older than the retention limit."""
    ctx = get_output_context()
    history = open_history(ctx)

    limit = history.settings.days_limit if days is None else days
    if limit == 0:
        ctx.warning("Retention is disabled (days limit is 0); nothing to purge")
        ctx.print_json({"purged": [], "days_limit": 0})
        return

    purged = history.purge(file, days_limit=days, dry_run=ctx.dry_run)

    if ctx.json_mode:
        ctx.print_json(
            {"purged": [str(p) for p in purged], "days_limit": limit, "dry_run": ctx.dry_run}
        )
        return

    verb = "Would delete" if ctx.dry_run else "Deleted"
    for path in purged:
        ctx.print(f"  {verb} {escape(display_path(history, path))}")
    summary = f"{verb} {len(purged)} revision(s) older than {limit} days"
    if ctx.dry_run:
        ctx.dry_run_notice(summary)
    else:
        ctx.print(summary)
