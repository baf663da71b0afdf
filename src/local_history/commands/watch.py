"""Watch command: record revisions while files are saved."""

import time

import typer

from ..constants import WATCH_POLL_INTERVAL
from ..models import RevisionResult
from ..output import get_output_context
from ..services import HistoryWatcher
from .common import open_history


def watch() -> None:
    """Record a revision every time a workspace file is written."""
    ctx = get_output_context()
    history = open_history(ctx)

    if not history.settings.enabled:
        ctx.error("History is disabled in configuration")
        raise typer.Exit(1)

    def on_result(result: RevisionResult) -> None:
        for message in result.errors:
            ctx.error(message)

    ctx.print(f"Watching [bold]{history.workspace.root}[/bold] (Ctrl+C to stop)")
    with HistoryWatcher(history, on_result=on_result):
        try:
            while True:
                time.sleep(WATCH_POLL_INTERVAL)
        except KeyboardInterrupt:
            pass
    ctx.print(f"Stopped watching, {len(history.tracker)} file(s) seen")
