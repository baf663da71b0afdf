"""Commands that read history: list and show."""

from pathlib import Path

import typer
from rich.markup import escape

from ..errors import RevisionNotFoundError
from ..output import get_output_context
from .common import display_path, open_history, revision_data


def list_cmd(
    file: Path = typer.Argument(..., help="Workspace file or one of its revisions"),
    all_revisions: bool = typer.Option(
        False, "--all", "-a", help="List every revision, ignoring max_display"
    ),
) -> None:
    """List revisions of a file, newest first."""
    ctx = get_output_context()
    history = open_history(ctx)

    entries = history.find_all_history(file, no_limit=all_revisions)
    current = history.find_current(file)

    if ctx.json_mode:
        ctx.print_json(
            {
                "file": str(current),
                "revisions": [revision_data(e) for e in reversed(entries)],
            }
        )
        return

    if not entries:
        ctx.print(f"No history for {escape(str(file))}")
        return

    ctx.console.print(f"[bold]{escape(display_path(history, current))}[/bold]")
    for n, entry in enumerate(reversed(entries), start=1):
        ctx.console.print(
            f"{n:>3}  {entry.label}  [dim]{escape(display_path(history, entry.path))}[/dim]",
            highlight=False,
        )


def show(
    file: Path = typer.Argument(..., help="Workspace file or one of its revisions"),
    revision: str | None = typer.Option(
        None,
        "--revision",
        "-r",
        help="Timestamp (YYYYMMDDHHMMSS) or revision path; newest if omitted",
    ),
) -> None:
    """Print the content of a revision."""
    ctx = get_output_context()
    history = open_history(ctx)

    try:
        entry = history.select_revision(file, revision)
    except RevisionNotFoundError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    try:
        content = entry.path.read_bytes()
    except OSError as e:
        ctx.error(f"Cannot read {entry.path}: {e}")
        raise typer.Exit(1) from None

    if ctx.json_mode:
        ctx.print_json({**revision_data(entry), "content": content.decode(errors="replace")})
        return
    typer.echo(content, nl=False)
