"""lhist CLI: local history of workspace files."""

from pathlib import Path

import typer

from local_history import __version__

from .commands import diff, edit, init, list_cmd, purge, record, restore, show, status, watch
from .commands.common import set_workspace_override
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"lhist {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="lhist",
    help="Time-stamped local history of the files you edit",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would change without writing or deleting files",
    ),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace root (defaults to the nearest .lhist.toml or .git above cwd)",
    ),
) -> None:
    """lhist - local history of workspace files."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output, dry_run=dry_run))
    set_workspace_override(workspace)


app.command()(init)
app.command()(status)
app.command()(record)
app.command()(edit)
app.command()(watch)
app.command("list")(list_cmd)
app.command()(show)
app.command()(diff)
app.command()(restore)
app.command()(purge)
