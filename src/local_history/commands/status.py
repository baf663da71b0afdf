"""Status command for workspace history overview."""

from rich.markup import escape

from ..output import get_output_context
from .common import open_history


def status() -> None:
    """Show where history is stored and how it is configured."""
    ctx = get_output_context()
    history = open_history(ctx)
    settings = history.settings
    revisions = history.count_revisions()

    if ctx.json_mode:
        ctx.print_json(
            {
                "workspace": str(history.workspace.root),
                "history_root": str(history.history_root),
                "save_mode": history.save_mode.value,
                "revisions": revisions,
                **settings.model_dump(),
            }
        )
        return

    ctx.console.print(f"\n[bold]Workspace:[/bold] {history.workspace.root}")
    ctx.console.print(f"[bold]History:[/bold] {history.history_root} ({history.save_mode.value})")
    if not settings.enabled:
        ctx.warning("Status: DISABLED")
    ctx.console.print(f"[bold]Revisions:[/bold] {revisions}")
    days = f"{settings.days_limit} days" if settings.days_limit else "forever"
    ctx.console.print(f"[bold]Retention:[/bold] {days}")
    shown = settings.max_display or "all"
    ctx.console.print(f"[bold]Listed per file:[/bold] {shown}")
    ctx.console.print(f"[bold]Exclude:[/bold] {escape(settings.exclude)}")
