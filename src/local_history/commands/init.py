"""Init command implementation."""

from pathlib import Path

from rich.markup import escape

from ..config import write_config_template
from ..constants import CONFIG_FILE
from ..core import find_workspace_root
from ..output import get_output_context
from .common import get_workspace_override


def init() -> None:
    """Create a .lhist.toml config in the workspace."""
    ctx = get_output_context()

    root = get_workspace_override() or find_workspace_root() or Path.cwd().resolve()
    config_path = root / CONFIG_FILE

    if ctx.dry_run:
        ctx.dry_run_notice("Would initialize local history:")
        if config_path.exists():
            ctx.print(f"  Config already exists: {escape(str(config_path))}")
        else:
            ctx.print(f"  Create config: {escape(str(config_path))}")
        ctx.result({"config": str(config_path), "created": False, "dry_run": True})
        return

    created = not config_path.exists()
    if created:
        write_config_template(root)
        ctx.print(f"[green]Created config template:[/green] {escape(str(config_path))}")
    else:
        ctx.warning("Config already exists:", str(config_path))
    ctx.result({"config": str(config_path), "created": created, "dry_run": False})
