"""Output formatting for the lhist CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape


@dataclass
class OutputContext:
    """Where command output goes and in which form.

    In text mode messages are rendered on the console with rich markup.
    With --json each command writes one JSON document to stdout instead and
    the text helpers stay silent.
    """

    console: Console
    json_mode: bool = False
    dry_run: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def result(self, data: dict[str, Any], message: str = "") -> None:
        """Print result in appropriate format."""
        if self.json_mode:
            self.print_json(data)
        elif message:
            self.console.print(message)

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {escape(message)}[/red]")

    def warning(self, label: str, detail: str = "") -> None:
        """Print a highlighted label followed by literal detail text, e.g. a path."""
        if detail:
            self.print(f"[yellow]{label}[/yellow] {escape(detail)}")
        else:
            self.print(f"[yellow]{label}[/yellow]")

    def dry_run_notice(self, action: str) -> None:
        """Describe an action skipped because of --dry-run."""
        self.print(f"[cyan][DRY RUN][/cyan] {escape(action)}")


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext | None) -> None:
    """Set the global output context. Called by CLI main callback."""
    global _ctx
    _ctx = ctx
