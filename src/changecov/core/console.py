"""Rich consoles for user-facing output.

The report goes to stdout; status lines and hints go to stderr so piping the
report stays clean.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

_console = Console(stderr=True, highlight=False)


def get_console() -> Console:
    """Get the shared stderr console."""
    return _console


def print_status(passed: bool, message: str, *, console: Console | None = None) -> None:
    """Print a one-line pass/fail status."""
    out = console or _console
    if passed:
        out.print(f"[green]✅ {escape(message)}[/green]")
    else:
        out.print(f"[red]❌ {escape(message)}[/red]")


def print_error(message: str, *, hint: str | None = None, console: Console | None = None) -> None:
    """Print an error line with an optional dim hint underneath."""
    out = console or _console
    out.print(f"[red]❌ {escape(message)}[/red]")
    if hint:
        out.print(f"[dim]{escape(hint)}[/dim]")
