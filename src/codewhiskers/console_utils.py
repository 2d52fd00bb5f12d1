"""
Rich consoles for user-facing CLI output.

Reports go to stdout through ``click.echo`` so they can be piped; errors
and notes go to stderr through ``error_console``.

codewhiskers/src/codewhiskers/console_utils.py
"""

from rich.console import Console
from rich.markup import escape

__all__ = ["console", "error_console", "print_error", "print_note"]

console = Console()
error_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print ``message`` in red on stderr. The message is not parsed as markup."""
    error_console.print(f"[red]{escape(message)}[/red]")


def print_note(message: str) -> None:
    error_console.print(f"[yellow]{escape(message)}[/yellow]")
