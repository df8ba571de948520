"""Error output for CLI commands."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING

from rich.markup import escape

from netlist_rebuild.exceptions import NetlistRebuildError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_error_console"]

# Shared stderr console, created on first error
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output."""
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def _print_rich(console: Console, e: Exception) -> None:
    if not isinstance(e, NetlistRebuildError):
        console.print(f"[bold red]Error:[/bold red] {escape(type(e).__name__)}: {escape(str(e))}")
        return

    console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
    for key, value in e.context.items():
        console.print(f"  [dim]{escape(str(key))}:[/dim] {escape(str(value))}")
    for suggestion in e.suggestions:
        console.print(f"  [cyan]hint:[/cyan] {escape(suggestion)}")


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception to stderr.

    On a terminal the message, its context and its suggestions are styled
    with Rich; pipes get the plain text of :func:`format_error`.

    Args:
        e: The exception to print
        verbose: Print the active traceback instead
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    if verbose:
        print(traceback.format_exc(), file=sys.stderr)
        return

    console = get_error_console()
    if use_rich is None:
        use_rich = console.is_terminal

    if use_rich:
        _print_rich(console, e)
    else:
        print(format_error(e), file=sys.stderr)


def format_error(e: Exception) -> str:
    """Plain-text form of ``e``, with context and suggestions for package errors."""
    if isinstance(e, NetlistRebuildError):
        return f"Error: {e}"
    return f"Error: {type(e).__name__}: {e}"
