"""Console implementations of the host file, prompt and notification interfaces."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from netlist_rebuild.exceptions import NetlistRebuildError, ParseError, ParseErrorKind
from netlist_rebuild.host import Severity

# Host log lines go to their own logger so -v shows them next to library logs
host_logger = logging.getLogger("netlist_rebuild.host")

SEVERITY_STYLES = {
    Severity.INFO: "cyan",
    Severity.SUCCESS: "bold green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "bold red",
}


class PathFileSelector:
    """File "dialog" that returns a path given on the command line.

    Args:
        path: Netlist path, or None to behave like a cancelled dialog
    """

    def __init__(self, path: str | Path | None):
        self.path = Path(path) if path is not None else None

    async def select_file(self, extensions: Sequence[str]) -> bytes | None:
        if self.path is None:
            return None

        suffix = self.path.suffix.lower().lstrip(".")
        if suffix not in extensions:
            raise ParseError(
                f"Unsupported netlist file type: .{suffix}" if suffix else "Netlist file has no extension",
                kind=ParseErrorKind.UNSUPPORTED_EXTENSION,
                file_path=self.path,
                suggestions=[f"Use one of: {', '.join('.' + e for e in extensions)}"],
            )

        try:
            return self.path.read_bytes()
        except FileNotFoundError as e:
            raise NetlistRebuildError(
                "Netlist file not found",
                context={"file": self.path},
            ) from e


class ConsolePrompt:
    """Yes/no prompt on the terminal.

    Args:
        assume_yes: Answer yes without asking
        console: Console to prompt on
    """

    def __init__(self, assume_yes: bool = False, console: Console | None = None):
        self.assume_yes = assume_yes
        self.console = console or Console(stderr=True)

    async def confirm(self, message: str, title: str = "") -> bool:
        if self.assume_yes:
            return True
        prompt = f"[bold]{escape(title)}[/bold]: {escape(message)}" if title else escape(message)
        return await asyncio.to_thread(Confirm.ask, prompt, console=self.console, default=True)


class ConsoleNotifier:
    """Show toasts on stderr and forward host log lines to ``logging``.

    Args:
        console: Console for toasts (default: stderr)
        quiet: Suppress info and success toasts
    """

    def __init__(self, console: Console | None = None, quiet: bool = False):
        self.console = console or Console(stderr=True)
        self.quiet = quiet
        self.toasts: list[tuple[Severity, str]] = []

    def toast(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.toasts.append((severity, message))
        if self.quiet and severity in (Severity.INFO, Severity.SUCCESS):
            return
        self.console.print(escape(message), style=SEVERITY_STYLES[severity])

    def log(self, message: str) -> None:
        host_logger.info(message)
