"""Progress bar for rebuild runs.

The bar lives on stderr so ``--format json`` output on stdout stays clean.
It is only drawn on a terminal; elsewhere the rebuild runs without a progress
callback installed.

Usage:
    with rebuild_progress(enabled=not args.quiet):
        result = asyncio.run(import_netlist(host, config))
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager

from netlist_rebuild.progress import ProgressCallback, ProgressContext


def is_terminal() -> bool:
    """Check if stderr is attached to a terminal."""
    return sys.stderr.isatty()


def progress_callback(progress, task_id) -> ProgressCallback:
    """Adapt a Rich progress task to a rebuild progress callback.

    Negative fractions mean "indeterminate" and leave the bar where it is.
    """

    def callback(fraction: float, message: str) -> None:
        if fraction < 0:
            progress.update(task_id, description=message)
        else:
            progress.update(task_id, completed=fraction, description=message)

    return callback


@contextmanager
def rebuild_progress(enabled: bool = True, description: str = "Rebuilding schematic...") -> Iterator[None]:
    """Show a transient bar driven by ``report_progress`` calls inside the block."""
    if not enabled or not is_terminal():
        yield
        return

    from rich.console import Console
    from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=Console(stderr=True),
        transient=True,
    )
    with progress:
        task = progress.add_task(description, total=1.0)
        with ProgressContext(callback=progress_callback(progress, task)):
            yield
