"""
Progress callback infrastructure for rebuild runs.

The orchestrator reports progress after every attempted component through
:func:`report_progress`; callers install a callback with
:class:`ProgressContext` to drive a progress bar or an agent.

Example::

    from netlist_rebuild.progress import ProgressContext

    def on_progress(progress: float, message: str) -> None:
        print(f"{progress*100:.0f}%: {message}")

    with ProgressContext(callback=on_progress):
        summary = asyncio.run(reconstruct(doc, host, config))
"""

from __future__ import annotations

from collections.abc import Callable
from contextvars import ContextVar
from typing import TypeAlias

# Rebuild runs cannot be cancelled mid-run, so callbacks return nothing.
ProgressCallback: TypeAlias = Callable[[float, str], None]

_current_progress: ContextVar[ProgressCallback | None] = ContextVar(
    "current_progress", default=None
)


def get_current_callback() -> ProgressCallback | None:
    """Get the current progress callback from context."""
    return _current_progress.get()


def report_progress(progress: float, message: str) -> None:
    """Report progress using the current context callback, if any.

    Args:
        progress: 0.0 to 1.0, or -1 for indeterminate
        message: Current operation description
    """
    callback = get_current_callback()
    if callback is not None:
        callback(progress, message)


class ProgressContext:
    """Context manager for scoped progress reporting."""

    def __init__(self, callback: ProgressCallback | None = None):
        self._callback = callback
        self._token = None

    def __enter__(self) -> ProgressContext:
        self._token = _current_progress.set(self._callback)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _current_progress.reset(self._token)
            self._token = None

