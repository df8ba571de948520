"""
Logging setup for netlist-rebuild.

Every module logs through a child of the ``netlist_rebuild`` logger. Until
:func:`enable_verbose` is called the package logger only has a NullHandler,
so embedding applications see nothing unless they opt in. Host log lines from
the console notifier arrive on ``netlist_rebuild.host``.
"""

import logging
import sys

PACKAGE_LOGGER = "netlist_rebuild"
DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_logger = logging.getLogger(PACKAGE_LOGGER)
_logger.addHandler(logging.NullHandler())  # Default: no output


def level_for_verbosity(count: int) -> str:
    """Level name for a repeated ``-v`` flag: one is INFO, two or more DEBUG."""
    if count <= 0:
        return "WARNING"
    return "INFO" if count == 1 else "DEBUG"


def _stream_handlers() -> list:
    return [h for h in _logger.handlers if not isinstance(h, logging.NullHandler)]


def enable_verbose(level: str = "INFO", format: str = None, stream=None) -> None:
    """Send package log records to ``stream`` (stderr by default).

    Calling it again replaces the previous handler instead of adding another.

    Example:
        enable_verbose("DEBUG")
        summary = asyncio.run(reconstruct(doc, host, config))
        disable_verbose()
    """
    numeric = getattr(logging, level.upper())
    _logger.setLevel(numeric)
    for handler in _stream_handlers():
        _logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Go quiet again: drop stream handlers and reset the level to WARNING."""
    _logger.setLevel(logging.WARNING)
    for handler in _stream_handlers():
        _logger.removeHandler(handler)
