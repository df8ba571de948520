"""
Custom exception hierarchy for netlist-rebuild.

Provides consistent error handling with context, suggestions, and actionable guidance.
Only two kinds of error are fatal to a rebuild run: ``ParseError`` (the netlist
cannot be decoded) and ``LibraryUnavailableError`` (no device library to place
from). Everything that can go wrong for a single component or pin is reported
as a :class:`FailureKind` on an outcome value instead of being raised.

Example::

    from netlist_rebuild.exceptions import ParseError, ParseErrorKind

    raise ParseError(
        "Netlist is not a JSON object",
        kind=ParseErrorKind.MALFORMED_FORMAT,
        context={"file": "board.enet", "got": "list"},
        suggestions=["The top level must map component ids to components"],
    )
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class NetlistRebuildError(Exception):
    """
    Base exception for all netlist-rebuild errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (file, component, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseErrorKind(Enum):
    """Why a netlist could not be decoded."""

    MALFORMED_FORMAT = "malformed_format"
    UNSUPPORTED_EXTENSION = "unsupported_extension"


class ParseError(NetlistRebuildError):
    """
    Netlist decoding failed.

    Raised when the raw text is not well-formed JSON, when the decoded value
    is not an object, or when the input file has an unsupported suffix.

    Example::

        raise ParseError(
            "Invalid JSON in netlist",
            context={"line": 3, "column": 12},
            file_path="board.json",
        )
    """

    def __init__(
        self,
        message: str,
        kind: ParseErrorKind = ParseErrorKind.MALFORMED_FORMAT,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        self.kind = kind
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        super().__init__(message, ctx, suggestions)


class LibraryUnavailableError(NetlistRebuildError):
    """
    The shared device library namespace could not be obtained.

    Fatal for the whole run: nothing can be placed without it.
    """

    pass


class ConfigurationError(NetlistRebuildError):
    """
    Configuration or settings error.

    Raised when a configuration value is invalid, e.g. an unknown wire
    synthesis strategy or a non-positive grid size.

    Example::

        raise ConfigurationError(
            "Unknown wire strategy",
            context={"strategy": "routed", "available": ["immediate", "grouped"]},
        )
    """

    pass


class CatalogError(NetlistRebuildError):
    """A device catalog file could not be loaded."""

    pass


class FailureKind(Enum):
    """Recoverable per-component and per-pin failure kinds.

    These never abort a run; they are carried on outcome values and
    recorded in the run summary.
    """

    DEVICE_NOT_FOUND = "device_not_found"
    INSTANTIATION_FAILED = "instantiation_failed"
    ATTRIBUTE_MUTATION_FAILED = "attribute_mutation_failed"
    PIN_LOOKUP_MISS = "pin_lookup_miss"
    WIRE_CREATION_FAILED = "wire_creation_failed"
    PLACEMENT_ERROR = "placement_error"


__all__ = [
    "NetlistRebuildError",
    "ParseError",
    "ParseErrorKind",
    "LibraryUnavailableError",
    "ConfigurationError",
    "CatalogError",
    "FailureKind",
]
