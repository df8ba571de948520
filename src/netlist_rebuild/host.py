"""
Host application interfaces.

The rebuild pipeline never talks to a schematic editor directly. Everything it
needs from the outside world is described here as a ``Protocol``; the
``netlist_rebuild.canvas`` and ``netlist_rebuild.cli.console`` modules provide
a standalone implementation, and tests substitute in-memory fakes.

Every call that reaches into the host is a coroutine and is awaited
sequentially. Notifications are fire-and-forget and synchronous.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from netlist_rebuild.library.models import DeviceRef
    from netlist_rebuild.placement.models import ResolvedPin

# Wire segment as (x1, y1, x2, y2)
Segment = tuple[float, float, float, float]


class Severity(Enum):
    """Severity of a transient user notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class FileSelector(Protocol):
    async def select_file(self, extensions: Sequence[str]) -> bytes | None:
        """Return the chosen file's bytes, or None if the user cancelled."""
        ...


class ConfirmPrompt(Protocol):
    async def confirm(self, message: str, title: str = "") -> bool:
        """Ask the user a yes/no question."""
        ...


class DeviceLibrary(Protocol):
    async def lookup_by_supplier_id(self, supplier_id: str) -> list[DeviceRef]:
        """Exact lookup by supplier part number, best match first."""
        ...

    async def search_by_name(self, name: str, page: int = 1) -> list[DeviceRef]:
        """Fuzzy search by device name, best match first."""
        ...

    async def get_library_namespace(self) -> str | None:
        """UUID of the library devices are instantiated from, or None."""
        ...


class SymbolEditor(Protocol):
    async def instantiate(
        self, device: DeviceRef, library_uuid: str, x: float, y: float
    ) -> str | None:
        """Place a symbol for ``device`` and return its instance id."""
        ...

    async def set_attributes(
        self, instance_id: str, designator: str | None = None, name: str | None = None
    ) -> None:
        """Update displayed attributes of a placed symbol. May raise."""
        ...

    async def list_pins(self, instance_id: str) -> Sequence[ResolvedPin]:
        """Realized pins of a placed symbol in absolute coordinates."""
        ...


class WireEditor(Protocol):
    async def create_labeled_segment(self, points: Segment, label: str) -> None:
        """Create one straight wire segment carrying a net label. May raise."""
        ...


class Notifier(Protocol):
    def toast(self, message: str, severity: Severity = Severity.INFO) -> None:
        """Show a transient message to the user."""
        ...

    def log(self, message: str) -> None:
        """Append a line to the host's persistent log."""
        ...


@dataclass
class Host:
    """Bundle of every collaborator a rebuild run needs."""

    files: FileSelector
    prompt: ConfirmPrompt
    library: DeviceLibrary
    symbols: SymbolEditor
    wires: WireEditor
    notifier: Notifier
