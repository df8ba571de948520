"""
Placement data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from netlist_rebuild.exceptions import FailureKind

if TYPE_CHECKING:
    from netlist_rebuild.library.models import DeviceRef


@dataclass(frozen=True)
class ResolvedPin:
    """A realized pin of a placed symbol, in absolute coordinates."""

    number: str
    x: float
    y: float


@dataclass(frozen=True)
class PlacedComponent:
    """A symbol instance created for one netlist component.

    Geometry is fixed at creation: ``width`` and ``height`` span the
    placement point and every pin.
    """

    instance_id: str
    component_id: str
    x: float
    y: float
    width: float
    height: float
    pins: tuple[ResolvedPin, ...] = ()
    designator: str = ""
    device: DeviceRef | None = None

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def label(self) -> str:
        return self.designator or self.component_id

    def find_pin(self, number: str) -> ResolvedPin | None:
        """Realized pin with exactly this number, if any."""
        for pin in self.pins:
            if pin.number == number:
                return pin
        return None


@dataclass(frozen=True)
class PlacementFailure:
    """Why a component could not be placed."""

    component_id: str
    designator: str
    kind: FailureKind
    message: str

    @property
    def label(self) -> str:
        return self.designator or self.component_id


@dataclass(frozen=True)
class AttributeOutcome:
    """Result of the best-effort attribute update on a placed symbol.

    A failed update never fails the placement; the placer logs it and moves on.
    """

    applied: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> FailureKind | None:
        return None if self.ok else FailureKind.ATTRIBUTE_MUTATION_FAILED
