"""
Labeled wire stubs.

A stub is one short horizontal segment starting at a pin and carrying the
pin's net name as its label. Pins at or right of the component's horizontal
center get a stub to the right; the others get one to the left. Net
membership is expressed only by the label text, never by wire connectivity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from netlist_rebuild.exceptions import FailureKind
from netlist_rebuild.host import Segment, Severity

if TYPE_CHECKING:
    from netlist_rebuild.host import Notifier, WireEditor
    from netlist_rebuild.placement.models import PlacedComponent, ResolvedPin

logger = logging.getLogger(__name__)

DEFAULT_STUB_LENGTH = 30


def normalize_net_name(net_name: str) -> str:
    """Label text for a net. Names differing only in case share a label."""
    return net_name.upper()


def stub_segment(
    pin: ResolvedPin, component: PlacedComponent, length: float = DEFAULT_STUB_LENGTH
) -> Segment:
    """Segment from ``pin`` pointing away from the component center.

    ``pin.x == center`` extends to the right.
    """
    if pin.x >= component.center_x:
        end_x = pin.x + length
    else:
        end_x = pin.x - length
    return (pin.x, pin.y, end_x, pin.y)


@dataclass(frozen=True)
class StubOutcome:
    """Result of synthesizing one stub (or failing to)."""

    component_id: str
    pin_number: str
    label: str
    segment: Segment | None = None
    kind: FailureKind | None = None
    error: str | None = None

    @property
    def created(self) -> bool:
        return self.kind is None


class StubWriter:
    """
    Create stubs through the host wire editor.

    Failures are caught, logged and returned as outcomes; they never affect
    other stubs or components.
    """

    def __init__(
        self,
        wires: WireEditor,
        notifier: Notifier | None = None,
        length: float = DEFAULT_STUB_LENGTH,
    ):
        self.wires = wires
        self.notifier = notifier
        self.length = length

    def pin_missing(self, component: PlacedComponent, pin_number: str, net_name: str) -> StubOutcome:
        """Record a netlist pin that the placed symbol does not have."""
        logger.warning(f"Component {component.component_id} has no pin {pin_number}")
        return StubOutcome(
            component_id=component.component_id,
            pin_number=pin_number,
            label=normalize_net_name(net_name),
            kind=FailureKind.PIN_LOOKUP_MISS,
        )

    async def emit(
        self, component: PlacedComponent, pin: ResolvedPin, net_name: str
    ) -> StubOutcome:
        label = normalize_net_name(net_name)
        segment = stub_segment(pin, component, self.length)
        try:
            await self.wires.create_labeled_segment(segment, label)
        except Exception as e:
            message = f"Failed to create net wire {label}: {e}"
            logger.error(message)
            if self.notifier is not None:
                self.notifier.log(message)
                self.notifier.toast(message, Severity.WARNING)
            return StubOutcome(
                component_id=component.component_id,
                pin_number=pin.number,
                label=label,
                segment=segment,
                kind=FailureKind.WIRE_CREATION_FAILED,
                error=str(e),
            )

        if self.notifier is not None:
            self.notifier.log(f"Created net wire: {label} - component: {component.component_id}")
        return StubOutcome(
            component_id=component.component_id,
            pin_number=pin.number,
            label=label,
            segment=segment,
        )
