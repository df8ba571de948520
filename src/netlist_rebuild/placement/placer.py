"""
Component placement.

Turns one netlist component into a placed symbol instance:

1. Resolve the device (supplier part, then name)
2. Instantiate it at the planned grid position
3. Apply designator and value, best effort
4. Read back the realized pins and derive the bounding box

Nothing in here raises: every failure becomes a :class:`PlacementFailure` so
one bad component never aborts a rebuild.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from netlist_rebuild.exceptions import FailureKind
from netlist_rebuild.host import Severity

from .models import AttributeOutcome, PlacedComponent, PlacementFailure, ResolvedPin

if TYPE_CHECKING:
    from netlist_rebuild.host import Notifier, SymbolEditor
    from netlist_rebuild.library.resolver import DeviceResolver
    from netlist_rebuild.netlist.models import ComponentRecord

logger = logging.getLogger(__name__)


def bounding_size(pins: Sequence[ResolvedPin], x: float, y: float) -> tuple[float, float]:
    """Width and height spanned by the placement point and all pins.

    A component without pins has zero size at its placement point.
    """
    min_x = max_x = x
    min_y = max_y = y
    for pin in pins:
        min_x = min(min_x, pin.x)
        max_x = max(max_x, pin.x)
        min_y = min(min_y, pin.y)
        max_y = max(max_y, pin.y)
    return (max_x - min_x, max_y - min_y)


async def apply_attributes(
    symbols: SymbolEditor, instance_id: str, record: ComponentRecord
) -> AttributeOutcome:
    """Set designator and displayed name from the netlist record.

    Only fields that are non-empty after stripping whitespace are sent. The
    displayed name comes from the record's ``value``.
    """
    changes: dict[str, str] = {}
    if record.designator.strip():
        changes["designator"] = record.designator
    if record.value.strip():
        changes["name"] = record.value

    if not changes:
        return AttributeOutcome()

    try:
        await symbols.set_attributes(instance_id, **changes)
    except Exception as e:
        return AttributeOutcome(error=str(e))
    return AttributeOutcome(applied=changes)


class ComponentPlacer:
    """
    Place netlist components as symbol instances.

    Args:
        resolver: Device resolver
        symbols: Host symbol editor
        notifier: Optional host notifier for progress lines and failure toasts
    """

    def __init__(
        self,
        resolver: DeviceResolver,
        symbols: SymbolEditor,
        notifier: Notifier | None = None,
    ):
        self.resolver = resolver
        self.symbols = symbols
        self.notifier = notifier

    def _log(self, message: str) -> None:
        logger.info(message)
        if self.notifier is not None:
            self.notifier.log(message)

    def _fail(
        self,
        component_id: str,
        record: ComponentRecord,
        kind: FailureKind,
        message: str,
        severity: Severity = Severity.WARNING,
    ) -> PlacementFailure:
        self._log(message)
        if self.notifier is not None:
            self.notifier.toast(message, severity)
        return PlacementFailure(
            component_id=component_id,
            designator=record.designator,
            kind=kind,
            message=message,
        )

    async def place(
        self,
        component_id: str,
        record: ComponentRecord,
        position: tuple[float, float],
        library_uuid: str,
    ) -> PlacedComponent | PlacementFailure:
        """Place one component at ``position``.

        Returns:
            PlacedComponent on success, PlacementFailure otherwise
        """
        label = record.label(component_id)
        x, y = position

        try:
            self._log(f"Placing component: {label} at ({x}, {y})")

            device = await self.resolver.resolve(record)
            if device is None:
                return self._fail(
                    component_id,
                    record,
                    FailureKind.DEVICE_NOT_FOUND,
                    f"Device not found in library: {label}",
                )

            instance_id = await self.symbols.instantiate(device, library_uuid, x, y)
            if not instance_id:
                return self._fail(
                    component_id,
                    record,
                    FailureKind.INSTANTIATION_FAILED,
                    f"Failed to create component: {label}",
                )

            outcome = await apply_attributes(self.symbols, instance_id, record)
            if not outcome.ok:
                logger.warning(f"Failed to update attributes of {label}: {outcome.error}")
            elif outcome.applied:
                logger.debug(f"Updated attributes of {label}: {outcome.applied}")

            pins = tuple(await self.symbols.list_pins(instance_id) or ())
            width, height = bounding_size(pins, x, y)

            self._log(f"Placed component: {label} - {device.name}")
            return PlacedComponent(
                instance_id=instance_id,
                component_id=component_id,
                x=x,
                y=y,
                width=width,
                height=height,
                pins=pins,
                designator=record.designator,
                device=device,
            )
        except Exception as e:
            logger.exception(f"Placement of {label} raised")
            return self._fail(
                component_id,
                record,
                FailureKind.PLACEMENT_ERROR,
                f"Error placing component: {label} - {e}",
                severity=Severity.ERROR,
            )
