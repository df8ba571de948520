"""
In-memory schematic canvas.

Implements the symbol and wire editor interfaces of
:mod:`netlist_rebuild.host` on top of a :class:`DeviceCatalog`, so the command
line tool can rebuild a schematic without a host EDA application and write the
result as JSON.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from netlist_rebuild.host import Segment
from netlist_rebuild.library import DeviceCatalog, DeviceRef
from netlist_rebuild.placement import ResolvedPin

logger = logging.getLogger(__name__)


@dataclass
class SymbolInstance:
    """A placed symbol on the canvas."""

    instance_id: str
    device_uuid: str
    device_name: str
    library_uuid: str
    x: float
    y: float
    designator: str = ""
    name: str = ""
    pins: list[ResolvedPin] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.instance_id,
            "device": {"uuid": self.device_uuid, "name": self.device_name},
            "library": self.library_uuid,
            "at": [self.x, self.y],
            "designator": self.designator,
            "name": self.name,
            "pins": [{"number": p.number, "at": [p.x, p.y]} for p in self.pins],
        }


@dataclass(frozen=True)
class LabeledWire:
    """A straight wire segment with a net label."""

    points: Segment
    label: str

    def to_dict(self) -> dict[str, Any]:
        x1, y1, x2, y2 = self.points
        return {"pts": [[x1, y1], [x2, y2]], "label": self.label}


class SchematicCanvas:
    """
    Schematic built in memory from catalog devices.

    Example::

        canvas = SchematicCanvas(catalog)
        instance_id = await canvas.instantiate(device, catalog.library_uuid, 20, 20)
        await canvas.create_labeled_segment((10, 20, -20, 20), "VCC")
        canvas.save("rebuilt.json")
    """

    def __init__(self, catalog: DeviceCatalog):
        self.catalog = catalog
        self.symbols: dict[str, SymbolInstance] = {}
        self.wires: list[LabeledWire] = []

    def _instance(self, instance_id: str) -> SymbolInstance:
        try:
            return self.symbols[instance_id]
        except KeyError:
            raise KeyError(f"No symbol instance {instance_id!r} on canvas") from None

    async def instantiate(
        self, device: DeviceRef, library_uuid: str, x: float, y: float
    ) -> str | None:
        if library_uuid != self.catalog.library_uuid:
            logger.warning(f"Unknown library {library_uuid} for device {device.name}")
            return None

        entry = self.catalog.get(device.uuid)
        if entry is None:
            logger.warning(f"Device {device.uuid} is not in the catalog")
            return None

        instance_id = str(uuid.uuid4())
        self.symbols[instance_id] = SymbolInstance(
            instance_id=instance_id,
            device_uuid=entry.uuid,
            device_name=entry.name,
            library_uuid=library_uuid,
            x=x,
            y=y,
            pins=[ResolvedPin(number=p.number, x=x + p.x, y=y + p.y) for p in entry.pins],
        )
        return instance_id

    async def set_attributes(
        self, instance_id: str, designator: str | None = None, name: str | None = None
    ) -> None:
        instance = self._instance(instance_id)
        if designator is not None:
            instance.designator = designator
        if name is not None:
            instance.name = name

    async def list_pins(self, instance_id: str) -> list[ResolvedPin]:
        return list(self._instance(instance_id).pins)

    async def create_labeled_segment(self, points: Segment, label: str) -> None:
        if len(points) != 4:
            raise ValueError(f"Wire segment needs 4 coordinates, got {len(points)}")
        self.wires.append(LabeledWire(points=tuple(points), label=label))

    def net_labels(self) -> dict[str, int]:
        """Stub count per label, sorted by label."""
        counts: dict[str, int] = {}
        for wire in self.wires:
            counts[wire.label] = counts.get(wire.label, 0) + 1
        return dict(sorted(counts.items()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "library": self.catalog.library_uuid,
            "symbols": [s.to_dict() for s in self.symbols.values()],
            "wires": [w.to_dict() for w in self.wires],
            "nets": self.net_labels(),
        }

    def save(self, path: str | Path) -> Path:
        """Write the canvas as JSON, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"Wrote {len(self.symbols)} symbols and {len(self.wires)} wires to {path}")
        return path
