"""
Netlist data models.

A netlist file maps component ids to a ``props`` block and a ``pins`` block::

    {
      "C1": {
        "props": {"Designator": "R1", "device_name": "10k resistor",
                  "value": "10k", "Supplier Part": "C25804"},
        "pins": {"1": "VCC", "2": "GND"}
      }
    }

:class:`NetlistDocument` keeps the components as an explicit ordered sequence
so the declaration order that drives grid placement is part of the model.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

# Keys used in the "props" block of a netlist component
PROP_DESIGNATOR = "Designator"
PROP_DEVICE_NAME = "device_name"
PROP_VALUE = "value"
PROP_SUPPLIER_PART = "Supplier Part"


@dataclass(frozen=True)
class ComponentRecord:
    """One component of a netlist.

    Missing fields are empty strings; ``pins`` maps pin numbers to net names
    and may be empty.
    """

    designator: str = ""
    device_name: str = ""
    value: str = ""
    supplier_part: str = ""
    pins: dict[str, str] = field(default_factory=dict)

    def label(self, component_id: str) -> str:
        """Name used when reporting this component: designator, else its id."""
        return self.designator or component_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to the netlist file representation."""
        return {
            "props": {
                PROP_DESIGNATOR: self.designator,
                PROP_DEVICE_NAME: self.device_name,
                PROP_VALUE: self.value,
                PROP_SUPPLIER_PART: self.supplier_part,
            },
            "pins": dict(self.pins),
        }


@dataclass(frozen=True)
class NetlistDocument:
    """Ordered collection of ``(component_id, ComponentRecord)`` pairs."""

    entries: tuple[tuple[str, ComponentRecord], ...] = ()

    def __post_init__(self):
        ids = [component_id for component_id, _ in self.entries]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate component ids in netlist")

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[str, ComponentRecord]]:
        return iter(self.entries)

    def __contains__(self, component_id: object) -> bool:
        return any(cid == component_id for cid, _ in self.entries)

    @property
    def component_ids(self) -> list[str]:
        return [component_id for component_id, _ in self.entries]

    def get(self, component_id: str) -> ComponentRecord | None:
        """Look up a record by component id."""
        for cid, record in self.entries:
            if cid == component_id:
                return record
        return None

    def net_names(self) -> list[str]:
        """All net names in first-seen order."""
        seen: dict[str, None] = {}
        for _, record in self.entries:
            for net in record.pins.values():
                seen.setdefault(net, None)
        return list(seen)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the netlist file representation."""
        return {component_id: record.to_dict() for component_id, record in self.entries}

    @classmethod
    def from_records(cls, records: dict[str, ComponentRecord]) -> NetlistDocument:
        """Build a document from a mapping, keeping its iteration order."""
        return cls(entries=tuple(records.items()))
