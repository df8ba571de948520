"""
Device library data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DeviceRef:
    """A device definition returned by a library lookup.

    Opaque beyond its identity: the resolver hands it to the symbol editor
    unchanged.
    """

    uuid: str
    name: str
    supplier_part: str = ""

    def __str__(self) -> str:
        if self.supplier_part:
            return f"{self.name} ({self.supplier_part})"
        return self.name


@dataclass(frozen=True)
class CatalogPin:
    """Pin of a catalog device, relative to the symbol anchor."""

    number: str
    x: float
    y: float
    name: str = ""


@dataclass
class CatalogDevice:
    """A device entry in a local catalog file."""

    uuid: str
    name: str
    supplier_part: str = ""
    description: str = ""
    keywords: list[str] = field(default_factory=list)
    pins: list[CatalogPin] = field(default_factory=list)

    @property
    def ref(self) -> DeviceRef:
        return DeviceRef(uuid=self.uuid, name=self.name, supplier_part=self.supplier_part)
