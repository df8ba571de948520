"""
Local device catalog.

A file-backed :class:`~netlist_rebuild.host.DeviceLibrary` so rebuilds can run
without a host EDA application. Catalogs are YAML (or JSON, which YAML reads
too)::

    library:
      uuid: 0b8f2c1e-basic-passives
      name: Basic passives
    devices:
      - name: 10k resistor
        supplier_part: C25804
        keywords: [resistor, 0402]
        pins:
          - {number: "1", x: -10, y: 0}
          - {number: "2", x: 10, y: 0}

Devices without a ``uuid`` get a stable one derived from their name.
"""

from __future__ import annotations

import logging
import uuid
from difflib import get_close_matches
from pathlib import Path
from typing import Any

import yaml

from netlist_rebuild.exceptions import CatalogError

from .models import CatalogDevice, CatalogPin, DeviceRef

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _stable_uuid(name: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"netlist-rebuild:{name}"))


def _parse_pin(data: Any, device_name: str) -> CatalogPin:
    if not isinstance(data, dict) or "number" not in data:
        raise CatalogError(
            "Catalog pin must be a mapping with a 'number'",
            context={"device": device_name, "pin": data},
        )
    try:
        return CatalogPin(
            number=str(data["number"]),
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            name=str(data.get("name", "")),
        )
    except (TypeError, ValueError) as e:
        raise CatalogError(
            "Catalog pin coordinates must be numbers",
            context={"device": device_name, "pin": data["number"]},
        ) from e


def _parse_device(data: Any) -> CatalogDevice:
    if not isinstance(data, dict) or not data.get("name"):
        raise CatalogError(
            "Catalog device must be a mapping with a 'name'",
            context={"device": data},
        )
    name = str(data["name"])
    keywords = data.get("keywords") or []
    if isinstance(keywords, str):
        keywords = keywords.split()
    return CatalogDevice(
        uuid=str(data.get("uuid") or _stable_uuid(name)),
        name=name,
        supplier_part=str(data.get("supplier_part") or ""),
        description=str(data.get("description") or ""),
        keywords=[str(k) for k in keywords],
        pins=[_parse_pin(p, name) for p in data.get("pins") or []],
    )


class DeviceCatalog:
    """
    In-memory device library loaded from a catalog file.

    Supplier part lookup is exact (case-insensitive). Name search ranks exact
    name matches first, then substring matches on name, description and
    keywords, then ``difflib`` close matches on the name.

    Example::

        catalog = DeviceCatalog.load("devices.yaml")
        devices = await catalog.search_by_name("10k resistor")
    """

    def __init__(
        self,
        devices: list[CatalogDevice] | None = None,
        library_uuid: str | None = None,
        name: str = "",
        fuzzy_cutoff: float = 0.6,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.devices: list[CatalogDevice] = list(devices or [])
        self.library_uuid = library_uuid
        self.name = name
        self.fuzzy_cutoff = fuzzy_cutoff
        self.page_size = page_size
        self._by_uuid = {d.uuid: d for d in self.devices}

    @classmethod
    def load(cls, path: str | Path, fuzzy_cutoff: float = 0.6) -> DeviceCatalog:
        """Load a catalog from a YAML or JSON file.

        Raises:
            CatalogError: If the file is unreadable or malformed
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise CatalogError(f"Cannot read device catalog: {e}", context={"file": path}) from e
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid device catalog: {e}", context={"file": path}) from e

        catalog = cls.from_dict(data, default_uuid=_stable_uuid(path.name), fuzzy_cutoff=fuzzy_cutoff)
        logger.info(f"Loaded {len(catalog.devices)} devices from {path}")
        return catalog

    @classmethod
    def from_dict(
        cls, data: Any, default_uuid: str | None = None, fuzzy_cutoff: float = 0.6
    ) -> DeviceCatalog:
        """Build a catalog from already decoded data."""
        if not isinstance(data, dict):
            raise CatalogError("Device catalog must be a mapping with a 'devices' list")

        library = data.get("library") or {}
        devices_data = data.get("devices") or []
        if not isinstance(devices_data, list):
            raise CatalogError("Catalog 'devices' must be a list")

        devices = [_parse_device(d) for d in devices_data]
        library_uuid = library.get("uuid", default_uuid) if isinstance(library, dict) else default_uuid
        name = str(library.get("name", "")) if isinstance(library, dict) else ""
        return cls(
            devices=devices,
            library_uuid=str(library_uuid) if library_uuid else None,
            name=name,
            fuzzy_cutoff=fuzzy_cutoff,
        )

    def __len__(self) -> int:
        return len(self.devices)

    def get(self, device_uuid: str) -> CatalogDevice | None:
        """Get a catalog device by uuid."""
        return self._by_uuid.get(device_uuid)

    def find_by_supplier_part(self, supplier_id: str) -> list[CatalogDevice]:
        wanted = supplier_id.strip().upper()
        if not wanted:
            return []
        return [d for d in self.devices if d.supplier_part.upper() == wanted]

    def rank_by_name(self, query: str) -> list[CatalogDevice]:
        """All devices matching ``query``, best first."""
        q = query.strip().lower()
        if not q:
            return []

        exact = [d for d in self.devices if d.name.lower() == q]
        substring = sorted(
            (
                d
                for d in self.devices
                if d not in exact
                and (
                    q in d.name.lower()
                    or q in d.description.lower()
                    or any(q == k.lower() for k in d.keywords)
                )
            ),
            key=lambda d: len(d.name),
        )

        seen = {d.uuid for d in exact + substring}
        names = [d.name.lower() for d in self.devices]
        close = get_close_matches(q, names, n=10, cutoff=self.fuzzy_cutoff)
        fuzzy = []
        for match in close:
            for d in self.devices:
                if d.name.lower() == match and d.uuid not in seen:
                    fuzzy.append(d)
                    seen.add(d.uuid)

        return exact + substring + fuzzy

    async def lookup_by_supplier_id(self, supplier_id: str) -> list[DeviceRef]:
        return [d.ref for d in self.find_by_supplier_part(supplier_id)]

    async def search_by_name(self, name: str, page: int = 1) -> list[DeviceRef]:
        ranked = self.rank_by_name(name)
        start = (max(page, 1) - 1) * self.page_size
        return [d.ref for d in ranked[start : start + self.page_size]]

    async def get_library_namespace(self) -> str | None:
        return self.library_uuid
