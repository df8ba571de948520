"""
Device libraries and component-to-device resolution.

Example::

    from netlist_rebuild.library import DeviceCatalog, DeviceResolver

    catalog = DeviceCatalog.load("devices.yaml")
    resolver = DeviceResolver(catalog)
    device = await resolver.resolve(record)
"""

from .catalog import DeviceCatalog
from .models import CatalogDevice, CatalogPin, DeviceRef
from .resolver import DeviceResolver

__all__ = [
    "DeviceCatalog",
    "DeviceResolver",
    "DeviceRef",
    "CatalogDevice",
    "CatalogPin",
]
