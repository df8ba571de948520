"""
Device resolution.

Maps a netlist component to a library device in two stages, first match wins:

1. Supplier part number (exact, authoritative)
2. Device name search (best effort)

The order is never reversed and the name search is never attempted once the
supplier part matched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import DeviceRef

if TYPE_CHECKING:
    from netlist_rebuild.host import DeviceLibrary, Notifier
    from netlist_rebuild.netlist.models import ComponentRecord

logger = logging.getLogger(__name__)


class DeviceResolver:
    """
    Resolve netlist components against a device library.

    Example::

        resolver = DeviceResolver(library, notifier)
        device = await resolver.resolve(record)
        if device is None:
            ...  # not found by supplier part or by name

    Args:
        library: Host device library
        notifier: Optional host log sink for lookup progress lines
        search_page: Result page requested from the name search
        cache_lookups: Memoize results by (supplier part, device name). Safe
            only while the library contents do not change.
    """

    def __init__(
        self,
        library: DeviceLibrary,
        notifier: Notifier | None = None,
        search_page: int = 1,
        cache_lookups: bool = False,
    ):
        self.library = library
        self.notifier = notifier
        self.search_page = search_page
        self._cache: dict[tuple[str, str], DeviceRef | None] | None = (
            {} if cache_lookups else None
        )

    def _log(self, message: str) -> None:
        logger.info(message)
        if self.notifier is not None:
            self.notifier.log(message)

    async def resolve(self, record: ComponentRecord) -> DeviceRef | None:
        """Resolve one component.

        Returns:
            The first matching device, or None if neither stage matched
        """
        key = (record.supplier_part, record.device_name)
        if self._cache is not None and key in self._cache:
            logger.debug(f"Lookup cache hit for {key}")
            return self._cache[key]

        device = await self._resolve_uncached(record)

        if self._cache is not None:
            self._cache[key] = device
        return device

    async def _resolve_uncached(self, record: ComponentRecord) -> DeviceRef | None:
        if record.supplier_part:
            self._log(f"Looking up supplier part: {record.supplier_part}")
            devices = await self.library.lookup_by_supplier_id(record.supplier_part)
            if devices:
                self._log(f"Found by supplier part: {record.designator} - {devices[0].name}")
                return devices[0]
            self._log(f"No device for supplier part: {record.supplier_part}")

        if record.device_name:
            self._log(f"Searching by device name: {record.device_name}")
            devices = await self.library.search_by_name(record.device_name, self.search_page)
            if devices:
                self._log(f"Found by device name: {record.designator} - {devices[0].name}")
                return devices[0]
            self._log(f"No device named: {record.device_name}")

        self._log(
            f"Device lookup failed: {record.designator} - "
            f"supplier part: {record.supplier_part or 'none'}, "
            f"device name: {record.device_name or 'none'}"
        )
        return None
