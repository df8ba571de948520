"""Tests for device resolution."""

import asyncio

from fakes import CAPACITOR, RESISTOR, FakeLibrary

from netlist_rebuild.library import DeviceRef, DeviceResolver
from netlist_rebuild.netlist import ComponentRecord


def resolve(resolver, record):
    return asyncio.run(resolver.resolve(record))


class TestDeviceResolver:
    """Tests for the supplier-part-then-name lookup order."""

    def test_supplier_part_wins_and_name_search_is_skipped(self, library):
        resolver = DeviceResolver(library)
        record = ComponentRecord(designator="C5", device_name="10k resistor", supplier_part="C1525")

        device = resolve(resolver, record)

        assert device == CAPACITOR
        assert library.calls == [("supplier", "C1525")]

    def test_falls_back_to_name_when_supplier_part_unmatched(self, library):
        resolver = DeviceResolver(library)
        record = ComponentRecord(designator="R1", device_name="10k resistor", supplier_part="C999")

        device = resolve(resolver, record)

        assert device == RESISTOR
        assert library.calls == [("supplier", "C999"), ("name", "10k resistor", 1)]

    def test_empty_supplier_part_goes_straight_to_name(self, library):
        resolver = DeviceResolver(library)
        device = resolve(resolver, ComponentRecord(device_name="10k resistor"))

        assert device == RESISTOR
        assert library.calls == [("name", "10k resistor", 1)]

    def test_not_found(self, library, notifier):
        resolver = DeviceResolver(library, notifier)
        device = resolve(resolver, ComponentRecord(designator="U9", device_name="unobtainium"))

        assert device is None
        assert any("Device lookup failed: U9" in line for line in notifier.lines)

    def test_nothing_to_look_up(self, library):
        resolver = DeviceResolver(library)
        assert resolve(resolver, ComponentRecord(designator="X1")) is None
        assert library.calls == []

    def test_first_result_is_taken(self):
        other = DeviceRef(uuid="dev-other", name="other")
        library = FakeLibrary(by_name={"res": [other, RESISTOR]})
        assert resolve(DeviceResolver(library), ComponentRecord(device_name="res")) == other

    def test_search_page_is_forwarded(self, library):
        resolver = DeviceResolver(library, search_page=3)
        resolve(resolver, ComponentRecord(device_name="10k resistor"))
        assert library.calls == [("name", "10k resistor", 3)]


class TestResolverCache:
    """Tests for opt-in lookup memoization."""

    def test_no_cache_by_default(self, library):
        resolver = DeviceResolver(library)
        record = ComponentRecord(supplier_part="C25804")
        resolve(resolver, record)
        resolve(resolver, record)
        assert len(library.calls) == 2

    def test_cache_reuses_results(self, library):
        resolver = DeviceResolver(library, cache_lookups=True)
        record = ComponentRecord(supplier_part="C25804")

        assert resolve(resolver, record) == RESISTOR
        assert resolve(resolver, ComponentRecord(designator="R2", supplier_part="C25804")) == RESISTOR
        assert library.calls == [("supplier", "C25804")]

    def test_cache_remembers_misses(self, library):
        resolver = DeviceResolver(library, cache_lookups=True)
        record = ComponentRecord(device_name="nothing")
        assert resolve(resolver, record) is None
        assert resolve(resolver, record) is None
        assert library.calls == [("name", "nothing", 1)]
