"""Pytest fixtures for netlist-rebuild tests."""

import json

import pytest

from fakes import (
    CAPACITOR,
    RESISTOR,
    SAMPLE_NETLIST,
    FakeEditor,
    FakeLibrary,
    RecordingNotifier,
)

CATALOG_YAML = """
library:
  uuid: lib-test
  name: Test parts
devices:
  - uuid: dev-res
    name: 10k resistor
    supplier_part: C25804
    description: Thick film resistor 0402
    keywords: [resistor, "0402"]
    pins:
      - {number: "1", x: -10, y: 0}
      - {number: "2", x: 10, y: 0}
  - uuid: dev-cap
    name: 100nF capacitor
    supplier_part: C1525
    pins:
      - {number: "1", x: 0, y: -10}
      - {number: "2", x: 0, y: 10}
  - name: LED red
    pins:
      - {number: "A", x: -10, y: 0}
      - {number: "K", x: 10, y: 0}
"""


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def editor():
    return FakeEditor()


@pytest.fixture
def library():
    return FakeLibrary(
        by_supplier={"C25804": [RESISTOR], "C1525": [CAPACITOR]},
        by_name={"10k resistor": [RESISTOR], "100nF capacitor": [CAPACITOR]},
    )


@pytest.fixture
def sample_netlist_text():
    return json.dumps(SAMPLE_NETLIST)


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "devices.yaml"
    path.write_text(CATALOG_YAML)
    return path
