"""
Net wire synthesis: one labeled stub per connected pin.
"""

from .strategy import (
    GroupedWireStrategy,
    ImmediateWireStrategy,
    NetConnection,
    WireReport,
    WireSynthesisStrategy,
    build_net_groups,
    create_strategy,
    match_pins,
)
from .stubs import DEFAULT_STUB_LENGTH, StubOutcome, StubWriter, normalize_net_name, stub_segment

__all__ = [
    "WireSynthesisStrategy",
    "ImmediateWireStrategy",
    "GroupedWireStrategy",
    "WireReport",
    "NetConnection",
    "build_net_groups",
    "create_strategy",
    "match_pins",
    "StubWriter",
    "StubOutcome",
    "DEFAULT_STUB_LENGTH",
    "normalize_net_name",
    "stub_segment",
]
