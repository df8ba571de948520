"""
Netlist input: data models and the JSON / .enet parser.
"""

from .models import ComponentRecord, NetlistDocument
from .parser import NETLIST_EXTENSIONS, parse_netlist, parse_netlist_bytes, serialize_netlist

__all__ = [
    "ComponentRecord",
    "NetlistDocument",
    "NETLIST_EXTENSIONS",
    "parse_netlist",
    "parse_netlist_bytes",
    "serialize_netlist",
]
