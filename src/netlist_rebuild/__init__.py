"""
netlist-rebuild: rebuild a schematic layout from a component netlist.

Reads a JSON (``.json`` / ``.enet``) netlist, resolves every component to a
library device, places it on a deterministic grid and draws a labeled wire
stub at every connected pin.

Modules:
    netlist: Netlist models and parser
    library: Device catalog and supplier-part / name resolution
    layout: Grid layout planner
    placement: Symbol placement and bounding geometry
    wiring: Net label stub synthesis strategies
    rebuild: Orchestrator and interactive import flow
    canvas: In-memory schematic used by the command line tool

Quick Start::

    import asyncio
    from netlist_rebuild import Config, parse_netlist, reconstruct

    doc = parse_netlist(open("board.json").read())
    summary = asyncio.run(reconstruct(doc, host, Config.load()))
"""

__version__ = "0.3.0"

from netlist_rebuild.config import Config
from netlist_rebuild.exceptions import (
    FailureKind,
    LibraryUnavailableError,
    NetlistRebuildError,
    ParseError,
)
from netlist_rebuild.netlist import ComponentRecord, NetlistDocument, parse_netlist
from netlist_rebuild.rebuild import ReconstructionSummary, import_netlist, reconstruct

__all__ = [
    "__version__",
    "Config",
    "NetlistRebuildError",
    "ParseError",
    "LibraryUnavailableError",
    "FailureKind",
    "ComponentRecord",
    "NetlistDocument",
    "parse_netlist",
    "ReconstructionSummary",
    "reconstruct",
    "import_netlist",
]
