"""
Command-line interface for netlist-rebuild.

    netlist-rebuild rebuild <netlist> --library <catalog>  - Rebuild a schematic
    netlist-rebuild config [--show|--init|--paths|get KEY] - Manage configuration
    netlist-rebuild about                                  - Show version banner

Examples:
    netlist-rebuild rebuild board.json -l devices.yaml -o rebuilt.json --yes
    netlist-rebuild rebuild board.enet -l devices.yaml --strategy grouped --format json
    netlist-rebuild config get wires.strategy
"""

import argparse
from typing import List, Optional

from netlist_rebuild import __version__

from . import config_cmd, rebuild_cmd

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the netlist-rebuild CLI."""
    parser = argparse.ArgumentParser(
        prog="netlist-rebuild",
        description="Rebuild schematic layouts from component netlists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"netlist-rebuild {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    rebuild_parser = subparsers.add_parser("rebuild", help="Rebuild a schematic from a netlist")
    rebuild_cmd.add_arguments(rebuild_parser)

    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_cmd.add_arguments(config_parser)

    subparsers.add_parser("about", help="Show version banner")

    args = parser.parse_args(argv)

    if args.command == "rebuild":
        return rebuild_cmd.run(args)
    if args.command == "config":
        return config_cmd.run(args)
    if args.command == "about":
        from netlist_rebuild.rebuild import about

        print(about())
        return 0

    parser.print_help()
    return 1
