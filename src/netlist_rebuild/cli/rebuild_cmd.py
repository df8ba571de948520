"""
Rebuild command for the netlist-rebuild CLI.

Rebuilds a schematic from a netlist against a local device catalog and
optionally writes the result as JSON.

Usage:
    netlist-rebuild rebuild board.json --library devices.yaml
    netlist-rebuild rebuild board.enet --library devices.yaml -o rebuilt.json --yes
    netlist-rebuild rebuild board.json --library devices.yaml --strategy grouped \\
        --drop-single-pin-nets --format json

Exit codes:
    0  every component placed (or the import was cancelled)
    1  the netlist or catalog could not be used
    2  some components could not be placed
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from rich.console import Console
from rich.table import Table

from netlist_rebuild.canvas import SchematicCanvas
from netlist_rebuild.config import WIRE_STRATEGIES, Config, ConfigError
from netlist_rebuild.exceptions import NetlistRebuildError
from netlist_rebuild.host import Host
from netlist_rebuild.library import DeviceCatalog
from netlist_rebuild.logging import enable_verbose, level_for_verbosity
from netlist_rebuild.rebuild import ImportResult, ImportStatus, RunOutcome, import_netlist

from .console import ConsoleNotifier, ConsolePrompt, PathFileSelector
from .progress import rebuild_progress
from .utils import print_error

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2


def add_arguments(parser: argparse.ArgumentParser) -> None:
    """Add rebuild arguments to ``parser``."""
    parser.add_argument("netlist", help="Netlist file (.json or .enet)")
    parser.add_argument(
        "--library",
        "-l",
        required=True,
        help="Device catalog (.yaml or .json)",
    )
    parser.add_argument("--output", "-o", help="Write the rebuilt schematic as JSON")
    parser.add_argument(
        "--strategy",
        choices=WIRE_STRATEGIES,
        help="When net stubs are created (default: from config, immediate)",
    )
    parser.add_argument(
        "--drop-single-pin-nets",
        action="store_true",
        default=None,
        help="Grouped strategy: skip nets that touch a single pin",
    )
    parser.add_argument("--stub-length", type=float, help="Length of each net stub")
    parser.add_argument("--grid-size", type=float, help="Grid pitch")
    parser.add_argument("--per-row", type=int, help="Components per row")
    parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Summary output format (default: text)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command line options on top of file configuration."""
    if args.strategy is not None:
        config.wires.strategy = args.strategy
    if args.drop_single_pin_nets is not None:
        config.wires.drop_single_pin_nets = args.drop_single_pin_nets
    if args.stub_length is not None:
        config.wires.stub_length = args.stub_length
    if args.grid_size is not None:
        config.layout.grid_size = args.grid_size
    if args.per_row is not None:
        config.layout.max_per_row = args.per_row
    if args.yes:
        config.defaults.assume_yes = True
    if args.verbose:
        config.defaults.verbose = True
    if args.quiet:
        config.defaults.quiet = True
    config.validate()
    return config


def exit_code(result: ImportResult) -> int:
    """Map an import result to a process exit code."""
    if result.fatal:
        return EXIT_ERROR
    if result.summary is None or result.summary.outcome is RunOutcome.COMPLETE:
        return EXIT_OK
    return EXIT_PARTIAL


def print_summary(result: ImportResult, canvas: SchematicCanvas, output_format: str) -> None:
    """Print the run summary to stdout."""
    summary = result.summary
    if output_format == "json":
        data = {"status": result.status.value}
        if summary is not None:
            data["summary"] = summary.to_dict()
            data["nets"] = canvas.net_labels()
        print(json.dumps(data, indent=2))
        return

    if summary is None:
        return

    console = Console()
    table = Table(title="Rebuild summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Components", str(summary.total))
    table.add_row("Placed", str(summary.succeeded))
    table.add_row("Failed", str(summary.failed))
    table.add_row("Net stubs", str(summary.wires_created))
    if summary.wire_failures:
        table.add_row("Stub failures", str(summary.wire_failures))
    if summary.pin_misses:
        table.add_row("Missing pins", str(summary.pin_misses))
    table.add_row("Nets", str(len(canvas.net_labels())))
    console.print(table)

    if summary.failed_designators:
        console.print(f"[yellow]Not placed:[/yellow] {', '.join(summary.failed_designators)}")


def run(args: argparse.Namespace) -> int:
    """Run the rebuild command with parsed arguments."""
    try:
        config = apply_overrides(Config.load(), args)
    except (ConfigError, NetlistRebuildError) as e:
        print_error(e)
        return EXIT_ERROR

    if config.defaults.verbose:
        enable_verbose(level_for_verbosity(max(args.verbose, 1)))

    try:
        catalog = DeviceCatalog.load(args.library, fuzzy_cutoff=config.library.fuzzy_cutoff)
    except NetlistRebuildError as e:
        print_error(e)
        return EXIT_ERROR

    canvas = SchematicCanvas(catalog)
    host = Host(
        files=PathFileSelector(args.netlist),
        prompt=ConsolePrompt(assume_yes=config.defaults.assume_yes),
        library=catalog,
        symbols=canvas,
        wires=canvas,
        notifier=ConsoleNotifier(quiet=config.defaults.quiet),
    )

    # A live progress bar would fight with the confirmation prompt
    show_progress = config.defaults.assume_yes and not config.defaults.quiet
    with rebuild_progress(enabled=show_progress):
        result = asyncio.run(import_netlist(host, config))

    if result.status is ImportStatus.COMPLETED and args.output:
        try:
            canvas.save(args.output)
        except OSError as e:
            print_error(e)
            return EXIT_ERROR
        if not config.defaults.quiet:
            print(f"Wrote {args.output}", file=sys.stderr)

    print_summary(result, canvas, args.format)
    return exit_code(result)

