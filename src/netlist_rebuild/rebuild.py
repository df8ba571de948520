"""
Schematic reconstruction from a netlist.

:func:`reconstruct` drives the whole pipeline over a parsed netlist: for each
component, in declaration order, resolve a device, place it on the grid and
synthesize its net stubs. A component that fails is recorded and skipped; only
a missing device library aborts the run.

:func:`import_netlist` wraps it in the interactive flow (select file, parse,
confirm, rebuild) and guarantees exactly one final notification.

Example::

    host = Host(files=..., prompt=..., library=catalog, symbols=canvas,
                wires=canvas, notifier=notifier)
    result = asyncio.run(import_netlist(host, Config.load()))
    if result.summary:
        print(result.summary.succeeded, "/", result.summary.total)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from netlist_rebuild import __version__
from netlist_rebuild.config import Config
from netlist_rebuild.exceptions import LibraryUnavailableError, NetlistRebuildError, ParseError
from netlist_rebuild.host import Severity
from netlist_rebuild.layout import GridPlanner
from netlist_rebuild.library import DeviceResolver
from netlist_rebuild.netlist import NETLIST_EXTENSIONS, parse_netlist_bytes
from netlist_rebuild.placement import ComponentPlacer, PlacedComponent, PlacementFailure
from netlist_rebuild.progress import report_progress
from netlist_rebuild.wiring import WireReport, WireSynthesisStrategy, create_strategy

if TYPE_CHECKING:
    from netlist_rebuild.host import Host
    from netlist_rebuild.netlist import ComponentRecord, NetlistDocument

logger = logging.getLogger(__name__)


class RunOutcome(Enum):
    """Overall classification of a finished run."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class ReconstructionSummary:
    """Counts and failures of one rebuild run."""

    total: int = 0
    succeeded: int = 0
    failed_designators: list[str] = field(default_factory=list)
    wires_created: int = 0
    wire_failures: int = 0
    pin_misses: int = 0

    @property
    def failed(self) -> int:
        return len(self.failed_designators)

    @property
    def outcome(self) -> RunOutcome:
        if not self.failed_designators:
            return RunOutcome.COMPLETE
        if self.succeeded == 0:
            return RunOutcome.FAILED
        return RunOutcome.PARTIAL

    def add_wires(self, report: WireReport) -> None:
        self.wires_created += report.created
        self.wire_failures += report.failures
        self.pin_misses += report.pin_misses

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "failed_designators": list(self.failed_designators),
            "wires_created": self.wires_created,
            "wire_failures": self.wire_failures,
            "pin_misses": self.pin_misses,
        }


def _notify_summary(host: Host, summary: ReconstructionSummary) -> None:
    host.notifier.log(
        f"Schematic rebuild finished - total: {summary.total}, "
        f"succeeded: {summary.succeeded}, failed: {summary.failed}"
    )

    outcome = summary.outcome
    if outcome is RunOutcome.COMPLETE:
        message = f"Rebuild complete! Placed all {summary.succeeded} components."
        host.notifier.log(message)
        host.notifier.toast(message, Severity.SUCCESS)
        return

    failed = ", ".join(summary.failed_designators)
    host.notifier.log(f"Components not placed: {failed}")
    if outcome is RunOutcome.PARTIAL:
        message = (
            f"Rebuild complete! Placed {summary.succeeded}/{summary.total} components.\n"
            f"Components not found: {failed}"
        )
        host.notifier.toast(message, Severity.WARNING)
    else:
        message = f"Rebuild failed: none of {summary.total} components could be placed.\n{failed}"
        host.notifier.toast(message, Severity.ERROR)


async def reconstruct(
    doc: NetlistDocument,
    host: Host,
    config: Config | None = None,
    strategy: WireSynthesisStrategy | None = None,
) -> ReconstructionSummary:
    """Rebuild a schematic from a parsed netlist.

    Args:
        doc: Parsed netlist
        host: Host collaborators
        config: Configuration (default: built-in defaults)
        strategy: Wire strategy override (default: from ``config.wires``)

    Returns:
        Run summary. Exactly one summary notification has been emitted.

    Raises:
        LibraryUnavailableError: If the host has no device library namespace
    """
    config = config or Config()

    library_uuid = await host.library.get_library_namespace()
    if not library_uuid:
        raise LibraryUnavailableError(
            "Could not obtain the device library namespace",
            suggestions=["Check that a device library is loaded"],
        )

    resolver = DeviceResolver(
        host.library,
        host.notifier,
        search_page=config.library.search_page,
        cache_lookups=config.library.cache_lookups,
    )
    placer = ComponentPlacer(resolver, host.symbols, host.notifier)
    planner = GridPlanner.from_config(config.layout)
    if strategy is None:
        strategy = create_strategy(config.wires, host.wires, host.notifier)

    total = len(doc)
    summary = ReconstructionSummary(total=total)
    placements: list[tuple[PlacedComponent, ComponentRecord]] = []

    # The grid index counts attempts, so failed components still take a slot.
    for index, (component_id, record) in enumerate(doc):
        label = record.label(component_id)
        try:
            result = await placer.place(component_id, record, planner.position(index), library_uuid)
            if isinstance(result, PlacementFailure):
                summary.failed_designators.append(result.label)
                host.notifier.log(f"Placement failed, skipped: {label}")
            else:
                summary.add_wires(await strategy.after_component(result, record))
                placements.append((result, record))
                host.notifier.log(f"Placement progress: {len(placements)}/{total}")
        except Exception as e:
            message = f"Error while placing component {label}: {e}"
            logger.exception(message)
            host.notifier.log(message)
            host.notifier.toast(message, Severity.ERROR)
            summary.failed_designators.append(label)

        report_progress((index + 1) / total, f"Placed {len(placements)}/{total}: {label}")

    summary.succeeded = len(placements)
    try:
        summary.add_wires(await strategy.finish(placements))
    except Exception as e:
        message = f"Net wire synthesis failed: {e}"
        logger.exception(message)
        host.notifier.log(message)

    _notify_summary(host, summary)
    return summary


class ImportStatus(Enum):
    """How an interactive import ended."""

    COMPLETED = "completed"
    NO_FILE = "no_file"
    FILE_ERROR = "file_error"
    PARSE_ERROR = "parse_error"
    CANCELLED = "cancelled"
    LIBRARY_UNAVAILABLE = "library_unavailable"
    ERROR = "error"


@dataclass
class ImportResult:
    """Result of :func:`import_netlist`."""

    status: ImportStatus
    summary: ReconstructionSummary | None = None
    error: Exception | None = None
    component_count: int = 0

    @property
    def fatal(self) -> bool:
        return self.status not in (
            ImportStatus.COMPLETED,
            ImportStatus.NO_FILE,
            ImportStatus.CANCELLED,
        )


async def import_netlist(host: Host, config: Config | None = None) -> ImportResult:
    """Interactive import: select a netlist file, confirm, rebuild.

    Declining the confirmation is a no-op: nothing has been created yet.
    """
    notifier = host.notifier

    try:
        raw = await host.files.select_file(NETLIST_EXTENSIONS)
    except (NetlistRebuildError, OSError) as e:
        logger.error(f"File selection failed: {e}")
        notifier.toast(f"File selection failed: {e}", Severity.ERROR)
        return ImportResult(ImportStatus.FILE_ERROR, error=e)

    if raw is None:
        notifier.toast("No file selected", Severity.INFO)
        return ImportResult(ImportStatus.NO_FILE)

    try:
        doc = parse_netlist_bytes(raw)
    except ParseError as e:
        logger.error(f"Netlist parse failed: {e}")
        notifier.log(f"Netlist parse failed: {e.message}")
        notifier.toast("Netlist file format error, please check the file format", Severity.ERROR)
        return ImportResult(ImportStatus.PARSE_ERROR, error=e)

    count = len(doc)
    confirmed = await host.prompt.confirm(
        f"Detected {count} components, start rebuilding the schematic?",
        "Confirm import",
    )
    if not confirmed:
        notifier.log("Import cancelled")
        return ImportResult(ImportStatus.CANCELLED, component_count=count)

    try:
        summary = await reconstruct(doc, host, config)
    except LibraryUnavailableError as e:
        notifier.log(e.message)
        notifier.toast(e.message, Severity.ERROR)
        return ImportResult(ImportStatus.LIBRARY_UNAVAILABLE, error=e, component_count=count)
    except Exception as e:
        logger.exception("Import failed")
        notifier.toast(f"Import failed: {e}", Severity.ERROR)
        return ImportResult(ImportStatus.ERROR, error=e, component_count=count)

    return ImportResult(ImportStatus.COMPLETED, summary=summary, component_count=count)


def about() -> str:
    """Version banner shown by the ``about`` command."""
    return (
        f"netlist-rebuild v{__version__} - "
        "imports netlist JSON files and rebuilds the schematic"
    )
