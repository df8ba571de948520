"""
Wire synthesis strategies.

Two interchangeable ways to decide when stubs are emitted:

- :class:`ImmediateWireStrategy` emits a component's stubs right after it is
  placed.
- :class:`GroupedWireStrategy` waits until every component is placed, groups
  connections by normalized net name and emits them net by net. With
  ``drop_single_pin_nets`` it skips nets that touch only one pin.

Both produce the same stub for the same pin.

Usage:
    strategy = create_strategy(config.wires, host.wires, host.notifier)
    for component, record in placements:
        report.extend(await strategy.after_component(component, record))
    report.extend(await strategy.finish(placements))
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from netlist_rebuild.exceptions import ConfigurationError, FailureKind

from .stubs import StubOutcome, StubWriter, normalize_net_name

if TYPE_CHECKING:
    from netlist_rebuild.config import WiresConfig
    from netlist_rebuild.host import Notifier, WireEditor
    from netlist_rebuild.netlist.models import ComponentRecord
    from netlist_rebuild.placement.models import PlacedComponent, ResolvedPin

logger = logging.getLogger(__name__)


@dataclass
class WireReport:
    """Accumulated stub outcomes."""

    outcomes: list[StubOutcome] = field(default_factory=list)

    def extend(self, other: WireReport) -> None:
        self.outcomes.extend(other.outcomes)

    @property
    def created(self) -> int:
        return sum(1 for o in self.outcomes if o.created)

    @property
    def failures(self) -> int:
        return sum(1 for o in self.outcomes if o.kind is FailureKind.WIRE_CREATION_FAILED)

    @property
    def pin_misses(self) -> int:
        return sum(1 for o in self.outcomes if o.kind is FailureKind.PIN_LOOKUP_MISS)


@dataclass(frozen=True)
class NetConnection:
    """One pin of one placed component on a net."""

    component: PlacedComponent
    pin_number: str
    pin: ResolvedPin
    net_name: str


def match_pins(
    component: PlacedComponent, record: ComponentRecord
) -> Iterator[tuple[str, str, ResolvedPin | None]]:
    """Pair each netlist pin of ``record`` with the realized pin, if any.

    Yields ``(pin_number, net_name, pin)`` in netlist order; ``pin`` is None
    when the placed symbol has no pin with that exact number.
    """
    for pin_number, net_name in record.pins.items():
        yield pin_number, net_name, component.find_pin(pin_number)


def build_net_groups(
    placements: Sequence[tuple[PlacedComponent, ComponentRecord]],
) -> tuple[dict[str, list[NetConnection]], list[tuple[PlacedComponent, str, str]]]:
    """Group realized pin connections by normalized net name.

    Returns:
        (groups, misses) where groups maps label to connections in placement
        order and misses lists ``(component, pin_number, net_name)`` for
        netlist pins the placed symbol lacks.
    """
    groups: dict[str, list[NetConnection]] = {}
    misses: list[tuple[PlacedComponent, str, str]] = []

    for component, record in placements:
        for pin_number, net_name, pin in match_pins(component, record):
            if pin is None:
                misses.append((component, pin_number, net_name))
                continue
            groups.setdefault(normalize_net_name(net_name), []).append(
                NetConnection(component=component, pin_number=pin_number, pin=pin, net_name=net_name)
            )

    return groups, misses


class WireSynthesisStrategy(ABC):
    """Decides when stubs are emitted during a rebuild run.

    Lifecycle:
        1. ``after_component(component, record)`` for each placed component,
           in netlist order.
        2. ``finish(placements)`` once, after the last component.
    """

    name: str = ""

    def __init__(self, writer: StubWriter):
        self.writer = writer

    @abstractmethod
    async def after_component(
        self, component: PlacedComponent, record: ComponentRecord
    ) -> WireReport:
        """Called right after ``component`` was placed."""

    @abstractmethod
    async def finish(
        self, placements: Sequence[tuple[PlacedComponent, ComponentRecord]]
    ) -> WireReport:
        """Called once after every component has been attempted."""


class ImmediateWireStrategy(WireSynthesisStrategy):
    """Emit each component's stubs as soon as it is placed."""

    name = "immediate"

    async def after_component(
        self, component: PlacedComponent, record: ComponentRecord
    ) -> WireReport:
        report = WireReport()
        for pin_number, net_name, pin in match_pins(component, record):
            if pin is None:
                report.outcomes.append(self.writer.pin_missing(component, pin_number, net_name))
            else:
                report.outcomes.append(await self.writer.emit(component, pin, net_name))
        return report

    async def finish(
        self, placements: Sequence[tuple[PlacedComponent, ComponentRecord]]
    ) -> WireReport:
        return WireReport()


class GroupedWireStrategy(WireSynthesisStrategy):
    """Emit stubs net by net after all components are placed.

    Args:
        writer: Stub writer
        drop_single_pin_nets: Skip nets with fewer than two connections
    """

    name = "grouped"

    def __init__(self, writer: StubWriter, drop_single_pin_nets: bool = False):
        super().__init__(writer)
        self.drop_single_pin_nets = drop_single_pin_nets

    async def after_component(
        self, component: PlacedComponent, record: ComponentRecord
    ) -> WireReport:
        return WireReport()

    async def finish(
        self, placements: Sequence[tuple[PlacedComponent, ComponentRecord]]
    ) -> WireReport:
        report = WireReport()
        groups, misses = build_net_groups(placements)

        for component, pin_number, net_name in misses:
            report.outcomes.append(self.writer.pin_missing(component, pin_number, net_name))

        for label, connections in groups.items():
            if self.drop_single_pin_nets and len(connections) < 2:
                logger.info(f"Skipping single-pin net {label}")
                continue
            for connection in connections:
                report.outcomes.append(
                    await self.writer.emit(connection.component, connection.pin, connection.net_name)
                )
        return report


def create_strategy(
    wires_config: WiresConfig,
    wires: WireEditor,
    notifier: Notifier | None = None,
) -> WireSynthesisStrategy:
    """Build the strategy named by ``wires_config.strategy``.

    Raises:
        ConfigurationError: If the strategy name is unknown
    """
    writer = StubWriter(wires, notifier, length=wires_config.stub_length)
    if wires_config.strategy == ImmediateWireStrategy.name:
        return ImmediateWireStrategy(writer)
    if wires_config.strategy == GroupedWireStrategy.name:
        return GroupedWireStrategy(writer, drop_single_pin_nets=wires_config.drop_single_pin_nets)
    raise ConfigurationError(
        f"Unknown wire strategy: {wires_config.strategy}",
        context={"available": "immediate, grouped"},
    )
