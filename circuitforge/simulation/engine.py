"""
simulation/engine.py

Entry point of the DC simulation engine.

``simulate`` is a pure function of its arguments: it builds the node
graph, solves it, collects diagnostics and returns a fresh
SimulationResult. Expected problems in the circuit (no source, no
connections, dangling wires) come back as diagnostics; only an internal
fault raises.
"""

import logging
from typing import Iterable

from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.models.component import ComponentData
from circuitforge.models.wire import WireData

from . import diagnostics as diag
from .dc_solver import solve_dc
from .result import SimulationResult
from .topology import assign_nodes, build_terminal_graph

logger = logging.getLogger(__name__)


def propagate_wire_currents(
    wires: Iterable[WireData], component_currents: dict[str, float]
) -> dict[str, float]:
    """
    Copy each wire's start-component current magnitude onto the wire.

    Returns a new mapping holding the component entries plus one entry per
    wire whose start component carries current. A wire whose id matches a
    component id never overwrites that component's entry.
    """
    currents = dict(component_currents)
    for wire in wires:
        if wire.wire_id in component_currents:
            logger.debug("Wire %s shares its id with a component; current not recorded", wire.wire_id)
            continue
        current = component_currents.get(wire.start_component_id)
        if current:
            currents[wire.wire_id] = abs(current)
    return currents


def simulate(components: Iterable[ComponentData], wires: Iterable[WireData]) -> SimulationResult:
    """
    Resolve a circuit into node voltages, currents and diagnostics.

    Args:
        components: Component snapshots; not modified.
        wires: Wire snapshots; wires with unknown endpoints are ignored.

    Returns:
        A new SimulationResult. ``errors`` is non-empty when the circuit
        has no voltage source or no usable nodes.
    """
    components = list(components)
    wires = list(wires)

    if not any(c.is_voltage_source() for c in components):
        return SimulationResult.from_diagnostics([diag.no_source()])

    graph = build_terminal_graph(components, wires)
    assignment = assign_nodes(graph, components)
    if assignment.is_empty():
        return SimulationResult.from_diagnostics([diag.no_topology()])

    findings = []
    if assignment.ground_is_fallback:
        findings.append(diag.missing_ground())

    node_voltages, component_currents = solve_dc(components, assignment)
    currents = propagate_wire_currents(wires, component_currents)

    findings.extend(diag.check_node_voltages(node_voltages))
    findings.extend(diag.check_currents(currents))

    logger.debug(
        "Simulated %d components, %d wires into %d nodes (ground %s)",
        len(components),
        len(wires),
        len(assignment.nodes),
        assignment.ground_node.node_id,
    )
    return SimulationResult.from_diagnostics(
        findings,
        node_voltages=node_voltages,
        component_currents=currents,
        ground_node=assignment.ground_node.node_id,
    )


def simulate_snapshot(snapshot: CircuitSnapshot) -> SimulationResult:
    """Run ``simulate`` on a CircuitSnapshot."""
    return simulate(snapshot.components, snapshot.wires)
