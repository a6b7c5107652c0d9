"""
simulation/dc_solver.py

Simplified DC operating point.

Voltage sources pin node voltages locally, one source at a time; no
simultaneous system is assembled across sources or loops. Component
currents then follow from a per-kind constitutive rule applied to the
voltage difference across each two-terminal component.
"""

import logging
from typing import Callable, Iterable, Optional

from circuitforge.models.component import DIODE_TYPES, VOLTAGE_SOURCE_TYPES, ComponentData

from .constants import (
    CURRENT_EPSILON,
    DEFAULT_RESISTANCE,
    DIODE_FORWARD_VOLTAGE,
    DIODE_SERIES_RESISTANCE,
    SOURCE_PLACEHOLDER_CURRENT,
)
from .topology import NodeAssignment
from .value_parser import parse_value

logger = logging.getLogger(__name__)


def _terminal_nodes(component: ComponentData, assignment: NodeAssignment):
    """Return the nodes under terminals 0 and 1, or None for non-two-terminal parts."""
    if component.get_terminal_count() != 2:
        return None
    first, second = component.terminals
    node_a = assignment.node_for(component.component_id, first.terminal_id)
    node_b = assignment.node_for(component.component_id, second.terminal_id)
    if node_a is None or node_b is None:
        return None
    return node_a, node_b


def apply_voltage_sources(components: Iterable[ComponentData], assignment: NodeAssignment) -> None:
    """
    Pin node voltages from each two-terminal voltage source.

    Terminal 0 is the negative side and terminal 1 the positive side.
    Sources are applied in component order; a later source overrides an
    earlier one on a shared node. The ground node is never modified.
    """
    ground = assignment.ground_node
    for component in components:
        if component.component_type not in VOLTAGE_SOURCE_TYPES:
            continue
        nodes = _terminal_nodes(component, assignment)
        if nodes is None:
            continue
        neg_node, pos_node = nodes
        if neg_node is pos_node:
            logger.debug("Source %s is shorted onto %s", component.component_id, neg_node.node_id)
            continue

        voltage = parse_value(component.value)
        if neg_node is ground:
            pos_node.voltage = voltage
        elif pos_node is ground:
            neg_node.voltage = -voltage
        else:
            pos_node.voltage = neg_node.voltage + voltage


def resolve_resistance(component: ComponentData) -> float:
    """Parsed resistance, or DEFAULT_RESISTANCE when missing or non-positive."""
    resistance = parse_value(component.value)
    if resistance <= 0:
        return DEFAULT_RESISTANCE
    return resistance


def resistor_current(component: ComponentData, delta_v: float) -> float:
    return delta_v / resolve_resistance(component)


def diode_current(component: ComponentData, delta_v: float) -> float:
    if delta_v > DIODE_FORWARD_VOLTAGE:
        return (delta_v - DIODE_FORWARD_VOLTAGE) / DIODE_SERIES_RESISTANCE
    return 0.0


def source_current(component: ComponentData, delta_v: float) -> float:
    # Nominal value, not a load computation
    return SOURCE_PLACEHOLDER_CURRENT


CONSTITUTIVE_RULES: dict[str, Callable[[ComponentData, float], float]] = {
    "resistor": resistor_current,
    **{kind: diode_current for kind in DIODE_TYPES},
    **{kind: source_current for kind in VOLTAGE_SOURCE_TYPES},
}


def component_current(component: ComponentData, assignment: NodeAssignment) -> Optional[float]:
    """
    Compute the current through one component.

    Returns None when the component has no rule or is not a resolvable
    two-terminal part.
    """
    rule = CONSTITUTIVE_RULES.get(component.component_type)
    if rule is None:
        return None
    nodes = _terminal_nodes(component, assignment)
    if nodes is None:
        return None
    node_a, node_b = nodes
    return rule(component, node_b.voltage - node_a.voltage)


def compute_component_currents(
    components: Iterable[ComponentData], assignment: NodeAssignment
) -> dict[str, float]:
    """Return currents keyed by component id, leaving out negligible ones."""
    currents: dict[str, float] = {}
    for component in components:
        current = component_current(component, assignment)
        if current is not None and abs(current) > CURRENT_EPSILON:
            currents[component.component_id] = current
    return currents


def solve_dc(
    components: list[ComponentData], assignment: NodeAssignment
) -> tuple[dict[str, float], dict[str, float]]:
    """
    Run the DC pass over resolved nodes.

    Returns:
        (node_voltages, component_currents)
    """
    apply_voltage_sources(components, assignment)
    node_voltages = {node.node_id: node.voltage for node in assignment.nodes}
    return node_voltages, compute_component_currents(components, assignment)
