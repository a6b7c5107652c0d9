"""Step-by-step explanations of a simulation result for learners.

Pure Python module with no GUI dependencies. Steps are plain data; a
view decides how to highlight the listed components and wires.
"""

from dataclasses import dataclass, field
from typing import Iterable

from circuitforge.models.component import DIODE_TYPES, VOLTAGE_SOURCE_TYPES, ComponentData
from circuitforge.models.wire import WireData
from circuitforge.simulation.dc_solver import resolve_resistance
from circuitforge.simulation.result import SimulationResult

# Currents at or below this magnitude count as "not conducting" in prose
CONDUCTING_THRESHOLD = 0.001

TRANSISTOR_TYPES = ("transistor-npn", "transistor-pnp")


@dataclass
class SimulationStep:
    """One step of a guided walkthrough."""

    step_id: int
    title: str
    description: str
    highlighted_components: list[str] = field(default_factory=list)
    highlighted_wires: list[str] = field(default_factory=list)
    # (wire_id, direction) pairs; direction is "forward" or "reverse"
    current_flow: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.step_id,
            "title": self.title,
            "description": self.description,
            "highlighted_components": list(self.highlighted_components),
            "highlighted_wires": list(self.highlighted_wires),
            "current_flow": [{"wire_id": w, "direction": d} for w, d in self.current_flow],
        }


def _wires_with_current(wires: list[WireData], result: SimulationResult) -> list[WireData]:
    return [w for w in wires if result.component_currents.get(w.wire_id)]


def _attached_wires(wires: list[WireData], component_id: str) -> list[str]:
    return [w.wire_id for w in wires if w.connects_component(component_id)]


def generate_simulation_steps(
    components: Iterable[ComponentData],
    wires: Iterable[WireData],
    result: SimulationResult,
) -> list[SimulationStep]:
    """Build the ordered walkthrough for a simulated circuit.

    Args:
        components: Components of the simulated circuit.
        wires: Wires of the simulated circuit.
        result: The result returned by ``simulate`` for that circuit.

    Returns:
        Steps in reading order. The first step is always the overview and
        the last is always the steady-state summary.
    """
    components = list(components)
    wires = list(wires)
    steps: list[SimulationStep] = []

    def add(title, description, components_=(), wires_=(), flow=()):
        steps.append(
            SimulationStep(
                step_id=len(steps),
                title=title,
                description=description,
                highlighted_components=list(components_),
                highlighted_wires=list(wires_),
                current_flow=list(flow),
            )
        )

    add(
        "Circuit Overview",
        f"This circuit contains {len(components)} components and {len(wires)} connections. "
        "Let's analyze how current flows through this circuit.",
    )

    sources = [c for c in components if c.component_type in VOLTAGE_SOURCE_TYPES]
    if sources:
        first = sources[0]
        add(
            "Power Source Initialization",
            f"The circuit has {len(sources)} power source(s). "
            f"{first.value or 'Unknown voltage'} is supplied by {first.label or 'the battery'}.",
            components_=[s.component_id for s in sources],
        )

    grounds = [c for c in components if c.is_ground()]
    if grounds:
        add(
            "Ground Reference",
            "Ground symbols establish the 0V reference point for the circuit. "
            "All voltages are measured relative to ground.",
            components_=[g.component_id for g in grounds],
        )

    live_wires = _wires_with_current(wires, result)
    flow = [(w.wire_id, "forward") for w in live_wires]
    if live_wires:
        add(
            "Current Path Established",
            f"Current flows through {len(live_wires)} wire(s) in the circuit. "
            "The highlighted wires show the direction of conventional current.",
            wires_=[w.wire_id for w in live_wires],
            flow=flow,
        )

    for resistor in (c for c in components if c.component_type == "resistor"):
        current = result.component_currents.get(resistor.component_id)
        if not current:
            continue
        drop = current * resolve_resistance(resistor)
        add(
            f"Resistor Analysis: {resistor.label or 'R'}",
            f"This resistor ({resistor.value or 'unknown'}) carries {abs(current):.3f}A of current. "
            f"By Ohm's Law (V=IR), the voltage drop across it is {drop:.3f}V. "
            "Resistors limit current flow and dissipate energy as heat.",
            components_=[resistor.component_id],
            wires_=_attached_wires(wires, resistor.component_id),
        )

    for diode in (c for c in components if c.component_type in DIODE_TYPES):
        current = result.component_currents.get(diode.component_id, 0.0)
        kind = "LED" if diode.component_type == "led" else "Diode"
        noun = "LED" if kind == "LED" else "diode"
        title = f"{kind} Analysis: {diode.label or 'D'}"
        if abs(current) > CONDUCTING_THRESHOLD:
            behaviour = (
                "The LED emits light as current flows through it."
                if kind == "LED"
                else "The diode allows current to flow in one direction only."
            )
            add(
                title,
                f"This {noun} is forward-biased with "
                f"{abs(current):.3f}A flowing through it. {behaviour} "
                "Forward voltage drop is approximately 0.7V for regular diodes and 2-3V for LEDs.",
                components_=[diode.component_id],
                wires_=_attached_wires(wires, diode.component_id),
            )
        else:
            add(
                title,
                f"This {noun} is reverse-biased or not conducting. "
                "No current flows through it, and it acts as an open circuit.",
                components_=[diode.component_id],
            )

    for cap in (c for c in components if c.component_type == "capacitor"):
        add(
            f"Capacitor: {cap.label or 'C'}",
            f"This capacitor ({cap.value or 'unknown'}) stores electrical energy in an electric field. "
            "In DC steady-state analysis, it acts as an open circuit. In AC circuits, it would "
            "allow alternating current to pass based on its reactance.",
            components_=[cap.component_id],
        )

    for transistor in (c for c in components if c.component_type in TRANSISTOR_TYPES):
        add(
            f"Transistor: {transistor.label or 'Q'}",
            f"This {transistor.component_type.upper()} transistor acts as an electronic switch or "
            "amplifier. When the base current is sufficient, it allows current to flow from "
            "collector to emitter. The transistor can amplify small signals or switch larger loads.",
            components_=[transistor.component_id],
        )

    if result.node_voltages:
        ranked = sorted(result.node_voltages.items(), key=lambda item: item[1], reverse=True)
        (high_node, high_v), (low_node, low_v) = ranked[0], ranked[-1]
        add(
            "Node Voltage Analysis",
            f"The circuit has {len(ranked)} unique voltage nodes. The highest voltage is "
            f"{high_v:.2f}V at node {high_node}, and the lowest is {low_v:.2f}V at node {low_node}.",
        )

    status = (
        "However, there are errors that need attention."
        if result.errors
        else "The circuit is operating normally."
    )
    add(
        "Steady-State Condition",
        "The circuit has reached steady-state where all voltages and currents are constant. "
        "Energy is being continuously supplied by the power source and dissipated by "
        f"resistive components. {status}",
        components_=[c.component_id for c in components],
        wires_=[w.wire_id for w in live_wires],
        flow=flow,
    )
    return steps


def generate_current_flow_explanation(
    components: Iterable[ComponentData],
    wires: Iterable[WireData],
    result: SimulationResult,
) -> str:
    """Describe the current path and each conducting component as prose."""
    components = list(components)
    wires = list(wires)
    by_id = {c.component_id: c for c in components}

    def name_of(component_id: str) -> str:
        component = by_id.get(component_id)
        if component is None:
            return "unknown"
        return component.label or component.component_type

    lines = ["Current Flow Analysis:", ""]

    source = next((c for c in components if c.component_type in VOLTAGE_SOURCE_TYPES), None)
    if source is not None:
        kind = "DC battery" if source.component_type == "battery" else "AC source"
        lines.append(f"The circuit is powered by a {kind} providing {source.value or 'unknown voltage'}.")
        lines.append("")

    live_wires = _wires_with_current(wires, result)
    if live_wires:
        lines.append("Current Path:")
        for index, wire in enumerate(live_wires, start=1):
            current = abs(result.component_currents[wire.wire_id])
            lines.append(
                f"{index}. From {name_of(wire.start_component_id)} "
                f"to {name_of(wire.end_component_id)} ({current:.3f}A)"
            )
        lines.append("")

    lines.append("Component Behavior:")
    for component in components:
        current = result.component_currents.get(component.component_id, 0.0)
        if abs(current) <= CONDUCTING_THRESHOLD:
            continue
        label = component.label or component.component_type
        kind = component.component_type
        if kind == "resistor":
            drop = current * resolve_resistance(component)
            lines.append(
                f"• {label} ({component.value}): {drop:.3f}V drop, {abs(current):.3f}A current"
            )
        elif kind == "led":
            lines.append(f"• {label}: Forward-biased, emitting light with {abs(current):.3f}A")
        elif kind == "diode":
            lines.append(f"• {label}: Conducting {abs(current):.3f}A in forward direction")
        elif kind not in ("ground", "connector"):
            lines.append(f"• {label}: Active with {abs(current):.3f}A")

    return "\n".join(lines) + "\n"
