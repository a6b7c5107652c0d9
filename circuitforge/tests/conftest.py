"""
Shared test fixtures for the CircuitForge test suite.

All fixtures build pure-Python model objects (no GUI dependencies).
"""

import json

import pytest

from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.models.component import create_component
from circuitforge.models.wire import WireData


def make_component(component_type, component_id, value=None, position=(0.0, 0.0), label=""):
    """Helper to create a ComponentData with its standard terminals."""
    return create_component(component_type, component_id, position=position, value=value, label=label)


def make_wire(start_id, start_term, end_id, end_term, wire_id=None):
    """Helper to create a WireData between two terminals.

    Terminals are given by suffix (``"t1"``) and expanded to full ids
    (``"R1-t1"``).
    """
    return WireData(
        wire_id=wire_id or f"w-{start_id}.{start_term}-{end_id}.{end_term}",
        start=(start_id, f"{start_id}-{start_term}"),
        end=(end_id, f"{end_id}-{end_term}"),
    )


@pytest.fixture
def series_led_circuit():
    """
    B1(+) -- R1 -- LED1 -- GND1, battery negative left open

    Four nodes: n0 {B1-t1}, n1 {B1-t2, R1-t1}, n2 {R1-t2, LED1-t1},
    n3 {LED1-t2, GND1-t1} (ground).
    """
    components = [
        make_component("battery", "B1", "9V"),
        make_component("resistor", "R1", "220Ω"),
        make_component("led", "LED1", ""),
        make_component("ground", "GND1"),
    ]
    wires = [
        make_wire("B1", "t2", "R1", "t1", "w1"),
        make_wire("R1", "t2", "LED1", "t1", "w2"),
        make_wire("LED1", "t2", "GND1", "t1", "w3"),
    ]
    return components, wires


@pytest.fixture
def closed_led_loop(series_led_circuit):
    """The series LED circuit with the battery negative wired to ground."""
    components, wires = series_led_circuit
    return components, wires + [make_wire("B1", "t1", "GND1", "t1", "w4")]


@pytest.fixture
def voltage_divider():
    """
    B1 (12V) -- R1 (10k) -- R2 (10k) -- GND1, B1(-) to GND1

    Nodes: n0 {B1-t1, R2-t2, GND1-t1} (ground), n1 {B1-t2, R1-t1},
    n2 {R1-t2, R2-t1}.
    """
    components = [
        make_component("battery", "B1", "12V"),
        make_component("resistor", "R1", "10kΩ"),
        make_component("resistor", "R2", "10kΩ"),
        make_component("ground", "GND1"),
    ]
    wires = [
        make_wire("B1", "t2", "R1", "t1", "w1"),
        make_wire("R1", "t2", "R2", "t1", "w2"),
        make_wire("R2", "t2", "GND1", "t1", "w3"),
        make_wire("B1", "t1", "GND1", "t1", "w4"),
    ]
    return components, wires


@pytest.fixture
def divider_snapshot(voltage_divider):
    components, wires = voltage_divider
    return CircuitSnapshot(components=tuple(components), wires=tuple(wires))


@pytest.fixture
def divider_file(tmp_path, divider_snapshot):
    """Write the voltage divider to a circuit JSON file."""
    filepath = tmp_path / "divider.json"
    filepath.write_text(json.dumps(divider_snapshot.to_dict(), ensure_ascii=False), encoding="utf-8")
    return filepath


@pytest.fixture
def events():
    """Fixture that returns a list and a callback that appends events to it."""
    recorded = []

    def callback(event, data):
        recorded.append((event, data))

    return recorded, callback
