"""
CircuitForge - DC circuit topology and simulation engine.

The engine entry point is ``simulate(components, wires)``; controllers,
reports and the command-line interface are built on top of it.
"""

from .models import CircuitSnapshot, ComponentData, TerminalData, WireData, create_component
from .simulation import SimulationResult, simulate, simulate_snapshot

__version__ = "0.1.0"

__all__ = [
    "CircuitSnapshot",
    "ComponentData",
    "TerminalData",
    "WireData",
    "create_component",
    "SimulationResult",
    "simulate",
    "simulate_snapshot",
]
