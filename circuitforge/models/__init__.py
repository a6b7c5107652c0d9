"""
Pure Python data models for CircuitForge.

This package contains GUI-free data classes that represent circuit elements.
All models use only Python standard library types.
"""

from .circuit import CircuitSnapshot
from .component import (
    COMPONENT_TYPES,
    DEFAULT_VALUES,
    DIODE_TYPES,
    GROUND_TYPE,
    TERMINAL_LAYOUTS,
    VOLTAGE_SOURCE_TYPES,
    ComponentData,
    TerminalData,
    create_component,
)
from .node import NodeData
from .template import TemplateData
from .wire import WireData

__all__ = [
    "CircuitSnapshot",
    "ComponentData",
    "TerminalData",
    "create_component",
    "COMPONENT_TYPES",
    "DEFAULT_VALUES",
    "DIODE_TYPES",
    "GROUND_TYPE",
    "TERMINAL_LAYOUTS",
    "VOLTAGE_SOURCE_TYPES",
    "NodeData",
    "TemplateData",
    "WireData",
]
