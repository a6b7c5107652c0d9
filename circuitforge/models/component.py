"""
ComponentData - Pure Python data model for circuit components.

This module contains no GUI dependencies. Components are immutable
snapshots: editing a component means building a new one with
``dataclasses.replace`` (see ``CircuitController.update_component``).

Component kinds use lowercase tags as canonical identifiers:
'resistor', 'capacitor', 'diode', 'led', 'battery', 'ac-source', 'ground', ...
"""

from dataclasses import dataclass, field
from typing import Optional

# Component kind definitions (canonical tags)
COMPONENT_TYPES = [
    "resistor",
    "capacitor",
    "inductor",
    "diode",
    "led",
    "battery",
    "ac-source",
    "transistor-npn",
    "transistor-pnp",
    "mosfet",
    "switch-spst",
    "switch-spdt",
    "ic",
    "connector",
    "ground",
    "label",
    "text",
]

# Kinds the DC solver treats as independent voltage sources
VOLTAGE_SOURCE_TYPES = ("battery", "ac-source")

# Kinds the DC solver treats with the ideal threshold diode model
DIODE_TYPES = ("diode", "led")

GROUND_TYPE = "ground"

_TWO_TERMINAL = [("t1", "T1", -40, 0), ("t2", "T2", 40, 0)]
_TRANSISTOR = [
    ("base", "Base", -40, 0),
    ("collector", "Collector", 15, -40),
    ("emitter", "Emitter", 15, 40),
]

# Terminal layout per kind: (id suffix, name, local x, local y).
# Kinds missing from this table (label, text) have no terminals.
TERMINAL_LAYOUTS = {
    "resistor": _TWO_TERMINAL,
    "capacitor": _TWO_TERMINAL,
    "inductor": _TWO_TERMINAL,
    "diode": _TWO_TERMINAL,
    "led": _TWO_TERMINAL,
    "battery": _TWO_TERMINAL,
    "ac-source": _TWO_TERMINAL,
    "switch-spst": _TWO_TERMINAL,
    "transistor-npn": _TRANSISTOR,
    "transistor-pnp": _TRANSISTOR,
    "mosfet": _TRANSISTOR,
    "switch-spdt": [
        ("common", "Common", -40, 0),
        ("no", "NO", 40, -15),
        ("nc", "NC", 40, 15),
    ],
    "ic": [
        ("pin1", "Pin1", -30, -20),
        ("pin2", "Pin2", -30, 0),
        ("pin3", "Pin3", -30, 20),
        ("pin4", "Pin4", 30, -20),
        ("pin5", "Pin5", 30, 0),
        ("pin6", "Pin6", 30, 20),
    ],
    "connector": [("t1", "T1", 0, 0)],
    "ground": [("t1", "T1", 0, -20)],
}

# Default magnitude strings per kind
DEFAULT_VALUES = {
    "resistor": "1kΩ",
    "capacitor": "10µF",
    "inductor": "1mH",
    "battery": "9V",
    "ac-source": "5V",
}


@dataclass(frozen=True)
class TerminalData:
    """A named connection point belonging to exactly one component.

    The (x, y) offset is relative to the owning component and only
    matters for rendering.
    """

    terminal_id: str
    component_id: str
    name: str = ""
    x: float = 0.0
    y: float = 0.0

    @property
    def key(self) -> tuple[str, str]:
        return (self.component_id, self.terminal_id)

    def to_dict(self) -> dict:
        return {
            "id": self.terminal_id,
            "x": self.x,
            "y": self.y,
            "componentId": self.component_id,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: dict, component_id: Optional[str] = None) -> "TerminalData":
        return cls(
            terminal_id=data["id"],
            component_id=data.get("componentId", component_id or ""),
            name=data.get("name", ""),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
        )


@dataclass(frozen=True)
class ComponentData:
    """
    Pure Python data class representing a circuit component.

    Instances are treated as immutable snapshots owned by the caller.
    ``properties`` holds the magnitude string under ``"value"`` and the
    display label under ``"label"``; any other keys are carried through
    serialization untouched.
    """

    component_id: str
    component_type: str
    properties: dict = field(default_factory=dict)
    terminals: tuple[TerminalData, ...] = ()
    position: tuple[float, float] = (0.0, 0.0)
    rotation: int = 0

    @property
    def value(self) -> str:
        return self.properties.get("value") or ""

    @property
    def label(self) -> str:
        return self.properties.get("label") or ""

    def get_terminal_count(self) -> int:
        return len(self.terminals)

    def is_voltage_source(self) -> bool:
        return self.component_type in VOLTAGE_SOURCE_TYPES

    def is_ground(self) -> bool:
        return self.component_type == GROUND_TYPE

    def to_dict(self) -> dict:
        """Serialize component to the JSON interchange format."""
        return {
            "id": self.component_id,
            "type": self.component_type,
            "x": self.position[0],
            "y": self.position[1],
            "rotation": self.rotation,
            "properties": dict(self.properties),
            "terminals": [t.to_dict() for t in self.terminals],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """Deserialize component from the JSON interchange format."""
        component_id = data["id"]
        return cls(
            component_id=component_id,
            component_type=data["type"],
            properties=dict(data.get("properties") or {}),
            terminals=tuple(
                TerminalData.from_dict(t, component_id) for t in data.get("terminals", [])
            ),
            position=(data.get("x", 0.0), data.get("y", 0.0)),
            rotation=data.get("rotation", 0),
        )

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, type={self.component_type!r}, "
            f"value={self.value!r}, terminals={len(self.terminals)})"
        )


def build_terminals(component_type: str, component_id: str) -> tuple[TerminalData, ...]:
    """Create the standard terminals for a component kind."""
    layout = TERMINAL_LAYOUTS.get(component_type, [])
    return tuple(
        TerminalData(
            terminal_id=f"{component_id}-{suffix}",
            component_id=component_id,
            name=name,
            x=float(x),
            y=float(y),
        )
        for suffix, name, x, y in layout
    )


def create_component(
    component_type: str,
    component_id: str,
    position: tuple[float, float] = (0.0, 0.0),
    value: Optional[str] = None,
    label: str = "",
    rotation: int = 0,
) -> ComponentData:
    """
    Build a component of the given kind with its standard terminals.

    Args:
        component_type: One of COMPONENT_TYPES.
        component_id: Unique id; terminal ids are derived from it.
        position: (x, y) placement in scene coordinates.
        value: Magnitude string. Defaults to DEFAULT_VALUES for the kind.
        label: Display label.
        rotation: Rotation in degrees.

    Raises:
        ValueError: If component_type is not a known kind.
    """
    if component_type not in COMPONENT_TYPES:
        raise ValueError(
            f"Unknown component type '{component_type}'. Valid types: {', '.join(COMPONENT_TYPES)}"
        )
    if value is None:
        value = DEFAULT_VALUES.get(component_type, "")
    return ComponentData(
        component_id=component_id,
        component_type=component_type,
        properties={"label": label, "value": value},
        terminals=build_terminals(component_type, component_id),
        position=position,
        rotation=rotation,
    )
