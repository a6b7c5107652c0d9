"""
CircuitSnapshot - Immutable view of a circuit's components and wires.

This module contains no GUI dependencies. Every editing operation returns
a new snapshot, which is what makes whole-snapshot undo/redo cheap and
lets the simulation engine run on a snapshot without copying it.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .component import ComponentData
from .wire import WireData


@dataclass(frozen=True)
class CircuitSnapshot:
    """
    Immutable store holding all circuit data.

    Components and wires keep insertion order, which determines node
    discovery order in the simulation engine.
    """

    components: tuple[ComponentData, ...] = ()
    wires: tuple[WireData, ...] = ()

    # --- Queries ---

    def get_component(self, component_id: str) -> Optional[ComponentData]:
        for component in self.components:
            if component.component_id == component_id:
                return component
        return None

    def get_wire(self, wire_id: str) -> Optional[WireData]:
        for wire in self.wires:
            if wire.wire_id == wire_id:
                return wire
        return None

    def component_ids(self) -> list[str]:
        return [c.component_id for c in self.components]

    def wires_for_component(self, component_id: str) -> list[WireData]:
        return [w for w in self.wires if w.connects_component(component_id)]

    def is_empty(self) -> bool:
        return not self.components and not self.wires

    # --- Component operations ---

    def with_component(self, component: ComponentData) -> "CircuitSnapshot":
        """Return a snapshot with the component appended."""
        return replace(self, components=self.components + (component,))

    def with_updated_component(self, component_id: str, **changes) -> "CircuitSnapshot":
        """Return a snapshot with one component's fields replaced.

        Unknown ids leave the snapshot unchanged.
        """
        components = tuple(
            replace(c, **changes) if c.component_id == component_id else c for c in self.components
        )
        return replace(self, components=components)

    def without_component(self, component_id: str) -> "CircuitSnapshot":
        """Return a snapshot without the component and every wire attached to it."""
        return CircuitSnapshot(
            components=tuple(c for c in self.components if c.component_id != component_id),
            wires=tuple(w for w in self.wires if not w.connects_component(component_id)),
        )

    # --- Wire operations ---

    def with_wire(self, wire: WireData) -> "CircuitSnapshot":
        return replace(self, wires=self.wires + (wire,))

    def without_wire(self, wire_id: str) -> "CircuitSnapshot":
        return replace(self, wires=tuple(w for w in self.wires if w.wire_id != wire_id))

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to the JSON interchange format."""
        return {
            "components": [c.to_dict() for c in self.components],
            "wires": [w.to_dict() for w in self.wires],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitSnapshot":
        """Deserialize circuit from the JSON interchange format."""
        return cls(
            components=tuple(ComponentData.from_dict(c) for c in data.get("components", [])),
            wires=tuple(WireData.from_dict(w) for w in data.get("wires", [])),
        )

    def __repr__(self) -> str:
        return f"CircuitSnapshot(components={len(self.components)}, wires={len(self.wires)})"
