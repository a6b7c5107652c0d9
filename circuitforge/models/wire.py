"""
WireData - Pure Python data model for circuit wires.

This module contains no GUI dependencies. Routing points are stored as
tuples (x, y).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WireData:
    """
    Pure Python data class representing a wire between two component terminals.

    Each endpoint is a (component_id, terminal_id) pair. The wire does not
    check that its endpoints exist; the simulation engine ignores wires
    whose endpoints are unknown.
    """

    wire_id: str
    start: tuple[str, str]
    end: tuple[str, str]

    # Routing data, used only for rendering
    points: tuple[tuple[float, float], ...] = ()

    @property
    def start_component_id(self) -> str:
        return self.start[0]

    @property
    def end_component_id(self) -> str:
        return self.end[0]

    def connects_component(self, component_id: str) -> bool:
        """Check if this wire connects to the given component."""
        return self.start[0] == component_id or self.end[0] == component_id

    def to_dict(self) -> dict:
        """Serialize wire to the JSON interchange format."""
        return {
            "id": self.wire_id,
            "from": {"componentId": self.start[0], "terminalId": self.start[1]},
            "to": {"componentId": self.end[0], "terminalId": self.end[1]},
            "points": [{"x": x, "y": y} for x, y in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """Deserialize wire from the JSON interchange format."""
        return cls(
            wire_id=data["id"],
            start=(data["from"]["componentId"], data["from"]["terminalId"]),
            end=(data["to"]["componentId"], data["to"]["terminalId"]),
            points=tuple((p["x"], p["y"]) for p in data.get("points", [])),
        )

    def __repr__(self) -> str:
        return f"WireData({self.wire_id}: {self.start[0]}[{self.start[1]}] -> {self.end[0]}[{self.end[1]}])"
