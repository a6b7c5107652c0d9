"""
NodeData - Pure Python data model for electrical nodes.

An electrical node is a set of component terminals that are electrically
connected (share the same voltage). Nodes are built fresh by the
simulation engine on every run and never outlive the result.
"""

from dataclasses import dataclass


def node_label(index: int) -> str:
    """Return the canonical id for the node discovered at ``index``."""
    return f"n{index}"


@dataclass
class NodeData:
    """
    Pure Python data class representing an electrical node.

    ``terminals`` holds (component_id, terminal_id) keys. ``voltage`` is
    filled in by the DC solver; the ground node always stays at 0.
    """

    node_id: str
    terminals: frozenset[tuple[str, str]] = frozenset()
    voltage: float = 0.0
    is_ground: bool = False

    def set_as_ground(self) -> None:
        """Mark this node as the 0 V reference."""
        self.is_ground = True
        self.voltage = 0.0

    def __repr__(self) -> str:
        suffix = ", ground" if self.is_ground else ""
        return f"NodeData({self.node_id}, terminals={len(self.terminals)}, V={self.voltage}{suffix})"
