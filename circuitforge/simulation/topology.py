"""
simulation/topology.py

Resolves component terminals and wires into electrical nodes.

Terminals are keyed by (component_id, terminal_id). Wires act as union
operations over those keys; the resulting equivalence classes are the
circuit's nodes.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from circuitforge.models.component import ComponentData
from circuitforge.models.node import NodeData, node_label
from circuitforge.models.wire import WireData

logger = logging.getLogger(__name__)

TerminalKey = tuple[str, str]


class TerminalGraph:
    """
    Union-find over terminal keys with union by rank and path compression.

    Keys are kept in registration order so node discovery is deterministic.
    """

    def __init__(self, keys: Iterable[TerminalKey] = ()):
        self._parent: dict[TerminalKey, TerminalKey] = {}
        self._rank: dict[TerminalKey, int] = {}
        for key in keys:
            self.add(key)

    def add(self, key: TerminalKey) -> None:
        if key not in self._parent:
            self._parent[key] = key
            self._rank[key] = 0

    def __contains__(self, key) -> bool:
        return key in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, key: TerminalKey) -> TerminalKey:
        """Return the representative of ``key``'s set, compressing the path."""
        root = key
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[key] != root:
            self._parent[key], key = root, self._parent[key]
        return root

    def union(self, a: TerminalKey, b: TerminalKey) -> bool:
        """Merge the sets holding ``a`` and ``b``. Returns False if already merged."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        return True

    def connected(self, a: TerminalKey, b: TerminalKey) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> list[list[TerminalKey]]:
        """Return the partition, ordered by each group's first registered key."""
        by_root: dict[TerminalKey, list[TerminalKey]] = {}
        for key in self._parent:
            by_root.setdefault(self.find(key), []).append(key)
        return list(by_root.values())


def build_terminal_graph(components: Iterable[ComponentData], wires: Iterable[WireData]) -> TerminalGraph:
    """
    Build the terminal partition for a circuit.

    Every terminal starts in its own set. Wires whose endpoints are not
    registered terminals are skipped.
    """
    graph = TerminalGraph()
    for component in components:
        for terminal in component.terminals:
            graph.add((component.component_id, terminal.terminal_id))

    for wire in wires:
        if wire.start not in graph or wire.end not in graph:
            logger.debug("Ignoring wire %s with unknown endpoint", wire.wire_id)
            continue
        graph.union(wire.start, wire.end)

    return graph


@dataclass
class NodeAssignment:
    """Canonical nodes of a circuit plus the chosen reference node."""

    nodes: list[NodeData] = field(default_factory=list)
    terminal_to_node: dict[TerminalKey, NodeData] = field(default_factory=dict)
    ground_node: Optional[NodeData] = None

    # True when no ground component pinned the reference and n0 was used
    ground_is_fallback: bool = False

    def node_for(self, component_id: str, terminal_id: str) -> Optional[NodeData]:
        return self.terminal_to_node.get((component_id, terminal_id))

    def is_empty(self) -> bool:
        return not self.nodes


def assign_nodes(graph: TerminalGraph, components: Iterable[ComponentData]) -> NodeAssignment:
    """
    Give each terminal group a canonical id and choose the ground node.

    Ids are ``n0``, ``n1``, ... in discovery order. The node holding the
    first ground component's terminal becomes the 0 V reference; without
    one, ``n0`` is used and ``ground_is_fallback`` is set.
    """
    assignment = NodeAssignment()
    for index, group in enumerate(graph.groups()):
        node = NodeData(node_id=node_label(index), terminals=frozenset(group))
        assignment.nodes.append(node)
        for key in group:
            assignment.terminal_to_node[key] = node

    if not assignment.nodes:
        return assignment

    for component in components:
        if component.is_ground() and component.terminals:
            terminal = component.terminals[0]
            assignment.ground_node = assignment.node_for(component.component_id, terminal.terminal_id)
            break

    if assignment.ground_node is None:
        assignment.ground_node = assignment.nodes[0]
        assignment.ground_is_fallback = True
        logger.debug("No ground component, using %s as reference", assignment.ground_node.node_id)

    assignment.ground_node.set_as_ground()
    return assignment
