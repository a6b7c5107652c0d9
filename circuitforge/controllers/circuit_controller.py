"""
CircuitController - Owns the editor state and its command-style mutators.

This module contains no GUI dependencies. Every mutator replaces the
immutable EditorState with a new one and notifies views through an
observer pattern. Edits that change the circuit are recorded in the
UndoManager as whole snapshots.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.models.component import ComponentData, create_component
from circuitforge.models.wire import WireData

from .undo_manager import DEFAULT_MAX_DEPTH, UndoManager

logger = logging.getLogger(__name__)

TOOLS = ("select", "wire", "pan")
MIN_ZOOM = 0.25
MAX_ZOOM = 3.0


@dataclass(frozen=True)
class EditorState:
    """Everything the editor shows, as one immutable value."""

    circuit: CircuitSnapshot = field(default_factory=CircuitSnapshot)
    selected_component_id: Optional[str] = None
    selected_wire_id: Optional[str] = None
    tool: str = "select"
    wire_start: Optional[tuple[str, str]] = None
    zoom: float = 1.0
    pan_offset: tuple[float, float] = (0.0, 0.0)
    grid_enabled: bool = True
    simulation_result: Any = None


class CircuitController:
    """
    Controller for circuit editing operations.

    Observer events:
        component_added (ComponentData) - A new component was added
        component_updated (ComponentData) - A component's fields changed
        component_removed (str) - A component was removed (by ID)
        wire_added (WireData) - A new wire was added
        wire_removed (str) - A wire was removed (by ID)
        selection_changed (EditorState) - Selected component or wire changed
        view_changed (EditorState) - Tool, zoom, pan or grid changed
        circuit_cleared (None) - The entire circuit was cleared
        model_loaded (CircuitSnapshot) - A circuit was imported or loaded
        history_changed (CircuitSnapshot) - Undo or redo restored a snapshot
        simulation_started (None) - Simulation began
        simulation_completed (SimulationResult) - Simulation finished
    """

    def __init__(self, circuit: Optional[CircuitSnapshot] = None, max_history: int = DEFAULT_MAX_DEPTH):
        self.state = EditorState(circuit=circuit or CircuitSnapshot())
        self.history = UndoManager(max_history)
        self.history.push(self.state.circuit)
        self._observers: list[Callable[[str, Any], None]] = []
        self._counters: dict[str, int] = {}
        self._wire_counter = 0

    @property
    def circuit(self) -> CircuitSnapshot:
        return self.state.circuit

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for state change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a state change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    def _set_state(self, **changes) -> EditorState:
        self.state = replace(self.state, **changes)
        return self.state

    def _commit(self, circuit: CircuitSnapshot, **changes) -> CircuitSnapshot:
        """Install a new circuit snapshot and record it in history."""
        self._set_state(circuit=circuit, **changes)
        self.history.push(circuit)
        return circuit

    # --- Id generation ---

    def _next_component_id(self, component_type: str) -> str:
        existing = set(self.circuit.component_ids())
        count = self._counters.get(component_type, 0)
        while True:
            count += 1
            candidate = f"{component_type}-{count}"
            if candidate not in existing:
                break
        self._counters[component_type] = count
        return candidate

    def _next_wire_id(self) -> str:
        existing = {w.wire_id for w in self.circuit.wires}
        while True:
            self._wire_counter += 1
            candidate = f"wire-{self._wire_counter}"
            if candidate not in existing:
                return candidate

    # --- Component operations ---

    def add_component(
        self,
        component_type: str,
        position: tuple[float, float] = (0.0, 0.0),
        value: Optional[str] = None,
        label: str = "",
    ) -> ComponentData:
        """
        Create and add a new component to the circuit.

        Generates a unique ID per kind (resistor-1, resistor-2, battery-1, ...).

        Returns:
            The newly created ComponentData.

        Raises:
            ValueError: If component_type is not a known kind.
        """
        component = create_component(
            component_type,
            self._next_component_id(component_type),
            position=position,
            value=value,
            label=label,
        )
        self.insert_component(component)
        return component

    def insert_component(self, component: ComponentData) -> CircuitSnapshot:
        """Add an already-built component (e.g. pasted or from a template)."""
        snapshot = self._commit(self.circuit.with_component(component))
        self._notify("component_added", component)
        return snapshot

    def update_component(self, component_id: str, **changes) -> CircuitSnapshot:
        """
        Replace fields of a component.

        ``properties`` entries are merged into the existing property bag
        rather than replacing it. Unknown ids are ignored.
        """
        component = self.circuit.get_component(component_id)
        if component is None:
            return self.circuit
        if "properties" in changes:
            changes["properties"] = {**component.properties, **changes["properties"]}
        snapshot = self._commit(self.circuit.with_updated_component(component_id, **changes))
        self._notify("component_updated", snapshot.get_component(component_id))
        return snapshot

    def update_component_value(self, component_id: str, value: str) -> CircuitSnapshot:
        return self.update_component(component_id, properties={"value": value})

    def delete_component(self, component_id: str) -> CircuitSnapshot:
        """Remove a component and all connected wires."""
        if self.circuit.get_component(component_id) is None:
            return self.circuit
        removed_wires = [w.wire_id for w in self.circuit.wires_for_component(component_id)]
        selected = self.state.selected_component_id
        snapshot = self._commit(
            self.circuit.without_component(component_id),
            selected_component_id=None if selected == component_id else selected,
        )
        for wire_id in removed_wires:
            self._notify("wire_removed", wire_id)
        self._notify("component_removed", component_id)
        return snapshot

    def select_component(self, component_id: Optional[str]) -> EditorState:
        state = self._set_state(selected_component_id=component_id, selected_wire_id=None)
        self._notify("selection_changed", state)
        return state

    # --- Wire operations ---

    def add_wire(
        self,
        start: tuple[str, str],
        end: tuple[str, str],
        points: tuple[tuple[float, float], ...] = (),
        wire_id: Optional[str] = None,
    ) -> WireData:
        """
        Connect two terminals.

        Endpoints are (component_id, terminal_id) pairs. They are not
        checked here; the simulation engine ignores dangling wires.
        """
        wire = WireData(
            wire_id=wire_id or self._next_wire_id(),
            start=tuple(start),
            end=tuple(end),
            points=tuple(points),
        )
        self._commit(self.circuit.with_wire(wire), wire_start=None)
        self._notify("wire_added", wire)
        return wire

    def delete_wire(self, wire_id: str) -> CircuitSnapshot:
        if self.circuit.get_wire(wire_id) is None:
            return self.circuit
        selected = self.state.selected_wire_id
        snapshot = self._commit(
            self.circuit.without_wire(wire_id),
            selected_wire_id=None if selected == wire_id else selected,
        )
        self._notify("wire_removed", wire_id)
        return snapshot

    def select_wire(self, wire_id: Optional[str]) -> EditorState:
        state = self._set_state(selected_wire_id=wire_id, selected_component_id=None)
        self._notify("selection_changed", state)
        return state

    # --- View and tool state (not recorded in history) ---

    def set_tool(self, tool: str) -> EditorState:
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool '{tool}'. Valid tools: {', '.join(TOOLS)}")
        state = self._set_state(tool=tool, wire_start=None)
        self._notify("view_changed", state)
        return state

    def set_wire_start(self, start: Optional[tuple[str, str]]) -> EditorState:
        return self._set_state(wire_start=tuple(start) if start else None)

    def set_zoom(self, zoom: float) -> EditorState:
        state = self._set_state(zoom=max(MIN_ZOOM, min(MAX_ZOOM, zoom)))
        self._notify("view_changed", state)
        return state

    def set_pan_offset(self, offset: tuple[float, float]) -> EditorState:
        state = self._set_state(pan_offset=tuple(offset))
        self._notify("view_changed", state)
        return state

    def toggle_grid(self) -> EditorState:
        state = self._set_state(grid_enabled=not self.state.grid_enabled)
        self._notify("view_changed", state)
        return state

    def set_simulation_result(self, result) -> EditorState:
        return self._set_state(simulation_result=result)

    # --- Circuit operations ---

    def clear_circuit(self) -> CircuitSnapshot:
        """Remove everything, including selection and the last result."""
        snapshot = self._commit(
            CircuitSnapshot(),
            selected_component_id=None,
            selected_wire_id=None,
            simulation_result=None,
        )
        self._notify("circuit_cleared", None)
        return snapshot

    def import_circuit(self, circuit: CircuitSnapshot) -> CircuitSnapshot:
        """Replace the circuit with an imported one. Undoable."""
        snapshot = self._commit(circuit, selected_component_id=None, selected_wire_id=None)
        self._notify("model_loaded", snapshot)
        return snapshot

    def load_project(
        self,
        circuit: CircuitSnapshot,
        zoom: float = 1.0,
        pan_offset: tuple[float, float] = (0.0, 0.0),
    ) -> CircuitSnapshot:
        """Open a saved project. Starts a fresh history rooted at the loaded circuit."""
        self._set_state(
            circuit=circuit,
            selected_component_id=None,
            selected_wire_id=None,
            zoom=max(MIN_ZOOM, min(MAX_ZOOM, zoom)),
            pan_offset=tuple(pan_offset),
            simulation_result=None,
        )
        self.history.clear()
        self.history.push(circuit)
        self._notify("model_loaded", circuit)
        return circuit

    # --- History ---

    def undo(self) -> bool:
        """
        Restore the previous snapshot.

        Returns:
            True if an edit was undone, False if there was nothing to undo
        """
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    def redo(self) -> bool:
        """
        Restore the next snapshot.

        Returns:
            True if an edit was redone, False if there was nothing to redo
        """
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    def _restore(self, snapshot: CircuitSnapshot) -> None:
        selected_component = self.state.selected_component_id
        selected_wire = self.state.selected_wire_id
        self._set_state(
            circuit=snapshot,
            selected_component_id=selected_component if snapshot.get_component(selected_component or "") else None,
            selected_wire_id=selected_wire if snapshot.get_wire(selected_wire or "") else None,
        )
        self._notify("history_changed", snapshot)
