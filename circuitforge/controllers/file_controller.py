"""
FileController - Handles circuit file I/O.

Circuits are saved in the JSON interchange format. File dialog
interaction is the responsibility of the view layer.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from circuitforge.models.circuit import CircuitSnapshot

from .circuit_controller import CircuitController

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_coordinates(data: dict, keys, owner: str) -> None:
    """Optional coordinate fields must be numbers when present."""
    for key in keys:
        if key in data and not _is_number(data[key]):
            raise ValueError(f"{owner} has a non-numeric '{key}'.")


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    Wires that point at unknown terminals are accepted; the simulation
    engine skips them.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        _check_coordinates(comp, ("x", "y", "rotation"), f"Component '{comp['id']}'")
        if not isinstance(comp.get("terminals", []), list):
            raise ValueError(f"Component '{comp['id']}' has an invalid 'terminals' list.")
        for j, terminal in enumerate(comp.get("terminals", [])):
            if not isinstance(terminal, dict) or "id" not in terminal:
                raise ValueError(f"Terminal #{j + 1} of component '{comp['id']}' is missing its 'id'.")
            _check_coordinates(terminal, ("x", "y"), f"Terminal '{terminal['id']}'")
        if not isinstance(comp.get("properties", {}), dict):
            raise ValueError(f"Component '{comp['id']}' has invalid 'properties'.")

    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        if "id" not in wire:
            raise ValueError(f"Wire #{i + 1} is missing required field 'id'.")
        for end in ("from", "to"):
            endpoint = wire.get(end)
            if not isinstance(endpoint, dict) or "componentId" not in endpoint or "terminalId" not in endpoint:
                raise ValueError(f"Wire '{wire['id']}' has an invalid '{end}' endpoint.")
        points = wire.get("points", [])
        if not isinstance(points, list):
            raise ValueError(f"Wire '{wire['id']}' has an invalid 'points' list.")
        for j, point in enumerate(points):
            if not isinstance(point, dict) or not all(_is_number(point.get(k)) for k in ("x", "y")):
                raise ValueError(f"Point #{j + 1} of wire '{wire['id']}' needs numeric 'x' and 'y'.")


def read_circuit_file(filepath) -> CircuitSnapshot:
    """
    Read and validate a circuit JSON file.

    Raises:
        json.JSONDecodeError: If file is not valid JSON.
        ValueError: If file structure is invalid.
        OSError: If the file cannot be read.
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_circuit_data(data)
    return CircuitSnapshot.from_dict(data)


def write_circuit_file(filepath, circuit: CircuitSnapshot) -> None:
    """Write a circuit as JSON. Non-ASCII symbols (Ω, µ) are kept as-is."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(circuit.to_dict(), f, indent=2, ensure_ascii=False)


class FileController:
    """
    Manages circuit file I/O.

    Tracks the current file path for quick-save.
    """

    def __init__(self, circuit_ctrl: Optional[CircuitController] = None):
        self.circuit_ctrl = circuit_ctrl or CircuitController()
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.circuit_ctrl.clear_circuit()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        write_circuit_file(filepath, self.circuit_ctrl.circuit)
        self.current_file = filepath
        logger.info("Saved circuit to %s", filepath)

    def load_circuit(self, filepath) -> CircuitSnapshot:
        """
        Load circuit from JSON file into the editor. The load is undoable.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        circuit = read_circuit_file(filepath)
        self.circuit_ctrl.import_circuit(circuit)
        self.current_file = filepath
        logger.info("Loaded circuit from %s", filepath)
        return circuit
