"""
Controllers for CircuitForge.

This package contains GUI-free controller classes that own the editor
state and orchestrate simulation, file and template operations using an
observer pattern.
"""

from .circuit_controller import CircuitController, EditorState
from .file_controller import FileController, read_circuit_file, validate_circuit_data, write_circuit_file
from .simulation_controller import SimulationController
from .template_manager import TemplateManager
from .undo_manager import UndoManager

__all__ = [
    "CircuitController",
    "EditorState",
    "SimulationController",
    "FileController",
    "TemplateManager",
    "UndoManager",
    "read_circuit_file",
    "write_circuit_file",
    "validate_circuit_data",
]
