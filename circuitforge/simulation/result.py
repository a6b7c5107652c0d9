"""
simulation/result.py

The value returned by every simulation run.
"""

from dataclasses import dataclass, field
from typing import Optional

from .diagnostics import Diagnostic, split_messages


@dataclass
class SimulationResult:
    """Node voltages, currents and findings of one simulation run.

    ``component_currents`` is keyed by component id and, for the
    current-flow display, by wire id as well.
    """

    node_voltages: dict[str, float] = field(default_factory=dict)
    component_currents: dict[str, float] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    ground_node: Optional[str] = None

    @classmethod
    def from_diagnostics(
        cls,
        diagnostics: list[Diagnostic],
        node_voltages: Optional[dict[str, float]] = None,
        component_currents: Optional[dict[str, float]] = None,
        ground_node: Optional[str] = None,
    ) -> "SimulationResult":
        errors, warnings = split_messages(diagnostics)
        return cls(
            node_voltages=node_voltages or {},
            component_currents=component_currents or {},
            errors=errors,
            warnings=warnings,
            diagnostics=list(diagnostics),
            ground_node=ground_node,
        )

    @classmethod
    def failure(cls, message: str) -> "SimulationResult":
        """Result for a run that could not complete at all."""
        return cls(errors=[message])

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "node_voltages": dict(self.node_voltages),
            "component_currents": dict(self.component_currents),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
        if self.ground_node is not None:
            data["ground_node"] = self.ground_node
        if self.diagnostics:
            data["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        return data
