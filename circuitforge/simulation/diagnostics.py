"""
simulation/diagnostics.py

Errors and warnings derived from a resolved circuit.

Diagnostics are data, never exceptions: errors mean the numbers cannot be
interpreted, warnings sit next to an otherwise usable result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import HIGH_CURRENT_THRESHOLD, HIGH_VOLTAGE_THRESHOLD


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(Enum):
    NO_SOURCE = "no_source"
    NO_TOPOLOGY = "no_topology"
    MISSING_GROUND = "missing_ground"
    HIGH_VOLTAGE = "high_voltage"
    HIGH_CURRENT = "high_current"


SEVERITY_BY_CODE = {
    DiagnosticCode.NO_SOURCE: Severity.ERROR,
    DiagnosticCode.NO_TOPOLOGY: Severity.ERROR,
    DiagnosticCode.MISSING_GROUND: Severity.WARNING,
    DiagnosticCode.HIGH_VOLTAGE: Severity.WARNING,
    DiagnosticCode.HIGH_CURRENT: Severity.WARNING,
}


@dataclass(frozen=True)
class Diagnostic:
    """One finding about a circuit.

    ``subject`` names the node, component or wire concerned, if any.
    """

    code: DiagnosticCode
    message: str
    subject: Optional[str] = None

    @property
    def severity(self) -> Severity:
        return SEVERITY_BY_CODE[self.code]

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict:
        data = {
            "code": self.code.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.subject is not None:
            data["subject"] = self.subject
        return data


def no_source() -> Diagnostic:
    return Diagnostic(DiagnosticCode.NO_SOURCE, "No voltage source found in circuit")


def no_topology() -> Diagnostic:
    return Diagnostic(DiagnosticCode.NO_TOPOLOGY, "No valid circuit connections found")


def missing_ground() -> Diagnostic:
    return Diagnostic(
        DiagnosticCode.MISSING_GROUND,
        "No ground reference found - assuming arbitrary reference",
    )


def check_node_voltages(node_voltages: dict[str, float]) -> list[Diagnostic]:
    """Flag nodes whose voltage magnitude exceeds HIGH_VOLTAGE_THRESHOLD."""
    return [
        Diagnostic(
            DiagnosticCode.HIGH_VOLTAGE,
            f"Node {node_id} has high voltage: {voltage:.2f}V",
            subject=node_id,
        )
        for node_id, voltage in node_voltages.items()
        if abs(voltage) > HIGH_VOLTAGE_THRESHOLD
    ]


def check_currents(currents: dict[str, float]) -> list[Diagnostic]:
    """Flag components and wires whose current magnitude exceeds HIGH_CURRENT_THRESHOLD."""
    return [
        Diagnostic(
            DiagnosticCode.HIGH_CURRENT,
            f"Component {item_id} has high current: {current:.2f}A",
            subject=item_id,
        )
        for item_id, current in currents.items()
        if abs(current) > HIGH_CURRENT_THRESHOLD
    ]


def split_messages(diagnostics: list[Diagnostic]) -> tuple[list[str], list[str]]:
    """
    Render diagnostics into message lists.

    Returns:
        (errors, warnings) where each entry is the diagnostic's message.
    """
    errors = [d.message for d in diagnostics if d.is_error]
    warnings = [d.message for d in diagnostics if not d.is_error]
    return errors, warnings
