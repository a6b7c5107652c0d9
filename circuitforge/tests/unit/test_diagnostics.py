"""Tests for simulation/diagnostics.py."""

from circuitforge.simulation.diagnostics import (
    DiagnosticCode,
    Severity,
    check_currents,
    check_node_voltages,
    missing_ground,
    no_source,
    no_topology,
    split_messages,
)


class TestMessages:
    def test_error_messages(self):
        assert no_source().message == "No voltage source found in circuit"
        assert no_topology().message == "No valid circuit connections found"
        assert no_source().is_error
        assert no_topology().severity is Severity.ERROR

    def test_missing_ground_is_warning(self):
        diag = missing_ground()
        assert diag.message == "No ground reference found - assuming arbitrary reference"
        assert diag.severity is Severity.WARNING
        assert not diag.is_error


class TestThresholds:
    def test_high_voltage_flagged(self):
        findings = check_node_voltages({"n0": 0.0, "n1": 1500.0, "n2": -2000.0})
        assert [d.subject for d in findings] == ["n1", "n2"]
        assert findings[0].message == "Node n1 has high voltage: 1500.00V"
        assert findings[1].message == "Node n2 has high voltage: -2000.00V"
        assert all(d.code is DiagnosticCode.HIGH_VOLTAGE for d in findings)

    def test_threshold_is_exclusive(self):
        assert check_node_voltages({"n1": 1000.0}) == []
        assert check_currents({"R1": 100.0}) == []

    def test_high_current_flagged(self):
        findings = check_currents({"R1": 0.5, "R2": -250.0})
        assert len(findings) == 1
        assert findings[0].message == "Component R2 has high current: -250.00A"
        assert findings[0].subject == "R2"


class TestSplitMessages:
    def test_split(self):
        errors, warnings = split_messages([no_source(), missing_ground()])
        assert errors == ["No voltage source found in circuit"]
        assert warnings == ["No ground reference found - assuming arbitrary reference"]

    def test_to_dict(self):
        data = check_currents({"R9": 200.0})[0].to_dict()
        assert data == {
            "code": "high_current",
            "severity": "warning",
            "message": "Component R9 has high current: 200.00A",
            "subject": "R9",
        }
