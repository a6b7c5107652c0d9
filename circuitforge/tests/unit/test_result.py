"""Tests for simulation/result.py."""

from circuitforge.simulation.diagnostics import check_currents, missing_ground, no_source
from circuitforge.simulation.result import SimulationResult


class TestSimulationResult:
    def test_defaults(self):
        result = SimulationResult()
        assert result.success
        assert result.node_voltages == {}
        assert result.component_currents == {}

    def test_from_diagnostics_splits_messages(self):
        diagnostics = [missing_ground()] + check_currents({"R1": 500.0})
        result = SimulationResult.from_diagnostics(diagnostics, node_voltages={"n0": 0.0}, ground_node="n0")
        assert result.success
        assert result.errors == []
        assert len(result.warnings) == 2
        assert result.diagnostics == diagnostics

    def test_error_means_failure(self):
        result = SimulationResult.from_diagnostics([no_source()])
        assert not result.success
        assert result.errors == ["No voltage source found in circuit"]

    def test_failure(self):
        result = SimulationResult.failure("Simulation failed: boom")
        assert not result.success
        assert result.errors == ["Simulation failed: boom"]
        assert result.diagnostics == []

    def test_to_dict(self):
        result = SimulationResult.from_diagnostics(
            [missing_ground()],
            node_voltages={"n0": 0.0, "n1": 9.0},
            component_currents={"B1": 0.1},
            ground_node="n0",
        )
        data = result.to_dict()
        assert data["success"] is True
        assert data["node_voltages"] == {"n0": 0.0, "n1": 9.0}
        assert data["component_currents"] == {"B1": 0.1}
        assert data["ground_node"] == "n0"
        assert data["diagnostics"][0]["code"] == "missing_ground"

    def test_to_dict_minimal(self):
        data = SimulationResult.failure("x").to_dict()
        assert "ground_node" not in data
        assert "diagnostics" not in data
