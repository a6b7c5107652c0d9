"""Tests for the command-line interface (circuitforge/cli.py)."""

import csv
import io
import json
from pathlib import Path

import pytest

from circuitforge.cli import build_parser, load_circuit, main, try_load_circuit
from circuitforge.models.circuit import CircuitSnapshot


@pytest.fixture
def circuit_file(divider_file):
    return str(divider_file)


@pytest.fixture
def null_points_circuit(tmp_path, divider_snapshot):
    """A circuit file whose first wire has ``"points": null``."""
    data = divider_snapshot.to_dict()
    data["wires"][0]["points"] = None
    filepath = tmp_path / "null_points.json"
    filepath.write_text(json.dumps(data))
    return str(filepath)


@pytest.fixture
def empty_circuit(tmp_path):
    """Create a minimal (empty) circuit file."""
    filepath = tmp_path / "empty.json"
    filepath.write_text(json.dumps({"components": [], "wires": []}))
    return str(filepath)


class TestLoadCircuit:
    def test_load_valid(self, circuit_file):
        circuit = load_circuit(circuit_file)
        assert isinstance(circuit, CircuitSnapshot)
        assert len(circuit.components) == 4
        assert len(circuit.wires) == 4

    def test_load_nonexistent(self):
        with pytest.raises(SystemExit):
            load_circuit("/nonexistent/file.json")

    def test_load_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(SystemExit):
            load_circuit(str(bad))

    def test_try_load_reports_reason(self, tmp_path):
        bad = tmp_path / "bad_struct.json"
        bad.write_text('{"foo": "bar"}')
        circuit, error = try_load_circuit(str(bad))
        assert circuit is None
        assert error.startswith("invalid circuit file:")

    def test_try_load_rejects_null_points(self, null_points_circuit):
        circuit, error = try_load_circuit(null_points_circuit)
        assert circuit is None
        assert "invalid 'points'" in error


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_simulate_defaults(self):
        args = build_parser().parse_args(["simulate", "c.json"])
        assert args.format == "json"
        assert args.output is None
        assert args.verbose is False

    def test_report_requires_output(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["report", "c.json"])


class TestSimulateCommand:
    def test_json_output(self, circuit_file, capsys):
        assert main(["simulate", circuit_file]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["node_voltages"]["n1"] == 12.0

    def test_csv_output_to_file(self, circuit_file, tmp_path):
        out = tmp_path / "r.csv"
        assert main(["simulate", circuit_file, "--format", "csv", "-o", str(out)]) == 0
        rows = list(csv.reader(io.StringIO(out.read_text(encoding="utf-8"))))
        assert ["# Circuit", "divider"] in rows

    def test_text_output(self, circuit_file, capsys):
        assert main(["simulate", circuit_file, "--format", "text"]) == 0
        out = capsys.readouterr().out
        assert "Node voltages:" in out
        assert "(ground)" in out

    def test_errors_exit_one(self, empty_circuit, capsys):
        assert main(["simulate", empty_circuit]) == 1
        assert "No voltage source found in circuit" in capsys.readouterr().err

    def test_warnings_go_to_stderr(self, tmp_path, capsys):
        from circuitforge.tests.conftest import make_component

        lone = CircuitSnapshot(components=(make_component("battery", "B1", "9V"),))
        path = tmp_path / "lone.json"
        path.write_text(json.dumps(lone.to_dict()))
        assert main(["simulate", str(path)]) == 0
        assert "No ground reference found" in capsys.readouterr().err


class TestCheckCommand:
    def test_valid(self, circuit_file, capsys):
        assert main(["check", circuit_file]) == 0
        assert "Circuit is valid" in capsys.readouterr().out

    def test_invalid(self, empty_circuit, capsys):
        assert main(["check", empty_circuit]) == 1
        assert "Circuit has errors" in capsys.readouterr().err

    def test_malformed_points(self, null_points_circuit, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["check", null_points_circuit])
        assert exc_info.value.code == 1
        assert "invalid 'points'" in capsys.readouterr().err


class TestReportCommand:
    def test_text_report(self, circuit_file, tmp_path):
        out = tmp_path / "report.txt"
        assert main(["report", circuit_file, "-o", str(out), "--notes", "Lab 3"]) == 0
        text = out.read_text(encoding="utf-8")
        assert "Circuit: divider" in text
        assert "Lab 3" in text

    def test_pdf_report(self, circuit_file, tmp_path):
        out = tmp_path / "report.pdf"
        assert main(["report", circuit_file, "-o", str(out), "--no-chart"]) == 0
        assert out.read_bytes().startswith(b"%PDF")

    def test_chart_image(self, circuit_file, tmp_path):
        out = tmp_path / "report.txt"
        chart = tmp_path / "voltages.png"
        assert main(["report", circuit_file, "-o", str(out), "--chart", str(chart)]) == 0
        assert chart.read_bytes().startswith(b"\x89PNG")


class TestExplainCommand:
    def test_explain(self, circuit_file, capsys):
        assert main(["explain", circuit_file]) == 0
        out = capsys.readouterr().out
        assert "Step 1: Circuit Overview" in out
        assert "Current Flow Analysis:" in out


class TestTemplatesCommand:
    def test_list(self, capsys):
        assert main(["templates"]) == 0
        out = capsys.readouterr().out
        assert "simple-led" in out
        assert "voltage-divider" in out

    def test_export(self, tmp_path):
        out = tmp_path / "led.json"
        assert main(["templates", "--export", "simple-led", "-o", str(out)]) == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["components"]) == 4
        assert main(["check", str(out)]) == 0

    def test_export_unknown(self, capsys):
        assert main(["templates", "--export", "nope"]) == 1
        assert "Unknown template 'nope'" in capsys.readouterr().err


class TestBatchCommand:
    def test_batch_directory(self, tmp_path, divider_snapshot, capsys):
        src = tmp_path / "circuits"
        src.mkdir()
        (src / "a.json").write_text(json.dumps(divider_snapshot.to_dict()))
        (src / "b.json").write_text(json.dumps(divider_snapshot.to_dict()))
        out_dir = tmp_path / "results"
        assert main(["batch", str(src), "--output-dir", str(out_dir), "--format", "csv"]) == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["a.csv", "b.csv"]
        assert "2/2 succeeded, 0 failed" in capsys.readouterr().out

    def test_batch_with_failures(self, tmp_path, divider_snapshot, capsys):
        src = tmp_path / "circuits"
        src.mkdir()
        (src / "a.json").write_text("broken")
        (src / "b.json").write_text(json.dumps({"components": [], "wires": []}))
        (src / "c.json").write_text(json.dumps(divider_snapshot.to_dict()))
        assert main(["batch", str(src)]) == 1
        out = capsys.readouterr().out
        assert "LOAD_ERROR" in out
        assert "FAIL" in out
        assert "1/3 succeeded, 2 failed" in out

    def test_batch_records_malformed_points(self, tmp_path, divider_snapshot, null_points_circuit, capsys):
        src = tmp_path / "circuits"
        src.mkdir()
        (src / "a.json").write_text(Path(null_points_circuit).read_text(encoding="utf-8"))
        (src / "b.json").write_text(json.dumps(divider_snapshot.to_dict()))
        assert main(["batch", str(src)]) == 1
        out = capsys.readouterr().out
        assert "LOAD_ERROR" in out
        assert "1/2 succeeded, 1 failed" in out

    def test_batch_fail_fast(self, tmp_path, capsys):
        src = tmp_path / "circuits"
        src.mkdir()
        (src / "a.json").write_text("broken")
        (src / "b.json").write_text("broken")
        assert main(["batch", str(src), "--fail-fast"]) == 1
        assert "0/1 succeeded" in capsys.readouterr().out

    def test_batch_glob(self, tmp_path, divider_snapshot, capsys):
        (tmp_path / "x.json").write_text(json.dumps(divider_snapshot.to_dict()))
        assert main(["batch", str(tmp_path / "*.json")]) == 0

    def test_batch_not_a_directory(self, tmp_path):
        assert main(["batch", str(tmp_path / "missing")]) == 1

    def test_batch_empty_directory(self, tmp_path):
        assert main(["batch", str(tmp_path)]) == 1
