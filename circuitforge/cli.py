"""
Command-line interface for CircuitForge.

Simulate, check, explain and report on circuits without an editor.

Usage::

    circuitforge simulate circuit.json
    circuitforge simulate circuit.json --format csv --output results.csv
    circuitforge check circuit.json
    circuitforge report circuit.json -o report.pdf --notes "Lab 3"
    circuitforge explain circuit.json
    circuitforge templates
    circuitforge templates --export simple-led -o led.json
    circuitforge batch circuits/ --output-dir results/
"""

import argparse
import glob
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from circuitforge.controllers.circuit_controller import CircuitController
from circuitforge.controllers.file_controller import read_circuit_file, write_circuit_file
from circuitforge.controllers.simulation_controller import SimulationController
from circuitforge.controllers.template_manager import TemplateManager
from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.reports.explanation import generate_current_flow_explanation, generate_simulation_steps
from circuitforge.reports.report_generator import ReportConfig, ReportGenerator, save_voltage_png
from circuitforge.simulation.csv_exporter import export_simulation_results, node_sort_key
from circuitforge.simulation.result import SimulationResult


def try_load_circuit(filepath: str) -> tuple[Optional[CircuitSnapshot], str]:
    """Load and validate a circuit JSON file without exiting.

    Args:
        filepath: Path to the circuit JSON file.

    Returns:
        (circuit, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        return read_circuit_file(path), ""
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"
    except ValueError as e:
        return None, f"invalid circuit file: {e}"
    except OSError as e:
        return None, f"cannot read {filepath}: {e}"


def load_circuit(filepath: str) -> CircuitSnapshot:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    circuit, error = try_load_circuit(filepath)
    if circuit is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return circuit


def run(circuit: CircuitSnapshot, timeout: Optional[float] = None) -> SimulationResult:
    """Simulate a circuit through the controllers."""
    sim = SimulationController(CircuitController(circuit))
    return sim.run_simulation(timeout=timeout)


def _write_or_print(text: str, output: Optional[str], what: str) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"{what} written to {output}", file=sys.stderr)
    else:
        print(text)


def _format_result(result: SimulationResult, fmt: str, circuit_name: str = "") -> str:
    """Format simulation result as text."""
    if fmt == "csv":
        return export_simulation_results(result, circuit_name)
    if fmt == "text":
        return _result_to_text(result)
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def _result_to_text(result: SimulationResult) -> str:
    lines = ["Node voltages:"]
    for node, voltage in sorted(result.node_voltages.items(), key=lambda item: node_sort_key(item[0])):
        marker = "  (ground)" if node == result.ground_node else ""
        lines.append(f"  {node:<6} {voltage:>12.6f} V{marker}")
    lines.append("Currents:")
    for item_id, current in result.component_currents.items():
        lines.append(f"  {item_id:<20} {current:>12.6f} A")
    return "\n".join(lines)


def _print_problems(result: SimulationResult) -> None:
    for err in result.errors:
        print(f"  - {err}", file=sys.stderr)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)


def cmd_simulate(args: argparse.Namespace) -> int:
    """Run simulation and output results."""
    circuit = load_circuit(args.circuit)
    result = run(circuit, timeout=args.timeout)

    if not result.success:
        print("Simulation failed:", file=sys.stderr)
        _print_problems(result)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    _write_or_print(_format_result(result, args.format, Path(args.circuit).stem), args.output, "Results")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Simulate and report errors and warnings only."""
    circuit = load_circuit(args.circuit)
    result = run(circuit)

    if result.success:
        print(f"Circuit is valid: {args.circuit}")
        for warning in result.warnings:
            print(f"  Warning: {warning}")
        return 0

    print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
    for err in result.errors:
        print(f"  - {err}", file=sys.stderr)
    return 1


def cmd_report(args: argparse.Namespace) -> int:
    """Write a circuit report. ``.txt`` outputs are plain text, anything else is PDF."""
    circuit = load_circuit(args.circuit)
    result = run(circuit)

    config = ReportConfig(circuit_name=Path(args.circuit).stem, include_chart=not args.no_chart)
    generator = ReportGenerator(config)
    output = Path(args.output)
    try:
        if output.suffix.lower() == ".txt":
            output.write_text(generator.build_text(circuit, result, args.notes), encoding="utf-8")
        else:
            generator.write_pdf(output, circuit, result, args.notes)
        if args.chart and result.node_voltages:
            save_voltage_png(result, args.chart)
    except OSError as e:
        print(f"Error writing report: {e}", file=sys.stderr)
        return 1

    print(f"Report written to {output}", file=sys.stderr)
    return 0 if result.success else 1


def cmd_explain(args: argparse.Namespace) -> int:
    """Print a step-by-step walkthrough of the simulation."""
    circuit = load_circuit(args.circuit)
    result = run(circuit)

    steps = generate_simulation_steps(circuit.components, circuit.wires, result)
    for step in steps:
        print(f"Step {step.step_id + 1}: {step.title}")
        print(f"  {step.description}")
        print()
    print(generate_current_flow_explanation(circuit.components, circuit.wires, result))
    _print_problems(result)
    return 0 if result.success else 1


def cmd_templates(args: argparse.Namespace) -> int:
    """List templates or export one as a circuit file."""
    manager = TemplateManager()

    if args.export:
        try:
            template = manager.load_template(args.export)
        except KeyError as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            return 1
        if args.output:
            write_circuit_file(args.output, template.circuit)
            print(f"Template written to {args.output}", file=sys.stderr)
        else:
            print(json.dumps(template.circuit.to_dict(), indent=2, ensure_ascii=False))
        return 0

    templates = manager.list_templates()
    if not templates:
        print("No templates found.", file=sys.stderr)
        return 0
    print(f"{'ID':<20} {'Category':<10} {'Difficulty':<14} {'Name'}")
    print("-" * 70)
    for template in templates:
        print(f"{template.template_id:<20} {template.category:<10} {template.difficulty:<14} {template.name}")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Run simulations on multiple circuit files."""
    pattern = args.path
    path = Path(pattern)
    if path.is_dir():
        files = sorted(path.glob("*.json"))
    elif "*" in pattern or "?" in pattern:
        files = sorted(Path(p) for p in glob.glob(pattern))
    else:
        print(f"Error: {pattern} is not a directory or glob pattern", file=sys.stderr)
        return 1

    if not files:
        print(f"No .json circuit files found matching: {pattern}", file=sys.stderr)
        return 1

    output_dir = None
    if args.output_dir:
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    fmt = args.format
    results_summary = []
    any_failed = False

    for filepath in files:
        name = filepath.stem
        circuit, error = try_load_circuit(str(filepath))

        if circuit is None:
            results_summary.append({"file": filepath.name, "status": "LOAD_ERROR", "error": error})
            any_failed = True
            if args.fail_fast:
                break
            continue

        result = run(circuit)

        if not result.success:
            results_summary.append({"file": filepath.name, "status": "FAIL", "error": "; ".join(result.errors)})
            any_failed = True
            if args.fail_fast:
                break
            continue

        results_summary.append(
            {
                "file": filepath.name,
                "status": "OK",
                "details": f"{len(result.node_voltages)} nodes, {len(result.warnings)} warnings",
            }
        )

        if output_dir:
            ext = "csv" if fmt == "csv" else "json"
            out_path = output_dir / f"{name}.{ext}"
            out_path.write_text(_format_result(result, fmt, name), encoding="utf-8")

    print(f"\n{'File':<40} {'Status':<12} {'Details'}")
    print("-" * 70)
    for entry in results_summary:
        details = entry.get("details", entry.get("error", ""))
        print(f"{entry['file']:<40} {entry['status']:<12} {details}")

    total = len(results_summary)
    passed = sum(1 for e in results_summary if e["status"] == "OK")
    print(f"\n{passed}/{total} succeeded, {total - passed} failed")

    return 1 if any_failed else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="circuitforge",
        description="CircuitForge: simulate, check, explain and report on DC circuits from the command line.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # simulate
    sim_parser = subparsers.add_parser("simulate", help="Run simulation and output results")
    sim_parser.add_argument("circuit", help="Path to circuit JSON file")
    sim_parser.add_argument(
        "--format", choices=["json", "csv", "text"], default="json", help="Output format (default: json)"
    )
    sim_parser.add_argument("--output", "-o", help="Write results to file instead of stdout")
    sim_parser.add_argument("--timeout", type=float, help="Give up after this many seconds")

    # check
    check_parser = subparsers.add_parser("check", help="Check circuit for errors and warnings")
    check_parser.add_argument("circuit", help="Path to circuit JSON file")

    # report
    report_parser = subparsers.add_parser("report", help="Write a PDF (or .txt) circuit report")
    report_parser.add_argument("circuit", help="Path to circuit JSON file")
    report_parser.add_argument("--output", "-o", required=True, help="Report file path")
    report_parser.add_argument("--notes", default="", help="Notes to include in the report")
    report_parser.add_argument("--no-chart", action="store_true", help="Leave out the node voltage chart")
    report_parser.add_argument("--chart", help="Also save the node voltage chart as a PNG image")

    # explain
    explain_parser = subparsers.add_parser("explain", help="Explain the simulation step by step")
    explain_parser.add_argument("circuit", help="Path to circuit JSON file")

    # templates
    tpl_parser = subparsers.add_parser("templates", help="List circuit templates or export one")
    tpl_parser.add_argument("--export", metavar="ID", help="Template ID to export as a circuit file")
    tpl_parser.add_argument("--output", "-o", help="Write the exported circuit to file instead of stdout")

    # batch
    batch_parser = subparsers.add_parser("batch", help="Run simulations on multiple circuit files")
    batch_parser.add_argument("path", help="Directory or glob pattern matching circuit JSON files")
    batch_parser.add_argument(
        "--format", choices=["json", "csv"], default="json", help="Output format for per-file results (default: json)"
    )
    batch_parser.add_argument("--output-dir", help="Write per-file results to this directory")
    batch_parser.add_argument("--fail-fast", action="store_true", help="Stop on first error")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "simulate": cmd_simulate,
        "check": cmd_check,
        "report": cmd_report,
        "explain": cmd_explain,
        "templates": cmd_templates,
        "batch": cmd_batch,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
