"""
simulation/csv_exporter.py

Export simulation results to CSV format.
No GUI dependencies; choosing a destination file is the caller's job.
"""

import csv
import io
from datetime import datetime

from .result import SimulationResult


def export_simulation_results(result: SimulationResult, circuit_name: str = "") -> str:
    """
    Export a DC simulation result to a CSV string.

    Args:
        result: SimulationResult to export.
        circuit_name: optional circuit filename

    Returns:
        str: CSV content with a header block, then node voltages,
        currents, and diagnostics sections separated by blank rows.
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["# Analysis Type", "DC Operating Point"])
    writer.writerow(["# Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        writer.writerow(["# Circuit", circuit_name])
    if result.ground_node:
        writer.writerow(["# Ground", result.ground_node])
    writer.writerow([])

    writer.writerow(["Node", "Voltage (V)"])
    for node, voltage in sorted(result.node_voltages.items(), key=lambda item: node_sort_key(item[0])):
        writer.writerow([node, voltage])
    writer.writerow([])

    writer.writerow(["Element", "Current (A)"])
    for element, current in sorted(result.component_currents.items()):
        writer.writerow([element, current])

    if result.errors or result.warnings:
        writer.writerow([])
        writer.writerow(["Severity", "Message"])
        for message in result.errors:
            writer.writerow(["error", message])
        for message in result.warnings:
            writer.writerow(["warning", message])

    return output.getvalue()


def node_sort_key(node_id: str):
    """Sort n2 before n10."""
    digits = node_id[1:]
    if node_id.startswith("n") and digits.isdigit():
        return (0, int(digits), node_id)
    return (1, 0, node_id)
