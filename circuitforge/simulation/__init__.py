from .csv_exporter import export_simulation_results
from .diagnostics import Diagnostic, DiagnosticCode, Severity
from .engine import simulate, simulate_snapshot
from .result import SimulationResult
from .value_parser import format_value, parse_value

__all__ = [
    'simulate',
    'simulate_snapshot',
    'SimulationResult',
    'Diagnostic',
    'DiagnosticCode',
    'Severity',
    'parse_value',
    'format_value',
    'export_simulation_results',
]
