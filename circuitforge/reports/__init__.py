"""Human-readable output built from circuits and simulation results."""

from .explanation import SimulationStep, generate_current_flow_explanation, generate_simulation_steps
from .report_generator import ReportConfig, ReportGenerator, create_voltage_figure

__all__ = [
    "SimulationStep",
    "generate_simulation_steps",
    "generate_current_flow_explanation",
    "ReportConfig",
    "ReportGenerator",
    "create_voltage_figure",
]
