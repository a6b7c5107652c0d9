"""Circuit report generator.

Builds a plain-text circuit report (overview, component list, wiring
summary, simulation results, user notes) and renders it to a multi-page
PDF. Pure Python module with no GUI dependencies. Matplotlib is used only
for PDF and figure creation and is imported lazily.
"""

import logging
import textwrap
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.simulation.csv_exporter import node_sort_key
from circuitforge.simulation.result import SimulationResult
from circuitforge.simulation.value_parser import format_value

logger = logging.getLogger(__name__)

# Currents at or below this magnitude are left out of the listing
MIN_LISTED_CURRENT = 1e-5

FOOTER_TEXT = "Generated by CircuitForge"


@dataclass
class ReportConfig:
    """Configuration for which sections to include in a circuit report."""

    include_overview: bool = True
    include_components: bool = True
    include_wiring: bool = True
    include_results: bool = True
    include_notes: bool = True
    include_chart: bool = True
    title: str = "Circuit Design Report"
    circuit_name: str = ""
    designer: str = "Circuit Designer Application"


class ReportGenerator:
    """Generates circuit reports as text or multi-page PDF.

    The PDF is laid out on A4 pages as monospaced text, one section after
    another, followed by a node-voltage bar chart when the report has
    results and the chart is enabled.
    """

    # Page layout constants (figure coordinates are 0..1)
    PAGE_SIZE = (8.27, 11.69)  # A4 in inches
    LINES_PER_PAGE = 58
    TOP = 0.95
    LEFT = 0.08
    LINE_HEIGHT = 0.0148
    BODY_FONT_SIZE = 9
    HEADING_FONT_SIZE = 12
    FOOTER_FONT_SIZE = 7
    WRAP_WIDTH = 88

    def __init__(self, config: Optional[ReportConfig] = None):
        self.config = config or ReportConfig()

    # --- Sections ---

    def build_sections(
        self,
        circuit: CircuitSnapshot,
        result: Optional[SimulationResult] = None,
        notes: str = "",
    ) -> list[tuple[str, list[str]]]:
        """Return the enabled report sections as (heading, lines) pairs."""
        config = self.config
        sections = []
        if config.include_overview:
            sections.append(("Circuit Overview", self._overview_lines(circuit)))
        if config.include_components:
            sections.append(("Component List", self._component_lines(circuit)))
        if config.include_wiring:
            sections.append(("Wiring Summary", self._wiring_lines(circuit)))
        if config.include_results and result is not None:
            sections.append(("Simulation Results", self._result_lines(circuit, result)))
        if config.include_notes and notes.strip():
            sections.append(("User Notes", self._wrap(notes)))
        return sections

    @staticmethod
    def _overview_lines(circuit: CircuitSnapshot) -> list[str]:
        sources = [c for c in circuit.components if c.is_voltage_source()]
        return [
            f"Total Components: {len(circuit.components)}",
            f"Wire Connections: {len(circuit.wires)}",
            f"Power Sources: {len(sources)}",
        ]

    @staticmethod
    def _component_lines(circuit: CircuitSnapshot) -> list[str]:
        lines = []
        for index, comp in enumerate(circuit.components, start=1):
            label = comp.label or f"{comp.component_type}-{index}"
            value = comp.value or "N/A"
            lines.append(f"{index}. {label} ({comp.component_type}) - {value}")
        return lines or ["(no components)"]

    @staticmethod
    def _wiring_lines(circuit: CircuitSnapshot) -> list[str]:
        def name_of(component_id):
            comp = circuit.get_component(component_id)
            if comp is None:
                return "Unknown"
            return comp.label or comp.component_type

        lines = [
            f"{index}. {name_of(wire.start_component_id)} → {name_of(wire.end_component_id)}"
            for index, wire in enumerate(circuit.wires, start=1)
        ]
        return lines or ["(no wires)"]

    @staticmethod
    def _result_lines(circuit: CircuitSnapshot, result: SimulationResult) -> list[str]:
        lines = ["Node Voltages:"]
        for node, voltage in sorted(result.node_voltages.items(), key=lambda item: node_sort_key(item[0])):
            marker = " (ground)" if node == result.ground_node else ""
            lines.append(f"  {node}: {format_value(voltage, 'V')}{marker}")

        lines.append("")
        lines.append("Component Currents:")
        for item_id, current in result.component_currents.items():
            if abs(current) <= MIN_LISTED_CURRENT:
                continue
            comp = circuit.get_component(item_id)
            label = (comp.label or comp.component_type or item_id) if comp else item_id
            lines.append(f"  {label}: {format_value(abs(current), 'A')}")

        if result.errors:
            lines.append("")
            lines.append("Errors:")
            lines.extend(f"  - {message}" for message in result.errors)
        if result.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  - {message}" for message in result.warnings)
        return lines

    def _wrap(self, text: str) -> list[str]:
        lines = []
        for paragraph in text.splitlines():
            lines.extend(textwrap.wrap(paragraph, self.WRAP_WIDTH) or [""])
        return lines

    # --- Text ---

    def build_text(
        self,
        circuit: CircuitSnapshot,
        result: Optional[SimulationResult] = None,
        notes: str = "",
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render the report as plain text."""
        lines = self._header_lines(generated_at)
        for heading, body in self.build_sections(circuit, result, notes):
            lines.append("")
            lines.append(heading)
            lines.append("-" * len(heading))
            lines.extend(body)
        lines.append("")
        lines.append(FOOTER_TEXT)
        return "\n".join(lines) + "\n"

    def _header_lines(self, generated_at: Optional[datetime]) -> list[str]:
        generated_at = generated_at or datetime.now()
        lines = [self.config.title, "=" * len(self.config.title)]
        if self.config.circuit_name:
            lines.append(f"Circuit: {self.config.circuit_name}")
        lines.append(f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"Designer: {self.config.designer}")
        return lines

    # --- PDF ---

    def _paginate(self, circuit, result, notes, generated_at) -> list[list[tuple[str, bool]]]:
        """Split the report into pages of (text, is_heading) lines."""
        rows = [(self.config.title, True)]
        rows.extend((line, False) for line in self._header_lines(generated_at)[2:])
        for heading, body in self.build_sections(circuit, result, notes):
            rows.append(("", False))
            rows.append((heading, True))
            rows.extend((line, False) for line in body)

        pages = []
        for start in range(0, len(rows), self.LINES_PER_PAGE):
            pages.append(rows[start:start + self.LINES_PER_PAGE])
        return pages or [[]]

    def write_pdf(
        self,
        filepath,
        circuit: CircuitSnapshot,
        result: Optional[SimulationResult] = None,
        notes: str = "",
        generated_at: Optional[datetime] = None,
    ) -> int:
        """Render the report to a PDF file.

        Args:
            filepath: Output PDF file path.
            circuit: Circuit to describe.
            result: Simulation result for the circuit, if it was simulated.
            notes: Free-form user notes.
            generated_at: Timestamp printed in the header. Defaults to now.

        Returns:
            Number of pages written.
        """
        import matplotlib.figure as mpl_figure
        from matplotlib.backends.backend_pdf import PdfPages

        text_pages = self._paginate(circuit, result, notes, generated_at)
        with_chart = (
            self.config.include_chart
            and result is not None
            and bool(result.node_voltages)
        )
        total = len(text_pages) + (1 if with_chart else 0)

        with PdfPages(filepath) as pdf:
            for page_number, rows in enumerate(text_pages, start=1):
                fig = mpl_figure.Figure(figsize=self.PAGE_SIZE)
                y = self.TOP
                for text, is_heading in rows:
                    fig.text(
                        self.LEFT,
                        y,
                        text,
                        family="sans-serif" if is_heading else "monospace",
                        weight="bold" if is_heading else "normal",
                        size=self.HEADING_FONT_SIZE if is_heading else self.BODY_FONT_SIZE,
                        va="top",
                    )
                    y -= self.LINE_HEIGHT
                self._draw_footer(fig, page_number, total)
                pdf.savefig(fig)

            if with_chart:
                fig = create_voltage_figure(result, figsize=self.PAGE_SIZE)
                self._draw_footer(fig, total, total)
                pdf.savefig(fig)

            info = pdf.infodict()
            info["Title"] = self.config.circuit_name or self.config.title
            info["Creator"] = "CircuitForge"

        logger.info("Wrote %d-page report to %s", total, filepath)
        return total

    def _draw_footer(self, fig, page_number: int, total: int) -> None:
        fig.text(
            0.5,
            0.02,
            f"{FOOTER_TEXT} - Page {page_number} of {total}",
            ha="center",
            size=self.FOOTER_FONT_SIZE,
        )


def create_voltage_figure(result: SimulationResult, figsize=(6, 3)):
    """Create a matplotlib Figure with a bar chart of node voltages.

    Bars are ordered n0, n1, ... n10; negative voltages are drawn in red.

    Returns:
        matplotlib.figure.Figure with the chart plotted.
    """
    import matplotlib.figure as mpl_figure
    import numpy as np

    nodes = sorted(result.node_voltages, key=node_sort_key)
    voltages = np.array([result.node_voltages[n] for n in nodes], dtype=float)
    x_positions = np.arange(len(nodes))
    colors = np.where(voltages >= 0, "#4CAF50", "#E53935")

    fig = mpl_figure.Figure(figsize=figsize, dpi=100)
    ax = fig.add_subplot(111)
    ax.bar(x_positions, voltages, color=list(colors), edgecolor="#37474F", width=0.6)
    ax.axhline(0, color="#37474F", linewidth=0.8)

    ax.set_xticks(list(x_positions))
    ax.set_xticklabels(nodes, fontsize=8)
    ax.set_xlabel("Node")
    ax.set_ylabel("Voltage (V)")
    ax.set_title("Node Voltages")

    if result.ground_node in nodes:
        ground_index = nodes.index(result.ground_node)
        ax.get_xticklabels()[ground_index].set_fontweight("bold")

    fig.tight_layout()
    return fig


def save_voltage_png(result: SimulationResult, filepath) -> None:
    """Save the node-voltage bar chart as a PNG image."""
    fig = create_voltage_figure(result)
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
