"""
SimulationController - Runs the DC engine on the editor's current circuit.

This module contains no GUI dependencies. The engine itself never raises
for a malformed circuit; this controller is the layer that turns a
genuinely unexpected engine fault into a generic failure result, and the
place where callers can put a time box around a run.
"""

import concurrent.futures
import logging
from typing import Optional

from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.simulation import SimulationResult, simulate

from .circuit_controller import CircuitController

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Controller for the simulation pipeline.

    Coordinates: snapshot -> simulate -> store result -> notify
    """

    def __init__(self, circuit_ctrl: Optional[CircuitController] = None):
        self.circuit_ctrl = circuit_ctrl or CircuitController()

    def run_simulation(self, timeout: Optional[float] = None) -> SimulationResult:
        """
        Simulate the current circuit and store the result on the editor state.

        Args:
            timeout: Seconds to wait for the run. The engine has no
                interruption point, so on timeout the worker is abandoned
                and a failure result is returned.
        """
        self.circuit_ctrl._notify("simulation_started", None)
        result = self.simulate_circuit(self.circuit_ctrl.circuit, timeout=timeout)
        self.circuit_ctrl.set_simulation_result(result)
        self.circuit_ctrl._notify("simulation_completed", result)
        return result

    def simulate_circuit(self, circuit: CircuitSnapshot, timeout: Optional[float] = None) -> SimulationResult:
        """Simulate any snapshot without touching the editor state."""
        if timeout is None:
            return self._guarded_simulate(circuit)

        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._guarded_simulate, circuit)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.warning("Simulation timed out after %ss", timeout)
            return SimulationResult.failure(f"Simulation timed out after {timeout}s")
        finally:
            executor.shutdown(wait=False)

    @staticmethod
    def _guarded_simulate(circuit: CircuitSnapshot) -> SimulationResult:
        try:
            return simulate(circuit.components, circuit.wires)
        except Exception as e:
            logger.error("Simulation failed: %s", e, exc_info=True)
            return SimulationResult.failure(f"Simulation failed: {e}")
