"""
Reference Operator Driver

Runs a reactor over a fixed timestep budget, applying scheduled operator
commands and stopping early when the reactor leaves normal operation.
Wall-clock pacing between steps lives here and never in the reactor.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging
import time

import numpy as np

from .reactor import Reactor, ReactorStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperatorCommand:
    """
    Control action applied just before a given timestep is advanced.

    Attributes:
        timestep: Timestep number (1-based) the command applies to
        control_rods: New rod insertion [%], or None to leave unchanged
        coolant_flow: New coolant flow [%], or None to leave unchanged
    """

    timestep: int
    control_rods: Optional[float] = None
    coolant_flow: Optional[float] = None

    def apply(self, reactor: Reactor):
        if self.control_rods is not None:
            reactor.set_control_rod_position(self.control_rods)
        if self.coolant_flow is not None:
            reactor.set_coolant_flow(self.coolant_flow)


# Withdraw rods to 50% at step 3, reduce coolant to 80% at step 6
DEFAULT_COMMANDS: Tuple[OperatorCommand, ...] = (
    OperatorCommand(timestep=3, control_rods=50.0),
    OperatorCommand(timestep=6, coolant_flow=80.0),
)

STATUS_FIELDS = (
    "power_output",
    "core_temp",
    "pressure",
    "coolant_flow",
    "control_rods",
)


@dataclass
class SimulationResult:
    """
    Outcome of a driver run.

    Attributes:
        records: (timestep, status) after each advanced step
        completed: True if the full timestep budget ran without a trip
        shutdown_step: Timestep at which this run tripped the reactor;
            None if no trip occurred or the reactor was already shut down
        already_shutdown: True if the reactor was shut down before the run
    """

    records: List[Tuple[int, ReactorStatus]] = field(default_factory=list)
    completed: bool = False
    shutdown_step: Optional[int] = None
    already_shutdown: bool = False

    @property
    def final_status(self) -> Optional[ReactorStatus]:
        return self.records[-1][1] if self.records else None

    def as_arrays(self) -> Dict[str, np.ndarray]:
        """
        Trajectory of every numeric field as arrays.

        Returns:
            Dictionary with "timestep" plus one array per state field
        """
        arrays = {
            "timestep": np.array([t for t, _ in self.records], dtype=int),
        }
        for name in STATUS_FIELDS:
            arrays[name] = np.array(
                [getattr(status, name) for _, status in self.records], dtype=float
            )
        return arrays

    def peak_values(self) -> Dict[str, float]:
        """Maximum of power, temperature and pressure over the run."""
        if not self.records:
            return {}
        arrays = self.as_arrays()
        return {
            name: float(np.max(arrays[name]))
            for name in ("power_output", "core_temp", "pressure")
        }


def run_simulation(
    reactor: Optional[Reactor] = None,
    timesteps: int = 10,
    commands: Sequence[OperatorCommand] = DEFAULT_COMMANDS,
    on_step: Optional[Callable[[int, ReactorStatus], None]] = None,
    step_delay: float = 0.0,
) -> SimulationResult:
    """
    Drive a reactor through a sequence of timesteps.

    Args:
        reactor: Reactor to drive (a fresh one if omitted)
        timesteps: Timestep budget; steps are numbered 1..timesteps
        commands: Operator commands scheduled by timestep
        on_step: Callback invoked with (timestep, status) after each step
        step_delay: Wall-clock pause between steps [s]

    Returns:
        SimulationResult with the status after every advanced step
    """
    if timesteps < 0:
        raise ValueError(f"Timestep budget must be non-negative, got {timesteps}")
    if step_delay < 0:
        raise ValueError(f"Step delay must be non-negative, got {step_delay}")

    reactor = reactor if reactor is not None else Reactor()
    result = SimulationResult(already_shutdown=reactor.is_shutdown)

    schedule: Dict[int, List[OperatorCommand]] = {}
    for command in commands:
        schedule.setdefault(command.timestep, []).append(command)

    logger.info("Simulation started: %d timesteps", timesteps)

    for timestep in range(1, timesteps + 1):
        for command in schedule.get(timestep, []):
            command.apply(reactor)

        safe = reactor.advance_timestep()
        status = reactor.current_status()
        result.records.append((timestep, status))

        if on_step is not None:
            on_step(timestep, status)

        if not safe:
            if not result.already_shutdown:
                result.shutdown_step = timestep
            logger.warning("Simulation stopped at timestep %d", timestep)
            return result

        if step_delay and timestep < timesteps:
            time.sleep(step_delay)

    result.completed = True
    logger.info("Simulation completed")
    return result
