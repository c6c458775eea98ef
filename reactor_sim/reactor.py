"""
Reactor State Machine

This module provides the top-level reactor model: the physical state,
the operator inputs into it, the fixed-order per-timestep update and the
emergency shutdown interlock.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Tuple, Optional, Any
import json
import logging
import math

from .constants import (
    ModelParameters,
    SafetyLimits,
    InitialConditions,
    ROD_RANGE,
    FLOW_RANGE,
)
from .physics import calculate_power, calculate_temperature_change, calculate_pressure
from .safety import SafetySystem, SafetyMode, TripCondition
from .utils import clamp

logger = logging.getLogger(__name__)


@dataclass
class ReactorState:
    """
    Mutable physical state, owned exclusively by a Reactor.

    Attributes:
        power_output: Power output [MW]
        core_temp: Core temperature [°C]
        pressure: Primary pressure [bar]
        coolant_flow: Coolant flow [% of nominal]
        control_rods: Control rod insertion [%]
        emergency_shutdown: Latched once a trip has occurred
    """

    power_output: float = 0.0  # [MW]
    core_temp: float = 280.0  # [°C]
    pressure: float = 150.0  # [bar]
    coolant_flow: float = 100.0  # [%]
    control_rods: float = 100.0  # [% inserted]
    emergency_shutdown: bool = False

    @classmethod
    def from_initial_conditions(
        cls,
        initial: InitialConditions,
        params: ModelParameters
    ) -> "ReactorState":
        return cls(
            power_output=initial.power_output,
            core_temp=initial.core_temp,
            pressure=calculate_pressure(initial.core_temp, params),
            coolant_flow=initial.coolant_flow,
            control_rods=initial.control_rods,
        )

    def snapshot(self) -> "ReactorStatus":
        return ReactorStatus(**asdict(self))


@dataclass(frozen=True)
class ReactorStatus:
    """Immutable snapshot of all reactor state fields."""

    power_output: float
    core_temp: float
    pressure: float
    coolant_flow: float
    control_rods: float
    emergency_shutdown: bool

    @property
    def mode(self) -> SafetyMode:
        """Safety state machine mode at the time of the snapshot."""
        return SafetyMode.SHUTDOWN if self.emergency_shutdown else SafetyMode.NORMAL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        """Serialise the snapshot to a JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Reactor:
    """
    Reactor core under operator control.

    The reactor is advanced one fixed timestep at a time. Each step runs,
    in order: power, temperature, pressure, then the safety evaluation,
    every stage reading the values the previous stage just wrote.

    A safety trip is an expected physical event, not an error: it is
    reported through the return value of advance_timestep() and the
    emergency_shutdown flag. Once tripped, the reactor is inert.

    Attributes:
        parameters: Model coefficients
        limits: Safety trip setpoints
        initial: Initial conditions
    """

    parameters: ModelParameters = field(default_factory=ModelParameters)
    limits: SafetyLimits = field(default_factory=SafetyLimits)
    initial: InitialConditions = field(default_factory=InitialConditions)

    # Computed components (initialized in __post_init__)
    safety: SafetySystem = field(init=False, repr=False)
    _state: ReactorState = field(init=False, repr=False)
    _timestep: int = field(init=False, default=0, repr=False)
    _trip_conditions: Tuple[TripCondition, ...] = field(
        init=False, default=(), repr=False
    )

    def __post_init__(self):
        """Initialize state and safety system."""
        self.safety = SafetySystem(self.limits)
        self._state = ReactorState.from_initial_conditions(
            self.initial, self.parameters
        )

    @property
    def is_shutdown(self) -> bool:
        return self._state.emergency_shutdown

    @property
    def timestep(self) -> int:
        """Number of physical updates performed so far."""
        return self._timestep

    @property
    def trip_conditions(self) -> Tuple[TripCondition, ...]:
        """Conditions that caused the shutdown (empty while operating)."""
        return self._trip_conditions

    def set_control_rod_position(self, value: float):
        """
        Move the control rods to a new insertion.

        Out-of-range input is clamped to 0-100%, never rejected. After a
        shutdown the rods remain fully inserted.
        NaN is not a position and leaves the rods unchanged.

        Args:
            value: Requested insertion [%]
        """
        if math.isnan(value):
            logger.warning("Rod command ignored: position is NaN")
            return
        position = clamp(value, ROD_RANGE)
        if self._state.emergency_shutdown:
            logger.info(
                "Rod command %.1f%% ignored: rods held at full insertion after shutdown",
                position,
            )
            return
        logger.info("Control rods set to %.1f%%", position)
        self._state.control_rods = position

    def set_coolant_flow(self, value: float):
        """
        Set coolant flow.

        Out-of-range input is clamped to 0-100%, never rejected.
        NaN is not a flow and leaves the coolant flow unchanged.

        Args:
            value: Requested flow [% of nominal]
        """
        if math.isnan(value):
            logger.warning("Coolant command ignored: flow is NaN")
            return
        flow = clamp(value, FLOW_RANGE)
        logger.info("Coolant flow set to %.1f%%", flow)
        self._state.coolant_flow = flow

    def advance_timestep(self) -> bool:
        """
        Advance the reactor by one timestep.

        Returns:
            True if the reactor is still operating normally, False if a
            shutdown occurred this step or had already occurred
        """
        state = self._state
        if state.emergency_shutdown:
            return False

        state.power_output = calculate_power(
            state.control_rods, state.coolant_flow, self.parameters
        )
        state.core_temp += calculate_temperature_change(
            state.power_output, state.coolant_flow, self.parameters
        )
        state.pressure = calculate_pressure(state.core_temp, self.parameters)
        self._timestep += 1

        logger.debug(
            "Step %d: power=%.2f MW temp=%.2f °C pressure=%.2f bar",
            self._timestep, state.power_output, state.core_temp, state.pressure,
        )

        trips = self.safety.evaluate(state.core_temp, state.pressure, state.coolant_flow)
        if trips:
            self._scram(trips)
            return False
        return True

    def _scram(self, trips):
        """Insert all rods and latch the emergency shutdown."""
        self._state.control_rods = ROD_RANGE[1]
        self._state.emergency_shutdown = True
        self._trip_conditions = tuple(trips)
        logger.warning(
            "Emergency shutdown at step %d: %s",
            self._timestep, ", ".join(t.value for t in trips),
        )

    def current_status(self) -> ReactorStatus:
        """Return an immutable snapshot of the current state."""
        return self._state.snapshot()

    def safety_margins(self) -> Dict[str, float]:
        """Margins of the current state to each trip setpoint."""
        state = self._state
        return self.safety.get_safety_margins(
            state.core_temp, state.pressure, state.coolant_flow
        )


def create_reactor(
    parameters: Optional[ModelParameters] = None,
    limits: Optional[SafetyLimits] = None,
    **kwargs
) -> Reactor:
    """
    Factory function to create a reactor.

    Args:
        parameters: Model coefficients (defaults if omitted)
        limits: Safety trip setpoints (defaults if omitted)
        **kwargs: Additional parameters passed to Reactor

    Returns:
        Reactor in its initial state
    """
    return Reactor(
        parameters=parameters or ModelParameters(),
        limits=limits or SafetyLimits(),
        **kwargs
    )
