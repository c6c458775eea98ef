"""
Model Coefficients, Safety Limits and Initial Conditions

This module contains the fixed coefficients of the lumped core model,
the trip setpoints monitored by the safety system, and the state the
reactor starts from.
"""

from dataclasses import dataclass
import math
from typing import Tuple


# Operator-settable ranges [%]
ROD_RANGE: Tuple[float, float] = (0.0, 100.0)
FLOW_RANGE: Tuple[float, float] = (0.0, 100.0)


@dataclass(frozen=True)
class ModelParameters:
    """
    Coefficients of the per-timestep core model.

    All rates are expressed per timestep; one call to the step operation
    always represents one fixed unit of simulated time.

    Attributes:
        power_per_rod_percent: Power gained per % of rod withdrawal [MW/%]
        heat_per_mw: Core heating per MW of power [°C/MW/step]
        max_cooling: Cooling capacity at 100% coolant flow [°C/step]
        nominal_temp: Reference core temperature [°C]
        nominal_pressure: Pressure at the reference temperature [bar]
        pressure_per_degree: Pressure rise per degree above nominal [bar/°C]
    """

    power_per_rod_percent: float = 20.0  # [MW/%]
    heat_per_mw: float = 0.1  # [°C/MW]
    max_cooling: float = 30.0  # [°C/step]
    nominal_temp: float = 280.0  # [°C]
    nominal_pressure: float = 150.0  # [bar]
    pressure_per_degree: float = 0.5  # [bar/°C]

    def __post_init__(self):
        """Validate model coefficients."""
        if self.power_per_rod_percent <= 0:
            raise ValueError(
                f"Power per rod percent must be positive, got {self.power_per_rod_percent}"
            )
        if self.heat_per_mw < 0 or self.max_cooling < 0:
            raise ValueError("Heating and cooling coefficients must be non-negative")
        if self.nominal_pressure <= 0:
            raise ValueError(
                f"Nominal pressure must be positive, got {self.nominal_pressure} bar"
            )

    @property
    def max_power(self) -> float:
        """Power with rods fully withdrawn and full coolant flow [MW]."""
        return (ROD_RANGE[1] - ROD_RANGE[0]) * self.power_per_rod_percent


@dataclass(frozen=True)
class SafetyLimits:
    """
    Trip setpoints for the emergency shutdown system.

    A trip occurs when a limit is strictly exceeded (or, for coolant
    flow, strictly undershot).
    """

    max_core_temp: float = 1000.0  # [°C]
    max_pressure: float = 200.0  # [bar]
    min_coolant_flow: float = 10.0  # [%]

    def __post_init__(self):
        """Validate trip setpoints."""
        lo, hi = FLOW_RANGE
        if not lo <= self.min_coolant_flow <= hi:
            raise ValueError(
                f"Minimum coolant flow must be within {lo}-{hi}%, "
                f"got {self.min_coolant_flow}%"
            )
        if self.max_core_temp <= 0:
            raise ValueError(
                f"Maximum core temperature must be positive, got {self.max_core_temp} °C"
            )
        if self.max_pressure <= 0:
            raise ValueError(
                f"Maximum pressure must be positive, got {self.max_pressure} bar"
            )


@dataclass(frozen=True)
class InitialConditions:
    """
    State of a freshly constructed reactor.

    Pressure is not an initial condition: it is derived from core_temp.
    """

    power_output: float = 0.0  # [MW]
    core_temp: float = 280.0  # [°C]
    coolant_flow: float = 100.0  # [%]
    control_rods: float = 100.0  # [% inserted]

    def __post_init__(self):
        if not math.isfinite(self.core_temp):
            raise ValueError(f"Initial core temperature must be finite, got {self.core_temp}")
        for name, value, (lo, hi) in (
            ("coolant_flow", self.coolant_flow, FLOW_RANGE),
            ("control_rods", self.control_rods, ROD_RANGE),
        ):
            if not lo <= value <= hi:
                raise ValueError(f"Initial {name} must be within {lo}-{hi}%, got {value}")
        if self.power_output < 0:
            raise ValueError(f"Initial power must be non-negative, got {self.power_output}")
