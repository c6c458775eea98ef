"""
Core Physics Relations

Lumped relations advanced once per timestep by the reactor:
- Power from rod withdrawal, attenuated by coolant adequacy
- Net core heating (heat generation minus coolant removal)
- Primary pressure as a linear function of core temperature

Each relation is a pure function of its inputs so the reactor controls
the order in which they are evaluated.
"""

from .constants import ModelParameters, ROD_RANGE
from .utils import percent_to_fraction


def calculate_power(
    control_rods: float,
    coolant_flow: float,
    params: ModelParameters
) -> float:
    """
    Calculate power output from rod position and coolant flow.

    P = (100 - rods) * k_rod * (flow / 100)

    A dry core produces no credited output even at full reactivity.

    Args:
        control_rods: Rod insertion [%]
        coolant_flow: Coolant flow [%]
        params: Model coefficients

    Returns:
        Power output [MW]
    """
    base_power = (ROD_RANGE[1] - control_rods) * params.power_per_rod_percent
    cooling_factor = percent_to_fraction(coolant_flow)
    return base_power * cooling_factor


def calculate_temperature_change(
    power_output: float,
    coolant_flow: float,
    params: ModelParameters
) -> float:
    """
    Calculate the net core temperature change over one timestep.

    dT = P * k_heat - (flow / 100) * cooling_max

    Args:
        power_output: Power output this step [MW]
        coolant_flow: Coolant flow [%]
        params: Model coefficients

    Returns:
        Temperature change [°C]
    """
    power_heat = power_output * params.heat_per_mw
    cooling_effect = percent_to_fraction(coolant_flow) * params.max_cooling
    return power_heat - cooling_effect


def calculate_pressure(core_temp: float, params: ModelParameters) -> float:
    """
    Calculate primary pressure from the current core temperature.

    p = p_nom + (T - T_nom) * k_p

    Args:
        core_temp: Core temperature [°C]
        params: Model coefficients

    Returns:
        Pressure [bar]
    """
    return params.nominal_pressure + (
        (core_temp - params.nominal_temp) * params.pressure_per_degree
    )
