"""
Utility Functions for the Reactor Simulator

This module provides helper functions for input sanitising, unit
conversions and console formatting of reactor status.
"""

from typing import Tuple


def clamp(value: float, bounds: Tuple[float, float]) -> float:
    """
    Restrict a value to a closed interval.

    Args:
        value: Value to restrict
        bounds: (lower, upper) limits

    Returns:
        value if it lies within bounds, otherwise the nearest bound
    """
    lower, upper = bounds
    return float(min(max(value, lower), upper))


def percent_to_fraction(percent: float) -> float:
    """Convert a percentage to a fraction of one."""
    return percent / 100.0


def celsius_to_kelvin(celsius: float) -> float:
    """Convert temperature from Celsius to Kelvin."""
    return celsius + 273.15


def bar_to_mpa(bar: float) -> float:
    """Convert pressure from bar to MPa."""
    return bar * 0.1


def format_status(timestep: int, status) -> str:
    """
    Format a reactor status snapshot for console output.

    Args:
        timestep: Timestep number the snapshot was taken after
        status: ReactorStatus snapshot

    Returns:
        Multi-line status report
    """
    lines = [
        f"Timestep: {timestep}",
        f"Power Output: {status.power_output:.2f} MW",
        f"Core Temperature: {status.core_temp:.2f} °C "
        f"({celsius_to_kelvin(status.core_temp):.1f} K)",
        f"Pressure: {status.pressure:.2f} bar ({bar_to_mpa(status.pressure):.2f} MPa)",
        f"Coolant Flow: {status.coolant_flow:.2f}%",
        f"Control Rods: {status.control_rods:.2f}%",
    ]
    if status.emergency_shutdown:
        lines.append("EMERGENCY SHUTDOWN ACTIVATED")
    return "\n".join(lines)
