"""
Safety System

This module implements the emergency shutdown (trip) logic: monitoring
of core temperature, pressure and coolant flow against fixed setpoints.
"""

from enum import Enum
from typing import Dict, List, Optional
import logging

from .constants import SafetyLimits

logger = logging.getLogger(__name__)


class SafetyMode(Enum):
    """Operating mode of the reactor safety state machine."""

    NORMAL = "normal"
    SHUTDOWN = "shutdown"


class TripCondition(Enum):
    """Monitored parameter breaches that force an emergency shutdown."""

    HIGH_CORE_TEMPERATURE = "high_core_temperature"
    HIGH_PRESSURE = "high_pressure"
    LOW_COOLANT_FLOW = "low_coolant_flow"


class SafetySystem:
    """
    Emergency shutdown logic.

    The safety system only decides whether a trip is required; acting on
    the verdict (rod insertion, latching the shutdown) belongs to the
    reactor that owns the state.
    """

    def __init__(self, limits: Optional[SafetyLimits] = None):
        self.limits = limits or SafetyLimits()

    def evaluate(
        self,
        core_temp: float,
        pressure: float,
        coolant_flow: float
    ) -> List[TripCondition]:
        """
        Check the monitored parameters against the trip setpoints.

        Args:
            core_temp: Core temperature [°C]
            pressure: Primary pressure [bar]
            coolant_flow: Coolant flow [%]

        Returns:
            Breached conditions, empty if the reactor may keep operating
        """
        trips = []

        if core_temp > self.limits.max_core_temp:
            logger.warning(
                "Trip: core temperature %.1f °C > %.1f °C",
                core_temp, self.limits.max_core_temp,
            )
            trips.append(TripCondition.HIGH_CORE_TEMPERATURE)
        if pressure > self.limits.max_pressure:
            logger.warning(
                "Trip: pressure %.1f bar > %.1f bar",
                pressure, self.limits.max_pressure,
            )
            trips.append(TripCondition.HIGH_PRESSURE)
        if coolant_flow < self.limits.min_coolant_flow:
            logger.warning(
                "Trip: coolant flow %.1f%% < %.1f%%",
                coolant_flow, self.limits.min_coolant_flow,
            )
            trips.append(TripCondition.LOW_COOLANT_FLOW)

        return trips

    def get_safety_margins(
        self,
        core_temp: float,
        pressure: float,
        coolant_flow: float
    ) -> Dict[str, float]:
        """
        Calculate margins to each trip setpoint.

        Returns:
            Dictionary of margins (positive = safe, negative = exceeded)
        """
        return {
            "core_temp_margin": self.limits.max_core_temp - core_temp,
            "pressure_margin": self.limits.max_pressure - pressure,
            "coolant_flow_margin": coolant_flow - self.limits.min_coolant_flow,
        }
