"""
Reactor Core Simulator Package

A deterministic, discrete-timestep model of a reactor core under
operator control, with an emergency shutdown interlock.

Modules:
    - constants: Model coefficients, safety limits, initial conditions
    - physics: Power, temperature and pressure relations
    - safety: Trip conditions and the safety system
    - reactor: Reactor state machine
    - simulation: Reference operator driver
"""

from .constants import ModelParameters, SafetyLimits, InitialConditions
from .safety import SafetyMode, TripCondition, SafetySystem
from .reactor import Reactor, ReactorState, ReactorStatus, create_reactor
from .simulation import OperatorCommand, SimulationResult, run_simulation

__version__ = "1.0.0"
__author__ = "Nuclear Engineering Model"

__all__ = [
    "ModelParameters",
    "SafetyLimits",
    "InitialConditions",
    "SafetyMode",
    "TripCondition",
    "SafetySystem",
    "Reactor",
    "ReactorState",
    "ReactorStatus",
    "create_reactor",
    "OperatorCommand",
    "SimulationResult",
    "run_simulation",
]
