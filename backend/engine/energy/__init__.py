"""Energy-state engine -- live generation, load, battery and price state."""

from .state import EnergySnapshot, EnergyState, WeatherCondition
from .model import EnergyStateModel, solar_multiplier
from .status import StatusLabels, classify

__all__ = [
    "EnergySnapshot",
    "EnergyState",
    "WeatherCondition",
    "EnergyStateModel",
    "solar_multiplier",
    "StatusLabels",
    "classify",
]
