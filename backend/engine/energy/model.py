"""Per-tick evolution of the home energy network.

Generation and load follow deliberately simple stochastic approximations:

* **Solar** -- a sinusoidal daylight envelope over hours 6 -- 18 scaled to an
  8 kW array, plus small uniform noise.
* **Wind** -- a 3 kW mean with +/-1 kW uniform variability, independent of
  the time of day.
* **Home load** -- fresh uniform draw each tick, no smoothing.
* **Battery** -- bounded random walk on state of charge.

EV charging and the weather label are held fixed from configuration.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime

import numpy as np

from engine.energy.state import (
    BATTERY_MAX_LEVEL,
    BATTERY_MIN_LEVEL,
    EnergyState,
    WeatherCondition,
)
from engine.grid.tariff import TOUPricingPolicy
from engine.simulation.sources import RandomSource

logger = logging.getLogger(__name__)

# ======================================================================
# Constants
# ======================================================================

SOLAR_PEAK_KW: float = 8.0
SOLAR_NOISE_KW: float = 0.25
DAYLIGHT_START_HOUR: int = 6
DAYLIGHT_END_HOUR: int = 18

WIND_MEAN_KW: float = 3.0
WIND_NOISE_KW: float = 1.0

HOME_LOAD_MIN_KW: float = 2.5
HOME_LOAD_MAX_KW: float = 4.5

BATTERY_STEP_PCT: float = 1.0


def solar_multiplier(hour: int) -> float:
    """Fraction of peak solar output for *hour* (0 -- 23).

    ``sin((hour - 6) * pi / 12) * 0.8 + 0.2`` inside the daylight window,
    0 outside it.  The 0.2 floor keeps dawn and dusk hours non-zero.
    """
    if not DAYLIGHT_START_HOUR <= hour <= DAYLIGHT_END_HOUR:
        return 0.0
    return math.sin((hour - DAYLIGHT_START_HOUR) * math.pi / 12) * 0.8 + 0.2


class EnergyStateModel:
    """Owns the single :class:`EnergyState` and advances it each tick.

    Parameters
    ----------
    pricing : TOUPricingPolicy
        Grid price policy.
    ev_charging_kw : float
        Constant EV charger draw (kW).
    weather_condition : WeatherCondition
        Informational weather label.
    initial_state : EnergyState | None
        Starting state, copied.  Defaults to the standard demo values.
    """

    def __init__(
        self,
        pricing: TOUPricingPolicy | None = None,
        ev_charging_kw: float = 7.2,
        weather_condition: WeatherCondition = WeatherCondition.SUNNY,
        initial_state: EnergyState | None = None,
    ) -> None:
        if ev_charging_kw < 0:
            raise ValueError(f"ev_charging_kw must be >= 0, got {ev_charging_kw}")

        self.pricing = pricing or TOUPricingPolicy()
        self.state = replace(initial_state) if initial_state is not None else EnergyState()
        self.state.ev_charging = ev_charging_kw
        self.state.weather_condition = WeatherCondition(weather_condition)
        self.state.battery_level = float(
            np.clip(self.state.battery_level, BATTERY_MIN_LEVEL, BATTERY_MAX_LEVEL)
        )

    def tick(self, now: datetime, rng: RandomSource) -> EnergyState:
        """Advance the shared state to *now* and return it.

        Draws happen in a fixed order (price on refresh minutes, solar,
        wind, home load, battery) so seeded runs replay exactly.
        """
        s = self.state

        s.grid_price = self.pricing.price_for(now.hour, now.minute, s.grid_price, rng)

        solar_noise = rng.uniform(-SOLAR_NOISE_KW, SOLAR_NOISE_KW)
        s.solar_generation = max(0.0, SOLAR_PEAK_KW * solar_multiplier(now.hour) + solar_noise)

        wind_noise = rng.uniform(-WIND_NOISE_KW, WIND_NOISE_KW)
        s.wind_generation = max(0.0, WIND_MEAN_KW + wind_noise)

        s.home_consumption = rng.uniform(HOME_LOAD_MIN_KW, HOME_LOAD_MAX_KW)

        battery_noise = rng.uniform(-BATTERY_STEP_PCT, BATTERY_STEP_PCT)
        s.battery_level = float(
            np.clip(s.battery_level + battery_noise, BATTERY_MIN_LEVEL, BATTERY_MAX_LEVEL)
        )

        logger.debug(
            "Energy tick %02d:%02d: gen=%.2f kW load=%.2f kW price=%.3f",
            now.hour, now.minute, s.total_generation, s.total_consumption, s.grid_price,
        )
        return s
