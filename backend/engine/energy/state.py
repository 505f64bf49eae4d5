"""Live energy state of the home network and its immutable snapshot."""

from __future__ import annotations

import enum
from dataclasses import dataclass

BATTERY_MIN_LEVEL: float = 10.0
BATTERY_MAX_LEVEL: float = 95.0


class WeatherCondition(str, enum.Enum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    WINDY = "windy"
    RAINY = "rainy"


@dataclass
class EnergyState:
    """Mutable per-tick state.  Powers in kW, battery in % SOC, price in $/kWh."""

    solar_generation: float = 4.2
    wind_generation: float = 2.8
    battery_level: float = 75.0
    home_consumption: float = 3.5
    ev_charging: float = 7.2
    grid_price: float = 0.12
    weather_condition: WeatherCondition = WeatherCondition.SUNNY

    @property
    def total_generation(self) -> float:
        return self.solar_generation + self.wind_generation

    @property
    def total_consumption(self) -> float:
        return self.home_consumption + self.ev_charging

    @property
    def net_flow(self) -> float:
        """Positive exports to the grid, negative imports from it."""
        return self.total_generation - self.total_consumption

    def snapshot(self) -> EnergySnapshot:
        return EnergySnapshot(
            solar_generation=self.solar_generation,
            wind_generation=self.wind_generation,
            battery_level=self.battery_level,
            home_consumption=self.home_consumption,
            ev_charging=self.ev_charging,
            grid_price=self.grid_price,
            weather_condition=self.weather_condition,
            total_generation=self.total_generation,
            total_consumption=self.total_consumption,
            net_flow=self.net_flow,
        )


@dataclass(frozen=True)
class EnergySnapshot:
    """Read-only copy of :class:`EnergyState` with derived totals materialised."""

    solar_generation: float
    wind_generation: float
    battery_level: float
    home_consumption: float
    ev_charging: float
    grid_price: float
    weather_condition: WeatherCondition
    total_generation: float
    total_consumption: float
    net_flow: float
