"""Qualitative status labels for an energy snapshot.

Thresholds match the labels shown on the live dashboard, so any client
reading the snapshot gets the same wording.
"""

from __future__ import annotations

from dataclasses import dataclass

from engine.energy.state import EnergySnapshot


@dataclass(frozen=True)
class StatusLabels:
    solar: str
    wind: str
    home: str
    ev: str
    battery_health: str
    battery_mode: str
    grid_direction: str
    grid_flow_kw: float


def _tiered(value: float, upper: float, lower: float, labels: tuple[str, str, str]) -> str:
    if value > upper:
        return labels[0]
    if value > lower:
        return labels[1]
    return labels[2]


def solar_label(kw: float) -> str:
    return _tiered(kw, 5.0, 2.0, ("Peak", "Good", "Low"))


def wind_label(kw: float) -> str:
    return _tiered(kw, 4.0, 2.0, ("Strong", "Steady", "Light"))


def home_label(kw: float) -> str:
    return _tiered(kw, 4.0, 2.5, ("High", "Normal", "Low"))


def ev_label(kw: float) -> str:
    return _tiered(kw, 6.0, 3.0, ("Fast", "Normal", "Slow"))


def battery_health_label(level: float) -> str:
    return _tiered(level, 60.0, 30.0, ("Good", "Fair", "Low"))


def battery_mode_label(level: float, net_flow: float) -> str:
    """Charging on surplus below 90 %, discharging on deficit above 20 %."""
    if net_flow > 0 and level < 90:
        return "Charging"
    if net_flow < 0 and level > 20:
        return "Discharging"
    return "Standby"


def classify(snapshot: EnergySnapshot) -> StatusLabels:
    net = snapshot.net_flow
    return StatusLabels(
        solar=solar_label(snapshot.solar_generation),
        wind=wind_label(snapshot.wind_generation),
        home=home_label(snapshot.home_consumption),
        ev=ev_label(snapshot.ev_charging),
        battery_health=battery_health_label(snapshot.battery_level),
        battery_mode=battery_mode_label(snapshot.battery_level, net),
        grid_direction="Import" if net < 0 else "Export",
        grid_flow_kw=abs(net),
    )
