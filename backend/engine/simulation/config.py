"""Engine-level simulation configuration."""

from __future__ import annotations

from dataclasses import dataclass

from engine.economics.benefits import AccrualConstants
from engine.energy.state import WeatherCondition
from engine.grid.tariff import TOUPricingPolicy, default_bands

MS_PER_MINUTE: float = 60_000.0


@dataclass(frozen=True)
class SimulationConfig:
    """All constants of the simulation core, validated on construction.

    ``interval_minutes`` is the simulated span integrated per tick:
    ``tick_period_ms / 60000 * demo_acceleration_factor``, i.e. 0.5 with
    the defaults (a 2 s tick stands for 30 s of operation).
    """

    tick_period_ms: int = 2000
    demo_acceleration_factor: float = 15.0
    baseline_efficiency: float = 0.65
    ai_efficiency: float = 0.95
    baseline_consumption_kwh: float = 4.5
    co2_factor_lbs_per_kwh: float = 0.85
    social_cost_per_ton_usd: float = 185.0
    max_log_entries: int = 5
    peak_hours: tuple[int, int] = (16, 21)
    mid_peak_hours: tuple[int, int] = (6, 16)
    negotiation_probability: float = 0.3
    decision_probability: float = 0.4
    price_refresh_minutes: int = 15
    ev_charging_kw: float = 7.2
    weather_condition: WeatherCondition = WeatherCondition.SUNNY

    def __post_init__(self) -> None:
        if self.tick_period_ms <= 0:
            raise ValueError(f"tick_period_ms must be positive, got {self.tick_period_ms}")
        if self.demo_acceleration_factor <= 0:
            raise ValueError(
                f"demo_acceleration_factor must be positive, got {self.demo_acceleration_factor}"
            )
        if self.max_log_entries < 1:
            raise ValueError(f"max_log_entries must be >= 1, got {self.max_log_entries}")
        for name in ("negotiation_probability", "decision_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.ev_charging_kw < 0:
            raise ValueError(f"ev_charging_kw must be >= 0, got {self.ev_charging_kw}")
        object.__setattr__(self, "weather_condition", WeatherCondition(self.weather_condition))
        # Fail fast on invalid bands and accrual constants.
        self.pricing_policy()
        self.accrual_constants()

    @property
    def tick_period_s(self) -> float:
        return self.tick_period_ms / 1000.0

    @property
    def interval_minutes(self) -> float:
        return self.tick_period_ms / MS_PER_MINUTE * self.demo_acceleration_factor

    def pricing_policy(self) -> TOUPricingPolicy:
        return TOUPricingPolicy(
            bands=default_bands(tuple(self.peak_hours), tuple(self.mid_peak_hours)),
            refresh_minutes=self.price_refresh_minutes,
        )

    def accrual_constants(self) -> AccrualConstants:
        return AccrualConstants(
            baseline_efficiency=self.baseline_efficiency,
            ai_efficiency=self.ai_efficiency,
            baseline_consumption_kwh=self.baseline_consumption_kwh,
            co2_factor_lbs_per_kwh=self.co2_factor_lbs_per_kwh,
            social_cost_per_ton_usd=self.social_cost_per_ton_usd,
            peak_hours=tuple(self.peak_hours),
        )
