from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from engine.energy.state import WeatherCondition
from engine.simulation.config import SimulationConfig


class Settings(BaseSettings):
    model_config = {"env_prefix": "GAIFARE_", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "GAIFARE Simulator"
    log_json: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Scheduler
    autostart: bool = True
    random_seed: int | None = None
    tick_period_ms: int = Field(default=2000, gt=0)
    demo_acceleration_factor: float = Field(default=15.0, gt=0)

    # Benefit model
    baseline_efficiency: float = Field(default=0.65, gt=0, le=1)
    ai_efficiency: float = Field(default=0.95, gt=0, le=1)
    baseline_consumption_kwh: float = Field(default=4.5, ge=0)
    co2_factor_lbs_per_kwh: float = Field(default=0.85, ge=0)
    social_cost_per_ton_usd: float = Field(default=185.0, ge=0)

    # Pricing
    peak_hours: tuple[int, int] = (16, 21)
    mid_peak_hours: tuple[int, int] = (6, 16)
    price_refresh_minutes: int = Field(default=15, gt=0, le=60)

    # Events
    max_log_entries: int = Field(default=5, ge=1)
    negotiation_probability: float = Field(default=0.3, ge=0, le=1)
    decision_probability: float = Field(default=0.4, ge=0, le=1)
    negotiation_catalog_path: str | None = None
    decision_catalog_path: str | None = None
    agent_catalog_path: str | None = None

    # Static inputs
    ev_charging_kw: float = Field(default=7.2, ge=0)
    weather_condition: WeatherCondition = WeatherCondition.SUNNY

    @model_validator(mode="after")
    def _check_hour_windows(self) -> "Settings":
        for name in ("peak_hours", "mid_peak_hours"):
            start, end = getattr(self, name)
            if not 0 <= start <= end <= 23:
                raise ValueError(f"{name} must satisfy 0 <= start <= end <= 23, got {start}..{end}")
        return self

    def to_simulation_config(self) -> SimulationConfig:
        return SimulationConfig(
            tick_period_ms=self.tick_period_ms,
            demo_acceleration_factor=self.demo_acceleration_factor,
            baseline_efficiency=self.baseline_efficiency,
            ai_efficiency=self.ai_efficiency,
            baseline_consumption_kwh=self.baseline_consumption_kwh,
            co2_factor_lbs_per_kwh=self.co2_factor_lbs_per_kwh,
            social_cost_per_ton_usd=self.social_cost_per_ton_usd,
            max_log_entries=self.max_log_entries,
            peak_hours=self.peak_hours,
            mid_peak_hours=self.mid_peak_hours,
            negotiation_probability=self.negotiation_probability,
            decision_probability=self.decision_probability,
            price_refresh_minutes=self.price_refresh_minutes,
            ev_charging_kw=self.ev_charging_kw,
            weather_condition=self.weather_condition,
        )


settings = Settings()
