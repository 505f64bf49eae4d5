"""Tests for engine.energy — state model, solar envelope and status labels."""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from engine.energy.model import EnergyStateModel, solar_multiplier
from engine.energy.state import EnergyState, WeatherCondition
from engine.energy.status import (
    battery_mode_label,
    classify,
    ev_label,
    home_label,
    solar_label,
    wind_label,
)


def _at(hour: int, minute: int = 7) -> datetime:
    return datetime(2024, 6, 1, hour, minute)


# ======================================================================
# Solar envelope
# ======================================================================


class TestSolarMultiplier:
    def test_noon_is_peak(self):
        assert solar_multiplier(12) == pytest.approx(1.0)

    def test_window_edges(self):
        assert solar_multiplier(6) == pytest.approx(0.2)
        assert solar_multiplier(18) == pytest.approx(0.2)

    @pytest.mark.parametrize("hour", [0, 5, 19, 23])
    def test_zero_outside_daylight(self, hour):
        assert solar_multiplier(hour) == 0.0

    def test_known_value(self):
        expected = math.sin(3 * math.pi / 12) * 0.8 + 0.2
        assert solar_multiplier(9) == pytest.approx(expected)


# ======================================================================
# Derived quantities
# ======================================================================


class TestEnergyState:
    def test_initial_values(self):
        s = EnergyState()
        assert s.total_generation == pytest.approx(7.0)
        assert s.total_consumption == pytest.approx(10.7)
        assert s.net_flow == pytest.approx(-3.7)
        assert s.weather_condition is WeatherCondition.SUNNY

    def test_snapshot_is_frozen_copy(self):
        s = EnergyState()
        snap = s.snapshot()
        s.solar_generation = 0.0
        assert snap.solar_generation == pytest.approx(4.2)
        assert snap.net_flow == pytest.approx(-3.7)
        with pytest.raises(AttributeError):
            snap.solar_generation = 1.0  # type: ignore[misc]


# ======================================================================
# Tick
# ======================================================================


class TestTick:
    def test_midpoint_draws(self, scripted):
        """All draws at 0.5: noise terms vanish, load at range midpoint."""
        model = EnergyStateModel()
        s = model.tick(_at(12), scripted(0.5))
        assert s.solar_generation == pytest.approx(8.0)
        assert s.wind_generation == pytest.approx(3.0)
        assert s.home_consumption == pytest.approx(3.5)
        assert s.battery_level == pytest.approx(75.0)
        assert s.grid_price == pytest.approx(0.12)

    def test_draw_order(self, scripted):
        """Off-cadence minute: solar, wind, home, battery in that order."""
        rng = scripted(0.0, 1.0 - 1e-12, 0.25, 0.75)
        s = EnergyStateModel().tick(_at(12), rng)
        assert s.solar_generation == pytest.approx(7.75)
        assert s.wind_generation == pytest.approx(4.0)
        assert s.home_consumption == pytest.approx(3.0)
        assert s.battery_level == pytest.approx(75.5)
        assert rng.calls == 4

    def test_price_drawn_first_on_refresh_minute(self, scripted):
        rng = scripted(0.0, 0.5, 0.5, 0.5, 0.5)
        s = EnergyStateModel().tick(_at(18, 0), rng)
        assert s.grid_price == pytest.approx(0.18)
        assert s.solar_generation == pytest.approx(8.0 * 0.2)
        assert rng.calls == 5

    def test_solar_clamped_at_night(self, scripted):
        s = EnergyStateModel().tick(_at(0), scripted(0.0))
        assert s.solar_generation == 0.0

    def test_battery_upper_clamp(self, scripted):
        model = EnergyStateModel(initial_state=EnergyState(battery_level=94.8))
        s = model.tick(_at(12), scripted(0.999999))
        assert s.battery_level == 95.0

    def test_battery_lower_clamp(self, scripted):
        model = EnergyStateModel(initial_state=EnergyState(battery_level=10.2))
        s = model.tick(_at(12), scripted(0.0))
        assert s.battery_level == 10.0

    def test_ev_and_weather_from_config(self, scripted):
        model = EnergyStateModel(ev_charging_kw=3.3, weather_condition="windy")
        s = model.tick(_at(12), scripted(0.5))
        assert s.ev_charging == 3.3
        assert s.weather_condition is WeatherCondition.WINDY

    def test_initial_state_not_mutated(self, scripted):
        initial = EnergyState(battery_level=99.0, ev_charging=1.0)
        model = EnergyStateModel(ev_charging_kw=3.3, weather_condition="rainy", initial_state=initial)
        model.tick(_at(12), scripted(0.5))
        assert model.state is not initial
        assert model.state.battery_level == pytest.approx(95.0)
        assert initial.battery_level == 99.0
        assert initial.ev_charging == 1.0
        assert initial.weather_condition is WeatherCondition.SUNNY
        assert initial.solar_generation == pytest.approx(4.2)

    def test_negative_ev_rejected(self):
        with pytest.raises(ValueError, match="ev_charging_kw"):
            EnergyStateModel(ev_charging_kw=-1.0)

    def test_tick_mutates_shared_state(self, seeded_rng):
        model = EnergyStateModel()
        assert model.tick(_at(9), seeded_rng) is model.state

    def test_values_stay_in_range(self, seeded_rng):
        model = EnergyStateModel()
        for i in range(24 * 60):
            s = model.tick(_at(i // 60, i % 60), seeded_rng)
            assert 10.0 <= s.battery_level <= 95.0
            assert s.solar_generation >= 0
            assert s.wind_generation >= 0
            assert s.home_consumption >= 0
            assert s.ev_charging >= 0
            assert s.grid_price > 0


# ======================================================================
# Status labels
# ======================================================================


class TestStatusLabels:
    @pytest.mark.parametrize("kw, label", [(5.1, "Peak"), (5.0, "Good"), (2.1, "Good"), (2.0, "Low")])
    def test_solar(self, kw, label):
        assert solar_label(kw) == label

    @pytest.mark.parametrize("kw, label", [(4.5, "Strong"), (3.0, "Steady"), (1.0, "Light")])
    def test_wind(self, kw, label):
        assert wind_label(kw) == label

    @pytest.mark.parametrize("kw, label", [(4.2, "High"), (3.0, "Normal"), (2.5, "Low")])
    def test_home(self, kw, label):
        assert home_label(kw) == label

    @pytest.mark.parametrize("kw, label", [(7.2, "Fast"), (4.0, "Normal"), (3.0, "Slow")])
    def test_ev(self, kw, label):
        assert ev_label(kw) == label

    @pytest.mark.parametrize(
        "level, net, mode",
        [
            (50, 1.0, "Charging"),
            (92, 1.0, "Standby"),
            (50, -1.0, "Discharging"),
            (15, -1.0, "Standby"),
            (50, 0.0, "Standby"),
        ],
    )
    def test_battery_mode(self, level, net, mode):
        assert battery_mode_label(level, net) == mode

    def test_classify_initial_state(self):
        labels = classify(EnergyState().snapshot())
        assert labels.solar == "Good"
        assert labels.wind == "Steady"
        assert labels.ev == "Fast"
        assert labels.battery_health == "Good"
        assert labels.battery_mode == "Discharging"
        assert labels.grid_direction == "Import"
        assert labels.grid_flow_kw == pytest.approx(3.7)
