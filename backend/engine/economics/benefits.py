"""Cumulative benefit of coordinated operation versus an uncoordinated baseline.

Each tick compares two hypothetical systems fed by the same renewable
generation:

* **Baseline** -- fixed 4.5 kWh consumption, 65 % of renewables usable.
* **Coordinated** -- actual home + EV consumption, 95 % of renewables usable.

The difference in grid draw and wasted generation over the tick interval is
the energy saved, which is then priced at the current grid rate and
converted to avoided CO2 and its social cost.  Results are integrated into
five monotonic counters.

Units: energy in kWh, power in kW, money in USD ($), CO2 in lbs.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Protocol

from engine.simulation.sources import RandomSource

logger = logging.getLogger(__name__)


# ======================================================================
# Constants
# ======================================================================

ENERGY_SAVED_FLOOR: float = 0.1
SAVINGS_FLOOR: float = 0.05
ENERGY_OPTIMIZED_FLOOR: float = 0.1
CO2_FLOOR: float = 0.1
SOCIAL_COST_FLOOR: float = 0.01


@dataclass(frozen=True)
class AccrualConstants:
    """Tunable constants of the benefit model.

    Parameters
    ----------
    baseline_efficiency : float
        Usable share of renewable generation without coordination.
    ai_efficiency : float
        Usable share of renewable generation with coordination.
    baseline_consumption_kwh : float
        Fixed consumption of the baseline system per interval unit.
    co2_factor_lbs_per_kwh : float
        Grid emission factor (US average).
    social_cost_per_ton_usd : float
        Social cost of carbon, $/ton CO2.
    ton_in_lbs : float
        Pounds per short ton.
    peak_hours : tuple[int, int]
        Inclusive window in which exports earn the peak multiplier.
    peak_export_multiplier, default_grid_multiplier : float
        Grid-contribution weights for peak exports and everything else.
    bonus_range : tuple[float, float]
        Efficiency-bonus draw range.
    """

    baseline_efficiency: float = 0.65
    ai_efficiency: float = 0.95
    baseline_consumption_kwh: float = 4.5
    co2_factor_lbs_per_kwh: float = 0.85
    social_cost_per_ton_usd: float = 185.0
    ton_in_lbs: float = 2000.0
    peak_hours: tuple[int, int] = (16, 21)
    peak_export_multiplier: float = 1.2
    default_grid_multiplier: float = 0.3
    bonus_range: tuple[float, float] = (0.8, 1.3)

    def __post_init__(self) -> None:
        for name in ("baseline_efficiency", "ai_efficiency"):
            value = getattr(self, name)
            if not 0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        for name in (
            "baseline_consumption_kwh",
            "co2_factor_lbs_per_kwh",
            "social_cost_per_ton_usd",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.ton_in_lbs <= 0:
            raise ValueError(f"ton_in_lbs must be positive, got {self.ton_in_lbs}")
        low, high = self.bonus_range
        if not 0 <= low <= high:
            raise ValueError(f"bonus_range must satisfy 0 <= low <= high, got {self.bonus_range}")


class _EnergyReading(Protocol):
    total_generation: float
    total_consumption: float
    grid_price: float


# ======================================================================
# Accumulators
# ======================================================================

@dataclass
class CumulativeStats:
    """Monotonic totals since process start."""

    total_savings: float = 0.0
    energy_optimized: float = 0.0
    co2_reduced: float = 0.0
    social_cost_saved: float = 0.0
    grid_stability_contributions: float = 0.0

    def copy(self) -> CumulativeStats:
        return CumulativeStats(**asdict(self))


@dataclass(frozen=True)
class BenefitBreakdown:
    """Un-randomised per-interval quantities (steps before the bonus)."""

    baseline_grid_use: float
    baseline_waste: float
    ai_grid_use: float
    ai_waste: float
    energy_saved: float
    cost_saved: float
    co2_saved_lbs: float
    social_cost_saved: float
    grid_contribution: float


# ======================================================================
# Pure calculation
# ======================================================================

def _in_window(hour: int, window: tuple[int, int]) -> bool:
    return window[0] <= hour <= window[1]


def compute_interval_benefits(
    total_generation: float,
    total_consumption: float,
    grid_price: float,
    net_flow: float,
    interval_minutes: float,
    hour: int,
    constants: AccrualConstants | None = None,
) -> BenefitBreakdown:
    """Compare baseline and coordinated operation over one interval.

    ``energy_saved`` is floored at 0.1 after scaling by the interval so
    every tick shows some progress; it is a display property of the
    model rather than a physical bound.
    """
    c = constants or AccrualConstants()
    gen = total_generation

    baseline_grid_use = max(0.0, c.baseline_consumption_kwh - gen * c.baseline_efficiency)
    baseline_waste = max(0.0, gen * c.baseline_efficiency - c.baseline_consumption_kwh)

    ai_grid_use = max(0.0, total_consumption - gen * c.ai_efficiency)
    ai_waste = max(0.0, gen * (1.0 - c.ai_efficiency))

    delta = (baseline_grid_use - ai_grid_use) + (baseline_waste - ai_waste)
    energy_saved = max(ENERGY_SAVED_FLOOR, delta * interval_minutes)

    cost_saved = energy_saved * grid_price
    co2_saved_lbs = energy_saved * c.co2_factor_lbs_per_kwh
    social_cost_saved = (co2_saved_lbs / c.ton_in_lbs) * c.social_cost_per_ton_usd

    if _in_window(hour, c.peak_hours) and net_flow > 0:
        multiplier = c.peak_export_multiplier
    else:
        multiplier = c.default_grid_multiplier
    grid_contribution = abs(net_flow) * interval_minutes * multiplier

    return BenefitBreakdown(
        baseline_grid_use=baseline_grid_use,
        baseline_waste=baseline_waste,
        ai_grid_use=ai_grid_use,
        ai_waste=ai_waste,
        energy_saved=energy_saved,
        cost_saved=cost_saved,
        co2_saved_lbs=co2_saved_lbs,
        social_cost_saved=social_cost_saved,
        grid_contribution=grid_contribution,
    )


# ======================================================================
# Engine
# ======================================================================

class BenefitAccrualEngine:
    """Integrates per-tick benefits into :class:`CumulativeStats`.

    The engine does not know about demo acceleration; the caller passes the
    simulated minute span of each tick.
    """

    def __init__(self, constants: AccrualConstants | None = None) -> None:
        self.constants = constants or AccrualConstants()
        self.stats = CumulativeStats()
        self.last_breakdown: BenefitBreakdown | None = None

    def accrue(
        self,
        state: _EnergyReading,
        net_flow: float,
        interval_minutes: float,
        rng: RandomSource,
        hour: int,
    ) -> CumulativeStats:
        """Add one interval's benefits to the running totals and return them.

        Every delta is clamped to its floor, so no counter can decrease.
        """
        if interval_minutes < 0:
            raise ValueError(f"interval_minutes must be >= 0, got {interval_minutes}")

        b = compute_interval_benefits(
            total_generation=state.total_generation,
            total_consumption=state.total_consumption,
            grid_price=state.grid_price,
            net_flow=net_flow,
            interval_minutes=interval_minutes,
            hour=hour,
            constants=self.constants,
        )
        bonus = rng.uniform(*self.constants.bonus_range)

        s = self.stats
        s.total_savings += max(SAVINGS_FLOOR, b.cost_saved * bonus)
        s.energy_optimized += max(ENERGY_OPTIMIZED_FLOOR, b.energy_saved * bonus)
        s.co2_reduced += max(CO2_FLOOR, b.co2_saved_lbs * bonus)
        s.social_cost_saved += max(SOCIAL_COST_FLOOR, b.social_cost_saved * bonus)
        s.grid_stability_contributions += max(0.0, b.grid_contribution)

        self.last_breakdown = b
        logger.debug(
            "Accrued: saved=%.3f kWh bonus=%.2f totals=$%.2f / %.1f kWh",
            b.energy_saved, bonus, s.total_savings, s.energy_optimized,
        )
        return s

    def snapshot(self) -> CumulativeStats:
        """Detached copy of the current totals."""
        return self.stats.copy()
