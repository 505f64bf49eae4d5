"""Time-of-use grid pricing for the live energy-state model.

The grid price follows a three-band time-of-use schedule (peak, mid-peak,
off-peak) and is re-quoted on a fixed market cadence.  Between quotes the
previous price is carried forward unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from engine.simulation.sources import RandomSource


# ======================================================================
# Pricing band
# ======================================================================

@dataclass(frozen=True)
class PricingBand:
    """A single time-of-use band with a uniform price range.

    Parameters
    ----------
    name : str
        Machine name (e.g. ``"peak"``).
    label : str
        Display label (e.g. ``"Peak"``).
    start_hour, end_hour : int
        Inclusive hour-of-day window, 0 -- 23.
    low, high : float
        Price range in $/kWh.  Quotes are drawn uniformly from
        ``[low, high)``.
    """

    name: str
    label: str
    start_hour: int
    end_hour: int
    low: float
    high: float

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour <= self.end_hour <= 23:
            raise ValueError(
                f"Band {self.name!r} needs 0 <= start_hour <= end_hour <= 23, "
                f"got {self.start_hour}..{self.end_hour}"
            )
        if self.low <= 0:
            raise ValueError(f"Band {self.name!r} low price must be > 0, got {self.low}")
        if self.high < self.low:
            raise ValueError(
                f"Band {self.name!r} needs low <= high, got {self.low} > {self.high}"
            )

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour <= self.end_hour

    def quote(self, rng: RandomSource) -> float:
        """Draw a price from this band's range."""
        return rng.uniform(self.low, self.high)


def default_bands(
    peak_hours: tuple[int, int] = (16, 21),
    mid_peak_hours: tuple[int, int] = (6, 16),
) -> List[PricingBand]:
    """Peak and mid-peak bands in priority order."""
    return [
        PricingBand("peak", "Peak", peak_hours[0], peak_hours[1], 0.18, 0.26),
        PricingBand("mid_peak", "Mid-Peak", mid_peak_hours[0], mid_peak_hours[1], 0.12, 0.16),
    ]


# ======================================================================
# Time-of-Use pricing policy
# ======================================================================

@dataclass
class TOUPricingPolicy:
    """Banded time-of-use price with a fixed refresh cadence.

    Parameters
    ----------
    bands : List[PricingBand]
        Bands checked in order; the first one containing the hour wins.
        Overlapping windows are allowed, so the default peak band (16 -- 21)
        takes hour 16 away from mid-peak (6 -- 16).
    off_peak : PricingBand
        Fallback band for any hour not covered by ``bands``.
    refresh_minutes : int
        Price is re-quoted only when ``minute % refresh_minutes == 0``.

    Example
    -------
    >>> policy = TOUPricingPolicy()
    >>> policy.band_for(16).name
    'peak'
    >>> policy.band_for(3).name
    'off_peak'
    """

    bands: List[PricingBand] = field(default_factory=default_bands)
    off_peak: PricingBand = field(
        default_factory=lambda: PricingBand("off_peak", "Off-Peak", 0, 23, 0.06, 0.10)
    )
    refresh_minutes: int = 15

    def __post_init__(self) -> None:
        if self.refresh_minutes <= 0:
            raise ValueError(
                f"refresh_minutes must be positive, got {self.refresh_minutes}"
            )

    def band_for(self, hour: int) -> PricingBand:
        """Return the band in force at *hour* (0 -- 23)."""
        for band in self.bands:
            if band.contains(hour):
                return band
        return self.off_peak

    def is_refresh_minute(self, minute: int) -> bool:
        return minute % self.refresh_minutes == 0

    def price_for(
        self,
        hour: int,
        minute: int,
        previous_price: float,
        rng: RandomSource,
    ) -> float:
        """Return the grid price for the given time of day.

        Parameters
        ----------
        hour : int
            Hour of day, 0 -- 23.
        minute : int
            Minute of hour, 0 -- 59.
        previous_price : float
            Price currently in force ($/kWh).
        rng : RandomSource
            Consumed only on refresh minutes.

        Returns
        -------
        float
            New price in $/kWh, or *previous_price* between refreshes.
        """
        if not self.is_refresh_minute(minute):
            return previous_price
        return self.band_for(hour).quote(rng)
