"""Immutable view of the whole simulation, published once per tick."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from engine.economics.benefits import BenefitBreakdown, CumulativeStats
from engine.energy.state import EnergySnapshot
from engine.energy.status import StatusLabels
from engine.events.generator import DecisionEvent, NegotiationEvent


@dataclass(frozen=True)
class SimulationSnapshot:
    """Everything a presentation layer needs for one frame.

    ``version`` increases by one per tick; version 0 is the initial state
    before any tick has run, with no timestamp and no pricing band.
    ``stats`` is a detached copy.
    """

    version: int
    timestamp: datetime | None
    energy: EnergySnapshot
    pricing_band: str | None
    pricing_label: str | None
    labels: StatusLabels
    stats: CumulativeStats
    last_breakdown: BenefitBreakdown | None
    negotiations: tuple[NegotiationEvent, ...]
    decisions: tuple[DecisionEvent, ...]
