"""Probabilistic emission of scripted negotiation and decision events.

Each tick runs two independent Bernoulli trials, one per log.  On a hit a
template is picked uniformly from its catalog, stamped with a fresh id and
the tick time, and pushed onto a bounded newest-first log.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from engine.events.catalog import DecisionTemplate, NegotiationTemplate
from engine.events.log import BoundedLog
from engine.simulation.sources import RandomSource

logger = logging.getLogger(__name__)

IMPACT_RANGE_PCT: tuple[float, float] = (5.0, 20.0)


@dataclass(frozen=True)
class NegotiationEvent:
    id: int
    timestamp: datetime
    payload: NegotiationTemplate


@dataclass(frozen=True)
class DecisionEvent:
    id: int
    timestamp: datetime
    payload: DecisionTemplate
    impact: str


def format_impact(pct: float) -> str:
    """``12.345`` -> ``"+12.3% efficiency"``."""
    return f"+{pct:.1f}% efficiency"


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


class EventGenerator:
    """Maintains the negotiation and decision logs.

    Parameters
    ----------
    negotiations, decisions : Sequence
        Non-empty template catalogs.
    negotiation_probability, decision_probability : float
        Per-tick trigger probabilities.
    max_log_entries : int
        Capacity of each log.
    """

    def __init__(
        self,
        negotiations: Sequence[NegotiationTemplate],
        decisions: Sequence[DecisionTemplate],
        negotiation_probability: float = 0.3,
        decision_probability: float = 0.4,
        max_log_entries: int = 5,
    ) -> None:
        if not negotiations:
            raise ValueError("negotiation catalog must not be empty")
        if not decisions:
            raise ValueError("decision catalog must not be empty")
        _check_probability("negotiation_probability", negotiation_probability)
        _check_probability("decision_probability", decision_probability)

        self.negotiations = tuple(negotiations)
        self.decisions = tuple(decisions)
        self.negotiation_probability = negotiation_probability
        self.decision_probability = decision_probability

        self.negotiation_log: BoundedLog[NegotiationEvent] = BoundedLog(max_log_entries)
        self.decision_log: BoundedLog[DecisionEvent] = BoundedLog(max_log_entries)
        self._ids = itertools.count(1)

    def maybe_emit_negotiation(
        self, rng: RandomSource, now: datetime
    ) -> NegotiationEvent | None:
        if rng.random() >= self.negotiation_probability:
            return None
        template = self.negotiations[rng.index(len(self.negotiations))]
        event = NegotiationEvent(id=next(self._ids), timestamp=now, payload=template)
        self.negotiation_log.push(event)
        logger.debug("Negotiation #%d: %s", event.id, template.message)
        return event

    def maybe_emit_decision(
        self, rng: RandomSource, now: datetime
    ) -> DecisionEvent | None:
        if rng.random() >= self.decision_probability:
            return None
        template = self.decisions[rng.index(len(self.decisions))]
        impact = format_impact(rng.uniform(*IMPACT_RANGE_PCT))
        event = DecisionEvent(id=next(self._ids), timestamp=now, payload=template, impact=impact)
        self.decision_log.push(event)
        logger.debug("Decision #%d: %s (%s)", event.id, template.summary, impact)
        return event
