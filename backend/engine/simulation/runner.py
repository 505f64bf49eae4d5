"""Simulation core: owns the shared state and advances it one tick at a time.

``SimulationCore`` wires together the energy-state model, the benefit
accrual engine and the event generator.  A tick runs all of them under a
single lock and publishes a new immutable :class:`SimulationSnapshot`;
readers only ever see complete snapshots.  Observers registered with
:meth:`SimulationCore.subscribe` are called after the lock is released.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from datetime import datetime
from typing import Callable

from engine.economics.benefits import BenefitAccrualEngine
from engine.energy.model import EnergyStateModel
from engine.energy.status import classify
from engine.events.catalog import (
    DecisionTemplate,
    NegotiationTemplate,
    load_decision_catalog,
    load_negotiation_catalog,
)
from engine.events.generator import EventGenerator
from engine.simulation.config import SimulationConfig
from engine.simulation.snapshot import SimulationSnapshot
from engine.simulation.sources import (
    ClockSource,
    NumpyRandomSource,
    RandomSource,
    SystemClock,
)

logger = logging.getLogger(__name__)

Observer = Callable[[SimulationSnapshot], None]


class SimulationCore:
    """Owner of the energy state, cumulative stats and event logs.

    Parameters
    ----------
    config : SimulationConfig | None
        Simulation constants.  Defaults to the standard demo values.
    negotiations, decisions : Sequence | None
        Template catalogs.  ``None`` loads the bundled JSON catalogs.
    clock : ClockSource | None
        Wall-clock source, sampled once per tick.
    rng : RandomSource | None
        The only source of randomness for every component.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        negotiations: Sequence[NegotiationTemplate] | None = None,
        decisions: Sequence[DecisionTemplate] | None = None,
        clock: ClockSource | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.clock = clock or SystemClock()
        self.rng = rng or NumpyRandomSource()

        if negotiations is None:
            negotiations = load_negotiation_catalog()
        if decisions is None:
            decisions = load_decision_catalog()

        self.energy_model = EnergyStateModel(
            pricing=self.config.pricing_policy(),
            ev_charging_kw=self.config.ev_charging_kw,
            weather_condition=self.config.weather_condition,
        )
        self.benefits = BenefitAccrualEngine(self.config.accrual_constants())
        self.events = EventGenerator(
            negotiations,
            decisions,
            negotiation_probability=self.config.negotiation_probability,
            decision_probability=self.config.decision_probability,
            max_log_entries=self.config.max_log_entries,
        )

        self._lock = threading.Lock()
        self._observers: list[Observer] = []
        self._version = 0
        self._fallback_clock = SystemClock()
        self._snapshot = self._build_snapshot(None)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> SimulationSnapshot:
        """Return the most recently published snapshot."""
        return self._snapshot

    def tick(self) -> SimulationSnapshot:
        """Run one full update and publish the resulting snapshot."""
        now = self._sample_clock()
        interval = self.config.interval_minutes

        with self._lock:
            state = self.energy_model.tick(now, self.rng)
            self.benefits.accrue(state, state.net_flow, interval, self.rng, now.hour)
            self.events.maybe_emit_negotiation(self.rng, now)
            self.events.maybe_emit_decision(self.rng, now)

            self._version += 1
            snapshot = self._build_snapshot(now)
            self._snapshot = snapshot

        logger.debug("Tick %d published at %s", snapshot.version, now.isoformat())
        self._notify(snapshot)
        return snapshot

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer* for every new snapshot.

        Returns a callable that removes the observer again.
        """
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _sample_clock(self) -> datetime:
        try:
            return self.clock.now()
        except Exception:
            logger.warning(
                "Clock %s failed, using system time for this tick",
                type(self.clock).__name__,
                exc_info=True,
            )
            return self._fallback_clock.now()

    def _notify(self, snapshot: SimulationSnapshot) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Snapshot observer %r failed", observer)

    def _build_snapshot(self, now: datetime | None) -> SimulationSnapshot:
        energy = self.energy_model.state.snapshot()
        # No band before the first tick: the clock is only sampled by tick().
        band = self.energy_model.pricing.band_for(now.hour) if now is not None else None
        return SimulationSnapshot(
            version=self._version,
            timestamp=now,
            energy=energy,
            pricing_band=band.name if band is not None else None,
            pricing_label=band.label if band is not None else None,
            labels=classify(energy),
            stats=self.benefits.snapshot(),
            last_breakdown=self.benefits.last_breakdown,
            negotiations=self.events.negotiation_log.items(),
            decisions=self.events.decision_log.items(),
        )
