"""Shared test fixtures for the GAIFARE simulation engine and API tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from datetime import datetime, timedelta

import pytest

from engine.events.catalog import load_decision_catalog, load_negotiation_catalog
from engine.simulation.sources import NumpyRandomSource, RandomSource, SequenceClock


# ======================================================================
# Random sources
# ======================================================================

class ScriptedRandom(RandomSource):
    """Replays a fixed list of draws, cycling when exhausted.  Counts calls."""

    def __init__(self, values: Iterable[float]) -> None:
        values = list(values)
        if not values:
            raise ValueError("ScriptedRandom needs at least one value")
        self._values = itertools.cycle(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return next(self._values)


class ExplodingRandom(RandomSource):
    """Fails the test if any draw is made."""

    def random(self) -> float:
        raise AssertionError("unexpected random draw")


@pytest.fixture
def seeded_rng() -> NumpyRandomSource:
    return NumpyRandomSource(seed=42)


@pytest.fixture
def scripted():
    """Factory: ``scripted(0.5, 0.1)`` -> :class:`ScriptedRandom`."""
    def _make(*values: float) -> ScriptedRandom:
        return ScriptedRandom(values)
    return _make


@pytest.fixture
def exploding_rng() -> ExplodingRandom:
    return ExplodingRandom()


# ======================================================================
# Clocks
# ======================================================================

def minute_sequence(start: datetime, count: int, step_minutes: int = 1) -> list[datetime]:
    """*count* instants starting at *start*, *step_minutes* apart."""
    return [start + timedelta(minutes=i * step_minutes) for i in range(count)]


@pytest.fixture
def minutes():
    """Factory: ``minutes(start, count, step_minutes=1)`` -> list of datetimes."""
    return minute_sequence


@pytest.fixture
def full_day_clock() -> SequenceClock:
    """One tick every 3 minutes across a whole day (480 ticks)."""
    return SequenceClock(minute_sequence(datetime(2024, 6, 1, 0, 0), 480, step_minutes=3))


# ======================================================================
# Catalogs
# ======================================================================

@pytest.fixture(scope="session")
def negotiation_catalog():
    return load_negotiation_catalog()


@pytest.fixture(scope="session")
def decision_catalog():
    return load_decision_catalog()
