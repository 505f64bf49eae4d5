"""Clock and random-number sources injected into the simulation core.

Every time-dependent rule reads the wall clock through a :class:`ClockSource`
and every stochastic rule draws through a :class:`RandomSource`.  Swapping
either one for a deterministic implementation makes a run fully replayable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from datetime import datetime

import numpy as np


# ======================================================================
# Clocks
# ======================================================================

class ClockSource(ABC):
    """Supplies the current wall-clock time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local time."""


class SystemClock(ClockSource):
    """Host clock, local time zone."""

    def now(self) -> datetime:  # noqa: D401
        return datetime.now().astimezone()


class FixedClock(ClockSource):
    """Always returns the same instant.  Useful for pinning the hour."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:  # noqa: D401
        return self.instant


class SequenceClock(ClockSource):
    """Replays a finite sequence of instants, one per call.

    Raises
    ------
    RuntimeError
        When the sequence is exhausted.
    """

    def __init__(self, instants: Iterable[datetime]) -> None:
        self._instants: Iterator[datetime] = iter(instants)

    def now(self) -> datetime:
        try:
            return next(self._instants)
        except StopIteration:
            raise RuntimeError("SequenceClock exhausted") from None


# ======================================================================
# Random numbers
# ======================================================================

class RandomSource(ABC):
    """Uniform random numbers in ``[0, 1)``.

    Subclasses only implement :meth:`random`; every derived draw goes
    through it, so one call to ``uniform`` or ``index`` consumes exactly one
    underlying number.
    """

    @abstractmethod
    def random(self) -> float:
        """Return a float uniformly distributed in ``[0, 1)``."""

    def uniform(self, low: float, high: float) -> float:
        """Return a float uniformly distributed in ``[low, high)``."""
        return low + (high - low) * self.random()

    def index(self, n: int) -> int:
        """Return an integer uniformly distributed in ``[0, n)``."""
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return min(int(self.random() * n), n - 1)


class NumpyRandomSource(RandomSource):
    """:class:`RandomSource` backed by :func:`numpy.random.default_rng`.

    Parameters
    ----------
    seed : int | None
        Seed for reproducible runs.  ``None`` draws fresh OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:  # noqa: D401
        return float(self._rng.random())
