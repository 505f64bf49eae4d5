"""Fixed-period tick scheduler for :class:`SimulationCore`.

The scheduler runs on the asyncio event loop of the hosting process.  Each
tick is synchronous and short, so stopping is simply cancelling the
sleeping task; there is never a half-finished tick to unwind.
"""

from __future__ import annotations

import asyncio
import logging

from engine.simulation.runner import SimulationCore
from engine.simulation.snapshot import SimulationSnapshot

logger = logging.getLogger(__name__)


class SimulationScheduler:
    """Drives ``core.tick()`` every ``period_s`` seconds.

    Parameters
    ----------
    core : SimulationCore
        Simulation to drive.
    period_s : float | None
        Tick period in seconds.  Defaults to the core's configured period.
    """

    def __init__(self, core: SimulationCore, period_s: float | None = None) -> None:
        self.core = core
        self.period_s = period_s if period_s is not None else core.config.tick_period_s
        if self.period_s <= 0:
            raise ValueError(f"period_s must be positive, got {self.period_s}")
        self.tick_count = 0
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking on the running event loop.  No-op if already running."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="simulation-scheduler"
        )
        self._task.add_done_callback(self._on_done)
        logger.info("Simulation scheduler started (period %.2f s)", self.period_s)

    async def stop(self) -> None:
        """Cancel the tick task and wait for it to finish.  No-op if stopped."""
        task = self._task
        if task is None:
            return
        self._task = None
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info(
            "Simulation scheduler stopped after %d ticks",
            self.tick_count,
            extra={"tick_count": self.tick_count, "snapshot_version": self.core.version},
        )

    def run_for(self, ticks: int) -> SimulationSnapshot:
        """Run *ticks* ticks back to back without sleeping."""
        if ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {ticks}")
        snapshot = self.core.snapshot()
        for _ in range(ticks):
            snapshot = self.core.tick()
            self.tick_count += 1
        return snapshot

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period_s)
            self.core.tick()
            self.tick_count += 1

    @staticmethod
    def _on_done(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Simulation scheduler died", exc_info=exc)
