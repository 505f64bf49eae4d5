"""API test infrastructure — async httpx client over an app with a pinned clock and seed."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app
from engine.simulation.runner import SimulationCore
from engine.simulation.sources import FixedClock, NumpyRandomSource

# 18:00 falls in the peak pricing band.
PINNED_TIME = datetime(2024, 6, 1, 18, 0)


# ---------------------------------------------------------------------------
# FastAPI app with a deterministic simulation core
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def core() -> SimulationCore:
    return SimulationCore(clock=FixedClock(PINNED_TIME), rng=NumpyRandomSource(7))


@pytest_asyncio.fixture
async def app(core):
    application = create_app(cfg=Settings(autostart=False), core=core)
    yield application
    # ASGITransport skips the lifespan, so stop any scheduler a test started.
    await application.state.scheduler.stop()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
