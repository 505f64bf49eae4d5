import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, settings as default_settings
from app.api.v1 import catalogs, simulation
from app.core.logging import RequestLoggingMiddleware, setup_logging
from engine.events.catalog import (
    load_agent_roster,
    load_decision_catalog,
    load_negotiation_catalog,
)
from engine.simulation.runner import SimulationCore
from engine.simulation.scheduler import SimulationScheduler
from engine.simulation.sources import NumpyRandomSource

logger = logging.getLogger(__name__)


def build_core(cfg: Settings) -> SimulationCore:
    """Build the simulation from settings.  Raises ValueError on bad configuration."""
    return SimulationCore(
        config=cfg.to_simulation_config(),
        negotiations=load_negotiation_catalog(cfg.negotiation_catalog_path),
        decisions=load_decision_catalog(cfg.decision_catalog_path),
        rng=NumpyRandomSource(cfg.random_seed),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    cfg: Settings = app.state.settings
    setup_logging(json_format=cfg.log_json, debug=cfg.debug)
    scheduler: SimulationScheduler = app.state.scheduler
    if app.state.autostart:
        scheduler.start()
    else:
        logger.info("Autostart disabled; POST /api/v1/simulation/start to begin ticking")
    yield
    await scheduler.stop()


def create_app(
    cfg: Settings | None = None,
    core: SimulationCore | None = None,
    autostart: bool | None = None,
) -> FastAPI:
    cfg = cfg or default_settings

    application = FastAPI(
        title=cfg.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )

    core = core or build_core(cfg)
    application.state.settings = cfg
    application.state.core = core
    application.state.scheduler = SimulationScheduler(core)
    application.state.agents = load_agent_roster(cfg.agent_catalog_path)
    application.state.autostart = cfg.autostart if autostart is None else autostart

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cfg.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(simulation.router, prefix="/api/v1/simulation", tags=["simulation"])
    application.include_router(catalogs.router, prefix="/api/v1/catalogs", tags=["catalogs"])

    @application.get("/health")
    async def health_check() -> dict:
        scheduler: SimulationScheduler = application.state.scheduler
        return {
            "status": "ok",
            "scheduler": "running" if scheduler.is_running else "stopped",
            "snapshot_version": application.state.core.version,
        }

    return application


app = create_app()
