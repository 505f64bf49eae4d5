from fastapi import HTTPException, Request, status

from engine.events.catalog import AgentProfile
from engine.simulation.runner import SimulationCore
from engine.simulation.scheduler import SimulationScheduler


def get_core(request: Request) -> SimulationCore:
    core = getattr(request.app.state, "core", None)
    if core is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Simulation not initialised",
        )
    return core


def get_scheduler(request: Request) -> SimulationScheduler:
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Simulation not initialised",
        )
    return scheduler


def get_agent_roster(request: Request) -> tuple[AgentProfile, ...]:
    return getattr(request.app.state, "agents", ())
