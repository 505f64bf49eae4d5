from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_core, get_scheduler
from app.schemas.simulation import (
    DecisionEventResponse,
    EnergyResponse,
    NegotiationEventResponse,
    SchedulerStatusResponse,
    SnapshotResponse,
    StatsResponse,
)
from engine.simulation.runner import SimulationCore
from engine.simulation.scheduler import SimulationScheduler

router = APIRouter()


def _status(scheduler: SimulationScheduler) -> SchedulerStatusResponse:
    return SchedulerStatusResponse(
        running=scheduler.is_running,
        tick_count=scheduler.tick_count,
        period_s=scheduler.period_s,
        snapshot_version=scheduler.core.version,
    )


@router.get(
    "/snapshot",
    response_model=SnapshotResponse,
    summary="Current snapshot",
    description="Return the latest published simulation snapshot: energy state, cumulative benefits and both event logs.",
)
async def get_snapshot(core: SimulationCore = Depends(get_core)):
    return SnapshotResponse.model_validate(core.snapshot())


@router.get(
    "/energy",
    response_model=EnergyResponse,
    summary="Energy state",
    description="Current generation, load, battery, grid price and derived net flow.",
)
async def get_energy(core: SimulationCore = Depends(get_core)):
    return EnergyResponse.model_validate(core.snapshot().energy)


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Cumulative benefits",
    description="Savings, optimized energy, CO2 reduction, social cost of carbon and grid contributions since start.",
)
async def get_stats(core: SimulationCore = Depends(get_core)):
    return StatsResponse.model_validate(core.snapshot().stats)


@router.get(
    "/logs/negotiations",
    response_model=list[NegotiationEventResponse],
    summary="Negotiation log",
    description="Most recent negotiation events, newest first.",
)
async def get_negotiations(core: SimulationCore = Depends(get_core)):
    return [NegotiationEventResponse.model_validate(e) for e in core.snapshot().negotiations]


@router.get(
    "/logs/decisions",
    response_model=list[DecisionEventResponse],
    summary="Decision log",
    description="Most recent decision events, newest first.",
)
async def get_decisions(core: SimulationCore = Depends(get_core)):
    return [DecisionEventResponse.model_validate(e) for e in core.snapshot().decisions]


@router.get(
    "/logs/{log_name}",
    include_in_schema=False,
)
async def unknown_log(log_name: str):
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown log '{log_name}'")


@router.get(
    "/status",
    response_model=SchedulerStatusResponse,
    summary="Scheduler status",
)
async def get_status(scheduler: SimulationScheduler = Depends(get_scheduler)):
    return _status(scheduler)


@router.post(
    "/start",
    response_model=SchedulerStatusResponse,
    summary="Start ticking",
    description="Start the periodic tick. Starting a running simulation is a no-op.",
)
async def start_simulation(scheduler: SimulationScheduler = Depends(get_scheduler)):
    scheduler.start()
    return _status(scheduler)


@router.post(
    "/stop",
    response_model=SchedulerStatusResponse,
    summary="Stop ticking",
    description="Cancel the periodic tick. State is kept; stopping a stopped simulation is a no-op.",
)
async def stop_simulation(scheduler: SimulationScheduler = Depends(get_scheduler)):
    await scheduler.stop()
    return _status(scheduler)


@router.post(
    "/tick",
    response_model=SnapshotResponse,
    summary="Advance one tick",
    description="Run a single tick immediately and return the resulting snapshot.",
)
async def manual_tick(scheduler: SimulationScheduler = Depends(get_scheduler)):
    return SnapshotResponse.model_validate(scheduler.run_for(1))
