from fastapi import APIRouter, Depends

from app.core.deps import get_agent_roster, get_core
from app.schemas.simulation import (
    AgentProfileResponse,
    DecisionTemplateResponse,
    NegotiationTemplateResponse,
)
from engine.events.catalog import AgentProfile
from engine.simulation.runner import SimulationCore

router = APIRouter()


@router.get(
    "/negotiations",
    response_model=list[NegotiationTemplateResponse],
    summary="Negotiation templates",
    description="Scripted negotiation vignettes the event generator draws from.",
)
async def list_negotiation_templates(core: SimulationCore = Depends(get_core)):
    return [NegotiationTemplateResponse.model_validate(t) for t in core.events.negotiations]


@router.get(
    "/decisions",
    response_model=list[DecisionTemplateResponse],
    summary="Decision templates",
    description="Scripted coordination decisions the event generator draws from.",
)
async def list_decision_templates(core: SimulationCore = Depends(get_core)):
    return [DecisionTemplateResponse.model_validate(t) for t in core.events.decisions]


@router.get(
    "/agents",
    response_model=list[AgentProfileResponse],
    summary="Agent roster",
    description="Static profiles of the coordinating agents.",
)
async def list_agents(agents: tuple[AgentProfile, ...] = Depends(get_agent_roster)):
    return [AgentProfileResponse.model_validate(a) for a in agents]
