from datetime import datetime

from pydantic import BaseModel

from engine.energy.state import WeatherCondition


class EnergyResponse(BaseModel):
    solar_generation: float
    wind_generation: float
    battery_level: float
    home_consumption: float
    ev_charging: float
    grid_price: float
    weather_condition: WeatherCondition
    total_generation: float
    total_consumption: float
    net_flow: float

    model_config = {"from_attributes": True}


class StatusLabelsResponse(BaseModel):
    solar: str
    wind: str
    home: str
    ev: str
    battery_health: str
    battery_mode: str
    grid_direction: str
    grid_flow_kw: float

    model_config = {"from_attributes": True}


class StatsResponse(BaseModel):
    total_savings: float
    energy_optimized: float
    co2_reduced: float
    social_cost_saved: float
    grid_stability_contributions: float

    model_config = {"from_attributes": True}


class BreakdownResponse(BaseModel):
    baseline_grid_use: float
    baseline_waste: float
    ai_grid_use: float
    ai_waste: float
    energy_saved: float
    cost_saved: float
    co2_saved_lbs: float
    social_cost_saved: float
    grid_contribution: float

    model_config = {"from_attributes": True}


class AgentRoleResponse(BaseModel):
    name: str
    role: str
    concern: str

    model_config = {"from_attributes": True}


class NegotiationTemplateResponse(BaseModel):
    message: str
    participant_count: int
    title: str
    scenario: str
    agents: list[AgentRoleResponse]
    transcript: list[str]
    outcome: str
    impact_summary: str

    model_config = {"from_attributes": True}


class DecisionTemplateResponse(BaseModel):
    summary: str
    title: str
    description: str
    analysis: str
    implementation_steps: list[str]
    responsible_agent: str
    confidence: str
    energy_impact: str
    cost_impact: str

    model_config = {"from_attributes": True}


class NegotiationEventResponse(BaseModel):
    id: int
    timestamp: datetime
    payload: NegotiationTemplateResponse

    model_config = {"from_attributes": True}


class DecisionEventResponse(BaseModel):
    id: int
    timestamp: datetime
    payload: DecisionTemplateResponse
    impact: str

    model_config = {"from_attributes": True}


class AgentPerformanceResponse(BaseModel):
    efficiency: float
    uptime: float
    decisions: int

    model_config = {"from_attributes": True}


class AgentProfileResponse(BaseModel):
    id: str
    name: str
    status: str
    priority: str
    current_tasks: list[str]
    performance: AgentPerformanceResponse
    recent_actions: list[str]
    next_scheduled: str

    model_config = {"from_attributes": True}


class SnapshotResponse(BaseModel):
    version: int
    timestamp: datetime | None
    energy: EnergyResponse
    pricing_band: str | None
    pricing_label: str | None
    labels: StatusLabelsResponse
    stats: StatsResponse
    last_breakdown: BreakdownResponse | None
    negotiations: list[NegotiationEventResponse]
    decisions: list[DecisionEventResponse]

    model_config = {"from_attributes": True}


class SchedulerStatusResponse(BaseModel):
    running: bool
    tick_count: int
    period_s: float
    snapshot_version: int
