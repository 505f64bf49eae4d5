"""Scripted negotiation, decision and agent catalogs.

Catalogs are read-only JSON tables shipped in ``engine/events/data``.  Each
table is loaded once at startup into frozen records; a missing key, a
malformed file or an empty table raises ``ValueError`` so a bad catalog
stops the process instead of degrading the event stream.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
NEGOTIATIONS_FILE = DATA_DIR / "negotiations.json"
DECISIONS_FILE = DATA_DIR / "decisions.json"
AGENTS_FILE = DATA_DIR / "agents.json"

T = TypeVar("T")


# ======================================================================
# Records
# ======================================================================

@dataclass(frozen=True)
class AgentRole:
    """A participant in a negotiation vignette."""
    name: str
    role: str
    concern: str


@dataclass(frozen=True)
class NegotiationTemplate:
    message: str
    participant_count: int
    title: str
    scenario: str
    agents: tuple[AgentRole, ...]
    transcript: tuple[str, ...]
    outcome: str
    impact_summary: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NegotiationTemplate:
        participant_count = int(data["participant_count"])
        if participant_count < 1:
            raise ValueError(f"participant_count must be >= 1, got {participant_count}")
        return cls(
            message=str(data["message"]),
            participant_count=participant_count,
            title=str(data["title"]),
            scenario=str(data["scenario"]),
            agents=tuple(
                AgentRole(name=a["name"], role=a["role"], concern=a["concern"])
                for a in data["agents"]
            ),
            transcript=tuple(str(line) for line in data["transcript"]),
            outcome=str(data["outcome"]),
            impact_summary=str(data["impact_summary"]),
        )


@dataclass(frozen=True)
class DecisionTemplate:
    summary: str
    title: str
    description: str
    analysis: str
    implementation_steps: tuple[str, ...]
    responsible_agent: str
    confidence: str
    energy_impact: str
    cost_impact: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DecisionTemplate:
        return cls(
            summary=str(data["summary"]),
            title=str(data["title"]),
            description=str(data["description"]),
            analysis=str(data["analysis"]),
            implementation_steps=tuple(str(s) for s in data["implementation_steps"]),
            responsible_agent=str(data["responsible_agent"]),
            confidence=str(data["confidence"]),
            energy_impact=str(data["energy_impact"]),
            cost_impact=str(data["cost_impact"]),
        )


@dataclass(frozen=True)
class AgentPerformance:
    efficiency: float
    uptime: float
    decisions: int


@dataclass(frozen=True)
class AgentProfile:
    """Static description of one coordinating agent."""
    id: str
    name: str
    status: str
    priority: str
    current_tasks: tuple[str, ...]
    performance: AgentPerformance
    recent_actions: tuple[str, ...]
    next_scheduled: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AgentProfile:
        perf = data["performance"]
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            status=str(data["status"]),
            priority=str(data["priority"]),
            current_tasks=tuple(str(t) for t in data["current_tasks"]),
            performance=AgentPerformance(
                efficiency=float(perf["efficiency"]),
                uptime=float(perf["uptime"]),
                decisions=int(perf["decisions"]),
            ),
            recent_actions=tuple(str(a) for a in data["recent_actions"]),
            next_scheduled=str(data["next_scheduled"]),
        )


# ======================================================================
# Loading
# ======================================================================

def _load_table(
    path: str | Path,
    factory: Callable[[dict[str, Any]], T],
    kind: str,
) -> tuple[T, ...]:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ValueError(f"{kind} catalog not found: {path}") from None
    except json.JSONDecodeError as exc:
        raise ValueError(f"{kind} catalog {path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError(f"{kind} catalog {path} must be a JSON list, got {type(raw).__name__}")
    if not raw:
        raise ValueError(f"{kind} catalog {path} is empty")

    records = []
    for idx, entry in enumerate(raw):
        try:
            records.append(factory(entry))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"{kind} catalog {path} entry {idx} is malformed: {exc!r}") from exc

    logger.info("Loaded %d %s templates from %s", len(records), kind, path.name)
    return tuple(records)


def load_negotiation_catalog(path: str | Path | None = None) -> tuple[NegotiationTemplate, ...]:
    return _load_table(path or NEGOTIATIONS_FILE, NegotiationTemplate.from_dict, "negotiation")


def load_decision_catalog(path: str | Path | None = None) -> tuple[DecisionTemplate, ...]:
    return _load_table(path or DECISIONS_FILE, DecisionTemplate.from_dict, "decision")


def load_agent_roster(path: str | Path | None = None) -> tuple[AgentProfile, ...]:
    return _load_table(path or AGENTS_FILE, AgentProfile.from_dict, "agent")
