"""Scripted coordination events -- catalogs, bounded logs and the generator."""

from .catalog import (
    AgentProfile,
    AgentRole,
    DecisionTemplate,
    NegotiationTemplate,
    load_agent_roster,
    load_decision_catalog,
    load_negotiation_catalog,
)
from .log import BoundedLog
from .generator import DecisionEvent, EventGenerator, NegotiationEvent

__all__ = [
    "AgentProfile",
    "AgentRole",
    "DecisionTemplate",
    "NegotiationTemplate",
    "load_agent_roster",
    "load_decision_catalog",
    "load_negotiation_catalog",
    "BoundedLog",
    "DecisionEvent",
    "EventGenerator",
    "NegotiationEvent",
]
