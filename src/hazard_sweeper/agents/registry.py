"""
Agent registry.

The strategies form a closed set, chosen once when an episode is built.
The legacy labels P1..P4 are accepted as aliases.
"""
from enum import Enum
from typing import Dict, Optional, Type

from ..game.environment import GridEnvironment
from .base_agent import AgentConfig, BaseAgent
from .basic_agent import BasicProbeAgent
from .sat_agent import SatCNFAgent, SatDNFAgent
from .single_point_agent import SinglePointAgent


class AgentKind(Enum):
    """Available strategies."""

    BASIC_PROBE = "basic"
    SINGLE_POINT = "single-point"
    SAT_DNF = "sat-dnf"
    SAT_CNF = "sat-cnf"

    @classmethod
    def parse(cls, label: str) -> "AgentKind":
        """
        Resolve a strategy label or its legacy alias (P1..P4).

        Raises:
            ValueError: If the label names no strategy.
        """
        normalized = label.strip().lower()
        if normalized.upper() in LEGACY_LABELS:
            return LEGACY_LABELS[normalized.upper()]
        for kind in cls:
            if kind.value == normalized:
                return kind
        choices = [kind.value for kind in cls] + sorted(LEGACY_LABELS)
        raise ValueError(f"Unknown agent {label!r}; choose from {choices}")


LEGACY_LABELS: Dict[str, AgentKind] = {
    "P1": AgentKind.BASIC_PROBE,
    "P2": AgentKind.SINGLE_POINT,
    "P3": AgentKind.SAT_DNF,
    "P4": AgentKind.SAT_CNF,
}

AGENT_CLASSES: Dict[AgentKind, Type[BaseAgent]] = {
    AgentKind.BASIC_PROBE: BasicProbeAgent,
    AgentKind.SINGLE_POINT: SinglePointAgent,
    AgentKind.SAT_DNF: SatDNFAgent,
    AgentKind.SAT_CNF: SatCNFAgent,
}


def make_agent(
    kind: AgentKind,
    environment: GridEnvironment,
    config: Optional[AgentConfig] = None,
) -> BaseAgent:
    """Build the agent of the given kind for one episode."""
    return AGENT_CLASSES[kind](environment, config)
