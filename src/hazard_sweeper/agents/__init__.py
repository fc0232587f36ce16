"""
Hazard Sweeper agents module.

Provides the episode driver and its strategies:
- BasicProbeAgent: frontier expansion plus row-major probing (baseline)
- SinglePointAgent: AFN/AMN local rules only
- SatDNFAgent: local rules plus SAT queries over the DNF encoding
- SatCNFAgent: local rules plus incremental SAT queries over a CNF encoding
"""
from .base_agent import (
    AgentConfig,
    BaseAgent,
    EpisodeResult,
    EpisodeState,
    RESULT_MESSAGES,
)
from .basic_agent import BasicProbeAgent
from .single_point_agent import SinglePointAgent
from .sat_agent import SatAgent, SatCNFAgent, SatDNFAgent
from .registry import AGENT_CLASSES, AgentKind, LEGACY_LABELS, make_agent

__all__ = [
    "AgentConfig",
    "BaseAgent",
    "EpisodeResult",
    "EpisodeState",
    "RESULT_MESSAGES",
    "BasicProbeAgent",
    "SinglePointAgent",
    "SatAgent",
    "SatCNFAgent",
    "SatDNFAgent",
    "AGENT_CLASSES",
    "AgentKind",
    "LEGACY_LABELS",
    "make_agent",
]
