"""
Agent evaluation.

Runs agent variants over seeded random layouts and aggregates the outcomes.
Every variant in a comparison plays the same layouts.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..agents.base_agent import AgentConfig, EpisodeResult, EpisodeState
from ..agents.registry import AgentKind, make_agent
from ..game.environment import GridEnvironment, HazardPolicy
from ..game.layout import GridLayout, default_safe_cells
from ..logic.verdict import Rule


logger = logging.getLogger(__name__)


# ============================================================================
# Evaluation Configuration
# ============================================================================

@dataclass
class EvaluationConfig:
    """Configuration for evaluating agents on random layouts."""

    # Layout settings
    size: int = 7
    hazard_count: int = 5

    # Run settings
    num_episodes: int = 100
    seed: Optional[int] = None
    hazard_policy: HazardPolicy = HazardPolicy.TERMINATE

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.size < 1:
            raise ValueError("Grid dimensions must be positive")
        if self.hazard_count < 0:
            raise ValueError("Number of hazards cannot be negative")
        max_hazards = self.size * self.size - len(default_safe_cells(self.size))
        if self.hazard_count > max_hazards:
            raise ValueError(f"Too many hazards (max {max_hazards})")
        if self.num_episodes < 1:
            raise ValueError("Number of episodes must be positive")


# ============================================================================
# Episode Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single episode."""

    state: EpisodeState
    cycles: int = 0
    probes: int = 0
    flags: int = 0
    revealed_cells: int = 0
    hazards_exposed: int = 0
    verdicts: Dict[Rule, int] = field(default_factory=dict)

    @classmethod
    def from_result(cls, result: EpisodeResult) -> "EpisodeStats":
        return cls(
            state=result.state,
            cycles=result.cycles,
            probes=result.probes,
            flags=result.flags,
            revealed_cells=result.board.revealed_count,
            hazards_exposed=result.hazards_exposed,
            verdicts=dict(result.verdicts),
        )

    @property
    def won(self) -> bool:
        return self.state == EpisodeState.WON


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agent variants.

    Provides standardized evaluation on one reproducible set of layouts.
    """

    def __init__(
        self,
        config: Optional[EvaluationConfig] = None,
        agent_config: Optional[AgentConfig] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Layout and run settings.
            agent_config: Configuration handed to every agent.
        """
        self.config = config or EvaluationConfig()
        self.agent_config = agent_config or AgentConfig()
        self._layouts: Optional[List[GridLayout]] = None

    def layouts(self) -> List[GridLayout]:
        """The evaluation layouts, generated once from the configured seed."""
        if self._layouts is None:
            rng = np.random.default_rng(self.config.seed)
            seeds = rng.integers(0, 2**32, size=self.config.num_episodes)
            self._layouts = [
                GridLayout.random(
                    self.config.size, self.config.hazard_count, seed=int(seed)
                )
                for seed in seeds
            ]
        return self._layouts

    def run_episode(self, kind: AgentKind, layout: GridLayout) -> EpisodeStats:
        """Play one layout with a fresh agent of the given kind."""
        environment = GridEnvironment(layout, self.config.hazard_policy)
        agent = make_agent(kind, environment, self.agent_config)
        return EpisodeStats.from_result(agent.play())

    def evaluate(self, kind: AgentKind) -> Dict[str, float]:
        """
        Evaluate a single agent kind.

        Args:
            kind: Agent kind to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        episodes = [self.run_episode(kind, layout) for layout in self.layouts()]
        return summarize(episodes)

    def compare(
        self, kinds: Optional[Iterable[AgentKind]] = None
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare several agent kinds on the same layouts.

        Args:
            kinds: Kinds to compare (default: all of them).

        Returns:
            Dictionary of agent label -> evaluation metrics.
        """
        results = {}
        for kind in kinds or list(AgentKind):
            logger.info("Evaluating %s...", kind.value)
            results[kind.value] = self.evaluate(kind)
        return results


def summarize(episodes: List[EpisodeStats]) -> Dict[str, float]:
    """Aggregate episode statistics into rates and averages."""
    if not episodes:
        raise ValueError("No episodes to summarize")

    def rate(state: EpisodeState) -> float:
        return float(np.mean([episode.state == state for episode in episodes]))

    def average(values: List[int]) -> float:
        return float(np.mean(values))

    return {
        "win_rate": rate(EpisodeState.WON),
        "loss_rate": rate(EpisodeState.LOST),
        "stuck_rate": rate(EpisodeState.STUCK),
        "avg_cycles": average([episode.cycles for episode in episodes]),
        "avg_probes": average([episode.probes for episode in episodes]),
        "avg_revealed": average([episode.revealed_cells for episode in episodes]),
        "avg_sat_verdicts": average(
            [episode.verdicts.get(Rule.SAT, 0) for episode in episodes]
        ),
        "avg_exposed": average([episode.hazards_exposed for episode in episodes]),
    }
