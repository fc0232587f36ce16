"""
Single-point agent for Hazard Sweeper.

Uses only the local AFN/AMN rules and stops as soon as they run dry.
"""
from typing import Optional

from ..game.environment import GridEnvironment
from ..logic.single_point import SinglePointInference
from ..logic.verdict import Verdict
from .base_agent import AgentConfig, BaseAgent


class SinglePointAgent(BaseAgent):
    """Agent restricted to single-point inference."""

    name = "single-point"

    def __init__(
        self,
        environment: GridEnvironment,
        config: Optional[AgentConfig] = None,
    ) -> None:
        super().__init__(environment, config)
        self.single_point = SinglePointInference(self.board)

    def decide(self) -> Optional[Verdict]:
        return self.single_point.find_verdict()
