"""
Satisfiability agents for Hazard Sweeper.

Combine single-point inference with the satisfiability query driver. The two
concrete agents differ only in how the oracle is queried:

- SatDNFAgent: exact-k DNF, a fresh solve per candidate
- SatCNFAgent: cardinality CNF, one incremental solver per cycle
"""
from typing import Optional

from ..game.environment import GridEnvironment
from ..logic.query import (
    AssumptionQuery,
    AugmentationQuery,
    QueryOutcome,
    QueryStrategy,
    SatisfiabilityQueryDriver,
)
from ..logic.single_point import SinglePointInference
from ..logic.verdict import Verdict
from .base_agent import AgentConfig, BaseAgent


# ============================================================================
# SAT Agent
# ============================================================================

class SatAgent(BaseAgent):
    """
    Agent that falls back to a SAT oracle when local rules are not enough.

    With single_point_first (the default) each cycle tries AFN/AMN, then the
    oracle. Otherwise the oracle is asked first and AFN/AMN only runs when
    it proves nothing.
    """

    name = "sat"

    def __init__(
        self,
        environment: GridEnvironment,
        config: Optional[AgentConfig] = None,
        strategy: Optional[QueryStrategy] = None,
    ) -> None:
        """
        Args:
            environment: Environment to play.
            config: Agent configuration.
            strategy: Query strategy (default: the subclass's).
        """
        super().__init__(environment, config)
        self.single_point = SinglePointInference(self.board)
        self.query_driver = SatisfiabilityQueryDriver(
            self.board,
            strategy or self.make_strategy(),
            self.config.make_oracle,
        )
        self.last_outcome: Optional[QueryOutcome] = None

    def make_strategy(self) -> QueryStrategy:
        """Query strategy used when none is passed in."""
        return AssumptionQuery(self.config.cardinality_encoding)

    def decide(self) -> Optional[Verdict]:
        if self.config.single_point_first:
            return self.single_point.find_verdict() or self._query()
        return self._query() or self.single_point.find_verdict()

    def _query(self) -> Optional[Verdict]:
        outcome = self.query_driver.find_verdict()
        self.last_outcome = outcome
        if outcome.failure is not None:
            self.oracle_failures[outcome.failure] += 1
        return outcome.to_verdict()


class SatDNFAgent(SatAgent):
    """SAT agent using conjunctive augmentation over the DNF encoding."""

    name = "sat-dnf"

    def make_strategy(self) -> QueryStrategy:
        return AugmentationQuery()


class SatCNFAgent(SatAgent):
    """SAT agent using assumption queries over a cardinality CNF."""

    name = "sat-cnf"
