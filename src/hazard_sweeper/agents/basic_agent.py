"""
Basic probe agent for Hazard Sweeper.

Serves as a baseline: it makes no deductions beyond frontier expansion and
probes unknown cells in row-major order.
"""
from typing import Optional

from ..logic.verdict import Action, Rule, Verdict
from .base_agent import BaseAgent


# ============================================================================
# Basic Probe Agent
# ============================================================================

class BasicProbeAgent(BaseAgent):
    """
    Agent that probes the first unknown cell it finds.

    Opens only the top-left corner. Every verdict after the frontier is a
    guess, so this agent loses whenever a hazard comes first in row-major
    order among the cells the frontier could not reach.
    """

    name = "basic"
    opens_center = False

    def decide(self) -> Optional[Verdict]:
        """Probe the first unknown cell in row-major order."""
        for cell in self.board.unresolved():
            return Verdict(cell.x, cell.y, Action.REVEAL, Rule.PROBE)
        return None
