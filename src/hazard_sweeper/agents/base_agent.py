"""
Base agent interface for Hazard Sweeper.

Holds the driver loop shared by every strategy. An agent owns a knowledge
board for one episode, opens the grid, and then runs cycles: frontier
expansion, at most one verdict from the strategy, and a state update, until
the episode is WON, LOST or STUCK.
"""
import logging
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from pysat.card import EncType

from ..game.board import KnowledgeBoard
from ..game.environment import GridEnvironment, ProbeResult
from ..game.layout import default_safe_cells
from ..game.render import mark_exposed
from ..logic.frontier import FrontierExpander
from ..logic.oracle import DEFAULT_SOLVER, SatOracle, is_known_solver
from ..logic.query import QueryFailure, terminal_sweep
from ..logic.verdict import Action, Rule, Verdict


logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


# ============================================================================
# Episode Types
# ============================================================================

class EpisodeState(Enum):
    """States of the driver state machine."""

    RUNNING = auto()
    WON = auto()
    LOST = auto()
    STUCK = auto()


RESULT_MESSAGES: Dict[EpisodeState, str] = {
    EpisodeState.WON: "Result: Agent alive: all solved",
    EpisodeState.LOST: "Result: Agent dead: found hazard",
    EpisodeState.STUCK: "Result: Agent not terminated",
}


@dataclass
class AgentConfig:
    """
    Configuration shared by all agents.

    Attributes:
        opening: Cells probed before the first cycle. None means (0, 0) and
            the center, or (0, 0) alone for agents that do not open the
            center.
        single_point_first: SAT agents try AFN/AMN before the oracle.
        solver_name: PySAT solver used by the oracle.
        conflict_budget: Conflicts allowed per oracle query (None: no limit).
        cardinality_encoding: PySAT EncType for the CNF query strategy.
    """

    opening: Optional[Tuple[Coord, ...]] = None
    single_point_first: bool = True
    solver_name: str = DEFAULT_SOLVER
    conflict_budget: Optional[int] = None
    cardinality_encoding: int = EncType.seqcounter

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not is_known_solver(self.solver_name):
            raise ValueError(f"Unknown SAT solver {self.solver_name!r}")
        if self.conflict_budget is not None and self.conflict_budget <= 0:
            raise ValueError("Conflict budget must be positive")
        if self.opening is not None:
            self.opening = tuple(tuple(cell) for cell in self.opening)
            for x, y in self.opening:
                if x < 0 or y < 0:
                    raise ValueError(f"Opening cell ({x}, {y}) is negative")

    def make_oracle(self) -> SatOracle:
        """Build an oracle with this configuration."""
        return SatOracle(self.solver_name, self.conflict_budget)


@dataclass
class EpisodeResult:
    """Outcome of one episode."""

    state: EpisodeState
    cycles: int
    probes: int
    flags: int
    board: KnowledgeBoard = field(repr=False)
    verdicts: Dict[Rule, int] = field(default_factory=dict)
    oracle_failures: Dict[QueryFailure, int] = field(default_factory=dict)
    hazards_exposed: int = 0
    exposed: Tuple[Coord, ...] = ()

    @property
    def message(self) -> str:
        """Fixed result message for the terminal state."""
        return RESULT_MESSAGES[self.state]

    @property
    def won(self) -> bool:
        return self.state == EpisodeState.WON

    def rows(self) -> List[List[str]]:
        """Final board symbols, with hazards the agent walked into as 't'."""
        return mark_exposed(self.board.symbols(), set(self.exposed))


# ============================================================================
# Base Agent
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Hazard Sweeper agents.

    Subclasses implement decide(), returning at most one verdict per cycle.
    """

    name = "base"
    opens_center = True

    def __init__(
        self,
        environment: GridEnvironment,
        config: Optional[AgentConfig] = None,
    ) -> None:
        """
        Initialize the agent for one episode.

        Args:
            environment: Environment to play; owned by this agent.
            config: Agent configuration.
        """
        self.environment = environment
        self.config = config or AgentConfig()
        self.board = KnowledgeBoard(environment.size)
        for x, y in self.config.opening or ():
            if not self.board.in_bounds(x, y):
                raise ValueError(
                    f"Opening cell ({x}, {y}) is outside a "
                    f"{environment.size}x{environment.size} grid"
                )
        self.frontier = FrontierExpander(self.board, environment, self.probe)
        self.state = EpisodeState.RUNNING
        self.cycles = 0
        self.trace: List[Verdict] = []
        self.verdict_counts: Counter = Counter()
        self.oracle_failures: Counter = Counter()
        self.exposed: List[Coord] = []
        self._opened = False
        self._refresh_state()

    @abstractmethod
    def decide(self) -> Optional[Verdict]:
        """
        Produce one verdict from the current board.

        Returns:
            A verdict, or None if the strategy has no sound move.
        """

    # ========================================================================
    # Driver Loop
    # ========================================================================

    def play(self) -> EpisodeResult:
        """Run cycles until the episode reaches a terminal state."""
        while self.state == EpisodeState.RUNNING:
            self.step()
        logger.info("%s finished %s after %d cycles", self.name, self.state.name, self.cycles)
        return self.result()

    def step(self) -> EpisodeState:
        """
        Run one cycle.

        Returns:
            The episode state after the cycle.
        """
        if self.state != EpisodeState.RUNNING:
            return self.state

        self.cycles += 1
        if not self._opened:
            self._open()
        else:
            self._expand()
        if self._refresh_state() != EpisodeState.RUNNING:
            return self.state

        verdict = self.decide()
        if verdict is None:
            logger.info("%s has no sound move; episode stuck", self.name)
            self.state = EpisodeState.STUCK
            return self.state

        self.apply(verdict)
        return self._refresh_state()

    def opening_cells(self) -> Tuple[Coord, ...]:
        """Cells probed at the start of the episode."""
        if self.config.opening is not None:
            return self.config.opening
        if self.opens_center:
            return default_safe_cells(self.board.size)
        return ((0, 0),)

    def _open(self) -> None:
        self._opened = True
        for x, y in self.opening_cells():
            if self.state != EpisodeState.RUNNING or not self.environment.is_playing:
                break
            if not self.board.cell(x, y).is_unknown:
                continue
            self.probe(x, y)
            self._expand()

    def _expand(self) -> None:
        probed = self.frontier.expand()
        if probed:
            self.verdict_counts[Rule.FRONTIER] += probed

    # ========================================================================
    # Board Updates
    # ========================================================================

    def probe(self, x: int, y: int) -> ProbeResult:
        """Probe (x, y) and record what the environment disclosed."""
        result = self.environment.probe(x, y)
        if result.is_hazard:
            self.exposed.append((x, y))
            if not self.environment.is_lost:
                self.board.flag_hazard(x, y)
        else:
            self.board.reveal(x, y, result.hint)
        return result

    def apply(self, verdict: Verdict) -> None:
        """Carry out a verdict on the board."""
        logger.debug("%s", verdict)
        self.trace.append(verdict)
        self.verdict_counts[verdict.rule] += 1
        if verdict.action == Action.REVEAL:
            self.probe(verdict.x, verdict.y)
        else:
            self.board.flag_hazard(verdict.x, verdict.y)

    def _refresh_state(self) -> EpisodeState:
        if self.state != EpisodeState.RUNNING:
            return self.state
        if self.environment.is_lost:
            self.state = EpisodeState.LOST
        elif self.environment.is_won:
            for verdict in terminal_sweep(self.board, self.environment.hazard_count):
                self.apply(verdict)
            self.state = EpisodeState.WON
        return self.state

    # ========================================================================
    # Results
    # ========================================================================

    def result(self) -> EpisodeResult:
        """Snapshot of the episode so far."""
        return EpisodeResult(
            state=self.state,
            cycles=self.cycles,
            probes=self.environment.probe_count,
            flags=self.board.flagged_count,
            board=self.board,
            verdicts=dict(self.verdict_counts),
            oracle_failures=dict(self.oracle_failures),
            hazards_exposed=self.environment.hazards_exposed,
            exposed=tuple(self.exposed),
        )
