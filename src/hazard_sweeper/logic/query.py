"""
Satisfiability query driver.

For each candidate cell c the driver asks whether the knowledge base stays
satisfiable with c hazardous. If it does not, c is provably safe. Two
interchangeable strategies answer that question:

- AugmentationQuery: DNF encoding, one fresh solve per candidate with the
  unit clause [c] appended.
- AssumptionQuery: cardinality CNF loaded once into an incremental solver,
  one solve per candidate under the assumption c.

Oracle failures never escape the driver; they come back as a QueryOutcome
with a QueryFailure and no proved cell.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from pysat.card import EncType

from ..errors import (
    FormulaParseError,
    OracleContradiction,
    OracleError,
    OracleTimeout,
)
from ..game.board import KnowledgeBoard
from .encoder import ConstraintEncoder, KnowledgeBase, variable_name
from .oracle import SatOracle
from .verdict import Action, Rule, Verdict


logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
OracleFactory = Callable[[], SatOracle]


# ============================================================================
# Outcomes
# ============================================================================

class QueryFailure(Enum):
    """Why a query cycle produced no answer."""

    PARSE = "parse"
    CONTRADICTION = "contradiction"
    TIMEOUT = "timeout"


_FAILURES = {
    FormulaParseError: QueryFailure.PARSE,
    OracleContradiction: QueryFailure.CONTRADICTION,
    OracleTimeout: QueryFailure.TIMEOUT,
}


@dataclass(frozen=True)
class QueryOutcome:
    """
    Result of one query cycle.

    Attributes:
        cell: The first cell proved safe, if any.
        failure: Why the oracle could not answer, if it failed.
        queries: Number of candidate queries posed.
    """

    cell: Optional[Coord] = None
    failure: Optional[QueryFailure] = None
    queries: int = 0

    @property
    def proved(self) -> bool:
        """A safe cell was found."""
        return self.cell is not None

    def to_verdict(self) -> Optional[Verdict]:
        """Reveal verdict for the proved cell, if any."""
        if self.cell is None:
            return None
        return Verdict(self.cell[0], self.cell[1], Action.REVEAL, Rule.SAT)


# ============================================================================
# Query Strategies
# ============================================================================

class QueryStrategy(ABC):
    """Finds the first candidate whose hazard hypothesis is unsatisfiable."""

    name = "base"

    @abstractmethod
    def first_safe(
        self,
        knowledge_base: KnowledgeBase,
        candidates: Sequence[Coord],
        oracle: SatOracle,
    ) -> Tuple[Optional[Coord], int]:
        """
        Args:
            knowledge_base: Constraints of the current cycle.
            candidates: Cells to test, in order.
            oracle: Oracle to query.

        Returns:
            Tuple of (first provably safe cell or None, queries posed).

        Raises:
            OracleError: If the oracle fails.
        """


class AugmentationQuery(QueryStrategy):
    """Conjoin "c is hazardous" to the DNF knowledge base and solve afresh."""

    name = "dnf"

    def first_safe(self, knowledge_base, candidates, oracle):
        clauses = knowledge_base.dnf_clauses()
        if not oracle.is_satisfiable(clauses):
            raise OracleContradiction("Knowledge base is unsatisfiable")

        # A hypothesis opposing a unit of the base is unsatisfiable as it stands
        units = {clause[0] for clause in clauses if len(clause) == 1}
        queries = 0
        for cell in candidates:
            queries += 1
            literal = knowledge_base.literal(cell, True)
            if -literal in units:
                return cell, queries
            if not oracle.is_satisfiable(clauses + [[literal]]):
                return cell, queries
        return None, queries


class AssumptionQuery(QueryStrategy):
    """Load the cardinality CNF once and assume "c is hazardous" per query."""

    name = "cnf"

    def __init__(self, encoding: int = EncType.seqcounter) -> None:
        self.encoding = encoding

    def first_safe(self, knowledge_base, candidates, oracle):
        oracle.load(knowledge_base.cnf_clauses(self.encoding))
        try:
            if not oracle.query():
                raise OracleContradiction("Knowledge base is unsatisfiable")

            queries = 0
            for cell in candidates:
                queries += 1
                if not oracle.query([knowledge_base.literal(cell, True)]):
                    return cell, queries
            return None, queries
        finally:
            oracle.close()


# ============================================================================
# Query Driver
# ============================================================================

class SatisfiabilityQueryDriver:
    """Encodes the board and runs one query cycle with a strategy."""

    def __init__(
        self,
        board: KnowledgeBoard,
        strategy: QueryStrategy,
        oracle_factory: OracleFactory = SatOracle,
    ) -> None:
        """
        Args:
            board: Knowledge board to encode.
            strategy: How candidates are queried.
            oracle_factory: Builds the oracle used for a cycle.
        """
        self.board = board
        self.strategy = strategy
        self.encoder = ConstraintEncoder(board)
        self._oracle_factory = oracle_factory

    def candidates(self, knowledge_base: KnowledgeBase) -> List[Coord]:
        """
        Unknown cells the knowledge base constrains, in row-major order.

        Cells outside every constraint can always be hazardous, so they are
        never worth a query.
        """
        constrained = set(knowledge_base.cells())
        return [
            cell.coords
            for cell in self.board.unresolved()
            if cell.coords in constrained
        ]

    def find_verdict(self) -> QueryOutcome:
        """
        Run one cycle: encode, then query candidates until one is proved safe.

        Returns:
            A QueryOutcome; never raises for oracle failures.
        """
        try:
            knowledge_base = self.encoder.build()
            if knowledge_base.is_empty:
                return QueryOutcome()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("KB: %s", knowledge_base.render())

            oracle = self._oracle_factory()
            cell, queries = self.strategy.first_safe(
                knowledge_base, self.candidates(knowledge_base), oracle
            )
        except OracleError as exc:
            failure = _FAILURES.get(type(exc), QueryFailure.CONTRADICTION)
            logger.warning("%s query failed (%s): %s", self.strategy.name, failure.value, exc)
            return QueryOutcome(failure=failure)

        if cell is not None:
            logger.debug(
                "%s proved %s safe after %d queries",
                self.strategy.name,
                variable_name(cell),
                queries,
            )
        return QueryOutcome(cell=cell, queries=queries)


# ============================================================================
# Terminal Sweep
# ============================================================================

def terminal_sweep(board: KnowledgeBoard, hazard_count: int) -> List[Verdict]:
    """
    Flag every unknown cell once they must all be hazards.

    Fires only when the unknown count equals the hazards not yet flagged.

    Args:
        board: Knowledge board.
        hazard_count: Total hazards in the grid.

    Returns:
        Flag verdicts for the remaining unknown cells, or an empty list.
    """
    remaining = hazard_count - board.flagged_count
    if remaining <= 0 or board.unknown_count != remaining:
        return []
    return [
        Verdict(cell.x, cell.y, Action.FLAG, Rule.SWEEP)
        for cell in board.unresolved()
    ]
