"""
Constraint encoder.

Turns the revealed hint cells of a knowledge board into a knowledge base:
one "exactly n of these cells are hazards" constraint per hint cell with
unknown neighbors. The knowledge base can be emitted as clauses in two ways:

- dnf_clauses(): the exact-k DNF (one term per n-subset, enumerated as
  combinations), with one selector variable per term.
- cnf_clauses(): a cardinality encoding from PySAT (sequential counter by
  default), polynomial in the number of cells.
"""
import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from pysat.card import CardEnc, EncType

from ..errors import FormulaParseError
from ..game.board import KnowledgeBoard


logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
Clause = List[int]
Term = Tuple[Tuple[Coord, bool], ...]


def variable_name(coord: Coord) -> str:
    """Readable name of the hazard variable of (x, y)."""
    return f"T{coord[0]}_{coord[1]}"


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class ExactConstraint:
    """
    Exactly `count` of `cells` are hazards.

    For example, a revealed "2" with one flagged neighbor and three unknown
    neighbors gives cells={A, B, C}, count=1.

    Attributes:
        source: The hint cell the constraint comes from.
        cells: Unknown neighbors of the hint cell, row-major.
        count: Hazards still to be placed among them.
    """

    source: Coord
    cells: Tuple[Coord, ...]
    count: int

    def validate(self) -> None:
        """
        Raises:
            FormulaParseError: If the constraint cannot describe a formula.
        """
        if not self.cells:
            raise FormulaParseError(f"Constraint from {self.source} has no cells")
        if not 0 <= self.count <= len(self.cells):
            raise FormulaParseError(
                f"Constraint from {self.source} needs {self.count} hazards "
                f"among {len(self.cells)} cells"
            )

    @property
    def is_degenerate(self) -> bool:
        """All cells share one value (none or all are hazards)."""
        return self.count == 0 or self.count == len(self.cells)

    def terms(self) -> Iterator[Term]:
        """
        Enumerate the DNF terms: one per `count`-subset of the cells.

        Each term lists every cell with True if the subset holds it.
        """
        self.validate()
        for hazards in combinations(range(len(self.cells)), self.count):
            chosen = set(hazards)
            yield tuple(
                (cell, position in chosen)
                for position, cell in enumerate(self.cells)
            )


# ============================================================================
# Knowledge Base
# ============================================================================

class KnowledgeBase:
    """
    Conjunction of exact constraints over hazard variables.

    Variables are numbered 1..n in row-major order of the cells they stand
    for; auxiliary variables of either encoding are numbered above n.
    """

    def __init__(self, constraints: Sequence[ExactConstraint]) -> None:
        self.constraints = list(constraints)
        cells = {cell for constraint in self.constraints for cell in constraint.cells}
        self._variables: Dict[Coord, int] = {
            cell: number
            for number, cell in enumerate(sorted(cells, key=lambda c: (c[1], c[0])), 1)
        }

    @property
    def is_empty(self) -> bool:
        """No constraints at all."""
        return not self.constraints

    @property
    def top(self) -> int:
        """Highest cell variable id."""
        return len(self._variables)

    def cells(self) -> List[Coord]:
        """Cells appearing in some constraint, row-major."""
        return list(self._variables)

    def variable(self, coord: Coord) -> int:
        """
        Variable id of the hazard indicator of coord.

        Raises:
            FormulaParseError: If coord does not appear in the knowledge base.
        """
        try:
            return self._variables[coord]
        except KeyError:
            raise FormulaParseError(
                f"{variable_name(coord)} is not a knowledge base variable"
            ) from None

    def literal(self, coord: Coord, hazardous: bool) -> int:
        """Signed literal for "coord is (not) hazardous"."""
        variable = self.variable(coord)
        return variable if hazardous else -variable

    # ========================================================================
    # Clause Forms
    # ========================================================================

    def dnf_clauses(self) -> List[Clause]:
        """
        Clauses of the exact-k DNF encoding.

        A degenerate constraint has a single term and becomes unit clauses.
        Otherwise each term j gets a selector s_j with s_j -> literal for
        every literal of the term, plus one clause (s_1 | ... | s_m).
        """
        clauses: List[Clause] = []
        top = self.top
        for constraint in self.constraints:
            terms = list(constraint.terms())
            if len(terms) == 1:
                clauses.extend(
                    [self.literal(cell, hazardous)] for cell, hazardous in terms[0]
                )
                continue

            selectors = list(range(top + 1, top + 1 + len(terms)))
            top += len(terms)
            clauses.append(selectors)
            for selector, term in zip(selectors, terms):
                clauses.extend(
                    [-selector, self.literal(cell, hazardous)]
                    for cell, hazardous in term
                )
        return clauses

    def cnf_clauses(self, encoding: int = EncType.seqcounter) -> List[Clause]:
        """
        Clauses of a cardinality encoding of every constraint.

        Args:
            encoding: PySAT EncType used for non-degenerate constraints.
        """
        clauses: List[Clause] = []
        top = self.top
        for constraint in self.constraints:
            constraint.validate()
            lits = [self.variable(cell) for cell in constraint.cells]
            if constraint.is_degenerate:
                hazardous = constraint.count == len(lits)
                clauses.extend([lit if hazardous else -lit] for lit in lits)
                continue

            encoded = CardEnc.equals(
                lits=lits, bound=constraint.count, top_id=top, encoding=encoding
            )
            for clause in encoded.clauses:
                clauses.append(list(clause))
                top = max(top, max(abs(lit) for lit in clause))
        return clauses

    # ========================================================================
    # Rendering
    # ========================================================================

    def render(self) -> str:
        """Readable DNF formula, e.g. ((~T0_1 & T1_1) | (T0_1 & ~T1_1))."""
        rendered = []
        for constraint in self.constraints:
            terms = []
            for term in constraint.terms():
                literals = [
                    variable_name(cell) if hazardous else "~" + variable_name(cell)
                    for cell, hazardous in term
                ]
                terms.append("(" + " & ".join(literals) + ")")
            rendered.append("(" + " | ".join(terms) + ")")
        return " & ".join(rendered)

    def __len__(self) -> int:
        return len(self.constraints)


# ============================================================================
# Encoder
# ============================================================================

class ConstraintEncoder:
    """Builds a fresh knowledge base from the current board."""

    def __init__(self, board: KnowledgeBoard) -> None:
        self.board = board

    def constraint_for(self, x: int, y: int) -> Optional[ExactConstraint]:
        """
        Exact constraint of the revealed cell at (x, y).

        Returns:
            None if the cell has no unknown neighbors.
        """
        hint_cell = self.board.cell(x, y)
        unknown = self.board.unknown_neighbors(x, y)
        if not unknown:
            return None
        flagged = len(self.board.flagged_neighbors(x, y))
        return ExactConstraint(
            source=(x, y),
            cells=tuple(cell.coords for cell in unknown),
            count=hint_cell.hint - flagged,
        )

    def build(self) -> KnowledgeBase:
        """
        Encode every revealed hint cell with at least one unknown neighbor.

        Raises:
            FormulaParseError: If a hint is inconsistent with the flags
                around it.
        """
        constraints = []
        for cell in self.board.revealed_with_hint():
            constraint = self.constraint_for(cell.x, cell.y)
            if constraint is None:
                continue
            constraint.validate()
            constraints.append(constraint)

        knowledge_base = KnowledgeBase(constraints)
        logger.debug(
            "Knowledge base: %d constraints over %d variables",
            len(knowledge_base),
            knowledge_base.top,
        )
        return knowledge_base
