"""
Unit tests for the constraint encoder.

Both clause forms are checked against the constraints they encode by
solving under every full assignment of the cell variables.
"""
from itertools import product

import pytest
from pysat.card import EncType

from hazard_sweeper.errors import FormulaParseError
from hazard_sweeper.game import KnowledgeBoard
from hazard_sweeper.logic import (
    ConstraintEncoder,
    ExactConstraint,
    KnowledgeBase,
    SatOracle,
    variable_name,
)


def satisfies(knowledge_base: KnowledgeBase, assignment) -> bool:
    """Evaluate the constraints directly on a {cell: hazardous} mapping."""
    return all(
        sum(assignment[cell] for cell in constraint.cells) == constraint.count
        for constraint in knowledge_base.constraints
    )


class TestExactConstraint:
    """Test a single exact-k constraint."""

    def test_terms_enumerate_subsets(self) -> None:
        """Two of three cells gives three terms."""
        constraint = ExactConstraint((1, 2), ((0, 3), (1, 3), (2, 3)), 2)
        terms = list(constraint.terms())
        assert len(terms) == 3
        for term in terms:
            assert sum(hazardous for _, hazardous in term) == 2

    def test_degenerate(self) -> None:
        """Zero or all hazards is degenerate."""
        cells = ((0, 0), (1, 0))
        assert ExactConstraint((0, 1), cells, 0).is_degenerate is True
        assert ExactConstraint((0, 1), cells, 2).is_degenerate is True
        assert ExactConstraint((0, 1), cells, 1).is_degenerate is False

    def test_count_above_cells_raises(self) -> None:
        """More hazards than cells cannot be satisfied."""
        with pytest.raises(FormulaParseError, match="needs 3 hazards"):
            ExactConstraint((0, 0), ((1, 0), (0, 1)), 3).validate()

    def test_negative_count_raises(self) -> None:
        """Negative counts are malformed."""
        with pytest.raises(FormulaParseError):
            list(ExactConstraint((0, 0), ((1, 0),), -1).terms())

    def test_empty_cells_raises(self) -> None:
        """A constraint needs cells."""
        with pytest.raises(FormulaParseError, match="no cells"):
            ExactConstraint((0, 0), (), 0).validate()


class TestConstraintEncoder:
    """Test knowledge-base construction from a board."""

    def test_one_constraint_per_hint_with_unknowns(self, exact_k_board: KnowledgeBoard) -> None:
        """Only the four hints bordering the unknown row are encoded."""
        knowledge_base = ConstraintEncoder(exact_k_board).build()
        assert len(knowledge_base) == 4
        assert [c.source for c in knowledge_base.constraints] == [
            (0, 2), (1, 2), (2, 2), (3, 2),
        ]
        assert [c.count for c in knowledge_base.constraints] == [1, 2, 1, 1]

    def test_variables_are_row_major(self, exact_k_board: KnowledgeBoard) -> None:
        """Variables are numbered 1..n in row-major order."""
        knowledge_base = ConstraintEncoder(exact_k_board).build()
        assert knowledge_base.cells() == [(0, 3), (1, 3), (2, 3), (3, 3)]
        assert knowledge_base.variable((2, 3)) == 3
        assert knowledge_base.literal((2, 3), False) == -3
        assert knowledge_base.top == 4

    def test_flags_reduce_count(self, make_board) -> None:
        """Flagged neighbors are subtracted from the hint."""
        board = make_board([
            "2 *",
            "? ?",
        ])
        constraint = ConstraintEncoder(board).constraint_for(0, 0)
        assert constraint.cells == ((0, 1), (1, 1))
        assert constraint.count == 1

    def test_no_constraint_without_unknowns(self, make_board) -> None:
        """A hint with no unknown neighbors contributes nothing."""
        board = make_board([
            "1 *",
            "1 1",
        ])
        assert ConstraintEncoder(board).constraint_for(0, 0) is None
        assert ConstraintEncoder(board).build().is_empty is True

    def test_inconsistent_hint_raises(self, make_board) -> None:
        """More flags than the hint allows is a malformed formula."""
        board = make_board([
            "1 *",
            "* ?",
        ])
        with pytest.raises(FormulaParseError):
            ConstraintEncoder(board).build()

    def test_unknown_variable_raises(self, exact_k_board: KnowledgeBoard) -> None:
        """Cells outside the knowledge base have no variable."""
        knowledge_base = ConstraintEncoder(exact_k_board).build()
        with pytest.raises(FormulaParseError, match="T0_0"):
            knowledge_base.variable((0, 0))


class TestClauseForms:
    """Test that both clause forms encode exactly the constraints."""

    @pytest.mark.parametrize("form", ["dnf", "seqcounter", "totalizer"])
    def test_models_match_constraints(self, exact_k_board: KnowledgeBoard, form: str) -> None:
        """An assignment satisfies the clauses iff it satisfies the constraints."""
        knowledge_base = ConstraintEncoder(exact_k_board).build()
        if form == "dnf":
            clauses = knowledge_base.dnf_clauses()
        else:
            clauses = knowledge_base.cnf_clauses(getattr(EncType, form))

        cells = knowledge_base.cells()
        oracle = SatOracle()
        for values in product([False, True], repeat=len(cells)):
            assignment = dict(zip(cells, values))
            assumptions = [
                knowledge_base.literal(cell, hazardous)
                for cell, hazardous in assignment.items()
            ]
            expected = satisfies(knowledge_base, assignment)
            assert oracle.is_satisfiable(clauses, assumptions) == expected

    def test_degenerate_constraint_becomes_units(self, make_board) -> None:
        """A zero hint on unknown cells yields negative unit clauses."""
        board = make_board([
            "0 ?",
            "? ?",
        ])
        knowledge_base = ConstraintEncoder(board).build()
        assert knowledge_base.dnf_clauses() == [[-1], [-2], [-3]]
        assert knowledge_base.cnf_clauses() == [[-1], [-2], [-3]]

    def test_dnf_selectors_above_cell_variables(self, exact_k_board: KnowledgeBoard) -> None:
        """Selector variables never collide with cell variables."""
        knowledge_base = ConstraintEncoder(exact_k_board).build()
        selectors = knowledge_base.dnf_clauses()[0]
        assert min(selectors) > knowledge_base.top


class TestRender:
    """Test the readable formula."""

    def test_variable_name(self) -> None:
        """Variables are named T{x}_{y}."""
        assert variable_name((1, 3)) == "T1_3"

    def test_render_terms(self, make_board) -> None:
        """One parenthesized disjunction of terms per constraint."""
        board = make_board([
            "2 ?",
            "* ?",
        ])
        rendered = ConstraintEncoder(board).build().render()
        assert rendered == "((T1_0 & ~T1_1) | (~T1_0 & T1_1))"
