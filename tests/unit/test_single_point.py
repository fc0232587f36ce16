"""
Unit tests for single-point inference (AFN/AMN).
"""
from hazard_sweeper.game import KnowledgeBoard
from hazard_sweeper.logic import Action, Rule, SinglePointInference, Verdict


class TestVerdict:
    """Test the verdict record."""

    def test_coords_and_text(self) -> None:
        """A verdict exposes its cell and renders as rule, action and cell."""
        verdict = Verdict(2, 1, Action.FLAG, Rule.AMN)
        assert verdict.coords == (2, 1)
        assert str(verdict) == "AMN: flag (2, 1)"


class TestRules:
    """Test the individual rules."""

    def test_afn(self, make_board) -> None:
        """A hint satisfied by flags frees its other neighbors."""
        board = make_board([
            "1 *",
            "? ?",
        ])
        inference = SinglePointInference(board)
        assert inference.is_afn(board.cell(0, 0)) is True
        assert inference.is_amn(board.cell(0, 0)) is False

    def test_amn(self, make_board) -> None:
        """A hint equal to its unknown neighbors marks them all."""
        board = make_board([
            "3 ?",
            "? ?",
        ])
        inference = SinglePointInference(board)
        assert inference.is_amn(board.cell(0, 0)) is True
        assert inference.is_afn(board.cell(0, 0)) is False


class TestFindVerdict:
    """Test verdict selection."""

    def test_afn_verdict_reveals(self, make_board) -> None:
        """AFN yields a reveal verdict."""
        board = make_board([
            "1 *",
            "? ?",
        ])
        verdict = SinglePointInference(board).find_verdict()
        assert verdict == Verdict(0, 1, Action.REVEAL, Rule.AFN)

    def test_amn_verdict_flags_first_unknown(self, make_board) -> None:
        """AMN yields a flag verdict for the first unknown cell."""
        board = make_board([
            "3 ?",
            "? ?",
        ])
        verdict = SinglePointInference(board).find_verdict()
        assert verdict == Verdict(1, 0, Action.FLAG, Rule.AMN)

    def test_no_verdict_when_ambiguous(self, make_board) -> None:
        """One hazard among three cells cannot be placed locally."""
        board = make_board([
            "1 ?",
            "? ?",
        ])
        assert SinglePointInference(board).find_verdict() is None

    def test_no_verdict_without_hints(self, empty_board: KnowledgeBoard) -> None:
        """An all-unknown board has nothing to infer."""
        assert SinglePointInference(empty_board).find_verdict() is None

    def test_exact_k_board_is_stuck(self, exact_k_board: KnowledgeBoard) -> None:
        """Local rules cannot solve the exact-k row."""
        assert SinglePointInference(exact_k_board).find_verdict() is None

    def test_row_major_scan(self, make_board) -> None:
        """The first unknown cell with a verdict wins."""
        board = make_board([
            "0 ? ?",
            "? ? ?",
            "? ? 0",
        ])
        verdict = SinglePointInference(board).find_verdict()
        assert verdict.coords == (1, 0)
        assert verdict.rule == Rule.AFN

    def test_verdict_does_not_mutate(self, make_board) -> None:
        """Finding a verdict leaves the board unchanged."""
        board = make_board([
            "1 *",
            "? ?",
        ])
        SinglePointInference(board).find_verdict()
        assert board.unknown_count == 2
