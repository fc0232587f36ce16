"""
Single-point inference.

Looks at one revealed hint cell at a time:

- All Free Neighbours (AFN): the hint is already accounted for by flags,
  so every other unknown neighbor is safe.
- All Marked Neighbours (AMN): the unknown neighbors are exactly as many
  as the hazards still missing, so every one of them is hazardous.
"""
import logging
from typing import Optional

from ..game.board import KnowledgeBoard
from ..game.cell import Cell
from .verdict import Action, Rule, Verdict


logger = logging.getLogger(__name__)


class SinglePointInference:
    """Finds at most one AFN/AMN verdict per call."""

    def __init__(self, board: KnowledgeBoard) -> None:
        self.board = board

    def is_afn(self, hint_cell: Cell) -> bool:
        """Every hazard around hint_cell is already flagged."""
        flagged = len(self.board.flagged_neighbors(hint_cell.x, hint_cell.y))
        return flagged == hint_cell.hint

    def is_amn(self, hint_cell: Cell) -> bool:
        """Every unknown neighbor of hint_cell must be a hazard."""
        flagged = len(self.board.flagged_neighbors(hint_cell.x, hint_cell.y))
        unknown = len(self.board.unknown_neighbors(hint_cell.x, hint_cell.y))
        return unknown == hint_cell.hint - flagged

    def find_verdict(self) -> Optional[Verdict]:
        """
        Scan unknown cells in row-major order for a forced verdict.

        For each unknown cell, its revealed neighbors are checked for AFN
        first and AMN second.

        Returns:
            The first verdict found, or None if no local deduction exists.
        """
        for cell in self.board.unresolved():
            hint_cells = [
                neighbor
                for neighbor in self.board.neighbor_cells(cell.x, cell.y)
                if neighbor.is_revealed
            ]
            if any(self.is_afn(hint_cell) for hint_cell in hint_cells):
                verdict = Verdict(cell.x, cell.y, Action.REVEAL, Rule.AFN)
                logger.debug("%s", verdict)
                return verdict
            if any(self.is_amn(hint_cell) for hint_cell in hint_cells):
                verdict = Verdict(cell.x, cell.y, Action.FLAG, Rule.AMN)
                logger.debug("%s", verdict)
                return verdict
        return None
