"""
Frontier expansion.

A revealed zero-hint cell has no hazardous neighbors, so every unknown
neighbor can be probed at once. Expansion drains such cells until none are
left or the episode stops.
"""
import logging
from collections import deque
from typing import Callable, Deque, Set, Tuple

from ..game.board import KnowledgeBoard
from ..game.environment import GridEnvironment, ProbeResult


logger = logging.getLogger(__name__)

Prober = Callable[[int, int], ProbeResult]


class FrontierExpander:
    """
    Flood-fills the neighbors of zero-hint cells.

    The set of drained cells persists across calls, so each zero cell has its
    neighborhood examined once per episode and no cell is probed twice.
    """

    def __init__(
        self,
        board: KnowledgeBoard,
        environment: GridEnvironment,
        probe: Prober,
    ) -> None:
        """
        Args:
            board: Knowledge board to read and extend.
            environment: Environment whose state gates the expansion.
            probe: Callable that probes (x, y) and records the result on
                the board.
        """
        self.board = board
        self.environment = environment
        self._probe = probe
        self._drained: Set[Tuple[int, int]] = set()

    def pending(self) -> Deque[Tuple[int, int]]:
        """Revealed zero-hint cells whose neighbors were not yet drained."""
        return deque(
            cell.coords
            for cell in self.board.revealed_with_hint()
            if cell.hint == 0 and cell.coords not in self._drained
        )

    def expand(self) -> int:
        """
        Probe every unknown neighbor of every undrained zero-hint cell.

        Returns:
            Number of cells probed.
        """
        if self.environment.is_won:
            return 0

        work_list = self.pending()
        probed = 0
        while work_list and self.environment.is_playing:
            x, y = work_list.popleft()
            if (x, y) in self._drained:
                continue
            self._drained.add((x, y))

            for cell in self.board.unknown_neighbors(x, y):
                if not self.environment.is_playing:
                    break
                result = self._probe(cell.x, cell.y)
                probed += 1
                if result.hint == 0:
                    work_list.append((cell.x, cell.y))

        if probed:
            logger.debug("Frontier expansion probed %d cells", probed)
        return probed
