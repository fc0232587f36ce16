"""
Knowledge board module for Hazard Sweeper.

The agent's partial view of the grid: one Cell per coordinate stored in a
flat array (index = y * size + x), 8-connected adjacency, and the derived
unresolved/resolved/revealed views kept in step with every mutation.
"""
from functools import lru_cache
from typing import Dict, List, Tuple

import numpy as np

from .cell import Cell, CellState


Coord = Tuple[int, int]


# ============================================================================
# Neighbor Utilities (Low-level)
# ============================================================================

@lru_cache(maxsize=None)
def get_neighborhoods(size: int) -> Tuple[Tuple[Coord, ...], ...]:
    """
    Precompute 8-connected neighbors for every cell of a square grid.

    Args:
        size: Grid side length. Must be positive.

    Returns:
        Tuple indexed by flat index (y * size + x); each entry holds the
        neighboring (x, y) coordinates in row-major order.

    Raises:
        ValueError: If size is non-positive.
    """
    if size <= 0:
        raise ValueError("Grid dimensions must be positive")

    neighborhoods = []
    for y in range(size):
        for x in range(size):
            neighbors = []
            for delta_y in (-1, 0, 1):
                for delta_x in (-1, 0, 1):
                    if delta_x == 0 and delta_y == 0:
                        continue
                    new_x, new_y = x + delta_x, y + delta_y
                    if 0 <= new_x < size and 0 <= new_y < size:
                        neighbors.append((new_x, new_y))
            neighborhoods.append(tuple(neighbors))
    return tuple(neighborhoods)


# ============================================================================
# Knowledge Board
# ============================================================================

class KnowledgeBoard:
    """
    The agent's cell-by-cell view of an N x N grid.

    Every cell starts UNKNOWN. The board only changes through reveal() and
    flag_hazard(), each of which resolves exactly one unknown cell.
    """

    def __init__(self, size: int) -> None:
        """
        Initialize an all-unknown board.

        Args:
            size: Grid side length.
        """
        self.size = size
        self._neighborhoods = get_neighborhoods(size)
        self._cells: List[Cell] = [
            Cell(x=index % size, y=index // size) for index in range(size * size)
        ]
        # Insertion-ordered index sets; dict keys keep row-major order for
        # unresolved cells and reveal order for revealed ones.
        self._unresolved: Dict[int, None] = dict.fromkeys(range(size * size))
        self._revealed: Dict[int, None] = {}
        self._flagged: Dict[int, None] = {}

    # ========================================================================
    # Lookup
    # ========================================================================

    def index(self, x: int, y: int) -> int:
        """Flat index of (x, y)."""
        return y * self.size + x

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> Cell:
        """
        Get the cell at (x, y).

        Raises:
            IndexError: If the position is out of bounds.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.size}x{self.size} grid")
        return self._cells[self.index(x, y)]

    def neighbors(self, x: int, y: int) -> Tuple[Coord, ...]:
        """Boundary-clipped 8-connected neighbors of (x, y)."""
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.size}x{self.size} grid")
        return self._neighborhoods[self.index(x, y)]

    def neighbor_cells(self, x: int, y: int) -> List[Cell]:
        """Neighboring Cell objects of (x, y)."""
        return [self._cells[self.index(nx, ny)] for nx, ny in self.neighbors(x, y)]

    def unknown_neighbors(self, x: int, y: int) -> List[Cell]:
        """Neighbors of (x, y) that are still unknown."""
        return [cell for cell in self.neighbor_cells(x, y) if cell.is_unknown]

    def flagged_neighbors(self, x: int, y: int) -> List[Cell]:
        """Neighbors of (x, y) that are flagged."""
        return [cell for cell in self.neighbor_cells(x, y) if cell.is_flagged]

    # ========================================================================
    # Mutation
    # ========================================================================

    def reveal(self, x: int, y: int, hint: int) -> Cell:
        """
        Record a hint disclosed by the environment.

        Raises:
            AlreadyResolvedError: If the cell is not unknown.
        """
        cell = self.cell(x, y)
        cell.reveal(hint)
        index = self.index(x, y)
        del self._unresolved[index]
        self._revealed[index] = None
        return cell

    def flag_hazard(self, x: int, y: int) -> Cell:
        """
        Mark (x, y) as hazardous.

        Raises:
            AlreadyResolvedError: If the cell is not unknown.
        """
        cell = self.cell(x, y)
        cell.flag()
        index = self.index(x, y)
        del self._unresolved[index]
        self._flagged[index] = None
        return cell

    # ========================================================================
    # Derived Views
    # ========================================================================

    def unresolved(self) -> List[Cell]:
        """Unknown cells in row-major order."""
        return [self._cells[index] for index in self._unresolved]

    def resolved(self) -> List[Cell]:
        """Revealed and flagged cells in row-major order."""
        return [cell for cell in self._cells if cell.is_resolved]

    def revealed_with_hint(self) -> List[Cell]:
        """Revealed cells in the order they were revealed."""
        return [self._cells[index] for index in self._revealed]

    def flagged(self) -> List[Cell]:
        """Flagged cells in the order they were flagged."""
        return [self._cells[index] for index in self._flagged]

    @property
    def unknown_count(self) -> int:
        """Number of unknown cells."""
        return len(self._unresolved)

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return len(self._revealed)

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return len(self._flagged)

    def __iter__(self):
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    # ========================================================================
    # Observation
    # ========================================================================

    def symbols(self) -> List[List[str]]:
        """Visible symbol of every cell, one list per row."""
        return [
            [self._cells[self.index(x, y)].symbol for x in range(self.size)]
            for y in range(self.size)
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array indexed [y, x] where:
                -1 = unknown
                -2 = flagged
                0-8 = revealed hint
        """
        obs = np.full((self.size, self.size), -1, dtype=np.int8)
        for cell in self._cells:
            if cell.state != CellState.UNKNOWN:
                obs[cell.y, cell.x] = cell.to_observation()
        return obs
