"""
Cell module for Hazard Sweeper.

Represents a single cell of the agent's knowledge board: its coordinates,
its state (unknown/revealed/flagged) and, once revealed, its hint.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import AlreadyResolvedError


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible knowledge states of a cell."""

    UNKNOWN = auto()
    REVEALED = auto()
    FLAGGED = auto()


UNKNOWN_SYMBOL = "?"
FLAG_SYMBOL = "*"
MAX_HINT = 8


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the agent's view of the grid.

    A cell leaves the UNKNOWN state exactly once, either by being revealed
    with a hint or by being flagged as hazardous.

    Attributes:
        x: Column index.
        y: Row index.
        state: Current knowledge state.
        hint: Count of hazardous neighbors, set when revealed.
    """

    x: int
    y: int
    state: CellState = CellState.UNKNOWN
    hint: Optional[int] = None

    def reveal(self, hint: int) -> None:
        """
        Reveal this cell with the hint disclosed by the environment.

        Args:
            hint: Number of hazardous neighbors (0-8).

        Raises:
            AlreadyResolvedError: If the cell is not unknown.
            ValueError: If the hint is out of range.
        """
        self._ensure_unknown()
        if not 0 <= hint <= MAX_HINT:
            raise ValueError(f"Hint must be between 0 and {MAX_HINT}, got {hint}")
        self.state = CellState.REVEALED
        self.hint = hint

    def flag(self) -> None:
        """
        Mark this cell as hazardous.

        Raises:
            AlreadyResolvedError: If the cell is not unknown.
        """
        self._ensure_unknown()
        self.state = CellState.FLAGGED

    def _ensure_unknown(self) -> None:
        if self.state != CellState.UNKNOWN:
            raise AlreadyResolvedError(self.x, self.y, self.state.name)

    @property
    def coords(self) -> Tuple[int, int]:
        """Coordinates as an (x, y) tuple."""
        return self.x, self.y

    @property
    def is_unknown(self) -> bool:
        """Check if cell is still unknown."""
        return self.state == CellState.UNKNOWN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_resolved(self) -> bool:
        """Check if cell is revealed or flagged."""
        return self.state != CellState.UNKNOWN

    @property
    def symbol(self) -> str:
        """Visible symbol: '?' unknown, hint digit, or '*' flagged."""
        if self.state == CellState.UNKNOWN:
            return UNKNOWN_SYMBOL
        if self.state == CellState.FLAGGED:
            return FLAG_SYMBOL
        return str(self.hint)

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Unknown cell
            -2: Flagged cell
            0-8: Revealed cell hint
        """
        if self.state == CellState.UNKNOWN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        return self.hint
