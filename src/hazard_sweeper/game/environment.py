"""
Grid environment for Hazard Sweeper.

Owns the ground-truth layout and answers probes. The hazard positions are
never exposed; callers only learn a hint or that they hit a hazard.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Set, Tuple

from ..errors import EpisodeOverError
from .layout import GridLayout


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the environment."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class HazardPolicy(Enum):
    """What probing a hazard does to the episode."""

    TERMINATE = auto()
    TOLERATE = auto()


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of a single probe.

    Attributes:
        x: Column probed.
        y: Row probed.
        hint: Hazardous-neighbor count, or None if the cell was a hazard.
    """

    x: int
    y: int
    hint: Optional[int]

    @property
    def is_hazard(self) -> bool:
        """Check if the probe hit a hazard."""
        return self.hint is None


# ============================================================================
# Grid Environment
# ============================================================================

class GridEnvironment:
    """
    Ground truth for one episode.

    Tracks which cells are still covered and derives the win state after
    every probe: the episode is won once every covered cell is a hazard.
    """

    def __init__(
        self,
        layout: GridLayout,
        hazard_policy: HazardPolicy = HazardPolicy.TERMINATE,
    ) -> None:
        """
        Initialize the environment.

        Args:
            layout: Ground-truth layout.
            hazard_policy: Whether a hazard probe ends the episode.
        """
        self._layout = layout
        self.hazard_policy = hazard_policy
        self._covered: Set[Tuple[int, int]] = {
            (x, y) for y in range(layout.size) for x in range(layout.size)
        }
        self._game_state = GameState.PLAYING
        self._hazards_exposed = 0
        self._probes = 0
        self._check_win_condition()

    # ========================================================================
    # Probing
    # ========================================================================

    def probe(self, x: int, y: int) -> ProbeResult:
        """
        Uncover (x, y).

        Args:
            x: Column to probe.
            y: Row to probe.

        Returns:
            The hint, or a hazard result.

        Raises:
            ValueError: If (x, y) is out of bounds or was already probed.
            EpisodeOverError: If the episode was already lost.
        """
        if self._game_state == GameState.LOST:
            raise EpisodeOverError("Cannot probe after the episode was lost")
        if not self._layout.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is out of bounds")
        if (x, y) not in self._covered:
            raise ValueError(f"({x}, {y}) was already probed")

        self._covered.remove((x, y))
        self._probes += 1

        if self._layout.is_hazard(x, y):
            result = ProbeResult(x, y, None)
            if self.hazard_policy == HazardPolicy.TERMINATE:
                logger.info("Probe (%d, %d) hit a hazard; episode lost", x, y)
                self._game_state = GameState.LOST
                return result
            self._hazards_exposed += 1
            logger.info("Probe (%d, %d) hit a hazard; tolerated", x, y)
        else:
            result = ProbeResult(x, y, self._layout.hint(x, y))

        self._check_win_condition()
        return result

    def _check_win_condition(self) -> None:
        """Won iff every covered cell is a hazard."""
        if self._game_state != GameState.PLAYING:
            return
        for x, y in self._covered:
            if not self._layout.is_hazard(x, y):
                return
        self._game_state = GameState.WON

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def size(self) -> int:
        """Grid side length."""
        return self._layout.size

    @property
    def hazard_count(self) -> int:
        """Total number of hazards in the layout."""
        return self._layout.hazard_count

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if the episode is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if the episode was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if the episode was lost."""
        return self._game_state == GameState.LOST

    @property
    def hazards_exposed(self) -> int:
        """Hazard probes survived under the TOLERATE policy."""
        return self._hazards_exposed

    @property
    def probe_count(self) -> int:
        """Number of probes made."""
        return self._probes

    @property
    def covered_count(self) -> int:
        """Number of cells not yet probed."""
        return len(self._covered)

    def is_covered(self, x: int, y: int) -> bool:
        """Check whether (x, y) has not been probed."""
        return (x, y) in self._covered
