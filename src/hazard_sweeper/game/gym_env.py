"""
Gymnasium environment wrapper for Hazard Sweeper.

Exposes a GridEnvironment through the standard step interface so external
step-based drivers can play the same worlds as the deduction agents.
"""
from typing import Any, Dict, Optional, Set, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import KnowledgeBoard
from .environment import GridEnvironment, HazardPolicy
from .layout import GridLayout
from .render import mark_exposed, render_ansi


# ============================================================================
# Probe Environment
# ============================================================================

class ProbeEnv(gym.Env):
    """
    Gymnasium environment for Hazard Sweeper.

    Observation:
        2D int8 array indexed [y, x] where:
        - -1 = unknown cell
        - -2 = flagged cell (a tolerated hazard)
        - 0-8 = revealed hint

    Actions:
        Discrete action space of size size * size.
        Action i probes cell (i % size, i // size).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the episode
        - -10 for hitting a hazard
        - -0.1 for an invalid action (already probed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        layout: GridLayout,
        hazard_policy: HazardPolicy = HazardPolicy.TERMINATE,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            layout: Ground-truth layout.
            hazard_policy: Whether a hazard probe ends the episode.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.layout = layout
        self.hazard_policy = hazard_policy
        self.render_mode = render_mode
        self.size = layout.size

        self.observation_space = spaces.Box(
            low=-2,
            high=8,
            shape=(self.size, self.size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.size * self.size)

        self._start_episode()

    def _start_episode(self) -> None:
        self.grid = GridEnvironment(self.layout, self.hazard_policy)
        self.board = KnowledgeBoard(self.size)
        self._exposed: Set[Tuple[int, int]] = set()
        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode on the same layout.

        Args:
            seed: Random seed (unused, layouts are fixed).
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self._start_episode()
        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Probe one cell.

        Args:
            action: Cell index to probe (y * size + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.board.get_observation()
        terminated = not self.grid.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return int(action) % self.size, int(action) // self.size

    def _calculate_reward(self, x: int, y: int) -> float:
        if not self.grid.is_playing or not self.grid.is_covered(x, y):
            return -0.1

        result = self.grid.probe(x, y)
        if result.is_hazard:
            self._exposed.add((x, y))
            if self.grid.is_playing:
                self.board.flag_hazard(x, y)
            return -10.0

        self.board.reveal(x, y, result.hint)
        if self.grid.is_won:
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.size * self.size - self.layout.hazard_count,
            "game_state": self.grid.game_state.name,
            "hazards_exposed": self.grid.hazards_exposed,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_ansi(mark_exposed(self.board.symbols(), self._exposed))
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = cell not yet probed.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for cell in self.board.unresolved():
            if self.grid.is_covered(cell.x, cell.y):
                mask[self.board.index(cell.x, cell.y)] = True
        return mask
