"""
Grid layouts for Hazard Sweeper.

A layout is the ground truth of one world: which cells hold a hazard and the
hint every cell would show. Layouts come from text, from the preset worlds,
or from a seeded random placement.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np


# ============================================================================
# Constants
# ============================================================================

HAZARD_TOKEN = "t"
SAFE_TOKEN = "."


def default_safe_cells(size: int) -> Tuple[Tuple[int, int], ...]:
    """Cells every layout keeps safe: the top-left corner and the center."""
    center = size // 2
    if center == 0:
        return ((0, 0),)
    return ((0, 0), (center, center))


# ============================================================================
# Grid Layout
# ============================================================================

@dataclass(frozen=True, eq=False)
class GridLayout:
    """
    Ground-truth layout of a square grid.

    Attributes:
        hazards: Boolean array of shape (size, size), indexed [y, x].
        hints: Hazardous-neighbor count per cell, indexed [y, x].
    """

    hazards: np.ndarray
    hints: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the mask and precompute hints."""
        mask = np.array(self.hazards, dtype=bool)
        if mask.ndim != 2 or mask.shape[0] != mask.shape[1]:
            raise ValueError(f"Grid must be square, got shape {mask.shape}")
        if mask.shape[0] < 1:
            raise ValueError("Grid dimensions must be positive")
        mask.setflags(write=False)
        object.__setattr__(self, "hazards", mask)
        hints = _count_neighbor_hazards(mask)
        hints.setflags(write=False)
        object.__setattr__(self, "hints", hints)

    # ========================================================================
    # Constructors
    # ========================================================================

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "GridLayout":
        """
        Build a layout from rows of tokens.

        Tokens are 't' for a hazard and '.' or a digit for a safe cell.
        Digits are checked against the hint computed from the hazards.

        Args:
            rows: Token rows, top row first.

        Raises:
            ValueError: On an unknown token, a ragged grid or a wrong digit.
        """
        mask = np.zeros((len(rows), len(rows)), dtype=bool)
        digits: Dict[Tuple[int, int], int] = {}
        for y, row in enumerate(rows):
            if len(row) != len(rows):
                raise ValueError(
                    f"Row {y} has {len(row)} cells, expected {len(rows)}"
                )
            for x, token in enumerate(row):
                token = token.lower()
                if token == HAZARD_TOKEN:
                    mask[y, x] = True
                elif token.isdigit() and len(token) == 1:
                    digits[(x, y)] = int(token)
                elif token != SAFE_TOKEN:
                    raise ValueError(f"Unknown token {token!r} at ({x}, {y})")

        layout = cls(mask)
        for (x, y), digit in digits.items():
            if layout.hint(x, y) != digit:
                raise ValueError(
                    f"Hint at ({x}, {y}) is {digit}, "
                    f"but {layout.hint(x, y)} hazards are adjacent"
                )
        return layout

    @classmethod
    def from_text(cls, text: str) -> "GridLayout":
        """
        Parse a layout from text, one row per line.

        Rows may be whitespace-separated ("t . 1") or contiguous ("t.1").
        Blank lines are ignored.
        """
        rows: List[List[str]] = []
        for line in text.strip().splitlines():
            line = line.strip()
            if not line:
                continue
            tokens = line.split() if len(line.split()) > 1 else list(line)
            rows.append(tokens)
        return cls.from_rows(rows)

    @classmethod
    def random(
        cls,
        size: int,
        hazard_count: int,
        seed: Optional[int] = None,
        safe: Optional[Iterable[Tuple[int, int]]] = None,
    ) -> "GridLayout":
        """
        Place hazards uniformly at random.

        Args:
            size: Grid side length.
            hazard_count: Number of hazards to place.
            seed: Seed for numpy's generator.
            safe: (x, y) cells that must stay hazard-free
                (default: top-left corner and center).

        Raises:
            ValueError: If the hazards do not fit in the free cells.
        """
        if size < 1:
            raise ValueError("Grid dimensions must be positive")
        if hazard_count < 0:
            raise ValueError("Number of hazards cannot be negative")

        keep_safe = set(default_safe_cells(size) if safe is None else safe)
        positions = [
            y * size + x
            for y in range(size)
            for x in range(size)
            if (x, y) not in keep_safe
        ]
        if hazard_count > len(positions):
            raise ValueError(f"Too many hazards (max {len(positions)})")

        rng = np.random.default_rng(seed)
        chosen = rng.choice(positions, size=hazard_count, replace=False)
        mask = np.zeros(size * size, dtype=bool)
        mask[np.asarray(chosen, dtype=int)] = True
        return cls(mask.reshape(size, size))

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def size(self) -> int:
        """Grid side length."""
        return int(self.hazards.shape[0])

    @property
    def hazard_count(self) -> int:
        """Total number of hazards."""
        return int(self.hazards.sum())

    def is_hazard(self, x: int, y: int) -> bool:
        """Check whether (x, y) holds a hazard."""
        return bool(self.hazards[y, x])

    def hint(self, x: int, y: int) -> int:
        """Hazardous-neighbor count of (x, y)."""
        return int(self.hints[y, x])

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def to_rows(self) -> List[List[str]]:
        """Ground-truth rows: 't' for hazards, hint digits elsewhere."""
        return [
            [
                HAZARD_TOKEN if self.is_hazard(x, y) else str(self.hint(x, y))
                for x in range(self.size)
            ]
            for y in range(self.size)
        ]


def _count_neighbor_hazards(mask: np.ndarray) -> np.ndarray:
    """Sum the 8 shifted copies of a zero-padded mask."""
    size = mask.shape[0]
    padded = np.pad(mask.astype(np.int8), 1)
    counts = np.zeros((size, size), dtype=np.int8)
    for delta_y in (-1, 0, 1):
        for delta_x in (-1, 0, 1):
            if delta_x == 0 and delta_y == 0:
                continue
            counts += padded[
                1 + delta_y:1 + delta_y + size,
                1 + delta_x:1 + delta_x + size,
            ]
    return counts


# ============================================================================
# Preset Worlds
# ============================================================================

_WORLD_TEXT: Dict[str, str] = {
    "TEST1": """
        . . .
        . . .
        . . t
    """,
    "S1": """
        . . . . .
        . . . . .
        . . . . .
        t . . t .
        . t . . t
    """,
    "S2": """
        . . . t .
        . . . . .
        . . . . .
        . . . . t
        t . t . .
    """,
    "S3": """
        . . . . .
        . . . . .
        . . . . t
        . t . . .
        . . . t t
    """,
    "M1": """
        . . . . . . .
        . . . . . . t
        . . . . . . .
        . . . . . t .
        t . . . . . .
        . . t . . . .
        . t . . . t .
    """,
    "M2": """
        . . . . . t .
        . . . . . . .
        . . . . . . .
        . . . . . . .
        t . . . . . t
        . . t . . . .
        . . . . t . .
    """,
    "L1": """
        . . . . . . . . . t .
        . . . . . . . . . . .
        . . . . . . . . . . .
        . . . . . . . . . . t
        . . . . . . . . . . .
        t . . . . . . . . . .
        . . . . . . . . t . .
        . . . . . . . . . . .
        . . t . . . . . . . .
        . . . . . . t . . . .
        . t . . . . . . . . t
    """,
}

WORLDS: Dict[str, GridLayout] = {
    name: GridLayout.from_text(text) for name, text in _WORLD_TEXT.items()
}


def get_world(name: str) -> GridLayout:
    """
    Look up a preset world by name (case-insensitive).

    Raises:
        KeyError: If no world has that name.
    """
    key = name.upper()
    if key not in WORLDS:
        raise KeyError(f"Unknown world {name!r}; choose from {sorted(WORLDS)}")
    return WORLDS[key]
