"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Sequence

# Add src (package) and the project root (main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from hazard_sweeper.game import (
    GridEnvironment,
    GridLayout,
    HazardPolicy,
    KnowledgeBoard,
    get_world,
)


def board_from_rows(rows: Sequence[str]) -> KnowledgeBoard:
    """
    Build a knowledge board from symbol rows, top row first.

    '?' is unknown, '*' is flagged and a digit is a revealed hint.
    """
    grid = [row.split() for row in rows]
    board = KnowledgeBoard(len(grid))
    for y, row in enumerate(grid):
        for x, symbol in enumerate(row):
            if symbol == "*":
                board.flag_hazard(x, y)
            elif symbol.isdigit():
                board.reveal(x, y, int(symbol))
    return board


# ============================================================================
# Layout Fixtures
# ============================================================================

@pytest.fixture
def test1_layout() -> GridLayout:
    """3x3 preset with one hazard in the bottom-right corner."""
    return get_world("TEST1")


@pytest.fixture
def exact_k_layout() -> GridLayout:
    """4x4 grid whose bottom row needs the exact-k encoding to solve."""
    return GridLayout.from_text("""
        . . . .
        . . . .
        . . . .
        t . t .
    """)


@pytest.fixture
def ambiguous_layout() -> GridLayout:
    """5x5 grid where (4, 4) is safe but no hint touches it."""
    return GridLayout.from_text("""
        . . . . .
        . . . . .
        . . . . .
        . . . t t
        . . . t .
    """)


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def make_environment() -> Callable[..., GridEnvironment]:
    """Factory for environments over a layout."""
    def factory(
        layout: GridLayout,
        hazard_policy: HazardPolicy = HazardPolicy.TERMINATE,
    ) -> GridEnvironment:
        return GridEnvironment(layout, hazard_policy)
    return factory


@pytest.fixture
def test1_environment(test1_layout: GridLayout) -> GridEnvironment:
    """Fresh environment over TEST1."""
    return GridEnvironment(test1_layout)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def exact_k_board() -> KnowledgeBoard:
    """Knowledge board of the exact-k grid after frontier expansion."""
    return board_from_rows([
        "0 0 0 0",
        "0 0 0 0",
        "1 2 1 1",
        "? ? ? ?",
    ])


@pytest.fixture
def empty_board() -> KnowledgeBoard:
    """All-unknown 5x5 board."""
    return KnowledgeBoard(5)


@pytest.fixture
def make_board() -> Callable[[Sequence[str]], KnowledgeBoard]:
    """Factory for boards written as symbol rows."""
    return board_from_rows
