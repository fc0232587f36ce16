"""
Hazard Sweeper game module.

Provides the ground-truth layout and environment, the agent's knowledge
board, rendering, and a Gymnasium wrapper.
"""
from .cell import Cell, CellState
from .board import KnowledgeBoard, get_neighborhoods
from .layout import GridLayout, WORLDS, get_world, default_safe_cells
from .environment import GameState, GridEnvironment, HazardPolicy, ProbeResult
from .render import format_board, render_ansi, mark_exposed
from .gym_env import ProbeEnv

__all__ = [
    "Cell",
    "CellState",
    "KnowledgeBoard",
    "get_neighborhoods",
    "GridLayout",
    "WORLDS",
    "get_world",
    "default_safe_cells",
    "GameState",
    "GridEnvironment",
    "HazardPolicy",
    "ProbeResult",
    "format_board",
    "render_ansi",
    "mark_exposed",
    "ProbeEnv",
]
