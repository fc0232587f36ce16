"""
Hazard Sweeper: a deduction engine for a hidden-hazard grid game.

Agents open a square grid, expand the safe frontier, and decide the
remaining cells with local rules and a SAT oracle.
"""
from .errors import (
    AlreadyResolvedError,
    EpisodeOverError,
    FormulaParseError,
    HazardSweeperError,
    OracleContradiction,
    OracleError,
    OracleTimeout,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyResolvedError",
    "EpisodeOverError",
    "FormulaParseError",
    "HazardSweeperError",
    "OracleContradiction",
    "OracleError",
    "OracleTimeout",
    "__version__",
]
