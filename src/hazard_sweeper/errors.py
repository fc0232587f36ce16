"""
Exception types for Hazard Sweeper.

Board and environment errors signal misuse by a caller. Oracle errors are
raised by the satisfiability adapter and recovered by the query driver.
"""


class HazardSweeperError(Exception):
    """Base class for all Hazard Sweeper errors."""


class AlreadyResolvedError(HazardSweeperError):
    """A reveal or flag was attempted on a cell that is no longer unknown."""

    def __init__(self, x: int, y: int, state: str) -> None:
        super().__init__(f"Cell ({x}, {y}) is already resolved ({state})")
        self.x = x
        self.y = y


class EpisodeOverError(HazardSweeperError):
    """A probe was attempted after the episode was lost."""


# ============================================================================
# Oracle Errors
# ============================================================================

class OracleError(HazardSweeperError):
    """Base class for satisfiability oracle failures."""


class FormulaParseError(OracleError):
    """The generated constraint formula is malformed."""


class OracleContradiction(OracleError):
    """The clause set contradicts itself before any query is posed."""


class OracleTimeout(OracleError):
    """The solver exhausted its conflict budget without an answer."""
