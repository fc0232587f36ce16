"""
Verdicts produced by the deduction components.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Action(Enum):
    """What a verdict tells the driver to do with a cell."""

    REVEAL = "reveal"
    FLAG = "flag"


class Rule(Enum):
    """Which component produced a verdict."""

    FRONTIER = "FRONTIER"
    AFN = "AFN"
    AMN = "AMN"
    SAT = "SAT"
    PROBE = "PROBE"
    SWEEP = "SWEEP"


@dataclass(frozen=True)
class Verdict:
    """A single decision about one cell."""

    x: int
    y: int
    action: Action
    rule: Rule

    @property
    def coords(self) -> Tuple[int, int]:
        """Coordinates as an (x, y) tuple."""
        return self.x, self.y

    def __str__(self) -> str:
        return f"{self.rule.value}: {self.action.value} ({self.x}, {self.y})"
