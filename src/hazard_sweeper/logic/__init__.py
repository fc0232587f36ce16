"""
Deduction engine for Hazard Sweeper.

- FrontierExpander: flood-fills neighbors of zero-hint cells
- SinglePointInference: local AFN/AMN rules
- ConstraintEncoder: exact-k knowledge base over hazard variables
- SatisfiabilityQueryDriver: proves cells safe with a SAT oracle
"""
from .verdict import Action, Rule, Verdict
from .frontier import FrontierExpander
from .single_point import SinglePointInference
from .encoder import ConstraintEncoder, ExactConstraint, KnowledgeBase, variable_name
from .oracle import SatOracle, check_clauses
from .query import (
    AssumptionQuery,
    AugmentationQuery,
    QueryFailure,
    QueryOutcome,
    QueryStrategy,
    SatisfiabilityQueryDriver,
    terminal_sweep,
)

__all__ = [
    "Action",
    "Rule",
    "Verdict",
    "FrontierExpander",
    "SinglePointInference",
    "ConstraintEncoder",
    "ExactConstraint",
    "KnowledgeBase",
    "variable_name",
    "SatOracle",
    "check_clauses",
    "AssumptionQuery",
    "AugmentationQuery",
    "QueryFailure",
    "QueryOutcome",
    "QueryStrategy",
    "SatisfiabilityQueryDriver",
    "terminal_sweep",
]
