"""
Satisfiability oracle backed by PySAT.

Two ways to ask:

- is_satisfiable(clauses, assumptions): a one-shot query on a fresh solver.
- load(clauses) then query(assumptions): clauses are added once to an
  incremental solver and queried repeatedly under unit assumptions.

Failures surface as FormulaParseError (malformed clauses),
OracleContradiction (opposing unit clauses) or OracleTimeout (conflict budget
exhausted).
"""
import logging
from numbers import Integral
from typing import Iterable, List, Optional, Sequence

from pysat.solvers import Solver, SolverNames

from ..errors import FormulaParseError, OracleContradiction, OracleTimeout


logger = logging.getLogger(__name__)

DEFAULT_SOLVER = "m22"

Clause = Sequence[int]


def check_clauses(clauses: Iterable[Clause]) -> List[List[int]]:
    """
    Validate clauses and reject opposing unit clauses.

    Returns:
        The clauses as lists of ints.

    Raises:
        FormulaParseError: On an empty clause or a zero/non-integer literal.
        OracleContradiction: If both x and -x appear as unit clauses.
    """
    checked: List[List[int]] = []
    units = set()
    for clause in clauses:
        clause = list(clause)
        if not clause:
            raise FormulaParseError("Empty clause")
        for lit in clause:
            if isinstance(lit, bool) or not isinstance(lit, Integral) or lit == 0:
                raise FormulaParseError(f"Invalid literal {lit!r} in {clause}")
        if len(clause) == 1:
            if -clause[0] in units:
                raise OracleContradiction(
                    f"Opposing unit clauses on variable {abs(clause[0])}"
                )
            units.add(clause[0])
        checked.append([int(lit) for lit in clause])
    return checked


class SatOracle:
    """
    Wrapper around a PySAT solver.

    Args:
        solver_name: Any PySAT solver name ('m22', 'g3', 'cd15', ...).
        conflict_budget: Conflicts allowed per query; None means unbounded.
    """

    def __init__(
        self,
        solver_name: str = DEFAULT_SOLVER,
        conflict_budget: Optional[int] = None,
    ) -> None:
        if not is_known_solver(solver_name):
            raise ValueError(f"Unknown SAT solver {solver_name!r}")
        if conflict_budget is not None and conflict_budget <= 0:
            raise ValueError("Conflict budget must be positive")
        self.solver_name = solver_name
        self.conflict_budget = conflict_budget
        self._solver: Optional[Solver] = None
        self.calls = 0

    # ========================================================================
    # One-shot Queries
    # ========================================================================

    def is_satisfiable(
        self, clauses: Iterable[Clause], assumptions: Sequence[int] = ()
    ) -> bool:
        """Solve clauses under assumptions on a fresh solver."""
        checked = check_clauses(clauses)
        with Solver(name=self.solver_name, bootstrap_with=checked) as solver:
            return self._solve(solver, assumptions)

    # ========================================================================
    # Incremental Queries
    # ========================================================================

    def load(self, clauses: Iterable[Clause]) -> None:
        """Replace the incremental solver with one holding clauses."""
        checked = check_clauses(clauses)
        self.close()
        self._solver = Solver(name=self.solver_name, bootstrap_with=checked)

    def query(self, assumptions: Sequence[int] = ()) -> bool:
        """
        Solve the loaded clauses under assumptions.

        Raises:
            RuntimeError: If nothing was loaded.
        """
        if self._solver is None:
            raise RuntimeError("No clauses loaded")
        return self._solve(self._solver, assumptions)

    def close(self) -> None:
        """Release the incremental solver."""
        if self._solver is not None:
            self._solver.delete()
            self._solver = None

    def __enter__(self) -> "SatOracle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ========================================================================
    # Solving
    # ========================================================================

    def _solve(self, solver: Solver, assumptions: Sequence[int]) -> bool:
        self.calls += 1
        assumptions = [int(lit) for lit in assumptions]
        if self.conflict_budget is None:
            return bool(solver.solve(assumptions=assumptions))

        solver.conf_budget(self.conflict_budget)
        result = solver.solve_limited(assumptions=assumptions)
        if result is None:
            raise OracleTimeout(
                f"{self.solver_name} exceeded {self.conflict_budget} conflicts"
            )
        return bool(result)


def is_known_solver(name: str) -> bool:
    """Check a name against PySAT's solver aliases."""
    for attribute in vars(SolverNames).values():
        if isinstance(attribute, tuple) and name in attribute:
            return True
    return False
