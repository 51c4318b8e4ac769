# coding: utf-8
"""
Incremental SAT solving over formulas, backed by PySAT.

Besides plain solving under assumptions, the solver supports scoped
assertions: :meth:`PySATSolver.checkpoint` opens a scope and
:meth:`PySATSolver.restore` discards everything added since. Scopes are
implemented with activation (selector) literals: a clause added inside a scope
is extended by the negated selector of the innermost open scope, all open
selectors are assumed on every query, and restoring a scope permanently
asserts the negated selector, which disables its clauses.
"""
import itertools
import logging
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from pysat.formula import IDPool
from pysat.solvers import Solver

from spine.formula import Assignment, Formula, FormulaFactory, FType, Literal
from spine.global_params import global_config
from spine.utils.exceptions import CheckpointError, FormulaFactoryError, SolverStateError
from spine.utils.types import SolverResult

logger = logging.getLogger(__name__)

_solver_ids = itertools.count(1)


class SolverCheckpoint:
    """Token returned by :meth:`PySATSolver.checkpoint`; it can be restored exactly once."""

    def __init__(self, solver_id: int, depth: int, selector: int):
        self.solver_id = solver_id
        self.depth = depth
        self.selector = selector
        self.consumed = False

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else "open"
        return f"SolverCheckpoint(solver={self.solver_id}, depth={self.depth}, {state})"


class PySATSolver:
    """Incremental SAT solver over the formulas of one factory."""

    def __init__(self, factory: FormulaFactory, solver_name: Optional[str] = None):
        self.factory = factory
        self.solver_name = global_config.resolve_sat_solver(solver_name)
        self.solver_id = next(_solver_ids)
        self._oracle = Solver(name=self.solver_name)
        self._pool = IDPool()
        # problem variable id -> name, in order of first appearance
        self._problem_vars: Dict[int, str] = {}
        self._aux: Dict[Formula, int] = {}
        self._frames: List[SolverCheckpoint] = []
        self._selectors = itertools.count()
        self._false_var: Optional[int] = None
        self._last_result: Optional[SolverResult] = None
        self._model: Optional[set] = None
        self.stats: Dict[str, int] = {"solve_calls": 0, "sat": 0, "unsat": 0, "clauses": 0}

    # -- life cycle ----------------------------------------------------------

    def delete(self) -> None:
        if self._oracle is not None:
            self._oracle.delete()
            self._oracle = None

    def __enter__(self) -> "PySATSolver":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.delete()

    # -- encoding ----------------------------------------------------------

    def _var(self, name: str) -> int:
        vid = self._pool.id(("var", name))
        if vid not in self._problem_vars:
            self._problem_vars[vid] = name
            self._oracle.add_clause([vid, -vid])
        return vid

    def _lit(self, lit: Literal) -> int:
        vid = self._var(lit.name)
        return vid if lit.phase else -vid

    def _false(self) -> int:
        """A variable that is false in every model, used to encode empty clauses."""
        if self._false_var is None:
            self._false_var = self._pool.id(("false",))
            self._oracle.add_clause([-self._false_var])
        return self._false_var

    def _add_clause(self, clause: List[int]) -> None:
        if not clause:
            clause = [self._false()]
        if self._frames:
            clause = clause + [-self._frames[-1].selector]
        self._oracle.add_clause(clause)
        self.stats["clauses"] += 1

    def _tseitin(self, nnf: Formula) -> int:
        """Integer literal equivalent to ``nnf``; definitions are added permanently."""
        if nnf.type == FType.LITERAL:
            return self._lit(nnf)
        if nnf.type == FType.TRUE:
            return -self._false()
        if nnf.type == FType.FALSE:
            return self._false()
        cached = self._aux.get(nnf)
        if cached is not None:
            return cached

        children = [self._tseitin(op) for op in nnf.operands]
        aux = self._pool.id(("tseitin", len(self._aux)))
        if nnf.type == FType.AND:
            definition = [[-aux, child] for child in children]
            definition.append([aux] + [-child for child in children])
        else:
            definition = [[aux, -child] for child in children]
            definition.append([-aux] + children)
        for clause in definition:
            self._oracle.add_clause(clause)
        self._aux[nnf] = aux
        return aux

    # -- solver interface ----------------------------------------------------

    def add(self, formula: Formula) -> None:
        """Assert ``formula``; inside a checkpoint the assertion lasts until its restore."""
        if formula.factory_id != self.factory.factory_id:
            raise FormulaFactoryError(
                f"Solver works on factory {self.factory.factory_id}, "
                f"formula belongs to {formula.factory_id}"
            )
        if formula.is_cnf():
            for clause in formula.clauses():
                self._add_clause([self._lit(lit) for lit in clause])
        else:
            self._add_clause([self._tseitin(formula.nnf())])

    def add_all(self, formulas: Iterable[Formula]) -> None:
        for formula in formulas:
            self.add(formula)

    def solve(self, assumptions: Iterable[Literal] = ()) -> SolverResult:
        """Check satisfiability, treating ``assumptions`` as temporary unit clauses."""
        assumed = [frame.selector for frame in self._frames]
        assumed.extend(self._lit(lit) for lit in assumptions)
        self.stats["solve_calls"] += 1
        if self._oracle.solve(assumptions=assumed):
            self._last_result = SolverResult.SAT
            self._model = set(self._oracle.get_model() or [])
            self.stats["sat"] += 1
        else:
            self._last_result = SolverResult.UNSAT
            self._model = None
            self.stats["unsat"] += 1
        return self._last_result

    def model(self) -> Assignment:
        """The model of the last SAT answer, over the problem variables only."""
        if self._last_result != SolverResult.SAT or self._model is None:
            raise SolverStateError("A model is only available directly after a SAT answer")
        return Assignment(
            self.factory.literal(name, vid in self._model)
            for vid, name in self._problem_vars.items()
        )

    def checkpoint(self) -> SolverCheckpoint:
        """Open a scope; everything added until the matching restore is temporary."""
        selector = self._pool.id(("selector", next(self._selectors)))
        # registers the selector variable with the engine
        self._oracle.add_clause([selector, -selector])
        token = SolverCheckpoint(self.solver_id, len(self._frames), selector)
        self._frames.append(token)
        logger.debug("Checkpoint at depth %d", token.depth)
        return token

    def restore(self, token: SolverCheckpoint) -> None:
        """Discard everything added since ``token`` was created.

        Raises:
            CheckpointError: If the token was already restored, belongs to another
                solver, or is not the innermost open checkpoint.
        """
        if token.solver_id != self.solver_id:
            raise CheckpointError(f"{token} does not belong to solver {self.solver_id}")
        if token.consumed:
            raise CheckpointError(f"{token} was already restored")
        if not self._frames or self._frames[-1] is not token:
            raise CheckpointError(f"{token} is not the innermost open checkpoint")
        self._frames.pop()
        token.consumed = True
        self._oracle.add_clause([-token.selector])
        self._last_result = None
        self._model = None
        logger.debug("Restored checkpoint at depth %d", token.depth)

    @contextmanager
    def scope(self) -> Iterator[SolverCheckpoint]:
        """Context manager pairing :meth:`checkpoint` and :meth:`restore`."""
        token = self.checkpoint()
        try:
            yield token
        finally:
            if not token.consumed:
                self.restore(token)

    @property
    def depth(self) -> int:
        """Number of open checkpoints."""
        return len(self._frames)

    def nof_problem_vars(self) -> int:
        return len(self._problem_vars)
