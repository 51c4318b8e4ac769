# coding: utf-8
"""
Backbone computation.

The backbone of a formula is the set of literals that are true in all of its
models. All algorithms keep a candidate set that over-approximates the
backbone and refine it with SAT queries until it is exact:

- ENUMERATION: intersect the literals of all models, enumerated with
  blocking clauses.
- ITERATIVE_TWO_TESTS: test both phases of every variable under assumptions.
- ITERATIVE_ONE_TEST: test the complement of one candidate at a time; SAT
  answers prune the candidates with the new model.
- ITERATIVE_COMPLEMENT: assert temporarily that some candidate is false; UNSAT
  proves the whole candidate set.
- CHUNKING: like ITERATIVE_COMPLEMENT, but on chunks of ``chunk_size`` candidates.

An unsatisfiable formula has the empty backbone.
"""
import logging
import time
from enum import Enum
from typing import Any, Dict, Optional, Union

from sortedcontainers import SortedSet

from spine.bool.backbone.candidates import CandidateSet, negated_disjunction
from spine.bool.sat.pysat_solver import PySATSolver
from spine.formula import Formula
from spine.global_params import global_config
from spine.utils.exceptions import InvalidAlgorithm, InvalidChunkSize
from spine.utils.types import SolverResult

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    """Enumeration of available backbone algorithms."""
    ENUMERATION = "enumeration"
    ITERATIVE_TWO_TESTS = "iterative-two-tests"
    ITERATIVE_ONE_TEST = "iterative-one-test"
    ITERATIVE_COMPLEMENT = "iterative-complement"
    CHUNKING = "chunking"

    @classmethod
    def from_string(cls, name: str) -> "Algorithm":
        """Convert string to Algorithm enum."""
        normalized = name.lower().replace("_", "-")
        for alg in cls:
            if alg.value == normalized:
                return alg
        raise InvalidAlgorithm(f"Unknown algorithm: {name}")


class BackboneComputer:
    """Computes the backbone of one formula with one algorithm.

    Every call of :meth:`compute` uses a fresh solver, so repeated calls are
    independent of each other.
    """

    def __init__(self, formula: Formula,
                 algorithm: Union[str, Algorithm] = Algorithm.ITERATIVE_ONE_TEST,
                 chunk_size: Optional[int] = None,
                 solver_name: Optional[str] = None):
        self.formula = formula
        self.algorithm = algorithm
        self.chunk_size = chunk_size
        self.solver_name = solver_name
        self.stats: Dict[str, Any] = {}

    def _resolve_algorithm(self) -> Algorithm:
        if isinstance(self.algorithm, Algorithm):
            return self.algorithm
        if isinstance(self.algorithm, str):
            return Algorithm.from_string(self.algorithm)
        raise InvalidAlgorithm(f"Unknown algorithm: {self.algorithm!r}")

    def _resolve_chunk_size(self) -> int:
        size = self.chunk_size
        if size is None:
            size = global_config.default_chunk_size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidChunkSize(f"Chunk size must be a positive integer, got {size!r}")
        return size

    def compute(self) -> SortedSet:
        """Compute the backbone.

        Returns:
            The backbone literals, sorted.

        Raises:
            InvalidAlgorithm: If the algorithm selector is unknown.
            InvalidChunkSize: If CHUNKING is selected with a non-positive chunk size.
        """
        algorithm = self._resolve_algorithm()
        chunk_size = self._resolve_chunk_size() if algorithm == Algorithm.CHUNKING else None
        logger.info("Computing backbone with %s (chunk size: %s)", algorithm.value, chunk_size)

        start = time.time()
        with PySATSolver(self.formula.factory, self.solver_name) as solver:
            solver.add(self.formula)
            if algorithm == Algorithm.ENUMERATION:
                backbone = self._run_enumeration(solver)
            elif algorithm == Algorithm.ITERATIVE_TWO_TESTS:
                backbone = self._run_iterative_two_tests(solver)
            elif algorithm == Algorithm.ITERATIVE_ONE_TEST:
                backbone = self._run_iterative_one_test(solver)
            elif algorithm == Algorithm.ITERATIVE_COMPLEMENT:
                backbone = self._run_iterative_complement(solver)
            elif algorithm == Algorithm.CHUNKING:
                backbone = self._run_chunking(solver, chunk_size)
            else:
                raise InvalidAlgorithm(f"Unsupported algorithm: {algorithm}")
            self.stats = dict(solver.stats)

        self.stats.update({
            "algorithm": algorithm.value,
            "chunk_size": chunk_size,
            "backbone_size": len(backbone),
            "runtime_sec": time.time() - start,
        })
        logger.info("Backbone has %d literals (%d solver calls)",
                    len(backbone), self.stats["solve_calls"])
        return backbone

    def _run_enumeration(self, solver: PySATSolver) -> SortedSet:
        """Intersect all models, excluding each seen model with a blocking clause."""
        factory = self.formula.factory
        result = solver.solve()
        if result == SolverResult.UNSAT:
            return SortedSet()

        estimate = self.formula.literals()
        estimate.update([lit.negate() for lit in estimate])
        candidates = CandidateSet(estimate)
        while candidates:
            if result == SolverResult.UNSAT:
                break
            model = solver.model()
            candidates.retain(model.literals())
            logger.debug("Model %s leaves %d candidates", model, len(candidates))
            solver.add(model.blocking_clause(factory))
            result = solver.solve()
        return candidates.release()

    def _run_iterative_two_tests(self, solver: PySATSolver) -> SortedSet:
        """Test both phases of every variable; forced phases are asserted permanently."""
        backbone = SortedSet()
        for var in self.formula.variables():
            pos_sat = solver.solve([var]) == SolverResult.SAT
            neg_sat = solver.solve([var.negate()]) == SolverResult.SAT
            if not pos_sat and not neg_sat:
                logger.debug("Formula is unsatisfiable")
                return SortedSet()
            if not pos_sat:
                forced = var.negate()
            elif not neg_sat:
                forced = var
            else:
                continue
            logger.debug("Backbone literal: %s", forced)
            backbone.add(forced)
            solver.add(forced)
        return backbone

    def _run_iterative_one_test(self, solver: PySATSolver) -> SortedSet:
        """Test the complement of the smallest candidate; SAT answers prune the candidates."""
        if solver.solve() == SolverResult.UNSAT:
            return SortedSet()
        candidates = CandidateSet(solver.model().literals())
        backbone = SortedSet()
        while candidates:
            lit = candidates.first()
            if solver.solve([lit.negate()]) == SolverResult.UNSAT:
                logger.debug("Backbone literal: %s", lit)
                backbone.add(lit)
                candidates.discard(lit)
                solver.add(lit)
            else:
                candidates.retain(solver.model().literals())
        return backbone

    def _run_iterative_complement(self, solver: PySATSolver) -> SortedSet:
        """Temporarily assert that some candidate is false until this becomes UNSAT."""
        factory = self.formula.factory
        if solver.solve() == SolverResult.UNSAT:
            return SortedSet()
        candidates = CandidateSet(solver.model().literals())
        while candidates:
            with solver.scope():
                solver.add(negated_disjunction(factory, candidates))
                if solver.solve() == SolverResult.UNSAT:
                    break
                candidates.retain(solver.model().literals())
                logger.debug("%d candidates left", len(candidates))
        return candidates.release()

    def _run_chunking(self, solver: PySATSolver, chunk_size: int) -> SortedSet:
        """Refine the candidates one chunk of ``chunk_size`` literals at a time."""
        factory = self.formula.factory
        if solver.solve() == SolverResult.UNSAT:
            return SortedSet()
        candidates = CandidateSet(solver.model().literals())
        backbone = SortedSet()
        while candidates:
            gamma = negated_disjunction(factory, candidates.chunk(chunk_size))
            with solver.scope():
                solver.add(gamma)
                confirmed = solver.solve() == SolverResult.UNSAT
                if not confirmed:
                    candidates.retain(solver.model().literals())
            if confirmed:
                forced = gamma.negate().cnf()
                logger.debug("Backbone chunk: %s", forced)
                backbone.update(forced.literals())
                candidates.remove_all(forced.literals())
                solver.add(forced)
        return backbone


def compute_backbone(formula: Formula,
                     algorithm: Union[str, Algorithm] = Algorithm.ITERATIVE_ONE_TEST,
                     chunk_size: Optional[int] = None,
                     solver_name: Optional[str] = None) -> SortedSet:
    """Convenience function computing the backbone of ``formula``."""
    return BackboneComputer(formula, algorithm, chunk_size, solver_name).compute()
