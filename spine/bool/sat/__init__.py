from .pysat_solver import PySATSolver, SolverCheckpoint
from .z3sat_solver import Z3SATSolver

__all__ = ["PySATSolver", "SolverCheckpoint", "Z3SATSolver"]
