# coding: utf-8
from .sat.pysat_solver import PySATSolver
from .backbone import Algorithm, BackboneComputer

# Export
__all__ = ["PySATSolver", "Algorithm", "BackboneComputer"]
