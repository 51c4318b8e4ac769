# coding: utf-8
"""Shared result types."""
from enum import Enum


class SolverResult(Enum):
    """Answer of a satisfiability query."""
    SAT = 0
    UNSAT = 1
    UNKNOWN = 2

    def __str__(self) -> str:
        return self.name
