# coding: utf-8
"""Assignments (models) as sets of literals."""
from typing import Iterable, Optional

from sortedcontainers import SortedSet

from spine.formula.factory import FormulaFactory
from spine.formula.formula import Formula, Literal


class Assignment:
    """
    A (partial) truth assignment.

    Variables that are not assigned positively evaluate to false.
    """

    def __init__(self, literals: Iterable[Literal] = ()):
        self._positive = SortedSet()
        self._negative = SortedSet()
        for lit in literals:
            self.add_literal(lit)

    def add_literal(self, lit: Literal) -> None:
        if lit.phase:
            self._positive.add(lit)
        else:
            self._negative.add(lit)

    def literals(self) -> SortedSet:
        """All literals of the assignment, sorted."""
        return self._positive | self._negative

    def positive_variables(self) -> SortedSet:
        return SortedSet(self._positive)

    def negative_literals(self) -> SortedSet:
        return SortedSet(self._negative)

    def evaluate_lit(self, lit: Literal) -> bool:
        if lit.phase:
            return lit in self._positive
        return lit.variable() not in self._positive

    def blocking_clause(self, factory: FormulaFactory,
                        variables: Optional[Iterable[Literal]] = None) -> Formula:
        """
        The clause that excludes exactly this assignment.

        :param factory: factory building the clause
        :param variables: if given, the clause is projected onto these variables
        """
        names = None if variables is None else {v.name for v in variables}
        return factory.or_(*[lit.negate() for lit in self.literals()
                             if names is None or lit.name in names])

    def __contains__(self, lit: Literal) -> bool:
        return lit in self._positive or lit in self._negative

    def __len__(self) -> int:
        return len(self._positive) + len(self._negative)

    def __iter__(self):
        return iter(self.literals())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return self.literals() == other.literals()

    def __hash__(self) -> int:
        return hash(tuple(self.literals()))

    def __repr__(self) -> str:
        return "Assignment{" + ", ".join(str(lit) for lit in self.literals()) + "}"
