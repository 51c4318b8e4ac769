# coding: utf-8
"""
The formula factory.

A factory interns the formulas it creates, so structurally equal formulas
built by the same factory are the same object. Each factory owns an explicit
``factory_id``; formulas remember it and operators refuse operands built by a
different factory.
"""
import itertools
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from spine.formula.formula import (
    And,
    Constant,
    Equivalence,
    Formula,
    FType,
    Implication,
    Literal,
    Not,
    Or,
)
from spine.utils.exceptions import FormulaFactoryError

logger = logging.getLogger(__name__)

_factory_ids = itertools.count(1)

FormulaArgs = Union[Formula, Iterable[Formula]]


class FormulaFactory:
    """Creates, simplifies and interns formulas."""

    def __init__(self, name: Optional[str] = None):
        self.factory_id = next(_factory_ids)
        self.name = name or f"ff{self.factory_id}"
        self._verum = Constant(self, True)
        self._falsum = Constant(self, False)
        self._literals: Dict[Tuple[str, bool], Literal] = {}
        self._nots: Dict[Formula, Not] = {}
        self._implications: Dict[Tuple[Formula, Formula], Implication] = {}
        self._equivalences: Dict[Tuple[Formula, Formula], Equivalence] = {}
        self._ands: Dict[Tuple[Formula, ...], And] = {}
        self._ors: Dict[Tuple[Formula, ...], Or] = {}

    def __repr__(self) -> str:
        return f"FormulaFactory(name={self.name}, id={self.factory_id})"

    def _check(self, *formulas: Formula) -> None:
        for formula in formulas:
            if not isinstance(formula, Formula):
                raise TypeError(f"Expected a Formula, got {type(formula).__name__}")
            if formula.factory_id != self.factory_id:
                raise FormulaFactoryError(
                    f"Formula {formula} was created by factory {formula.factory_id}, "
                    f"not by {self.name} ({self.factory_id})"
                )

    # -- atoms -------------------------------------------------------------

    def verum(self) -> Constant:
        return self._verum

    def falsum(self) -> Constant:
        return self._falsum

    def constant(self, value: bool) -> Constant:
        return self._verum if value else self._falsum

    def literal(self, name: str, phase: bool = True) -> Literal:
        key = (name, phase)
        lit = self._literals.get(key)
        if lit is None:
            lit = Literal(self, name, phase)
            self._literals[key] = lit
        return lit

    def variable(self, name: str) -> Literal:
        return self.literal(name, True)

    def variables(self, *names: str) -> List[Literal]:
        """Shortcut for a list of positive literals."""
        return [self.variable(name) for name in names]

    # -- operators ---------------------------------------------------------

    def not_(self, operand: Formula) -> Formula:
        self._check(operand)
        if operand.is_atomic() or operand.type == FType.NOT:
            return operand.negate()
        result = self._nots.get(operand)
        if result is None:
            result = Not(self, operand)
            self._nots[operand] = result
        return result

    def implication(self, left: Formula, right: Formula) -> Formula:
        self._check(left, right)
        if left.type == FType.FALSE or right.type == FType.TRUE or left == right:
            return self._verum
        if left.type == FType.TRUE:
            return right
        if right.type == FType.FALSE:
            return self.not_(left)
        key = (left, right)
        result = self._implications.get(key)
        if result is None:
            result = Implication(self, left, right)
            self._implications[key] = result
        return result

    def equivalence(self, left: Formula, right: Formula) -> Formula:
        self._check(left, right)
        if left == right:
            return self._verum
        if left.type == FType.TRUE:
            return right
        if right.type == FType.TRUE:
            return left
        if left.type == FType.FALSE:
            return self.not_(right)
        if right.type == FType.FALSE:
            return self.not_(left)
        if left == right.negate():
            return self._falsum
        key = (left, right)
        result = self._equivalences.get(key)
        if result is None:
            result = Equivalence(self, left, right)
            self._equivalences[key] = result
        return result

    def and_(self, *operands: FormulaArgs) -> Formula:
        """Conjunction; ``$false`` or a complementary literal pair collapse it to ``$false``."""
        return self._nary(FType.AND, operands)

    def or_(self, *operands: FormulaArgs) -> Formula:
        """Disjunction; ``$true`` or a complementary literal pair collapse it to ``$true``."""
        return self._nary(FType.OR, operands)

    def clause(self, literals: Iterable[Literal]) -> Formula:
        return self.or_(*literals)

    def cnf(self, clauses: Iterable[Iterable[Literal]]) -> Formula:
        return self.and_(*[self.or_(*clause) for clause in clauses])

    def _nary(self, ftype: FType, args: Tuple[FormulaArgs, ...]) -> Formula:
        if ftype == FType.AND:
            neutral, dominant, cache, cls = self._verum, self._falsum, self._ands, And
        else:
            neutral, dominant, cache, cls = self._falsum, self._verum, self._ors, Or

        operands: List[Formula] = []
        seen = set()
        for op in _flatten_args(args):
            self._check(op)
            if op.type == dominant.type:
                return dominant
            if op.type == neutral.type:
                continue
            for inner in op.operands if op.type == ftype else (op,):
                if inner in seen:
                    continue
                if inner.type == FType.LITERAL and inner.negate() in seen:
                    return dominant
                seen.add(inner)
                operands.append(inner)

        if not operands:
            return neutral
        if len(operands) == 1:
            return operands[0]
        key = tuple(operands)
        result = cache.get(key)
        if result is None:
            result = cls(self, key)
            cache[key] = result
        return result


def _flatten_args(args: Tuple[FormulaArgs, ...]):
    for arg in args:
        if isinstance(arg, Formula):
            yield arg
        else:
            yield from arg
