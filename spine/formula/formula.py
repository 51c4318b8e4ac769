# coding: utf-8
"""
Formula nodes.

Formulas are immutable and created (and interned) by a
:class:`spine.formula.factory.FormulaFactory`. Every node records the
``factory_id`` of its factory; equality and hashing are structural.
"""
from __future__ import annotations

from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, List, Optional, Tuple

from sortedcontainers import SortedSet

from spine.utils.exceptions import FormulaError

if TYPE_CHECKING:
    from spine.formula.assignment import Assignment
    from spine.formula.factory import FormulaFactory


class FType(Enum):
    """Node types, ordered by binding strength when printed."""
    EQUIV = 1
    IMPL = 2
    OR = 3
    AND = 4
    NOT = 5
    LITERAL = 6
    TRUE = 7
    FALSE = 8


_PRECEDENCE = {
    FType.EQUIV: 1,
    FType.IMPL: 2,
    FType.OR: 3,
    FType.AND: 4,
}
_ATOMIC = 5


class Formula:
    """Base class of all formula nodes."""

    def __init__(self, ftype: FType, factory: "FormulaFactory"):
        self.type = ftype
        self.factory = factory
        self.factory_id = factory.factory_id
        self._hash: Optional[int] = None
        self._literals: Optional[Tuple["Literal", ...]] = None
        self._nnf: Optional[Formula] = None
        self._cnf: Optional[Formula] = None

    # -- structure ---------------------------------------------------------

    @property
    def operands(self) -> Tuple["Formula", ...]:
        return ()

    def _key(self) -> tuple:
        return (self.type, self.operands)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Formula):
            return NotImplemented
        return self.type == other.type and self._key() == other._key()

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._key())
        return self._hash

    def is_constant(self) -> bool:
        return self.type in (FType.TRUE, FType.FALSE)

    def is_atomic(self) -> bool:
        return self.type in (FType.TRUE, FType.FALSE, FType.LITERAL)

    # -- variables and literals --------------------------------------------

    def _collect_literals(self, into: set) -> None:
        for op in self.operands:
            op._collect_literals(into)

    def literals(self) -> SortedSet:
        """All literal occurrences of the formula (both phases, deduplicated, sorted).

        A fresh set is returned on every call, so callers may mutate it.
        """
        if self._literals is None:
            found: set = set()
            self._collect_literals(found)
            self._literals = tuple(sorted(found))
        return SortedSet(self._literals)

    def variables(self) -> SortedSet:
        """The variables of the formula as positive literals, sorted."""
        return SortedSet(lit.variable() for lit in self.literals())

    # -- transformations ---------------------------------------------------

    def negate(self) -> "Formula":
        """The negation of this formula (folded for constants, literals and negations)."""
        return self.factory.not_(self)

    def nnf(self) -> "Formula":
        """Negation normal form: only conjunctions and disjunctions over literals."""
        if self._nnf is None:
            self._nnf = self._compute_nnf()
        return self._nnf

    def _compute_nnf(self) -> "Formula":
        raise NotImplementedError

    def cnf(self) -> "Formula":
        """Conjunctive normal form by distribution over the NNF.

        The result is equivalent (not merely equisatisfiable) to the formula;
        it can be exponentially larger, so solvers use a Tseitin encoding instead.
        """
        if self._cnf is None:
            if self.is_cnf():
                self._cnf = self
            else:
                f = self.factory
                clauses = _distribute(self.nnf())
                self._cnf = f.and_(*[f.or_(*clause) for clause in clauses])
        return self._cnf

    def is_cnf(self) -> bool:
        return False

    def clauses(self) -> List[List["Literal"]]:
        """The clauses of a formula in CNF; ``$false`` has a single empty clause."""
        if not self.is_cnf():
            raise FormulaError(f"Formula is not in CNF: {self}")
        if self.type == FType.TRUE:
            return []
        if self.type == FType.FALSE:
            return [[]]
        if self.type == FType.LITERAL:
            return [[self]]
        if self.type == FType.OR:
            return [list(self.operands)]
        return [list(op.operands) if op.type == FType.OR else [op] for op in self.operands]

    def evaluate(self, assignment: "Assignment") -> bool:
        raise NotImplementedError

    # -- printing ----------------------------------------------------------

    def _precedence(self) -> int:
        return _PRECEDENCE.get(self.type, _ATOMIC)

    def _wrap(self, child: "Formula") -> str:
        if child._precedence() <= self._precedence():
            return f"({child})"
        return str(child)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class Constant(Formula):
    """The constants ``$true`` and ``$false``."""

    def __init__(self, factory: "FormulaFactory", value: bool):
        super().__init__(FType.TRUE if value else FType.FALSE, factory)
        self.value = value

    def _key(self) -> tuple:
        return (self.type,)

    def negate(self) -> Formula:
        return self.factory.constant(not self.value)

    def _compute_nnf(self) -> Formula:
        return self

    def is_cnf(self) -> bool:
        return True

    def evaluate(self, assignment: "Assignment") -> bool:
        return self.value

    def __str__(self) -> str:
        return "$true" if self.value else "$false"


@total_ordering
class Literal(Formula):
    """A variable with a phase. Ordered by name, the positive phase first."""

    def __init__(self, factory: "FormulaFactory", name: str, phase: bool):
        super().__init__(FType.LITERAL, factory)
        self.name = name
        self.phase = phase

    def _key(self) -> tuple:
        return (FType.LITERAL, self.name, self.phase)

    def __eq__(self, other) -> bool:
        if isinstance(other, Literal):
            return self.name == other.name and self.phase == other.phase
        return super().__eq__(other)

    def __hash__(self) -> int:
        return super().__hash__()

    def __lt__(self, other) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return (self.name, not self.phase) < (other.name, not other.phase)

    def _collect_literals(self, into: set) -> None:
        into.add(self)

    def negate(self) -> "Literal":
        return self.factory.literal(self.name, not self.phase)

    def variable(self) -> "Literal":
        """The positive literal of this literal's variable."""
        if self.phase:
            return self
        return self.factory.variable(self.name)

    def is_complement_of(self, other: "Literal") -> bool:
        return self.name == other.name and self.phase != other.phase

    def _compute_nnf(self) -> Formula:
        return self

    def is_cnf(self) -> bool:
        return True

    def evaluate(self, assignment: "Assignment") -> bool:
        return assignment.evaluate_lit(self)

    def __str__(self) -> str:
        return self.name if self.phase else f"~{self.name}"


class Not(Formula):
    """Negation of a non-atomic formula."""

    def __init__(self, factory: "FormulaFactory", operand: Formula):
        super().__init__(FType.NOT, factory)
        self.operand = operand

    @property
    def operands(self) -> Tuple[Formula, ...]:
        return (self.operand,)

    def negate(self) -> Formula:
        return self.operand

    def _compute_nnf(self) -> Formula:
        f = self.factory
        op = self.operand
        if op.type == FType.AND:
            return f.or_(*[o.negate().nnf() for o in op.operands])
        if op.type == FType.OR:
            return f.and_(*[o.negate().nnf() for o in op.operands])
        if op.type == FType.IMPL:
            return f.and_(op.left.nnf(), op.right.negate().nnf())
        if op.type == FType.EQUIV:
            return f.and_(
                f.or_(op.left.nnf(), op.right.nnf()),
                f.or_(op.left.negate().nnf(), op.right.negate().nnf()),
            )
        return op.negate().nnf()

    def evaluate(self, assignment: "Assignment") -> bool:
        return not self.operand.evaluate(assignment)

    def __str__(self) -> str:
        return f"~{self._wrap(self.operand)}"


class BinaryOperator(Formula):
    """Implication and equivalence."""

    symbol = ""

    def __init__(self, ftype: FType, factory: "FormulaFactory", left: Formula, right: Formula):
        super().__init__(ftype, factory)
        self.left = left
        self.right = right

    @property
    def operands(self) -> Tuple[Formula, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"{self._wrap(self.left)} {self.symbol} {self._wrap(self.right)}"


class Implication(BinaryOperator):
    symbol = "=>"

    def __init__(self, factory: "FormulaFactory", left: Formula, right: Formula):
        super().__init__(FType.IMPL, factory, left, right)

    def _compute_nnf(self) -> Formula:
        return self.factory.or_(self.left.negate().nnf(), self.right.nnf())

    def evaluate(self, assignment: "Assignment") -> bool:
        return not self.left.evaluate(assignment) or self.right.evaluate(assignment)


class Equivalence(BinaryOperator):
    symbol = "<=>"

    def __init__(self, factory: "FormulaFactory", left: Formula, right: Formula):
        super().__init__(FType.EQUIV, factory, left, right)

    def _compute_nnf(self) -> Formula:
        f = self.factory
        return f.and_(
            f.or_(self.left.negate().nnf(), self.right.nnf()),
            f.or_(self.left.nnf(), self.right.negate().nnf()),
        )

    def evaluate(self, assignment: "Assignment") -> bool:
        return self.left.evaluate(assignment) == self.right.evaluate(assignment)


class NAryOperator(Formula):
    """Conjunction and disjunction over at least two operands."""

    symbol = ""

    def __init__(self, ftype: FType, factory: "FormulaFactory", operands: Tuple[Formula, ...]):
        super().__init__(ftype, factory)
        self._operands = operands

    @property
    def operands(self) -> Tuple[Formula, ...]:
        return self._operands

    def __len__(self) -> int:
        return len(self._operands)

    def __iter__(self):
        return iter(self._operands)

    def __str__(self) -> str:
        return f" {self.symbol} ".join(self._wrap(op) for op in self._operands)


class And(NAryOperator):
    symbol = "&"

    def __init__(self, factory: "FormulaFactory", operands: Tuple[Formula, ...]):
        super().__init__(FType.AND, factory, operands)

    def _compute_nnf(self) -> Formula:
        return self.factory.and_(*[op.nnf() for op in self._operands])

    def is_cnf(self) -> bool:
        for op in self._operands:
            if op.type == FType.LITERAL:
                continue
            if op.type == FType.OR and op.is_cnf():
                continue
            return False
        return True

    def evaluate(self, assignment: "Assignment") -> bool:
        return all(op.evaluate(assignment) for op in self._operands)


class Or(NAryOperator):
    symbol = "|"

    def __init__(self, factory: "FormulaFactory", operands: Tuple[Formula, ...]):
        super().__init__(FType.OR, factory, operands)

    def _compute_nnf(self) -> Formula:
        return self.factory.or_(*[op.nnf() for op in self._operands])

    def is_cnf(self) -> bool:
        return all(op.type == FType.LITERAL for op in self._operands)

    def evaluate(self, assignment: "Assignment") -> bool:
        return any(op.evaluate(assignment) for op in self._operands)


def _distribute(nnf: Formula) -> List[List[Literal]]:
    """Clause lists of an NNF formula; ``$false`` is one empty clause."""
    if nnf.type == FType.TRUE:
        return []
    if nnf.type == FType.FALSE:
        return [[]]
    if nnf.type == FType.LITERAL:
        return [[nnf]]
    if nnf.type == FType.AND:
        clauses: List[List[Literal]] = []
        for op in nnf.operands:
            clauses.extend(_distribute(op))
        return clauses
    if nnf.type == FType.OR:
        product: List[List[Literal]] = [[]]
        for op in nnf.operands:
            op_clauses = _distribute(op)
            product = [left + right for left in product for right in op_clauses]
        return product
    raise FormulaError(f"Unexpected node in NNF: {nnf}")
