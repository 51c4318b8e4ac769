"""Propositional formulas: factory, nodes and assignments."""
from .formula import (
    And,
    BinaryOperator,
    Constant,
    Equivalence,
    Formula,
    FType,
    Implication,
    Literal,
    NAryOperator,
    Not,
    Or,
)
from .factory import FormulaFactory
from .assignment import Assignment

__all__ = [
    "And", "Assignment", "BinaryOperator", "Constant", "Equivalence", "Formula",
    "FormulaFactory", "FType", "Implication", "Literal", "NAryOperator", "Not", "Or",
]
