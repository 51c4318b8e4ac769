# coding: utf-8
"""
Z3's SAT engine as a reference oracle.
  - translation of spine formulas into z3 Boolean terms
  - backbone computation through z3's consequence finding
"""
from typing import Dict, List

import z3
from sortedcontainers import SortedSet

from spine.formula import Formula, FormulaFactory, FType, Literal
from spine.utils.types import SolverResult


class Z3SATSolver:
    """Z3 SAT solver wrapper."""
    def __init__(self, logic="QF_FD"):
        self.name2z3var: Dict[str, z3.BoolRef] = {}
        self.solver = z3.SolverFor(logic)

    def get_z3var(self, name: str) -> z3.BoolRef:
        """The z3 Boolean variable for a formula variable, created on first use."""
        if name not in self.name2z3var:
            self.name2z3var[name] = z3.Bool(name)
        return self.name2z3var[name]

    def to_z3(self, formula: Formula) -> z3.BoolRef:
        """Translate a formula into a z3 term."""
        if formula.type == FType.TRUE:
            return z3.BoolVal(True)
        if formula.type == FType.FALSE:
            return z3.BoolVal(False)
        if formula.type == FType.LITERAL:
            var = self.get_z3var(formula.name)
            return var if formula.phase else z3.Not(var)
        if formula.type == FType.NOT:
            return z3.Not(self.to_z3(formula.operand))
        if formula.type == FType.IMPL:
            return z3.Implies(self.to_z3(formula.left), self.to_z3(formula.right))
        if formula.type == FType.EQUIV:
            return self.to_z3(formula.left) == self.to_z3(formula.right)
        ops = [self.to_z3(op) for op in formula.operands]
        if formula.type == FType.AND:
            return z3.And(*ops)
        return z3.Or(*ops)

    def from_formula(self, formula: Formula) -> None:
        """Add a formula; all of its variables become known to the oracle."""
        for var in formula.variables():
            self.get_z3var(var.name)
        self.solver.add(self.to_z3(formula))

    def get_consequences(
        self, prelist: List[z3.BoolRef], postlist: List[z3.BoolRef]
    ) -> List[z3.BoolRef]:
        """Get consequences using Z3's extension."""
        res, factslist = self.solver.consequences(prelist, postlist)
        if res == z3.sat:
            return factslist
        return []

    def check_sat_assuming(self, assumptions: List[Literal]) -> SolverResult:
        """Check satisfiability with assumptions."""
        res = self.solver.check([self.to_z3(lit) for lit in assumptions])
        if res == z3.sat:
            return SolverResult.SAT
        if res == z3.unsat:
            return SolverResult.UNSAT
        return SolverResult.UNKNOWN

    def backbone(self, factory: FormulaFactory) -> SortedSet:
        """
        Backbone of the added formulas: the consequences over the known variables.
        An unsatisfiable problem has the empty backbone.
        """
        if self.solver.check() != z3.sat:
            return SortedSet()
        if not self.name2z3var:
            return SortedSet()
        result = SortedSet()
        for fact in self.get_consequences([], list(self.name2z3var.values())):
            lit = fact.arg(1) if z3.is_implies(fact) else fact
            if z3.is_not(lit):
                result.add(factory.literal(lit.arg(0).decl().name(), False))
            else:
                result.add(factory.literal(lit.decl().name(), True))
        return result
