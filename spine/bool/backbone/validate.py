# coding: utf-8
"""Cross-checking computed backbones against the z3 reference oracle."""
import logging
from typing import Iterable, NamedTuple

from sortedcontainers import SortedSet

from spine.bool.sat.z3sat_solver import Z3SATSolver
from spine.formula import Formula, Literal

logger = logging.getLogger(__name__)


class BackboneCheck(NamedTuple):
    """Outcome of comparing a backbone with the reference backbone."""
    expected: SortedSet
    actual: SortedSet
    missing: SortedSet
    spurious: SortedSet

    @property
    def ok(self) -> bool:
        return not self.missing and not self.spurious


def reference_backbone(formula: Formula) -> SortedSet:
    """The backbone of ``formula`` according to z3's consequence finding."""
    oracle = Z3SATSolver()
    oracle.from_formula(formula)
    return oracle.backbone(formula.factory)


def verify_backbone(formula: Formula, backbone: Iterable[Literal]) -> BackboneCheck:
    """Compare ``backbone`` with the reference backbone of ``formula``."""
    expected = reference_backbone(formula)
    actual = SortedSet(backbone)
    check = BackboneCheck(
        expected=expected,
        actual=actual,
        missing=expected - actual,
        spurious=actual - expected,
    )
    if not check.ok:
        logger.warning("Backbone mismatch: missing %s, spurious %s",
                       list(map(str, check.missing)), list(map(str, check.spurious)))
    return check
