"""Backbone extraction for propositional formulas."""
import os

from .formula import Assignment, Formula, FormulaFactory, Literal
from .bool.backbone import Algorithm, BackboneComputer, compute_backbone, verify_backbone

__all__ = [
    "Algorithm",
    "Assignment",
    "BackboneComputer",
    "Formula",
    "FormulaFactory",
    "Literal",
    "compute_backbone",
    "verify_backbone",
]

# Debug flag - can be set via environment variable SPINE_DEBUG
SPINE_DEBUG = os.environ.get("SPINE_DEBUG", "False").lower() in ("true", "1", "yes")
