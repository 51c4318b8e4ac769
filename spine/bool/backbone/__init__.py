"""Backbone computation: the set of literals true in all models of a formula.

Provides BackboneComputer and Algorithm (ENUMERATION, ITERATIVE_TWO_TESTS,
ITERATIVE_ONE_TEST, ITERATIVE_COMPLEMENT, CHUNKING).
"""

from spine.bool.backbone.backbone import (
    Algorithm,
    BackboneComputer,
    compute_backbone,
)
from spine.bool.backbone.candidates import CandidateSet
from spine.bool.backbone.validate import BackboneCheck, reference_backbone, verify_backbone

__all__ = [
    "Algorithm",
    "BackboneCheck",
    "BackboneComputer",
    "CandidateSet",
    "compute_backbone",
    "reference_backbone",
    "verify_backbone",
]
