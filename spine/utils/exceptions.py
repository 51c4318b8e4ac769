# coding: utf-8
"""
Public subclasses of different Exceptions
"""


class SpineException(Exception):
    """Base class for spine exceptions"""

    pass


class FormulaError(SpineException):
    """Raised for ill-formed formula operations."""

    pass


class FormulaFactoryError(FormulaError):
    """This exception is raised if formulas from different factories are combined."""

    pass


class ParserError(SpineException):
    """Raised when a DIMACS or propositional input cannot be parsed."""

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position


class SolverError(SpineException):
    """Generic exception for misuse of the incremental SAT solver."""

    pass


class SolverStateError(SolverError):
    """A solver query was made in a state that does not allow it (e.g. model after UNSAT)."""

    pass


class CheckpointError(SolverError):
    """A checkpoint token was restored twice, out of order, or on the wrong solver."""

    pass


class BackboneError(SpineException):
    """Base class for backbone computation errors."""

    pass


class InvalidAlgorithm(BackboneError):
    """This exception is raised if an unknown backbone algorithm is selected."""

    pass


class InvalidChunkSize(BackboneError):
    """The chunking algorithm was requested with a non-positive chunk size."""

    pass


class CandidateSetError(BackboneError):
    """A candidate set was used after its content had been released."""

    pass
