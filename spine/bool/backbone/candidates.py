# coding: utf-8
"""Candidate sets of the backbone algorithms."""
from typing import Iterable, Iterator, List

from sortedcontainers import SortedSet

from spine.formula import Formula, FormulaFactory, Literal
from spine.utils.exceptions import CandidateSetError


class CandidateSet:
    """
    Sorted set of literals that over-approximates the backbone.

    The set only ever shrinks. It is owned by one algorithm run; ``release()``
    moves its content out, after which the set can no longer be used.
    """

    def __init__(self, literals: Iterable[Literal]):
        self._literals = SortedSet(literals)
        self._released = False

    def _ensure_owned(self) -> None:
        if self._released:
            raise CandidateSetError("Candidate set was already released")

    def __len__(self) -> int:
        self._ensure_owned()
        return len(self._literals)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __contains__(self, lit: Literal) -> bool:
        self._ensure_owned()
        return lit in self._literals

    def __iter__(self) -> Iterator[Literal]:
        self._ensure_owned()
        return iter(list(self._literals))

    def first(self) -> Literal:
        """The smallest remaining literal."""
        self._ensure_owned()
        if not self._literals:
            raise CandidateSetError("Candidate set is empty")
        return self._literals[0]

    def chunk(self, size: int) -> List[Literal]:
        """The ``size`` smallest literals, clamped to the number of remaining ones."""
        self._ensure_owned()
        return list(self._literals.islice(0, min(size, len(self._literals))))

    def retain(self, literals: Iterable[Literal]) -> None:
        """Keep only the candidates that also occur in ``literals``."""
        self._ensure_owned()
        self._literals.intersection_update(literals)

    def discard(self, lit: Literal) -> None:
        self._ensure_owned()
        self._literals.discard(lit)

    def remove_all(self, literals: Iterable[Literal]) -> None:
        self._ensure_owned()
        self._literals.difference_update(literals)

    def release(self) -> SortedSet:
        """Hand the remaining literals over to the caller."""
        self._ensure_owned()
        literals = self._literals
        self._literals = SortedSet()
        self._released = True
        return literals

    def __repr__(self) -> str:
        if self._released:
            return "CandidateSet(<released>)"
        return "CandidateSet{" + ", ".join(str(lit) for lit in self._literals) + "}"


def negated_disjunction(factory: FormulaFactory, literals: Iterable[Literal]) -> Formula:
    """The clause "at least one of ``literals`` is false"."""
    return factory.or_(*[lit.negate() for lit in literals])
