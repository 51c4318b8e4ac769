# coding: utf-8
"""
Parser for propositional formulas in infix syntax.

Grammar (lowest precedence first)::

    equiv  := impl ("<=>" impl)*
    impl   := disj ("=>" impl)?
    disj   := conj ("|" conj)*
    conj   := unary ("&" unary)*
    unary  := "~" unary | atom
    atom   := VARIABLE | "$true" | "$false" | "(" equiv ")"
"""
import re
from typing import List, NamedTuple

from spine.formula import Formula, FormulaFactory
from spine.utils.exceptions import ParserError

_TOKEN_RE = re.compile(r"""
    (?P<ws>\s+)
  | (?P<equiv><=>)
  | (?P<impl>=>)
  | (?P<true>\$true)
  | (?P<false>\$false)
  | (?P<not>~)
  | (?P<and>&)
  | (?P<or>\|)
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<var>[A-Za-z_@][A-Za-z0-9_@.\#]*)
""", re.VERBOSE)


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into tokens, dropping whitespace; the list ends with an ``eof`` token."""
    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ParserError(f"Unexpected character {text[pos]!r} at position {pos}", pos)
        if match.lastgroup != "ws":
            tokens.append(Token(match.lastgroup, match.group(), pos))
        pos = match.end()
    tokens.append(Token("eof", "", len(text)))
    return tokens


class PropositionalParser:
    """Parses strings like ``(a | ~b) & (b => c)`` into formulas of a factory."""

    def __init__(self, factory: FormulaFactory):
        self.factory = factory
        self._tokens: List[Token] = []
        self._index = 0

    def parse(self, text: str) -> Formula:
        """Parse ``text``; blank input yields ``$true``."""
        if text is None or not text.strip():
            return self.factory.verum()
        self._tokens = tokenize(text)
        self._index = 0
        formula = self._equiv()
        token = self._peek()
        if token.kind != "eof":
            raise ParserError(f"Unexpected {token.text!r} at position {token.position}", token.position)
        return formula

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _next(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _equiv(self) -> Formula:
        left = self._impl()
        while self._peek().kind == "equiv":
            self._next()
            left = self.factory.equivalence(left, self._impl())
        return left

    def _impl(self) -> Formula:
        left = self._disj()
        if self._peek().kind == "impl":
            self._next()
            return self.factory.implication(left, self._impl())
        return left

    def _disj(self) -> Formula:
        operands = [self._conj()]
        while self._peek().kind == "or":
            self._next()
            operands.append(self._conj())
        return self.factory.or_(*operands)

    def _conj(self) -> Formula:
        operands = [self._unary()]
        while self._peek().kind == "and":
            self._next()
            operands.append(self._unary())
        return self.factory.and_(*operands)

    def _unary(self) -> Formula:
        if self._peek().kind == "not":
            self._next()
            return self.factory.not_(self._unary())
        return self._atom()

    def _atom(self) -> Formula:
        token = self._next()
        if token.kind == "var":
            return self.factory.variable(token.text)
        if token.kind == "true":
            return self.factory.verum()
        if token.kind == "false":
            return self.factory.falsum()
        if token.kind == "lparen":
            inner = self._equiv()
            closing = self._next()
            if closing.kind != "rparen":
                raise ParserError(f"Expected ')' at position {closing.position}", closing.position)
            return inner
        if token.kind == "eof":
            raise ParserError("Unexpected end of input", token.position)
        raise ParserError(f"Unexpected {token.text!r} at position {token.position}", token.position)


def parse_formula(text: str, factory: FormulaFactory) -> Formula:
    """Convenience wrapper around :class:`PropositionalParser`."""
    return PropositionalParser(factory).parse(text)
