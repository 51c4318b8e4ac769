"""Tests for the DIMACS reader."""

import pytest

from spine.formula import FormulaFactory
from spine.global_params import BENCHMARKS_PATH
from spine.io.dimacs import parse_cnf_string, read_cnf
from spine.utils.exceptions import ParserError


def test_parse_string():
    f = FormulaFactory()
    phi = parse_cnf_string("c comment\np cnf 3 2\n1 -2 0\n2 3 0\n", f)
    v1, v2, v3 = f.variables("v1", "v2", "v3")
    assert phi == f.and_(f.or_(v1, v2.negate()), f.or_(v2, v3))
    assert phi.is_cnf()


def test_read_file():
    f = FormulaFactory()
    phi = read_cnf(BENCHMARKS_PATH / "simple_backbone.cnf", f)
    assert [str(v) for v in phi.variables()] == ["v1", "v2", "v3", "v4"]
    assert len(phi.clauses()) == 3


def test_contradiction_keeps_clauses():
    f = FormulaFactory()
    phi = read_cnf(BENCHMARKS_PATH / "unsat.cnf", f)
    assert len(phi.clauses()) == 4


def test_malformed_input():
    with pytest.raises(ParserError):
        parse_cnf_string("p cnf 2 1\n1 x 0\n", FormulaFactory())
