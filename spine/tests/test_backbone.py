"""Tests for BackboneComputer on hand-written formulas."""

import pytest

from spine.bool.backbone import Algorithm, BackboneComputer, compute_backbone
from spine.formula import FormulaFactory
from spine.global_params import global_config
from spine.io.parser import PropositionalParser
from spine.utils.exceptions import InvalidAlgorithm, InvalidChunkSize

CONFIGURATIONS = [
    (Algorithm.ENUMERATION, None),
    (Algorithm.ITERATIVE_TWO_TESTS, None),
    (Algorithm.ITERATIVE_ONE_TEST, None),
    (Algorithm.ITERATIVE_COMPLEMENT, None),
    (Algorithm.CHUNKING, 1),
    (Algorithm.CHUNKING, 2),
    (Algorithm.CHUNKING, 100),
    (Algorithm.CHUNKING, None),
]

SCENARIOS = [
    ("(~x | ~y) & x & (z | w)", ["x", "~y"]),
    ("x & ~x", []),
    ("(x | y) & (~x | y) & (x | ~y) & (~x | ~y)", []),
    ("x | y", []),
    ("(~x | ~y) & y", ["~x", "y"]),
    # with x false the left disjunct needs both y and ~y
    ("((x | ~y) & y) | x", ["x"]),
    ("$true", []),
    ("$false", []),
    ("x", ["x"]),
    ("(a <=> b) & a", ["a", "b"]),
    ("(a => b) & (b => c) & a & (d | e)", ["a", "b", "c"]),
    ("~(a | b) | (a & b & c)", []),
    ("(a => ~b) & (~a => ~b) & (c | d)", ["~b"]),
]


def parse_literals(parser, names):
    return [parser.parse(name) for name in names]


def config_id(config):
    algorithm, chunk_size = config
    return algorithm.value if chunk_size is None else f"{algorithm.value}-{chunk_size}"


@pytest.mark.parametrize("config", CONFIGURATIONS, ids=config_id)
@pytest.mark.parametrize("text,expected", SCENARIOS)
def test_scenarios(config, text, expected):
    algorithm, chunk_size = config
    f = FormulaFactory()
    parser = PropositionalParser(f)
    phi = parser.parse(text)
    backbone = BackboneComputer(phi, algorithm, chunk_size).compute()
    assert list(backbone) == sorted(parse_literals(parser, expected))


@pytest.mark.parametrize("config", CONFIGURATIONS, ids=config_id)
def test_idempotent(config):
    algorithm, chunk_size = config
    f = FormulaFactory()
    phi = PropositionalParser(f).parse("(a => b) & (b => c) & a & (d | e)")
    computer = BackboneComputer(phi, algorithm, chunk_size)
    first = computer.compute()
    first.clear()
    assert computer.compute() == compute_backbone(phi, algorithm, chunk_size)
    assert len(computer.compute()) == 3


def test_algorithm_names():
    f = FormulaFactory()
    phi = PropositionalParser(f).parse("(~x | ~y) & y")
    for alg in Algorithm:
        assert Algorithm.from_string(alg.value) is alg
        assert list(compute_backbone(phi, alg.value)) == [f.literal("x", False), f.variable("y")]
    assert Algorithm.from_string("ITERATIVE_ONE_TEST") is Algorithm.ITERATIVE_ONE_TEST


@pytest.mark.parametrize("selector", ["magic", "", 42, None])
def test_invalid_algorithm(selector):
    phi = FormulaFactory().variable("x")
    with pytest.raises(InvalidAlgorithm):
        BackboneComputer(phi, selector).compute()


@pytest.mark.parametrize("chunk_size", [0, -3])
def test_invalid_chunk_size(chunk_size):
    phi = FormulaFactory().variable("x")
    with pytest.raises(InvalidChunkSize):
        BackboneComputer(phi, Algorithm.CHUNKING, chunk_size).compute()


def test_chunk_size_ignored_by_other_algorithms():
    f = FormulaFactory()
    phi = f.variable("x")
    assert list(BackboneComputer(phi, Algorithm.ITERATIVE_COMPLEMENT, 0).compute()) == [phi]


def test_default_chunk_size():
    f = FormulaFactory()
    phi = f.and_(*f.variables("a", "b", "c"))
    computer = BackboneComputer(phi, Algorithm.CHUNKING)
    assert len(computer.compute()) == 3
    assert computer.stats["chunk_size"] == global_config.default_chunk_size


def test_stats():
    f = FormulaFactory()
    phi = PropositionalParser(f).parse("(~x | ~y) & x & (z | w)")
    computer = BackboneComputer(phi, Algorithm.ITERATIVE_TWO_TESTS)
    computer.compute()
    # two queries per variable
    assert computer.stats["solve_calls"] == 8
    assert computer.stats["backbone_size"] == 2
    assert computer.stats["algorithm"] == "iterative-two-tests"
    assert computer.stats["runtime_sec"] >= 0


def test_one_test_uses_at_most_one_call_per_literal():
    f = FormulaFactory()
    phi = f.and_(*f.variables("a", "b", "c", "d"))
    computer = BackboneComputer(phi, Algorithm.ITERATIVE_ONE_TEST)
    computer.compute()
    assert computer.stats["solve_calls"] == 5


def test_other_engine():
    f = FormulaFactory()
    phi = PropositionalParser(f).parse("(~x | ~y) & x & (z | w)")
    backbone = compute_backbone(phi, Algorithm.ENUMERATION, solver_name="minisat22")
    assert list(backbone) == [f.variable("x"), f.literal("y", False)]
