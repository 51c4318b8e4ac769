"""
DIMACS CNF reader.

Variable ``n`` of the DIMACS file becomes the variable ``v<n>`` of the
resulting formula; the formula is the conjunction of all clauses.
"""
import logging
from typing import List

from pysat.formula import CNF

from spine.formula import Formula, FormulaFactory
from spine.utils.exceptions import ParserError

logger = logging.getLogger(__name__)


def variable_name(index: int) -> str:
    """Name of the formula variable for DIMACS variable ``index``."""
    return f"v{index}"


def cnf_to_formula(cnf: CNF, factory: FormulaFactory) -> Formula:
    """
    Convert a pysat CNF object into a formula.
    :param cnf: pysat CNF object
    :param factory: factory building the formula
    :return: the conjunction of the clauses
    """
    clauses: List[Formula] = []
    for clause in cnf.clauses:
        clauses.append(factory.or_(*[
            factory.literal(variable_name(abs(lit)), lit > 0) for lit in clause
        ]))
    return factory.and_(*clauses)


def parse_cnf_string(cnf_str: str, factory: FormulaFactory) -> Formula:
    """
    Parse a DIMACS CNF string into a formula.
    :param cnf_str: CNF file content as string
    :param factory: factory building the formula
    :return: the conjunction of the clauses
    """
    try:
        cnf = CNF(from_string=cnf_str)
    except (ValueError, IndexError) as e:
        raise ParserError(f"Malformed DIMACS input: {e}") from e
    logger.debug("Parsed DIMACS string: %d variables, %d clauses", cnf.nv, len(cnf.clauses))
    return cnf_to_formula(cnf, factory)


def read_cnf(cnf_path: str, factory: FormulaFactory) -> Formula:
    """
    Read a DIMACS CNF file into a formula.
    :param cnf_path: Path to the CNF file
    :param factory: factory building the formula
    :return: the conjunction of the clauses
    """
    try:
        cnf = CNF(from_file=str(cnf_path))
    except (ValueError, IndexError) as e:
        raise ParserError(f"Malformed DIMACS file {cnf_path}: {e}") from e
    logger.debug("Read %s: %d variables, %d clauses", cnf_path, cnf.nv, len(cnf.clauses))
    return cnf_to_formula(cnf, factory)
