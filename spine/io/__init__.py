"""Readers producing formulas from text."""
from .dimacs import parse_cnf_string, read_cnf
from .parser import PropositionalParser

__all__ = ["PropositionalParser", "parse_cnf_string", "read_cnf"]
