"""CLI tool for backbone computation of DIMACS and propositional formulas."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from sortedcontainers import SortedSet

from spine import SPINE_DEBUG
from spine.bool.backbone import Algorithm, BackboneComputer, verify_backbone
from spine.formula import Formula, FormulaFactory
from spine.global_params import global_config
from spine.io import PropositionalParser, read_cnf
from spine.utils.exceptions import SpineException

DIMACS_SUFFIXES = ('.cnf', '.dimacs')


def load_formula(filename: str, factory: FormulaFactory, file_format: str = "auto") -> Formula:
    """Load a formula from a file.

    Args:
        filename: Path to the formula file
        factory: Factory building the formula
        file_format: dimacs, prop, or auto (detect by suffix)
    """
    if file_format == "auto":
        file_format = "dimacs" if Path(filename).suffix.lower() in DIMACS_SUFFIXES else "prop"
    logging.info("Reading %s as %s", filename, file_format)
    if file_format == "dimacs":
        return read_cnf(filename, factory)
    with open(filename, encoding='utf-8') as f:
        content = f.read()
    return PropositionalParser(factory).parse(content)


def format_backbone(backbone: SortedSet) -> str:
    return "[" + ", ".join(str(lit) for lit in backbone) + "]"


def collect_files(path: str) -> List[Path]:
    """The file itself, or every regular file of a directory in sorted order."""
    p = Path(path)
    if p.is_dir():
        return sorted(child for child in p.iterdir() if child.is_file())
    return [p]


def process_file(filename: Path, args: argparse.Namespace) -> bool:
    """Compute (and optionally validate) the backbone of one file.

    Returns:
        False if a validation or agreement check failed.
    """
    factory = FormulaFactory()
    formula = load_formula(str(filename), factory, args.format)
    print(f"File: {filename.name}")

    algorithms = list(Algorithm) if args.all_algorithms else [Algorithm.from_string(args.algorithm)]
    results: Dict[Algorithm, SortedSet] = {}
    for algorithm in algorithms:
        computer = BackboneComputer(formula, algorithm, args.chunk_size, args.solver)
        backbone = computer.compute()
        results[algorithm] = backbone
        print(f"  {algorithm.value}: {format_backbone(backbone)} "
              f"({computer.stats['solve_calls']} solver calls, "
              f"{computer.stats['runtime_sec']:.3f}s)")

    success = True
    if len({tuple(backbone) for backbone in results.values()}) > 1:
        print("  Algorithms disagree!")
        success = False

    if args.validate:
        check = verify_backbone(formula, next(iter(results.values())))
        if check.ok:
            print("  Validation: ok")
        else:
            print(f"  Validation: FAILED (missing {format_backbone(check.missing)}, "
                  f"spurious {format_backbone(check.spurious)})")
            success = False
    return success


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the backbone CLI."""
    parser = argparse.ArgumentParser(
        description="Compute the backbone (literals true in all models) of formulas",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("path", type=str,
                        help="Formula file (.cnf, .dimacs, or propositional syntax) or directory")

    parser.add_argument(
        "--algorithm",
        type=str,
        default=Algorithm.ITERATIVE_ONE_TEST.value,
        help="Backbone algorithm: " + ", ".join(alg.value for alg in Algorithm) +
             " (default: iterative-one-test)"
    )

    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help=f"Chunk size of the chunking algorithm (default: {global_config.default_chunk_size})"
    )

    parser.add_argument(
        "--solver",
        type=str,
        default=None,
        help=f"PySAT engine name (default: {global_config.sat_solver})"
    )

    parser.add_argument(
        "--format",
        type=str,
        choices=["auto", "dimacs", "prop"],
        default="auto",
        help="Input format: dimacs, prop (propositional syntax), auto (by suffix, default)"
    )

    parser.add_argument(
        "--all-algorithms",
        action="store_true",
        help="Run every algorithm and check that they agree"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Cross-check the backbone against z3"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="DEBUG" if SPINE_DEBUG else "WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING, DEBUG if SPINE_DEBUG is set)"
    )

    args = parser.parse_args(argv)

    if not Path(args.path).exists():
        print(f"Error: File not found: {args.path}", file=sys.stderr)
        return 1

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    success = True
    for filename in collect_files(args.path):
        try:
            success = process_file(filename, args) and success
        except (SpineException, ValueError, OSError) as e:
            print(f"Error in {filename}: {e}", file=sys.stderr)
            if args.log_level == "DEBUG":
                import traceback  # pylint: disable=import-outside-toplevel
                traceback.print_exc()
            success = False
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
