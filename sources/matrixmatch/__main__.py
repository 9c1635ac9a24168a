r"""
Command line interface, e.g.::

    python -m matrixmatch matrix.txt --algorithm all
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
import typing as T

from . import __version__
from .assignment import SOLVERS, get_solver
from .constants import DEFAULT_MAX_ITERATIONS
from .errors import MatrixFileError, MatrixFormatError, MatrixMatchError
from .io import format_matrix, format_selection, read_matrix

__all__ = ["main", "build_parser"]

_logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        msg = f"expected a positive integer, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrixmatch",
        description=(
            "Select cells of an integer matrix, no two sharing a row or column, "
            "such that their sum is maximal."
        ),
    )
    parser.add_argument("file", help="matrix file with ';' separated values")
    parser.add_argument(
        "-a",
        "--algorithm",
        choices=[*sorted(SOLVERS), "all"],
        default="all",
        help="solver to run (default: %(default)s)",
    )
    parser.add_argument(
        "--max-iterations",
        type=_positive_int,
        default=DEFAULT_MAX_ITERATIONS,
        help="iteration limit of the hungarian solver (default: %(default)s)",
    )
    parser.add_argument(
        "--show-matrix", action="store_true", help="print the matrix before solving"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv: T.Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        matrix = read_matrix(args.file)
    except (MatrixFileError, MatrixFormatError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    if args.show_matrix:
        print(format_matrix(matrix))
        print()

    methods = sorted(SOLVERS) if args.algorithm == "all" else [args.algorithm]
    status = 0
    for method in methods:
        kwargs = {}
        if method == "hungarian":
            kwargs["max_iterations"] = args.max_iterations
        solver = get_solver(method, **kwargs)

        start = time.perf_counter()
        try:
            selection = solver(matrix)
        except MatrixMatchError as err:
            print(f"{method}: {err}", file=sys.stderr)
            status = 1
            continue
        elapsed = (time.perf_counter() - start) * 1e3
        _logger.debug("%s finished in %.3f ms", method, elapsed)

        print(format_selection(selection, title=f"{method}:"))

    return status


if __name__ == "__main__":
    sys.exit(main())
