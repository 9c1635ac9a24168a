from __future__ import annotations

import typing as T

from ..matrix import Matrix
from ._backtrack import Backtrack
from ._base import Assignment, Selection
from ._greedy import Greedy
from ._hungarian import Hungarian

__all__ = ["SOLVERS", "get_solver", "solve"]

SOLVERS: T.Final[dict[str, type[Assignment]]] = {
    "backtrack": Backtrack,
    "greedy": Greedy,
    "hungarian": Hungarian,
}


def get_solver(method: str, **kwargs: T.Any) -> Assignment:
    """
    Instantiate the solver registered under ``method``.
    """
    try:
        cls = SOLVERS[method.lower()]
    except KeyError:
        options = ", ".join(sorted(SOLVERS))
        msg = f"Unknown assignment method {method!r}, expected one of: {options}"
        raise ValueError(msg) from None
    return cls(**kwargs)


def solve(matrix: Matrix, method: str = "hungarian", **kwargs: T.Any) -> Selection:
    """
    Solve ``matrix`` with the solver registered under ``method``.
    """
    return get_solver(method, **kwargs)(matrix)
