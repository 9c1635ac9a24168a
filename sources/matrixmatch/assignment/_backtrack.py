r"""
Exhaustive backtracking search for the maximum-sum assignment.

Every way of mapping rows onto distinct columns is explored depth-first, such
that the result is the global optimum. The number of candidates grows as
``W! / (W - H)!``, which limits this solver to small matrices or to serving as
a reference for the other algorithms.
"""

from __future__ import annotations

import logging

import typing_extensions as TX

from ..matrix import Matrix, allocating
from ._base import Assignment, SelectedElement, Selection, validate_matrix

__all__ = ["Backtrack", "backtrack_assignment"]

_logger = logging.getLogger(__name__)


class Backtrack(Assignment):
    """
    See :func:`.backtrack_assignment` for details.
    """

    @TX.override
    def _assign(self, matrix: Matrix) -> Selection:
        return backtrack_assignment(matrix)


def backtrack_assignment(matrix: Matrix) -> Selection:
    """
    Find the maximum-sum assignment by exhaustive search.

    Rows are assigned in index order. A complete assignment replaces the best
    one only when its sum is strictly greater, so among equal sums the first
    one found is kept. When the matrix has more rows than columns, exactly
    ``H - W`` rows are left without a column.

    Parameters
    ----------
    matrix
        Matrix (HxW) to solve.

    Returns
    -------
        Selection of ``min(H, W)`` cells in row order.
    """
    validate_matrix(matrix)

    height, width = matrix.shape
    with allocating("backtracking buffers"):
        values = matrix.values.tolist()
        used_cols = [False] * width
        chosen: list[int | None] = [None] * height

    skippable = max(0, height - width)
    best_sum: int | None = None
    best: list[int | None] = []
    leaves = 0

    # Depth-first search with an explicit stack, one frame per row holding
    # [row, next column to try, rows skipped so far]. A cursor past ``width``
    # means the row has also been tried without a column.
    stack = [[0, 0, 0]]
    running = 0
    while stack:
        frame = stack[-1]
        row, cursor, skipped = frame

        if row == height:
            leaves += 1
            if best_sum is None or running > best_sum:
                best_sum = running
                best = list(chosen)
        else:
            while cursor < width and used_cols[cursor]:
                cursor += 1
            if cursor < width:
                frame[1] = cursor + 1
                used_cols[cursor] = True
                chosen[row] = cursor
                running += values[row][cursor]
                stack.append([row + 1, 0, skipped])
                continue
            if cursor == width and skipped < skippable:
                frame[1] = width + 1
                stack.append([row + 1, 0, skipped + 1])
                continue

        stack.pop()

        # Backtrack the choice that led into the finished frame
        if stack:
            parent = stack[-1][0]
            col = chosen[parent]
            if col is not None:
                used_cols[col] = False
                chosen[parent] = None
                running -= values[parent][col]

    _logger.debug(
        "Backtracking explored %d complete assignments, best sum: %s", leaves, best_sum
    )

    return Selection.from_entries(
        SelectedElement(row, col, values[row][col])
        for row, col in enumerate(best)
        if col is not None
    )
