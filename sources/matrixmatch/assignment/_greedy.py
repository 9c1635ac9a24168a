"""
Greedy assignment is a simple assignment algorithm that walks over the rows
once, selecting the best remaining column for each row. This algorithm is not
guaranteed to find the optimal solution, but it is fast and simple to
implement.
"""

from __future__ import annotations

import logging

import torch
import typing_extensions as TX

from ..matrix import Matrix, allocating
from ._base import Assignment, SelectedElement, Selection, validate_matrix

__all__ = ["Greedy", "greedy_assignment"]

_logger = logging.getLogger(__name__)


class Greedy(Assignment):
    """
    See :func:`.greedy_assignment` for details.
    """

    @TX.override
    def _assign(self, matrix: Matrix) -> Selection:
        return greedy_assignment(matrix)


@torch.no_grad()
def greedy_assignment(matrix: Matrix) -> Selection:
    """
    Performs a greedy assignment on a matrix, taking the maximum value among
    the unused columns of each row, in row order.

    An early row may take a column that a later row needed for a much larger
    value; no decision is ever revisited.

    Parameters
    ----------
    matrix : Matrix
        The (HxW) matrix to solve.

    Returns
    -------
    Selection
        The chosen cells in row order. Ties within a row go to the lowest
        column index. Rows that find no free column are left out.
    """
    validate_matrix(matrix)

    values = matrix.values
    with allocating("greedy buffers"):
        used_cols = torch.zeros(matrix.width, dtype=torch.bool)

    entries: list[SelectedElement] = []
    for row in range(matrix.height):
        free = (~used_cols).nonzero().flatten()
        if free.numel() == 0:
            break

        # ``argmax`` returns the first maximal value, i.e. the lowest column
        best = free[torch.argmax(values[row, free])]
        col = int(best.item())

        used_cols[col] = True
        entries.append(SelectedElement(row, col, int(values[row, col].item())))

    selection = Selection.from_entries(entries)

    _logger.debug(
        "Greedy selected %d of %d rows, sum: %d",
        selection.count,
        matrix.height,
        selection.total,
    )

    return selection
