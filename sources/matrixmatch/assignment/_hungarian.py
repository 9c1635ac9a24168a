r"""
Reduction-based solver in the style of the Hungarian algorithm.

The maximisation problem is turned into a minimisation over a non-negative
cost matrix, which is then reduced until a complete set of independent zeros
can be read off.

.. note::

    The zero covering used here is a heuristic and not the minimum line cover
    of the textbook algorithm. The stopping condition likewise counts the zeros
    that a single row-major pass can pair up, rather than the number of lines.
    The solver may therefore stop at a sub-optimal assignment, or cycle
    without ever stopping. The latter is reported as a
    :class:`.HeuristicNonConvergence` error after ``max_iterations`` passes, or
    immediately when a pass leaves the matrix unchanged.
"""

from __future__ import annotations

import logging
import typing as T

import torch
import typing_extensions as TX
from torch import Tensor

from ..constants import DEFAULT_MAX_ITERATIONS
from ..debug import check_debug_enabled
from ..errors import HeuristicNonConvergence, ValueOutOfRange
from ..io import format_cover, format_matrix
from ..matrix import LIMITS, Matrix, allocating
from ._base import Assignment, SelectedElement, Selection, validate_matrix

__all__ = ["Hungarian", "hungarian_assignment"]

_logger = logging.getLogger(__name__)


class Hungarian(Assignment):
    r"""
    Implements the reduction algorithm for solving the assignment problem.
    """

    max_iterations: T.Final[int]

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITERATIONS):
        """
        Parameters
        ----------
        max_iterations, optional
            Number of cover-and-augment passes after which the solver gives up.
        """
        super().__init__()

        if max_iterations <= 0:
            msg = f"Expected a positive iteration limit, got {max_iterations}!"
            raise ValueError(msg)

        self.max_iterations = max_iterations

    @TX.override
    def extra_repr(self) -> str:
        return f"max_iterations={self.max_iterations}"

    @TX.override
    def _assign(self, matrix: Matrix) -> Selection:
        return hungarian_assignment(matrix, self.max_iterations)


@torch.no_grad()
def hungarian_assignment(
    matrix: Matrix, max_iterations: int = DEFAULT_MAX_ITERATIONS
) -> Selection:
    """
    Solve the assignment problem by cost reduction and zero covering.

    The input matrix is not modified, all reductions happen on a copy.

    Parameters
    ----------
    matrix
        Matrix (HxW) to solve.
    max_iterations, optional
        Number of cover-and-augment passes after which the solver gives up.

    Returns
    -------
        Selection read from the reduced matrix, with values taken from the
        input matrix.

    Raises
    ------
    HeuristicNonConvergence
        If the stopping condition is not met within ``max_iterations`` passes,
        or a pass cannot change the reduced matrix.
    ValueOutOfRange
        If negating and shifting the values would leave the int64 range, that
        is when the matrix holds the int64 minimum or its values span more than
        the int64 maximum.
    """
    validate_matrix(matrix)
    check_reducible(matrix)

    cost = matrix.deep_copy().values

    # Step 1: Convert the profit matrix to a cost matrix
    negate_(cost)

    # Step 2: Shift all values to be non-negative
    shift_nonnegative_(cost)

    # Step 3: Subtract the minimum value from each row
    subtract_row_minima_(cost)

    # Step 4: Subtract the minimum value from each column
    subtract_column_minima_(cost)

    with allocating("cover masks"):
        covered_rows = torch.zeros(cost.shape[0], dtype=torch.bool)
        covered_cols = torch.zeros(cost.shape[1], dtype=torch.bool)

    iterations = 0
    while not is_optimal(cost):
        if iterations >= max_iterations:
            msg = f"Zero covering did not converge within {max_iterations} iterations!"
            raise HeuristicNonConvergence(msg, iterations)
        iterations += 1

        cover_zeros(cost, covered_rows, covered_cols)
        delta = create_additional_zeros(cost, covered_rows, covered_cols)

        if check_debug_enabled():
            _logger.debug(
                "Iteration %d (delta: %s)\n%s\n%s",
                iterations,
                delta,
                format_cover(covered_rows.tolist(), covered_cols.tolist()),
                format_matrix(cost),
            )

        # A pass that subtracts nothing would repeat itself forever
        if not delta:
            msg = (
                f"Zero covering stalled after {iterations} iteration(s): no "
                "uncovered cell with a positive value remains!"
            )
            raise HeuristicNonConvergence(msg, iterations)

    selection = extract_solution(matrix, cost)

    _logger.debug(
        "Hungarian selected %d cells after %d iteration(s), sum: %d",
        selection.count,
        iterations,
        selection.total,
    )

    return selection


def check_reducible(matrix: Matrix) -> None:
    """
    Check that the cost matrix derived from ``matrix`` stays within int64.
    After negation and shifting every cell lies in ``[0, max - min]``, the row
    and column reductions only lower it.
    """
    lowest = int(matrix.values.min().item())
    highest = int(matrix.values.max().item())
    if lowest == LIMITS.min or highest - lowest > LIMITS.max:
        msg = (
            f"Values between {lowest} and {highest} cannot be reduced without "
            f"leaving the range of {matrix.values.dtype}!"
        )
        raise ValueOutOfRange(msg)


def negate_(cost: Tensor) -> None:
    cost.neg_()


def shift_nonnegative_(cost: Tensor) -> None:
    """
    Subtract the global minimum from every cell if that minimum is negative.
    """
    lowest = cost.min()
    if lowest < 0:
        cost.sub_(lowest)


def subtract_row_minima_(cost: Tensor) -> None:
    cost.sub_(cost.min(dim=1, keepdim=True).values)


def subtract_column_minima_(cost: Tensor) -> None:
    cost.sub_(cost.min(dim=0, keepdim=True).values)


def is_optimal(cost: Tensor) -> bool:
    """
    Pair up zeros in a single row-major pass, taking each zero whose row and
    column are both still free. The cost matrix is considered solved when this
    pairs every row or every column.
    """
    height, width = cost.shape
    rows = [False] * height
    cols = [False] * width

    for row, col in (cost == 0).nonzero().tolist():
        if not rows[row] and not cols[col]:
            rows[row] = True
            cols[col] = True

    return sum(rows) == height or sum(cols) == width


def cover_zeros(cost: Tensor, covered_rows: Tensor, covered_cols: Tensor) -> None:
    """
    Reset and recompute the cover masks.

    Zeros are visited in row-major order. A zero that is not yet covered gets
    its column covered when that column holds another zero, or else its row
    covered when that row holds another zero. A zero that is alone in both its
    row and its column stays uncovered.
    """
    # TODO: chooses the wrong rows/columns for some inputs, a minimum line
    # cover (König) would make the stopping condition exact
    zeros = cost == 0
    zeros_per_row = zeros.sum(dim=1).tolist()
    zeros_per_col = zeros.sum(dim=0).tolist()

    rows = [False] * cost.shape[0]
    cols = [False] * cost.shape[1]
    for row, col in zeros.nonzero().tolist():
        if rows[row] or cols[col]:
            continue
        if zeros_per_col[col] > 1:
            cols[col] = True
        elif zeros_per_row[row] > 1:
            rows[row] = True

    covered_rows.copy_(torch.as_tensor(rows, dtype=torch.bool))
    covered_cols.copy_(torch.as_tensor(cols, dtype=torch.bool))


def create_additional_zeros(
    cost: Tensor, covered_rows: Tensor, covered_cols: Tensor
) -> int | None:
    """
    Subtract the minimum uncovered value from every uncovered cell and add it
    to every cell that is covered by both a row and a column. Cells covered by
    exactly one line are left unchanged.

    Returns
    -------
        The value that was subtracted, or ``None`` when every cell is covered.
    """
    uncovered = ~covered_rows.unsqueeze(1) & ~covered_cols.unsqueeze(0)
    if not uncovered.any():
        return None

    delta = cost[uncovered].min()
    doubly_covered = covered_rows.unsqueeze(1) & covered_cols.unsqueeze(0)

    cost.sub_(uncovered.to(cost.dtype) * delta)
    cost.add_(doubly_covered.to(cost.dtype) * delta)

    return int(delta.item())


def extract_solution(matrix: Matrix, cost: Tensor) -> Selection:
    """
    Walk over the rows of the reduced matrix, taking the first zero of each row
    that lies in a column not taken before. Values are read from the original
    ``matrix``.
    """
    zeros = (cost == 0).tolist()
    values = matrix.values.tolist()
    with allocating("extraction buffers"):
        used_cols = [False] * matrix.width

    entries: list[SelectedElement] = []
    for row, row_zeros in enumerate(zeros):
        for col, is_zero in enumerate(row_zeros):
            if is_zero and not used_cols[col]:
                used_cols[col] = True
                entries.append(SelectedElement(row, col, values[row][col]))
                break

    return Selection.from_entries(entries)
