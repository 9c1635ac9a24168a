r"""
Various utilities for working with assignment results.
"""

from __future__ import annotations

import typing as T

from ..errors import InvalidMatrix
from ..matrix import Matrix
from ._base import SelectedElement, Selection

__all__ = ["gather_total", "check_feasible"]


def gather_total(matrix: Matrix, entries: T.Iterable[tuple[int, int]]) -> int:
    """
    Gather the total value of an assignment. This amounts to summing all the
    assigned items from the matrix.

    Parameters
    ----------
    matrix: Matrix[H, W]
        The matrix.
    entries: Iterable[(row, column)]
        Positions of the selected cells. Any further tuple items, like the
        value of a :class:`SelectedElement`, are ignored.

    Returns
    -------
    int
        The total value of the assignment.
    """
    return sum(matrix.get(entry[0], entry[1]) for entry in entries)


def check_feasible(matrix: Matrix, selection: Selection) -> None:
    """
    Check that a selection is a valid assignment over ``matrix``: no two entries
    share a row or a column, every entry lies inside the matrix and carries the
    value found there, there are no more than ``min(H, W)`` entries and the
    total equals the sum of the entries.

    Raises
    ------
    InvalidMatrix
        Describing the first violation found.
    """
    limit = min(matrix.shape)
    if selection.count > limit:
        msg = f"Selection has {selection.count} entries, at most {limit} allowed!"
        raise InvalidMatrix(msg)

    rows: set[int] = set()
    cols: set[int] = set()
    for entry in selection.entries:
        entry = SelectedElement(*entry)
        if not (0 <= entry.row < matrix.height and 0 <= entry.column < matrix.width):
            msg = f"Entry {entry} lies outside of a {matrix.shape} matrix!"
            raise InvalidMatrix(msg)
        if entry.row in rows or entry.column in cols:
            msg = f"Entry {entry} shares a row or column with another entry!"
            raise InvalidMatrix(msg)
        if matrix.get(entry.row, entry.column) != entry.value:
            msg = (
                f"Entry {entry} does not match the matrix value "
                f"{matrix.get(entry.row, entry.column)}!"
            )
            raise InvalidMatrix(msg)
        rows.add(entry.row)
        cols.add(entry.column)

    expected = sum(entry.value for entry in selection.entries)
    if selection.total != expected:
        msg = f"Selection total {selection.total} differs from its entries ({expected})!"
        raise InvalidMatrix(msg)
