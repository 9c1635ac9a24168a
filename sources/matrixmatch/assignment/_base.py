from __future__ import annotations

import typing as T
from abc import abstractmethod

import torch

from ..errors import InvalidMatrix
from ..matrix import Matrix

__all__ = ["Assignment", "SelectedElement", "Selection", "validate_matrix"]


class SelectedElement(T.NamedTuple):
    """
    One chosen cell of a matrix.
    """

    row: int
    column: int
    value: int


class Selection(T.NamedTuple):
    """
    Result of a solver: the chosen cells in the order they were found and the
    sum of their values.
    """

    entries: tuple[SelectedElement, ...]
    total: int

    @property
    def count(self) -> int:
        return len(self.entries)

    @classmethod
    def from_entries(cls, entries: T.Iterable[SelectedElement]) -> Selection:
        entries = tuple(entries)
        return cls(entries, sum(e.value for e in entries))


def validate_matrix(matrix: T.Any) -> Matrix:
    """
    Check that ``matrix`` can be handed to a solver.

    Raises
    ------
    InvalidMatrix
        If the input is not a :class:`Matrix` or has a non-positive dimension.
    """
    if not isinstance(matrix, Matrix):
        msg = f"Expected a {Matrix.__name__}, got {type(matrix).__name__}!"
        raise InvalidMatrix(msg)
    if matrix.width <= 0 or matrix.height <= 0:
        msg = f"Cannot solve a matrix of shape {matrix.shape}!"
        raise InvalidMatrix(msg)
    return matrix


class Assignment(torch.nn.Module):
    """
    Solves the maximum-sum assignment problem over an integer matrix.
    """

    def forward(self, matrix: Matrix) -> Selection:
        """
        Solve the matrix

        Parameters
        ----------
        matrix
            Matrix (HxW) to solve

        Returns
        -------
            Selection of at most min(H, W) cells, no two sharing a row or
            column, and the sum of their values
        """
        validate_matrix(matrix)

        return self._assign(matrix)

    @abstractmethod
    def _assign(self, matrix: Matrix) -> Selection:
        raise NotImplementedError
