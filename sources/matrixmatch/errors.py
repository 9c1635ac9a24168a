r"""
Errors raised by the matrix container, the solvers and the text loader.

Every error derives from :class:`MatrixMatchError` and from the builtin
exception closest in meaning, such that callers may catch either.
"""

from __future__ import annotations

__all__ = [
    "MatrixMatchError",
    "InvalidDimensions",
    "InvalidMatrix",
    "ValueOutOfRange",
    "OutOfBounds",
    "SizeMismatch",
    "AllocationFailure",
    "HeuristicNonConvergence",
    "MatrixFileError",
    "MatrixFormatError",
]


class MatrixMatchError(Exception):
    """
    Base class of all errors in this package.
    """


class InvalidDimensions(MatrixMatchError, ValueError):
    """
    A width or height is not a positive integer.
    """


class InvalidMatrix(MatrixMatchError, ValueError):
    """
    The input to a solver is not a usable matrix.
    """


class ValueOutOfRange(InvalidMatrix):
    """
    A value does not fit the signed 64-bit integers that cells are stored as,
    or a solver cannot transform it without leaving that range.
    """


class OutOfBounds(MatrixMatchError, IndexError):
    """
    A row or column index lies outside the current extents.
    """


class SizeMismatch(MatrixMatchError, ValueError):
    """
    An inserted row or column does not match the current width or height.
    """


class AllocationFailure(MatrixMatchError, MemoryError):
    """
    Storage for a matrix or a scratch buffer could not be obtained.
    """


class HeuristicNonConvergence(MatrixMatchError, RuntimeError):
    """
    The Hungarian zero covering did not reach its stopping condition.
    """

    def __init__(self, msg: str, iterations: int):
        super().__init__(msg)

        self.iterations = iterations


class MatrixFileError(MatrixMatchError, OSError):
    """
    A matrix file could not be opened or read.
    """


class MatrixFormatError(MatrixMatchError, ValueError):
    """
    A matrix file was read, but its content is not a rectangular grid of
    integers.
    """
