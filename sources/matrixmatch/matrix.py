r"""
Integer matrix container that is shared by all solvers.

Cells are kept in a single contiguous row-major tensor of shape
``(height, width)``, such that every declared column of every row always holds
a value.
"""

from __future__ import annotations

import contextlib
import typing as T

import torch
from torch import Tensor

from .constants import DEFAULT_MATRIX_VALUE
from .errors import (
    AllocationFailure,
    InvalidDimensions,
    InvalidMatrix,
    OutOfBounds,
    SizeMismatch,
    ValueOutOfRange,
)

__all__ = ["Matrix", "allocating"]

DTYPE: T.Final = torch.int64
LIMITS: T.Final = torch.iinfo(DTYPE)


@contextlib.contextmanager
def allocating(what: str) -> T.Iterator[None]:
    """
    Translates allocator errors raised while building ``what`` into an
    :class:`AllocationFailure`.
    """
    try:
        yield
    except (MemoryError, RuntimeError) as err:
        # Torch reports CPU allocator failures as plain ``RuntimeError``
        if isinstance(err, MemoryError) or "alloc" in str(err).lower():
            msg = f"Could not allocate storage for {what}: {err}"
            raise AllocationFailure(msg) from err
        raise


def _check_value(value: T.Any) -> int:
    value = int(value)
    if not LIMITS.min <= value <= LIMITS.max:
        msg = (
            f"Value {value} does not fit in {DTYPE}, expected {LIMITS.min} to "
            f"{LIMITS.max}!"
        )
        raise ValueOutOfRange(msg)
    return value


def _exceeds_range(rows: T.Any) -> bool:
    if isinstance(rows, int):
        return not LIMITS.min <= rows <= LIMITS.max
    if isinstance(rows, (list, tuple)):
        return any(_exceeds_range(r) for r in rows)
    return False


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        msg = f"Matrix dimensions must be positive, got {width=} and {height=}!"
        raise InvalidDimensions(msg)


class Matrix:
    """
    A ``height`` x ``width`` matrix of integers.

    The matrix exclusively owns its storage. Use :meth:`deep_copy` to obtain an
    independent duplicate that may be modified without affecting the original.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Tensor):
        if data.ndim != 2:
            msg = f"Expected a 2-D tensor, got {data.ndim} dimension(s)!"
            raise InvalidDimensions(msg)
        _check_dimensions(data.shape[1], data.shape[0])
        if data.dtype != DTYPE:
            msg = f"Expected a tensor of type {DTYPE}, got {data.dtype}!"
            raise InvalidMatrix(msg)

        self._data = data.contiguous()

    @classmethod
    def create(
        cls, width: int, height: int, fill: int = DEFAULT_MATRIX_VALUE
    ) -> Matrix:
        """
        Create a matrix of the given size filled with a default value.

        Parameters
        ----------
        width
            Number of columns, must be positive.
        height
            Number of rows, must be positive.
        fill, optional
            Value of every cell.

        Returns
        -------
            The new matrix.
        """
        _check_dimensions(width, height)

        with allocating(f"a {height}x{width} matrix"):
            data = torch.full((height, width), _check_value(fill), dtype=DTYPE)
        return cls(data)

    @classmethod
    def from_rows(cls, rows: T.Any) -> Matrix:
        """
        Create a matrix from a nested sequence, array or 2-D integer tensor.
        The values are copied.

        Raises
        ------
        InvalidDimensions
            If the input is not a non-empty rectangular grid.
        InvalidMatrix
            If the values are not integers.
        ValueOutOfRange
            If a value does not fit in a signed 64-bit integer.
        """
        if _exceeds_range(rows):
            msg = f"Matrix values must lie between {LIMITS.min} and {LIMITS.max}!"
            raise ValueOutOfRange(msg)
        try:
            data = torch.as_tensor(rows)
        except (TypeError, ValueError) as err:
            msg = f"Cannot build a rectangular integer matrix from {rows!r}!"
            raise InvalidDimensions(msg) from err
        if data.ndim != 2:
            msg = f"Expected a 2-D grid of values, got shape {tuple(data.shape)}!"
            raise InvalidDimensions(msg)
        if data.numel() > 0 and (
            data.is_floating_point() or data.is_complex() or data.dtype == torch.bool
        ):
            msg = f"Matrix values must be integers, got {data.dtype}!"
            raise InvalidMatrix(msg)

        with allocating("a matrix copy"):
            converted = data.to(dtype=DTYPE, copy=True)
        # Unsigned 64-bit values above the signed maximum wrap to negatives
        if not data.dtype.is_signed and bool((converted < 0).any()):
            msg = f"Matrix values must lie between {LIMITS.min} and {LIMITS.max}!"
            raise ValueOutOfRange(msg)
        return cls(converted)

    # Dimensions #

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """
        Shape as ``(height, width)``, i.e. rows first as in the tensor.
        """
        return self.height, self.width

    @property
    def values(self) -> Tensor:
        """
        The underlying ``(height, width)`` tensor. This shares storage with the
        matrix, callers that intend to modify it should work on a
        :meth:`deep_copy`.
        """
        return self._data

    # Point access #

    def _check_position(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            msg = (
                f"Position ({row}, {col}) is out of bounds for a matrix with "
                f"{self.height} rows and {self.width} columns!"
            )
            raise OutOfBounds(msg)

    def get(self, row: int, col: int) -> int:
        self._check_position(row, col)
        return int(self._data[row, col].item())

    def set(self, row: int, col: int, value: int) -> None:
        """
        Replace the value at a position.
        """
        self._check_position(row, col)
        self._data[row, col] = _check_value(value)

    def row(self, index: int) -> list[int]:
        if not 0 <= index < self.height:
            msg = f"Row {index} is out of bounds for {self.height} rows!"
            raise OutOfBounds(msg)
        return self._data[index].tolist()

    def column(self, index: int) -> list[int]:
        if not 0 <= index < self.width:
            msg = f"Column {index} is out of bounds for {self.width} columns!"
            raise OutOfBounds(msg)
        return self._data[:, index].tolist()

    def tolist(self) -> list[list[int]]:
        return self._data.tolist()

    # Structural changes #

    @staticmethod
    def _as_line(values: T.Sequence[int], expected: int, kind: str) -> Tensor:
        if len(values) != expected:
            msg = f"Expected a {kind} of {expected} values, got {len(values)}!"
            raise SizeMismatch(msg)
        with allocating(f"a new {kind}"):
            return torch.as_tensor(
                [_check_value(v) for v in values], dtype=DTYPE
            ).flatten()

    def insert_row(self, values: T.Sequence[int]) -> None:
        """
        Insert a row in front of the matrix. The new row gets index 0 and all
        previous rows move down by one.
        """
        line = self._as_line(values, self.width, "row")
        with allocating("a row insertion"):
            self._data = torch.cat([line.unsqueeze(0), self._data], dim=0)

    def insert_column(self, values: T.Sequence[int]) -> None:
        """
        Append a column at the end of every row. The new column gets index
        ``width``, where ``values[i]`` lands in row ``i``.
        """
        line = self._as_line(values, self.height, "column")
        with allocating("a column insertion"):
            self._data = torch.cat([self._data, line.unsqueeze(1)], dim=1)

    def delete_row(self, index: int) -> None:
        if not 0 <= index < self.height:
            msg = f"Cannot delete row {index} from a matrix with {self.height} rows!"
            raise OutOfBounds(msg)
        if self.height == 1:
            msg = "Cannot delete the last remaining row of a matrix!"
            raise InvalidDimensions(msg)

        self._data = torch.cat([self._data[:index], self._data[index + 1 :]], dim=0)

    def delete_column(self, index: int) -> None:
        if not 0 <= index < self.width:
            msg = f"Cannot delete column {index} from a matrix with {self.width} columns!"
            raise OutOfBounds(msg)
        if self.width == 1:
            msg = "Cannot delete the last remaining column of a matrix!"
            raise InvalidDimensions(msg)

        self._data = torch.cat(
            [self._data[:, :index], self._data[:, index + 1 :]], dim=1
        ).contiguous()

    # Copies and comparison #

    def deep_copy(self) -> Matrix:
        with allocating(f"a copy of a {self.height}x{self.width} matrix"):
            data = self._data.clone()
        return type(self)(data)

    def equals(self, other: Matrix) -> bool:
        """
        Content equivalence: same shape and same values.
        """
        return self.shape == other.shape and torch.equal(self._data, other._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"
