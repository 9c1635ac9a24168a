r"""
Tests for ``matrixmatch.matrix``.
"""

from __future__ import annotations

import pytest
import torch
from hypothesis import given, settings
from hypothesis import strategies as st

import matrixmatch as mm
from matrixmatch import Matrix

from .strategies import matrices


@pytest.mark.parametrize(
    ["width", "height"],
    [(0, 5), (5, 0), (-1, 3), (0, 0)],
)
def test_create_invalid_dimensions(width, height):
    with pytest.raises(mm.InvalidDimensions):
        Matrix.create(width, height)


def test_create_default_fill():
    matrix = Matrix.create(3, 2)

    assert matrix.width == 3
    assert matrix.height == 2
    assert matrix.shape == (2, 3)
    assert matrix.tolist() == [[0, 0, 0], [0, 0, 0]]


def test_create_custom_fill():
    matrix = Matrix.create(2, 2, fill=7)

    assert matrix.tolist() == [[7, 7], [7, 7]]


def test_create_allocation_failure(monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("DefaultCPUAllocator: can't allocate memory")

    monkeypatch.setattr(torch, "full", fail)

    with pytest.raises(mm.AllocationFailure):
        Matrix.create(4, 4)


def test_allocating_passes_other_errors():
    with pytest.raises(RuntimeError, match="unrelated"):
        with mm.allocating("test"):
            raise RuntimeError("unrelated")

    with pytest.raises(mm.AllocationFailure):
        with mm.allocating("test"):
            raise MemoryError


@pytest.mark.parametrize(
    "rows",
    [[], [[]], [[1, 2], [3]], [1, 2, 3]],
    ids=("empty", "empty-row", "ragged", "flat"),
)
def test_from_rows_invalid_shape(rows):
    with pytest.raises(mm.InvalidDimensions):
        Matrix.from_rows(rows)


def test_from_rows_rejects_floats():
    with pytest.raises(mm.InvalidMatrix):
        Matrix.from_rows([[1.5, 2.0]])


def test_from_rows_copies_input():
    source = torch.tensor([[1, 2], [3, 4]])
    matrix = Matrix.from_rows(source)
    source[0, 0] = 100

    assert matrix.get(0, 0) == 1


def test_get_out_of_bounds(square):
    with pytest.raises(mm.OutOfBounds):
        square.get(square.height, 0)
    with pytest.raises(mm.OutOfBounds):
        square.get(0, square.width)
    with pytest.raises(mm.OutOfBounds):
        square.get(-1, 0)
    with pytest.raises(IndexError):
        square.set(0, 2, 1)


@settings(deadline=None)
@given(
    matrix=matrices(),
    row=st.integers(0, 3),
    col=st.integers(0, 3),
    value=st.integers(-1000, 1000),
)
def test_set_then_get(matrix, row, col, value):
    row %= matrix.height
    col %= matrix.width

    matrix.set(row, col, value)

    assert matrix.get(row, col) == value


def test_insert_row_prepends(square):
    square.insert_row([9, 8])

    assert square.height == 3
    assert square.tolist() == [[9, 8], [1, 2], [3, 4]]


def test_insert_column_appends(square):
    square.insert_column([5, 6])

    assert square.width == 3
    assert square.tolist() == [[1, 2, 5], [3, 4, 6]]


def test_insert_size_mismatch(square):
    with pytest.raises(mm.SizeMismatch):
        square.insert_row([1, 2, 3])
    with pytest.raises(mm.SizeMismatch):
        square.insert_column([1])

    assert square.tolist() == [[1, 2], [3, 4]]


def test_delete_row_and_column():
    matrix = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])

    matrix.delete_row(1)
    assert matrix.tolist() == [[1, 2, 3], [7, 8, 9]]

    matrix.delete_column(0)
    assert matrix.tolist() == [[2, 3], [8, 9]]
    assert matrix.shape == (2, 2)


def test_delete_out_of_bounds(square):
    with pytest.raises(mm.OutOfBounds):
        square.delete_row(2)
    with pytest.raises(mm.OutOfBounds):
        square.delete_column(-1)


def test_delete_last_line():
    matrix = Matrix.from_rows([[1, 2]])

    with pytest.raises(mm.InvalidDimensions):
        matrix.delete_row(0)

    matrix.delete_column(1)
    with pytest.raises(mm.InvalidDimensions):
        matrix.delete_column(0)

    assert matrix.tolist() == [[1]]


@settings(deadline=None)
@given(matrix=matrices(), data=st.data())
def test_insert_delete_round_trip(matrix, data):
    original = matrix.deep_copy()

    row = data.draw(
        st.lists(st.integers(-100, 100), min_size=matrix.width, max_size=matrix.width)
    )
    matrix.insert_row(row)
    assert matrix.row(0) == row
    matrix.delete_row(0)
    assert matrix.equals(original)

    col = data.draw(
        st.lists(st.integers(-100, 100), min_size=matrix.height, max_size=matrix.height)
    )
    matrix.insert_column(col)
    assert matrix.column(matrix.width - 1) == col
    matrix.delete_column(matrix.width - 1)
    assert matrix.equals(original)


def test_deep_copy_is_independent(square):
    copy = square.deep_copy()
    copy.set(0, 0, 42)
    copy.insert_row([0, 0])

    assert square.get(0, 0) == 1
    assert square.shape == (2, 2)
    assert not copy.equals(square)


def test_repr(square):
    assert repr(square) == "Matrix(width=2, height=2)"


@pytest.mark.parametrize(
    "rows",
    [[[2**64]], [[2**63, 0]], [[0], [-(2**63) - 1]]],
    ids=("far-above", "just-above", "just-below"),
)
def test_from_rows_out_of_range(rows):
    with pytest.raises(mm.ValueOutOfRange) as info:
        Matrix.from_rows(rows)

    assert isinstance(info.value, mm.InvalidMatrix)
    assert isinstance(info.value, ValueError)


def test_from_rows_int64_limits():
    matrix = Matrix.from_rows([[2**63 - 1, -(2**63)]])

    assert matrix.tolist() == [[2**63 - 1, -(2**63)]]


def test_set_out_of_range(square):
    with pytest.raises(mm.ValueOutOfRange):
        square.set(0, 0, 2**63)
    with pytest.raises(mm.ValueOutOfRange):
        square.set(1, 1, -(2**63) - 1)

    assert square.tolist() == [[1, 2], [3, 4]]

    square.set(0, 0, -(2**63))
    assert square.get(0, 0) == -(2**63)


def test_insert_and_create_out_of_range(square):
    with pytest.raises(mm.ValueOutOfRange):
        square.insert_row([0, 2**63])
    with pytest.raises(mm.ValueOutOfRange):
        square.insert_column([2**64, 0])
    with pytest.raises(mm.ValueOutOfRange):
        Matrix.create(2, 2, fill=2**63)

    assert square.tolist() == [[1, 2], [3, 4]]
