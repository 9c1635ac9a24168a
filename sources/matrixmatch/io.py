r"""
Reading matrices from delimited text and rendering matrices and selections.

A matrix file holds one row per line, with the values of a row separated by
``;``::

    7;53;183
    497;383;563
    627;343;773
"""

from __future__ import annotations

import os
import typing as T

from torch import Tensor

from .constants import ELEMENT_SEPARATOR
from .errors import MatrixFileError, MatrixFormatError, ValueOutOfRange
from .matrix import Matrix

if T.TYPE_CHECKING:
    from .assignment import Selection

__all__ = [
    "parse_matrix",
    "read_matrix",
    "format_matrix",
    "format_selection",
    "format_cover",
]


def parse_matrix(text: str, separator: str = ELEMENT_SEPARATOR) -> Matrix:
    """
    Parse a matrix from delimited text.

    The width is the number of separators on the first line plus one, the
    height is the number of non-blank lines.

    Raises
    ------
    MatrixFormatError
        If the text holds no rows, a row has a different number of values than
        the first one, or a value is not an integer that fits in 64 bits.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        msg = "No matrix rows found!"
        raise MatrixFormatError(msg)

    width = lines[0].count(separator) + 1
    matrix = Matrix.create(width, len(lines))
    for row, line in enumerate(lines):
        tokens = line.split(separator)
        if len(tokens) != width:
            msg = f"Row {row} has {len(tokens)} values, expected {width}!"
            raise MatrixFormatError(msg)
        for col, token in enumerate(tokens):
            try:
                value = int(token)
            except ValueError as err:
                msg = f"Value {token!r} at ({row}, {col}) is not an integer!"
                raise MatrixFormatError(msg) from err
            try:
                matrix.set(row, col, value)
            except ValueOutOfRange as err:
                msg = f"Value {token!r} at ({row}, {col}) is out of range: {err}"
                raise MatrixFormatError(msg) from err

    return matrix


def read_matrix(
    path: str | os.PathLike[str], separator: str = ELEMENT_SEPARATOR
) -> Matrix:
    """
    Read a matrix from a delimited text file, see :func:`parse_matrix`.

    Raises
    ------
    MatrixFileError
        If the file cannot be opened or decoded.
    MatrixFormatError
        If the content is not a rectangular grid of integers.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as err:
        msg = f"Cannot read matrix file {os.fspath(path)!r}: {err}"
        raise MatrixFileError(msg) from err

    try:
        return parse_matrix(text, separator)
    except MatrixFormatError as err:
        msg = f"Invalid matrix file {os.fspath(path)!r}: {err}"
        raise MatrixFormatError(msg) from err


def format_matrix(matrix: Matrix | Tensor) -> str:
    """
    Render a matrix as tab separated rows.
    """
    values = matrix.values if isinstance(matrix, Matrix) else matrix
    return "\n".join("\t".join(str(v) for v in row) for row in values.tolist())


def format_selection(selection: Selection, title: str | None = None) -> str:
    """
    Render the chosen cells, one per line, followed by their total.
    """
    lines = [] if title is None else [title]
    for entry in selection.entries:
        lines.append(f"  ({entry.row}, {entry.column}) = {entry.value}")
    lines.append(f"Total: {selection.total} ({selection.count} selected)")
    return "\n".join(lines)


def format_cover(rows: T.Sequence[bool], cols: T.Sequence[bool]) -> str:
    """
    Render cover masks: the covered lines, and a grid where ``X`` marks a cell
    on a covered line and ``-`` an uncovered cell.
    """
    lines = [
        "Rows: " + " ".join("1" if r else "0" for r in rows),
        "Columns: " + " ".join("1" if c else "0" for c in cols),
    ]
    for r in rows:
        lines.append(" ".join("X" if r or c else "-" for c in cols))
    return "\n".join(lines)
