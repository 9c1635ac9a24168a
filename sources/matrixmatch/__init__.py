r"""
MatrixMatch
===========

This package solves the assignment problem over integer matrices.

.. math::

    \max \sum_{(i, j) \in S} M_{ij}

where the selection :math:`S` holds at most :math:`\min(H, W)` cells, no two of
which share a row or a column.

Terminology
-----------

- **Matrix**: A rectangular grid of integers, see :class:`Matrix`.

- **Selection**: The cells chosen by a solver and the sum of their values.

- **Backtrack**: Exhaustive search, always optimal but exponential in time.

- **Greedy**: One pass over the rows, fast but possibly sub-optimal.

- **Hungarian**: Cost reduction with a heuristic zero covering.
"""

from __future__ import annotations

__version__ = "1.0.0"

from . import assignment, constants, debug, errors
from .assignment import Selection, SelectedElement, solve
from .errors import *
from .io import *
from .matrix import *
