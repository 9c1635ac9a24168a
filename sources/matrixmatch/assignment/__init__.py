"""
This package implements modules that solve the assignment problem, where the
maximum sum of cells, no two sharing a row or column, must be computed over an
integer matrix.
"""

from __future__ import annotations

from ._backtrack import *
from ._base import *
from ._greedy import *
from ._hungarian import *
from ._solve import *
from ._utils import *
