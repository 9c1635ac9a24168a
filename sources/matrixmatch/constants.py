from __future__ import annotations

from typing import Final

ELEMENT_SEPARATOR: Final = ";"
DEFAULT_MATRIX_VALUE: Final = 0
DEFAULT_MAX_ITERATIONS: Final = 1000
ENV_DEBUG: Final = "MATRIXMATCH_DEBUG"
