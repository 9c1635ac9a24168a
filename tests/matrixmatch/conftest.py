r"""
Common set-up for all tests.
"""

from __future__ import annotations

import typing as T

import pytest

from matrixmatch import Matrix, debug


@pytest.fixture()
def square() -> Matrix:
    return Matrix.from_rows([[1, 2], [3, 4]])


@pytest.fixture()
def debug_enabled(monkeypatch: pytest.MonkeyPatch) -> T.Iterator[None]:
    monkeypatch.setenv("MATRIXMATCH_DEBUG", "1")
    debug.check_debug_enabled.cache_clear()
    yield
    debug.check_debug_enabled.cache_clear()
