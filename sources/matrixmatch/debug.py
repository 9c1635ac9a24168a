"""
Simple system to debug the solvers via verbose log messages
"""

from __future__ import annotations

import functools
import logging
import os

from .constants import ENV_DEBUG

__all__ = ["check_debug_enabled", "get_env_bool"]

_logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "y", "yes", "t", "true", "on"})
_FALSY = frozenset({"0", "n", "no", "f", "false", "off"})


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Read a boolean from the environment.

    Accepts ``y``, ``yes``, ``t``, ``true``, ``on`` and ``1`` as true, and
    ``n``, ``no``, ``f``, ``false``, ``off`` and ``0`` as false, ignoring case
    and surrounding whitespace. An unset or empty variable gives ``default``,
    as does an unrecognised value, which is logged as a warning.
    """
    value = os.environ.get(key, "").strip().lower()
    if not value:
        return default
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False

    _logger.warning("Ignoring %s=%r, expected a boolean value", key, value)
    return default


@functools.cache
def check_debug_enabled() -> bool:
    """
    Check whether debugging is enabled by reading the environment
    variable ``MATRIXMATCH_DEBUG``.
    """
    return get_env_bool(ENV_DEBUG, default=False)
