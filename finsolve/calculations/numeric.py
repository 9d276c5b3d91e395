"""
Floating Point Helpers

Tolerance comparison and rounding shared by the solvers, the series
reconstructor, and the invariant checks.
"""

import math
from typing import Optional

import numpy as np

from finsolve.config import get_settings


def _ulps_between(a: float, b: float) -> Optional[int]:
    """Distance in units of least precision, or None if the signs differ."""
    ia = int(np.array(a, dtype=np.float64).view(np.int64))
    ib = int(np.array(b, dtype=np.float64).view(np.int64))
    if (ia < 0) != (ib < 0):
        return None
    return abs(ia - ib)


def is_approx_equal(
    a: float,
    b: float,
    epsilon: Optional[float] = None,
    ulps: Optional[int] = None,
) -> bool:
    """
    Compare two floats within an absolute epsilon or a ULP distance.

    Args:
        a: First value
        b: Second value
        epsilon: Absolute tolerance (defaults to settings.float_epsilon)
        ulps: Maximum distance in ULPs (defaults to settings.float_ulps)

    Returns:
        True if the values are equal within either tolerance
    """
    settings = get_settings()
    if epsilon is None:
        epsilon = settings.float_epsilon
    if ulps is None:
        ulps = settings.float_ulps

    if a == b:
        return True
    if not (math.isfinite(a) and math.isfinite(b)):
        return False
    if abs(a - b) <= epsilon:
        return True

    distance = _ulps_between(a, b)
    return distance is not None and distance <= ulps


def is_close(a: float, b: float, rel_tol: float = 1e-9) -> bool:
    """
    Looser comparison for values that went through many multiplications.

    Rounding error in a long series grows with the magnitude of the values,
    so a relative tolerance is accepted alongside is_approx_equal.
    """
    return is_approx_equal(a, b) or math.isclose(a, b, rel_tol=rel_tol)


def is_approx_zero(value: float) -> bool:
    """Check whether a value is zero within the default tolerance."""
    return is_approx_equal(0.0, value)


def round_to(value: float, digits: int) -> float:
    """Round to a fixed number of decimal places."""
    return round(value, digits)


def round_fractional_periods(fractional_periods: float) -> int:
    """
    Whole number of periods for a fractional count.

    A partial final period is still in progress so the count is rounded up,
    after trimming noise beyond four decimal places.
    """
    return int(math.ceil(round_to(fractional_periods, 4)))


def is_whole_number(value: float) -> bool:
    """Check whether a period count has no fractional part."""
    return float(value).is_integer()
