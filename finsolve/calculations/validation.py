"""
Input Validation

Domain checks shared by every solver. Each check either returns the
normalized input or raises an InvalidParameterError naming the argument.
"""

import logging
import math
import numbers
from typing import Iterable, List

from finsolve.config import get_settings
from finsolve.calculations.errors import (
    InvalidRateError,
    InvalidValueError,
    UnsatisfiableConstraintError,
)
from finsolve.calculations.numeric import is_approx_zero

logger = logging.getLogger(__name__)


def to_float(value, name: str) -> float:
    """
    Normalize a numeric input to a float.

    Accepts ints, floats and numpy integer/floating scalars. Booleans and
    anything non-numeric are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidValueError(
            name, f"must be an int or float, got {type(value).__name__}"
        )
    return float(value)


def check_value(value, name: str) -> float:
    """Require a finite present or future value."""
    value = to_float(value, name)
    if not math.isfinite(value):
        raise InvalidValueError(name, "must be finite (not NaN or infinity)")
    return value


def check_rate(rate, name: str = "rate") -> float:
    """
    Require a finite rate no lower than -1.0.

    A rate below -100% would mean losing more than the full value in one
    period. Rates above the warning threshold are allowed but logged.
    """
    if isinstance(rate, bool) or not isinstance(rate, numbers.Real):
        raise InvalidRateError(
            name, f"must be an int or float, got {type(rate).__name__}"
        )
    rate = float(rate)
    if not math.isfinite(rate):
        raise InvalidRateError(name, "must be finite (not NaN or infinity)")
    if rate < -1.0:
        raise InvalidRateError(
            name,
            f"must be greater than or equal to -1.0, got {rate}; a rate below "
            "-100% would lose more than the full value in a single period",
        )
    threshold = get_settings().rate_warning_threshold
    if abs(rate) > threshold:
        logger.warning(
            f"Periodic rate {rate} has an absolute value above {threshold}. "
            f"Are you sure you expect a {rate * 100.0}% change per period?"
        )
    return rate


def check_periods(periods, name: str = "periods") -> int:
    """Require a whole, non-negative number of periods."""
    if isinstance(periods, bool) or not isinstance(periods, numbers.Integral):
        raise InvalidValueError(
            name, f"must be a whole number, got {type(periods).__name__}"
        )
    periods = int(periods)
    if periods < 0:
        raise InvalidValueError(name, f"must not be negative, got {periods}")
    return periods


def check_fractional_periods(periods, name: str = "periods") -> float:
    """Require a finite, non-negative (possibly fractional) period count."""
    periods = to_float(periods, name)
    if not math.isfinite(periods) or periods < 0.0:
        raise InvalidValueError(
            name, f"must be finite and not negative, got {periods}"
        )
    return periods


def check_rates(rates: Iterable) -> List[float]:
    """Require a non-empty schedule of valid rates."""
    if isinstance(rates, (str, bytes)):
        raise InvalidRateError("rates", "must be a sequence of numbers")
    try:
        rates = list(rates)
    except TypeError:
        raise InvalidRateError("rates", "must be a sequence of numbers")
    if not rates:
        raise InvalidRateError("rates", "at least one rate is required")
    return [check_rate(rate, f"rates[{i}]") for i, rate in enumerate(rates)]


def check_opposite_signs(present_value: float, future_value: float) -> None:
    """
    Require present and future values with opposite signs.

    Under the cash-flow sign convention money paid in is negative and money
    received is positive, so both values cannot share a sign.
    """
    if present_value < 0.0 and future_value < 0.0:
        raise UnsatisfiableConstraintError(
            "future_value",
            "the present value and future value are both negative; "
            "they must have opposite signs",
        )
    if present_value > 0.0 and future_value > 0.0:
        raise UnsatisfiableConstraintError(
            "future_value",
            "the present value and future value are both positive; "
            "they must have opposite signs",
        )


def check_reachable(rate: float, present_value: float, future_value: float) -> None:
    """
    Require that compounding at this rate can move from one value to the other.

    Zero values and growth in the wrong direction have no period count that
    satisfies the equation.
    """
    if is_approx_zero(present_value) and not is_approx_zero(future_value):
        raise UnsatisfiableConstraintError(
            "present_value",
            "the present value is zero and the future value is nonzero",
        )
    if future_value == 0.0 and rate != -1.0:
        raise UnsatisfiableConstraintError(
            "future_value",
            "the future value is zero and the rate is not -100%",
        )
    if abs(present_value) < abs(future_value) and rate <= 0.0:
        raise UnsatisfiableConstraintError(
            "rate",
            "the future value is larger in magnitude than the present value "
            "but the rate is zero or negative, so no amount of compounding "
            "will reach it",
        )
    if abs(present_value) > abs(future_value) and rate >= 0.0:
        raise UnsatisfiableConstraintError(
            "rate",
            "the future value is smaller in magnitude than the present value "
            "but the rate is zero or positive, so no amount of compounding "
            "will reach it",
        )


def check_finite_result(value: float, name: str) -> float:
    """Reject a NaN or infinite result produced by a formula."""
    if not math.isfinite(value):
        raise UnsatisfiableConstraintError(
            name, f"the calculation produced a non-finite result ({value})"
        )
    return value
