"""
Time Value of Money Calculations

Closed-form solvers for the four TVM quantities. Each one is the algebraic
inverse of

    future_value = -present_value * (1 + rate) ** periods       (simple)
    future_value = -present_value * e ** (rate * periods)       (continuous)

Values follow the cash-flow sign convention used by spreadsheet TVM
functions: money paid out is negative and money received is positive, so an
investment of -1,000 grows into a future value of +1,100.
"""

import logging
import math

from finsolve.calculations.errors import UnsatisfiableConstraintError
from finsolve.calculations.numeric import is_approx_zero
from finsolve.calculations.validation import (
    check_finite_result,
    check_fractional_periods,
    check_opposite_signs,
    check_rate,
    check_reachable,
    check_value,
)

logger = logging.getLogger(__name__)


def growth_factor(rate: float, periods: float, continuous: bool) -> float:
    """
    Calculate the compounding multiplier for a rate over a number of periods.

    Args:
        rate: Periodic rate as decimal (e.g., 0.05 for 5%)
        periods: Number of periods, possibly fractional
        continuous: True for continuous compounding

    Returns:
        (1 + rate) ** periods, or e ** (rate * periods) when continuous
    """
    try:
        if continuous:
            return math.exp(rate * periods)
        return (1.0 + rate) ** periods
    except OverflowError:
        raise UnsatisfiableConstraintError(
            "periods",
            f"compounding {rate} over {periods} periods overflows a float",
        )


def solve_future_value(
    rate: float, periods: float, present_value: float, continuous: bool = False
) -> float:
    """
    Calculate the value of an investment after it grows or shrinks over time.

    Args:
        rate: Periodic rate as decimal
        periods: Number of periods
        present_value: Starting value (negative for money invested)
        continuous: True for continuous compounding

    Returns:
        Future value, with the opposite sign of present_value

    Raises:
        InvalidParameterError: If the rate or present value is invalid
    """
    rate = check_rate(rate)
    periods = check_fractional_periods(periods)
    present_value = check_value(present_value, "present_value")

    future_value = -present_value * growth_factor(rate, periods, continuous)
    logger.debug(
        f"solve_future_value(rate={rate}, periods={periods}, "
        f"present_value={present_value}, continuous={continuous}) = {future_value}"
    )
    return check_finite_result(future_value, "future_value")


def solve_present_value(
    rate: float, periods: float, future_value: float, continuous: bool = False
) -> float:
    """
    Calculate the current value of a future amount at a fixed rate.

    With zero periods or a zero rate nothing compounds and the present
    value is simply -future_value.

    Raises:
        InvalidParameterError: If an input is invalid, or the rate is
            exactly -100% so there is nothing to discount back from
    """
    rate = check_rate(rate)
    periods = check_fractional_periods(periods)
    future_value = check_value(future_value, "future_value")

    if periods == 0.0 or rate == 0.0:
        return -future_value

    if not continuous and rate == -1.0:
        raise UnsatisfiableConstraintError(
            "rate",
            "a rate of -100% wipes out any present value, so the present value "
            "cannot be recovered from the future value",
        )

    growth = growth_factor(rate, periods, continuous)
    if growth == 0.0:
        raise UnsatisfiableConstraintError(
            "periods",
            f"compounding {rate} over {periods} periods shrinks the value below "
            "the smallest float, so the present value cannot be recovered",
        )
    present_value = -future_value / growth
    logger.debug(
        f"solve_present_value(rate={rate}, periods={periods}, "
        f"future_value={future_value}, continuous={continuous}) = {present_value}"
    )
    return check_finite_result(present_value, "present_value")


def solve_rate(
    periods: float, present_value: float, future_value: float, continuous: bool = False
) -> float:
    """
    Calculate the fixed periodic rate that moves present_value to future_value.

    Special cases:
        - present_value + future_value ~= 0: any rate works, returns 0.0
        - future_value == 0 with a nonzero present value: returns -1.0

    Raises:
        InvalidParameterError: If the values share a sign, the present value
            is zero, or there are no periods to compound over
    """
    periods = check_fractional_periods(periods)
    present_value = check_value(present_value, "present_value")
    future_value = check_value(future_value, "future_value")

    if is_approx_zero(present_value + future_value):
        return 0.0
    if future_value == 0.0:
        return -1.0

    check_opposite_signs(present_value, future_value)
    if is_approx_zero(present_value):
        raise UnsatisfiableConstraintError(
            "present_value",
            "the present value is zero and the future value is nonzero so "
            "there's no way to solve for the rate",
        )
    if periods == 0.0:
        raise UnsatisfiableConstraintError(
            "periods",
            "there are no periods and the present value plus the future value "
            "is not zero so there's no way to solve for the rate",
        )

    ratio = -future_value / present_value
    if continuous:
        rate = math.log(ratio) / periods
    else:
        try:
            rate = ratio ** (1.0 / periods) - 1.0
        except OverflowError:
            raise UnsatisfiableConstraintError(
                "periods",
                f"the growth from {present_value} to {future_value} over {periods} "
                "periods implies a rate too large for a float",
            )

    check_finite_result(rate, "rate")
    if rate < -1.0:
        raise UnsatisfiableConstraintError(
            "future_value",
            f"the implied rate {rate} is below -100%",
        )
    logger.debug(
        f"solve_rate(periods={periods}, present_value={present_value}, "
        f"future_value={future_value}, continuous={continuous}) = {rate}"
    )
    return rate


def solve_periods(
    rate: float, present_value: float, future_value: float, continuous: bool = False
) -> float:
    """
    Calculate the number of periods needed to reach a future value.

    The result is fractional. Callers who need a whole number of periods
    should round up since a partial final period is still in progress.

    Special cases:
        - present_value + future_value ~= 0: no periods are needed, returns 0.0
        - future_value == 0 with rate == -1.0: the value is gone after one
          period, returns 1.0

    Raises:
        InvalidParameterError: If the values share a sign, either value is
            zero, or the rate moves the value away from the target
    """
    rate = check_rate(rate)
    present_value = check_value(present_value, "present_value")
    future_value = check_value(future_value, "future_value")

    if is_approx_zero(present_value + future_value):
        return 0.0
    if future_value == 0.0 and rate == -1.0:
        return 1.0

    check_opposite_signs(present_value, future_value)
    check_reachable(rate, present_value, future_value)

    ratio = -future_value / present_value
    if continuous:
        fractional_periods = math.log(ratio) / rate
    else:
        if rate == -1.0:
            raise UnsatisfiableConstraintError(
                "rate",
                "a rate of -100% reaches zero after one period and never a "
                "nonzero future value",
            )
        fractional_periods = math.log(ratio) / math.log1p(rate)

    check_finite_result(fractional_periods, "periods")
    logger.debug(
        f"solve_periods(rate={rate}, present_value={present_value}, "
        f"future_value={future_value}, continuous={continuous}) = {fractional_periods}"
    )
    return max(fractional_periods, 0.0)
