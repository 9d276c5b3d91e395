"""
Rate Schedule Calculations

Present and future values when the rate changes from one period to the
next. Compounding is always discrete here: one rate per period.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from finsolve.calculations.enums import TvmVariable
from finsolve.calculations.errors import UnsatisfiableConstraintError
from finsolve.calculations.numeric import is_close
from finsolve.calculations.series import TvmSeries, build_series
from finsolve.calculations.validation import (
    check_finite_result,
    check_rates,
    check_value,
)

logger = logging.getLogger(__name__)


def _schedule_growth(rates) -> float:
    """Product of (1 + r) across the schedule."""
    with np.errstate(over="raise"):
        try:
            return float(np.prod(1.0 + np.asarray(rates, dtype=np.float64)))
        except FloatingPointError:
            raise UnsatisfiableConstraintError(
                "rates", "compounding the schedule overflows a float"
            )


def solve_future_value_schedule(rates: Iterable[float], present_value: float) -> float:
    """
    Calculate the future value after applying each rate in turn.

    Args:
        rates: Periodic rates as decimals, one per period
        present_value: Starting value (negative for money invested)

    Returns:
        -present_value * (1 + r1) * (1 + r2) * ... * (1 + rn)
    """
    rates = check_rates(rates)
    present_value = check_value(present_value, "present_value")
    return _future_value(rates, present_value)


def _future_value(rates, present_value: float) -> float:
    future_value = -present_value * _schedule_growth(rates)
    logger.debug(
        f"solve_future_value_schedule({len(rates)} rates, "
        f"present_value={present_value}) = {future_value}"
    )
    return check_finite_result(future_value, "future_value")


def solve_present_value_schedule(rates: Iterable[float], future_value: float) -> float:
    """
    Calculate the present value that grows into future_value over the schedule.

    Raises:
        UnsatisfiableConstraintError: If any rate is exactly -100%, since
            nothing survives that period to be discounted back
    """
    rates = check_rates(rates)
    future_value = check_value(future_value, "future_value")
    return _present_value(rates, future_value)


def _present_value(rates, future_value: float) -> float:
    for i, rate in enumerate(rates):
        if rate == -1.0:
            raise UnsatisfiableConstraintError(
                f"rates[{i}]",
                "a rate of -100% wipes out the value, so the present value "
                "cannot be recovered from the future value",
            )

    growth = _schedule_growth(rates)
    if growth == 0.0:
        raise UnsatisfiableConstraintError(
            "rates",
            "compounding the schedule shrinks the value below the smallest "
            "float, so the present value cannot be recovered",
        )
    present_value = -future_value / growth
    logger.debug(
        f"solve_present_value_schedule({len(rates)} rates, "
        f"future_value={future_value}) = {present_value}"
    )
    return check_finite_result(present_value, "present_value")


@dataclass(frozen=True)
class TvmScheduleSolution:
    """Result of a present or future value calculation over a rate schedule."""

    calculated_field: TvmVariable
    rates: Tuple[float, ...]
    present_value: float
    future_value: float

    def __post_init__(self):
        assert self.calculated_field.is_present_value() or self.calculated_field.is_future_value()
        assert all(np.isfinite(self.rates)) and all(rate >= -1.0 for rate in self.rates)
        assert np.isfinite(self.present_value) and np.isfinite(self.future_value)

    @property
    def periods(self) -> int:
        return len(self.rates)

    def series(self) -> TvmSeries:
        """Value at the end of each period, starting with period 0."""
        series = build_series(
            self.calculated_field,
            False,
            list(self.rates),
            self.present_value,
            self.future_value,
        )
        assert is_close(series[0].value, -self.present_value)
        assert is_close(series[-1].value, self.future_value)
        return series


def future_value_schedule_solution(
    rates: Iterable[float], present_value: float
) -> TvmScheduleSolution:
    """Solve for the future value over a schedule and keep the inputs."""
    rates = check_rates(rates)
    present_value = check_value(present_value, "present_value")
    future_value = _future_value(rates, present_value)
    return TvmScheduleSolution(
        TvmVariable.future_value, tuple(rates), present_value, future_value
    )


def present_value_schedule_solution(
    rates: Iterable[float], future_value: float
) -> TvmScheduleSolution:
    """Solve for the present value over a schedule and keep the inputs."""
    rates = check_rates(rates)
    future_value = check_value(future_value, "future_value")
    present_value = _present_value(rates, future_value)
    return TvmScheduleSolution(
        TvmVariable.present_value, tuple(rates), present_value, future_value
    )
