"""
TVM Solutions

Wraps the closed-form solvers in a TvmSolution that keeps every input and
output together with a readable formula, rebuilds the period-by-period
series, and re-solves for other quantities or compounding frequencies.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from finsolve.config import get_settings
from finsolve.calculations import tvm
from finsolve.calculations.enums import TvmVariable
from finsolve.calculations.errors import InvalidParameterError
from finsolve.calculations.numeric import (
    is_approx_equal,
    is_close,
    is_whole_number,
    round_fractional_periods,
)
from finsolve.calculations.series import TvmSeries, build_series
from finsolve.calculations.validation import check_periods

logger = logging.getLogger(__name__)


def _format_periods(periods: float) -> str:
    if is_whole_number(periods):
        return str(int(periods))
    return f"{periods:.4f}"


@dataclass(frozen=True)
class ScenarioList:
    """
    A what-if comparison: one output value for each input value.

    For compounding-frequency scenarios the input is the number of
    compounding periods (math.inf for continuous compounding) and the
    output is a present or future value.
    """

    setup: str
    input_variable: TvmVariable
    output_variable: TvmVariable
    entries: Tuple[Tuple[float, float], ...]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def inputs(self) -> Tuple[float, ...]:
        return tuple(entry[0] for entry in self.entries)

    def outputs(self) -> Tuple[float, ...]:
        return tuple(entry[1] for entry in self.entries)


@dataclass(frozen=True, eq=False)
class TvmSolution:
    """
    The result of solving for one of rate, periods, present value or future value.

    The other three quantities are the inputs exactly as given, so any
    solution can be re-solved for a different quantity.
    """

    calculated_field: TvmVariable
    continuous_compounding: bool
    rate: float
    fractional_periods: float
    present_value: float
    future_value: float
    formula: str
    symbolic_formula: str

    def __post_init__(self):
        assert math.isfinite(self.rate) and self.rate >= -1.0
        assert math.isfinite(self.fractional_periods) and self.fractional_periods >= 0.0
        assert math.isfinite(self.present_value)
        assert math.isfinite(self.future_value)
        assert self.formula and self.symbolic_formula

    @property
    def periods(self) -> int:
        """Whole number of periods, counting a partial final period."""
        return round_fractional_periods(self.fractional_periods)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TvmSolution):
            return NotImplemented
        return (
            self.calculated_field == other.calculated_field
            and self.continuous_compounding == other.continuous_compounding
            and is_approx_equal(self.rate, other.rate)
            and is_approx_equal(self.fractional_periods, other.fractional_periods)
            and is_approx_equal(self.present_value, other.present_value)
            and is_approx_equal(self.future_value, other.future_value)
            and self.formula == other.formula
            and self.symbolic_formula == other.symbolic_formula
        )

    __hash__ = None

    def series(self) -> TvmSeries:
        """
        Value at the end of each period, from period 0 to self.periods.

        Entry 0 is -present_value and the last entry is future_value.
        """
        series = build_series(
            self.calculated_field,
            self.continuous_compounding,
            [self.rate] * self.periods,
            self.present_value,
            self.future_value,
            self.fractional_periods,
        )
        assert is_close(series[0].value, -self.present_value)
        assert is_close(series[-1].value, self.future_value)
        return series

    def rate_solution(
        self, continuous: bool, compounding_periods: Optional[int] = None
    ) -> "TvmSolution":
        """Solve for the rate from this solution's periods and values."""
        if compounding_periods is None:
            periods = self.fractional_periods
        else:
            periods = check_periods(compounding_periods, "compounding_periods")
        return rate_solution(periods, self.present_value, self.future_value, continuous)

    def periods_solution(self, continuous: bool) -> "TvmSolution":
        """Solve for the number of periods from this solution's rate and values."""
        return periods_solution(self.rate, self.present_value, self.future_value, continuous)

    def present_value_solution(
        self, continuous: bool, compounding_periods: Optional[int] = None
    ) -> "TvmSolution":
        """
        Solve for the present value, optionally splitting the same overall
        rate across a different number of compounding periods.
        """
        rate, periods = self._rate_and_periods(compounding_periods)
        return present_value_solution(rate, periods, self.future_value, continuous)

    def future_value_solution(
        self, continuous: bool, compounding_periods: Optional[int] = None
    ) -> "TvmSolution":
        rate, periods = self._rate_and_periods(compounding_periods)
        return future_value_solution(rate, periods, self.present_value, continuous)

    def resolve(
        self,
        variable: TvmVariable,
        continuous: Optional[bool] = None,
        compounding_periods: Optional[int] = None,
    ) -> "TvmSolution":
        """
        Solve for any of the four quantities from this solution.

        Args:
            variable: The quantity to calculate
            continuous: Compounding mode (defaults to this solution's mode)
            compounding_periods: Spread the overall rate over this many periods

        Raises:
            InvalidParameterError: If compounding_periods is given when
                solving for periods
        """
        if continuous is None:
            continuous = self.continuous_compounding
        variable = TvmVariable(variable)

        if variable.is_rate():
            return self.rate_solution(continuous, compounding_periods)
        if variable.is_periods():
            if compounding_periods is not None:
                raise InvalidParameterError(
                    "compounding_periods",
                    "cannot be given when solving for the number of periods",
                )
            return self.periods_solution(continuous)
        if variable.is_present_value():
            return self.present_value_solution(continuous, compounding_periods)
        return self.future_value_solution(continuous, compounding_periods)

    def present_value_vary_compounding_periods(
        self,
        compounding_periods: Iterable[int],
        include_continuous_compounding: bool = True,
    ) -> ScenarioList:
        """
        Compare present values when the overall rate is compounded at
        different frequencies.

        The overall rate is rate * fractional_periods. Each scenario splits
        it evenly across its number of compounding periods. The continuous
        scenario, if included, is listed last with math.inf periods.
        """
        overall_rate = self.rate * self.fractional_periods
        entries = []
        for periods in self._scenario_periods(compounding_periods):
            present_value = tvm.solve_present_value(
                overall_rate / periods, periods, self.future_value, self.continuous_compounding
            )
            entries.append((float(periods), present_value))
        if include_continuous_compounding:
            present_value = tvm.solve_present_value(
                overall_rate, 1, self.future_value, continuous=True
            )
            entries.append((math.inf, present_value))

        setup = (
            f"Compare present values with different compounding periods where "
            f"the rate is {overall_rate:.6f} and the future value is "
            f"{self.future_value:.4f}."
        )
        return ScenarioList(
            setup, TvmVariable.periods, TvmVariable.present_value, tuple(entries)
        )

    def future_value_vary_compounding_periods(
        self,
        compounding_periods: Iterable[int],
        include_continuous_compounding: bool = True,
    ) -> ScenarioList:
        """Same as present_value_vary_compounding_periods for future values."""
        overall_rate = self.rate * self.fractional_periods
        entries = []
        for periods in self._scenario_periods(compounding_periods):
            future_value = tvm.solve_future_value(
                overall_rate / periods, periods, self.present_value, self.continuous_compounding
            )
            entries.append((float(periods), future_value))
        if include_continuous_compounding:
            future_value = tvm.solve_future_value(
                overall_rate, 1, self.present_value, continuous=True
            )
            entries.append((math.inf, future_value))

        setup = (
            f"Compare future values with different compounding periods where "
            f"the rate is {overall_rate:.6f} and the present value is "
            f"{self.present_value:.4f}."
        )
        return ScenarioList(
            setup, TvmVariable.periods, TvmVariable.future_value, tuple(entries)
        )

    def _rate_and_periods(self, compounding_periods: Optional[int]) -> Tuple[float, float]:
        if compounding_periods is None:
            return self.rate, self.fractional_periods
        periods = check_periods(compounding_periods, "compounding_periods")
        if periods == 0:
            raise InvalidParameterError(
                "compounding_periods", "must be at least 1 to spread the rate over"
            )
        return self.rate * self.fractional_periods / periods, float(periods)

    @staticmethod
    def _scenario_periods(compounding_periods: Iterable[int]):
        threshold = get_settings().compounding_periods_warning_threshold
        checked = []
        for i, periods in enumerate(compounding_periods):
            periods = check_periods(periods, f"compounding_periods[{i}]")
            if periods == 0:
                raise InvalidParameterError(
                    f"compounding_periods[{i}]", "must be at least 1"
                )
            if periods > threshold:
                logger.warning(
                    f"Scenario with {periods} compounding periods is more than "
                    f"{threshold}; continuous compounding may be what you want"
                )
            checked.append(periods)
        return checked


def rate_solution(
    periods: float, present_value: float, future_value: float, continuous: bool = False
) -> TvmSolution:
    """
    Solve for the periodic rate and explain the result.

    Args:
        periods: Number of periods
        present_value: Starting value (negative for money invested)
        future_value: Ending value
        continuous: True for continuous compounding

    Returns:
        TvmSolution with calculated_field TvmVariable.rate
    """
    rate = tvm.solve_rate(periods, present_value, future_value, continuous)
    periods, present_value, future_value = float(periods), float(present_value), float(future_value)

    n = _format_periods(periods)
    if continuous:
        formula = f"{rate:.6f} = ln({-future_value:.4f} / {present_value:.4f}) / {n}"
        symbolic_formula = "r = ln(-fv / pv) / n"
    else:
        formula = f"{rate:.6f} = (({-future_value:.4f} / {present_value:.4f}) ^ (1 / {n})) - 1"
        symbolic_formula = "r = ((-fv / pv) ^ (1 / n)) - 1"

    return TvmSolution(
        TvmVariable.rate,
        continuous,
        rate,
        periods,
        present_value,
        future_value,
        formula,
        symbolic_formula,
    )


def periods_solution(
    rate: float, present_value: float, future_value: float, continuous: bool = False
) -> TvmSolution:
    """
    Solve for the number of periods and explain the result.

    The solution keeps the exact fractional count; its periods property
    rounds up to a whole number.
    """
    fractional_periods = tvm.solve_periods(rate, present_value, future_value, continuous)
    rate, present_value, future_value = float(rate), float(present_value), float(future_value)

    if continuous:
        formula = f"{fractional_periods:.2f} = ln({-future_value:.4f} / {present_value:.4f}) / {rate:.6f}"
        symbolic_formula = "n = ln(-fv / pv) / r"
    else:
        formula = (
            f"{fractional_periods:.2f} = log({-future_value:.4f} / {present_value:.4f}, "
            f"base {1.0 + rate:.6f})"
        )
        symbolic_formula = "n = log(-fv / pv, base (1 + r))"

    return TvmSolution(
        TvmVariable.periods,
        continuous,
        rate,
        fractional_periods,
        present_value,
        future_value,
        formula,
        symbolic_formula,
    )


def present_value_solution(
    rate: float, periods: float, future_value: float, continuous: bool = False
) -> TvmSolution:
    """Solve for the present value and explain the result."""
    present_value = tvm.solve_present_value(rate, periods, future_value, continuous)
    rate, periods, future_value = float(rate), float(periods), float(future_value)

    n = _format_periods(periods)
    if continuous:
        formula = f"{present_value:.4f} = {-future_value:.4f} / {math.e:.6f}^({rate:.6f} * {n})"
        symbolic_formula = "pv = -fv / e^(r * n)"
    else:
        formula = f"{present_value:.4f} = {-future_value:.4f} / ({1.0 + rate:.6f} ^ {n})"
        symbolic_formula = "pv = -fv / (1 + r)^n"

    return TvmSolution(
        TvmVariable.present_value,
        continuous,
        rate,
        periods,
        present_value,
        future_value,
        formula,
        symbolic_formula,
    )


def future_value_solution(
    rate: float, periods: float, present_value: float, continuous: bool = False
) -> TvmSolution:
    """Solve for the future value and explain the result."""
    future_value = tvm.solve_future_value(rate, periods, present_value, continuous)
    rate, periods, present_value = float(rate), float(periods), float(present_value)

    n = _format_periods(periods)
    if continuous:
        formula = f"{future_value:.4f} = {-present_value:.4f} * {math.e:.6f}^({rate:.6f} * {n})"
        symbolic_formula = "fv = -pv * e^(r * n)"
    else:
        formula = f"{future_value:.4f} = {-present_value:.4f} * ({1.0 + rate:.6f} ^ {n})"
        symbolic_formula = "fv = -pv * (1 + r)^n"

    return TvmSolution(
        TvmVariable.future_value,
        continuous,
        rate,
        periods,
        present_value,
        future_value,
        formula,
        symbolic_formula,
    )
