"""
Period-by-Period Series

Rebuilds the value at the end of every period for a solved TVM calculation.
The traversal direction depends on which quantity was solved:

- Rate, periods or future value: start from -present_value and compound
  forward one period at a time.
- Present value: start from the given future value and discount backward.

Either way the series has periods + 1 entries, entry 0 agrees with
-present_value, and the last entry agrees with future_value.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from finsolve.calculations.enums import TvmVariable
from finsolve.calculations.errors import UnsatisfiableConstraintError
from finsolve.calculations.numeric import is_whole_number
from finsolve.calculations.validation import check_finite_result


@dataclass(frozen=True)
class TvmPeriod:
    """Value of an investment at the end of one period."""

    period: int
    rate: float  # Rate applied during this period (0.0 for period 0)
    value: float
    formula: str
    symbolic_formula: str

    def __post_init__(self):
        assert math.isfinite(self.rate)
        assert math.isfinite(self.value)
        assert self.formula and self.symbolic_formula


@dataclass(frozen=True)
class TvmSeries(Sequence):
    """Ordered, immutable collection of TvmPeriod entries starting at period 0."""

    entries: Tuple[TvmPeriod, ...]

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def filter(self, predicate: Callable[[TvmPeriod], bool]) -> "TvmSeries":
        """Return a new series holding only the entries matching predicate."""
        return TvmSeries(tuple(entry for entry in self.entries if predicate(entry)))

    def first(self) -> Optional[TvmPeriod]:
        return self.entries[0] if self.entries else None

    def last(self) -> Optional[TvmPeriod]:
        return self.entries[-1] if self.entries else None

    def values(self) -> List[float]:
        return [entry.value for entry in self.entries]

    def to_rows(self) -> List[Dict]:
        """Rows for the presentation layer, one dict per period."""
        return [
            {"period": entry.period, "rate": entry.rate, "value": entry.value}
            for entry in self.entries
        ]


def _forward(
    calculated_field: TvmVariable,
    continuous: bool,
    rates: List[float],
    present_value: float,
    future_value: float,
    pin_last: bool,
) -> List[TvmPeriod]:
    periods = len(rates)
    value = -present_value
    entries = [TvmPeriod(0, 0.0, value, f"{value:.4f}", "value = -pv")]

    for period in range(1, periods + 1):
        rate = rates[period - 1]
        previous = value
        if period == periods and (calculated_field.is_periods() or pin_last):
            # The last period may be partial, so use the target rather than
            # compounding past it.
            value = future_value
            formula = f"{value:.4f}"
            symbolic_formula = "value = fv"
        elif continuous:
            value = previous * math.exp(rate)
            formula = f"{value:.4f} = {previous:.4f} * ({math.e:.6f} ^ {rate:.6f})"
            symbolic_formula = "value = {previous period value} * e^r"
        else:
            value = previous * (1.0 + rate)
            formula = f"{value:.4f} = {previous:.4f} * {1.0 + rate:.6f}"
            symbolic_formula = "value = {previous period value} * (1 + r)"
        check_finite_result(value, "value")
        entries.append(TvmPeriod(period, rate, value, formula, symbolic_formula))

    return entries


def _backward(
    continuous: bool,
    rates: List[float],
    present_value: float,
    future_value: float,
    pin_first: bool,
) -> List[TvmPeriod]:
    periods = len(rates)
    value = future_value
    last_rate = rates[-1] if rates else 0.0
    entries = [TvmPeriod(periods, last_rate, value, f"{value:.4f}", "value = fv")]

    for period in range(periods - 1, -1, -1):
        # Each value comes from the following period, discounted by that
        # period's rate.
        next_rate = rates[period]
        following = value
        if period == 0 and pin_first:
            value = -present_value
            formula = f"{value:.4f}"
            symbolic_formula = "value = -pv"
        elif continuous:
            value = following / math.exp(next_rate)
            formula = f"{value:.4f} = {following:.4f} / ({math.e:.6f} ^ {next_rate:.6f})"
            symbolic_formula = "value = {next period value} / e^r"
        else:
            divisor = 1.0 + next_rate
            if divisor == 0.0:
                raise UnsatisfiableConstraintError(
                    f"rates[{period}]",
                    "a rate of -100% cannot be discounted backward",
                )
            value = following / divisor
            formula = f"{value:.4f} = {following:.4f} / {divisor:.6f}"
            symbolic_formula = "value = {next period value} / (1 + r)"
        check_finite_result(value, "value")
        rate = rates[period - 1] if period > 0 else 0.0
        entries.append(TvmPeriod(period, rate, value, formula, symbolic_formula))

    entries.reverse()
    return entries


def build_series(
    calculated_field: TvmVariable,
    continuous: bool,
    rates: List[float],
    present_value: float,
    future_value: float,
    fractional_periods: Optional[float] = None,
) -> TvmSeries:
    """
    Reconstruct the value at the end of each period.

    Args:
        calculated_field: Which quantity the solver calculated
        continuous: True for continuous compounding
        rates: One rate per period (a fixed rate repeated, or a schedule)
        present_value: Starting value under the cash-flow sign convention
        future_value: Ending value
        fractional_periods: Exact period count when it may not be whole

    Returns:
        TvmSeries with len(rates) + 1 entries
    """
    # With a fractional period count the whole-period walk cannot land on
    # the far endpoint, so that endpoint is taken from the solution.
    fractional = fractional_periods is not None and not is_whole_number(fractional_periods)

    if calculated_field.is_present_value():
        entries = _backward(continuous, rates, present_value, future_value, fractional)
    else:
        entries = _forward(
            calculated_field, continuous, rates, present_value, future_value, fractional
        )

    series = TvmSeries(tuple(entries))
    assert len(series) == len(rates) + 1
    return series
