"""
Net Present Value Calculations

NPV of an initial investment followed by periodic cash flows. Cash flows
follow the usual sign convention: negative = outflow, positive = inflow.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from finsolve.calculations.annuity import annuity_factor
from finsolve.calculations.errors import InvalidValueError, UnsatisfiableConstraintError
from finsolve.calculations.validation import (
    check_finite_result,
    check_periods,
    check_rate,
    check_rates,
    check_value,
)

logger = logging.getLogger(__name__)


def net_present_value(
    rate: float, periods: int, initial_investment: float, cashflow: float
) -> float:
    """
    Calculate NPV for a constant cash flow received at the end of each period.

    Args:
        rate: Periodic discount rate as decimal
        periods: Number of cash flows after the initial investment
        initial_investment: Amount invested at period 0 (usually negative)
        cashflow: Cash flow received in each period

    Returns:
        initial_investment + present value of the cash flows
    """
    rate = check_rate(rate)
    periods = check_periods(periods)
    initial_investment = check_value(initial_investment, "initial_investment")
    cashflow = check_value(cashflow, "cashflow")

    if rate == -1.0:
        raise InvalidValueError(
            "rate", "cash flows cannot be discounted at a rate of -100%"
        )

    npv = initial_investment + cashflow * annuity_factor(rate, periods)
    logger.debug(
        f"net_present_value(rate={rate}, periods={periods}, "
        f"initial_investment={initial_investment}, cashflow={cashflow}) = {npv}"
    )
    return check_finite_result(npv, "net_present_value")


def _expand_schedule(
    rates: List[float], cashflows: List[float]
) -> Tuple[List[float], List[float]]:
    """
    Expand a one-element shorthand so both inputs describe every period.

    A single rate applies to every cash flow, and a single cash flow after
    the initial investment repeats once per rate.
    """
    flows = len(cashflows) - 1
    if len(rates) == flows:
        return rates, cashflows
    if len(rates) == 1:
        return rates * flows, cashflows
    if flows == 1:
        return rates, cashflows[:1] + cashflows[1:] * len(rates)
    raise InvalidValueError(
        "cashflows",
        f"{len(rates)} rates do not match {flows} cash flows; only one of rates "
        "or cashflows may be a single repeating value",
    )


def net_present_value_schedule(
    rates: Sequence[float], cashflows: Sequence[float]
) -> float:
    """
    Calculate NPV where each cash flow has its own discount rate.

    Cash flow i (counting from 1 after the initial investment) is discounted
    as cashflows[i] / (1 + rates[i - 1]) ** i.

    Args:
        rates: One discount rate per cash flow, or a single rate for all
        cashflows: Initial investment at position 0 followed by the cash
            flows, or the initial investment and a single repeating cash flow

    Returns:
        NPV value

    Raises:
        InvalidParameterError: If the initial investment is positive, fewer
            than two cash flows are given, or the lengths cannot be matched
    """
    rates = check_rates(rates)
    cashflows = [check_value(cf, f"cashflows[{i}]") for i, cf in enumerate(cashflows)]
    if len(cashflows) < 2:
        raise InvalidValueError(
            "cashflows",
            "at least two values are required: the initial investment and "
            "one or more cash flows",
        )
    if cashflows[0] > 0.0:
        raise InvalidValueError(
            "cashflows", "the initial investment (cashflows[0]) must be zero or negative"
        )

    rates, cashflows = _expand_schedule(rates, cashflows)
    rates_arr = np.asarray(rates, dtype=np.float64)
    if np.any(rates_arr == -1.0):
        raise InvalidValueError(
            "rates", "cash flows cannot be discounted at a rate of -100%"
        )

    exponents = np.arange(1, len(rates_arr) + 1)
    with np.errstate(over="raise", divide="raise"):
        try:
            discounted = np.asarray(cashflows[1:], dtype=np.float64) / np.power(
                1.0 + rates_arr, exponents
            )
        except FloatingPointError:
            raise UnsatisfiableConstraintError(
                "rates", "discounting the schedule overflows a float"
            )
    npv = cashflows[0] + float(np.sum(discounted))
    logger.debug(f"net_present_value_schedule({len(rates)} periods) = {npv}")
    return check_finite_result(npv, "net_present_value")
