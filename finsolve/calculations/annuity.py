"""
Annuity Present Value Calculations

What a series of equal cash flows is worth today. Matches Excel's PV()
function with a zero future value:

    present_value = -cashflow * ((1 - (1 + rate) ** -periods) / rate)

multiplied by (1 + rate) when each cash flow arrives at the start of its
period instead of the end.
"""

import logging
from typing import Tuple

from finsolve.calculations.enums import CashflowVariable
from finsolve.calculations.errors import UnsatisfiableConstraintError
from finsolve.calculations.payment import PaymentSolution
from finsolve.calculations.validation import (
    check_finite_result,
    check_periods,
    check_rate,
    check_value,
)

logger = logging.getLogger(__name__)


def annuity_factor(rate: float, periods: int) -> float:
    """
    Present value of 1 received at the end of each period.

    Args:
        rate: Periodic rate as decimal, greater than -1
        periods: Number of cash flows

    Returns:
        (1 - (1 + rate) ** -periods) / rate, or periods when the rate is zero

    Raises:
        UnsatisfiableConstraintError: If the discounting overflows a float
    """
    if rate == 0.0:
        return float(periods)
    try:
        return (1.0 - (1.0 + rate) ** -periods) / rate
    except OverflowError:
        raise UnsatisfiableConstraintError(
            "periods", f"discounting at {rate} over {periods} periods overflows a float"
        )


def present_value_annuity(
    rate: float, periods: int, cashflow: float, due_at_beginning: bool = False
) -> float:
    """
    Calculate the present value of a constant cash flow.

    Args:
        rate: Periodic rate as decimal (e.g., 0.034 for 3.4%)
        periods: Number of cash flows
        cashflow: Amount received (positive) or paid (negative) each period
        due_at_beginning: True when each cash flow arrives at the start of
            its period

    Returns:
        Present value, with the opposite sign of cashflow

    Raises:
        InvalidParameterError: If an input is invalid, or the rate is -100%
            so later cash flows cannot be discounted back
    """
    rate = check_rate(rate)
    periods = check_periods(periods)
    cashflow = check_value(cashflow, "cashflow")
    return _present_value_annuity(rate, periods, cashflow, due_at_beginning)


def _present_value_annuity(
    rate: float, periods: int, cashflow: float, due_at_beginning: bool
) -> float:
    if periods == 0:
        return 0.0
    if rate == -1.0:
        raise UnsatisfiableConstraintError(
            "rate",
            "a rate of -100% wipes out every cash flow, so their present value "
            "cannot be recovered",
        )

    present_value = -cashflow * annuity_factor(rate, periods)
    if due_at_beginning:
        present_value *= 1.0 + rate
    logger.debug(
        f"present_value_annuity(rate={rate}, periods={periods}, cashflow={cashflow}, "
        f"due_at_beginning={due_at_beginning}) = {present_value}"
    )
    return check_finite_result(present_value, "present_value")


def present_value_annuity_formula(
    rate: float, periods: int, cashflow: float, due_at_beginning: bool, present_value: float
) -> Tuple[str, str]:
    """Build the concrete and symbolic present value formulas."""
    if rate == 0.0:
        formula = f"{-cashflow:.4f} * {periods}"
        symbolic_formula = "-pmt * n"
    else:
        formula = f"{-cashflow:.4f} * ((1 - (1 / {1.0 + rate:.6f})^{periods}) / {rate:.6f})"
        symbolic_formula = "-pmt * ((1 - (1 / (1 + r))^n) / r)"
        if due_at_beginning:
            formula = f"{formula} * {1.0 + rate:.6f}"
            symbolic_formula = f"{symbolic_formula} * (1 + r)"
    return f"{present_value:.4f} = {formula}", f"pv = {symbolic_formula}"


def present_value_annuity_solution(
    rate: float, periods: int, cashflow: float, due_at_beginning: bool = False
) -> PaymentSolution:
    """
    Calculate the present value of a constant cash flow and keep the inputs.

    The result is a PaymentSolution with the cash flow as its payment and a
    future value of zero, so series() gives the table of each cash flow
    split into principal and interest.
    """
    rate = check_rate(rate)
    periods = check_periods(periods)
    cashflow = check_value(cashflow, "cashflow")

    present_value = _present_value_annuity(rate, periods, cashflow, due_at_beginning)
    formula, symbolic_formula = present_value_annuity_formula(
        rate, periods, cashflow, due_at_beginning, present_value
    )
    if due_at_beginning:
        calculated_field = CashflowVariable.present_value_annuity_due
    else:
        calculated_field = CashflowVariable.present_value_annuity
    return PaymentSolution(
        rate,
        periods,
        present_value,
        0.0,
        due_at_beginning,
        cashflow,
        formula,
        symbolic_formula,
        calculated_field,
    )
