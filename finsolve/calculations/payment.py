"""
Payment and Amortization Calculations

Implements the constant payment for an annuity and its period-by-period
split into principal and interest, matching Excel's PMT, IPMT, and PPMT
functions and their sign convention.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from finsolve.calculations.enums import CashflowVariable
from finsolve.calculations.errors import UnsatisfiableConstraintError
from finsolve.calculations.numeric import is_approx_zero
from finsolve.calculations.validation import (
    check_finite_result,
    check_periods,
    check_rate,
    check_value,
)

logger = logging.getLogger(__name__)


def payment(
    rate: float,
    periods: int,
    present_value: float,
    future_value: float = 0.0,
    due_at_beginning: bool = False,
) -> float:
    """
    Calculate the constant payment per period.

    Matches Excel's PMT() function.

    Args:
        rate: Periodic rate as decimal (e.g., 0.05 for 5%)
        periods: Number of payments
        present_value: Loan amount or current balance
        future_value: Balance remaining after the last payment
        due_at_beginning: True for an annuity due (payments at the start
            of each period)

    Returns:
        Payment amount, negative when present_value is positive

    Raises:
        InvalidParameterError: If an input is invalid, or there are no
            periods to spread a nonzero balance over
    """
    rate = check_rate(rate)
    periods = check_periods(periods)
    present_value = check_value(present_value, "present_value")
    future_value = check_value(future_value, "future_value")
    return _payment(rate, periods, present_value, future_value, due_at_beginning)


def _payment(
    rate: float,
    periods: int,
    present_value: float,
    future_value: float,
    due_at_beginning: bool,
) -> float:
    if periods == 0:
        if not is_approx_zero(present_value + future_value):
            raise UnsatisfiableConstraintError(
                "periods",
                "there are no periods and the present value plus the future "
                "value is not zero so there is no way to calculate payments",
            )
        return 0.0

    if rate == 0.0:
        return (-present_value - future_value) / periods

    rate_multiplier = 1.0 + rate
    try:
        growth = rate_multiplier**periods
    except OverflowError:
        raise UnsatisfiableConstraintError(
            "periods", f"compounding {rate} over {periods} periods overflows a float"
        )

    numerator = ((present_value * growth) + future_value) * -rate
    denominator = growth - 1.0
    if due_at_beginning:
        denominator *= rate_multiplier
    check_finite_result(numerator, "payment")
    check_finite_result(denominator, "payment")
    if denominator == 0.0:
        raise UnsatisfiableConstraintError(
            "rate", "the payment formula has a zero denominator for this rate"
        )

    pmt = numerator / denominator
    logger.debug(
        f"payment(rate={rate}, periods={periods}, present_value={present_value}, "
        f"future_value={future_value}, due_at_beginning={due_at_beginning}) = {pmt}"
    )
    return check_finite_result(pmt, "payment")


def payment_formula(
    rate: float,
    periods: int,
    present_value: float,
    future_value: float,
    due_at_beginning: bool,
    pmt: float,
) -> Tuple[str, str]:
    """
    Build the concrete and symbolic payment formulas.

    Terms that are zero are left out, so a loan paid down to nothing shows
    only the present value term.
    """
    rate_multiplier = 1.0 + rate
    if periods == 0:
        formula, symbolic_formula = f"{0.0:.4f}", "0"
    elif rate == 0.0:
        if future_value == 0.0:
            formula, symbolic_formula = f"{-present_value:.4f} / {periods}", "-pv / n"
        elif present_value == 0.0:
            formula, symbolic_formula = f"{-future_value:.4f} / {periods}", "-fv / n"
        else:
            if future_value > 0.0:
                add_future_value = f" - {future_value:.4f}"
            else:
                add_future_value = f" + {-future_value:.4f}"
            formula = f"({-present_value:.4f}{add_future_value}) / {periods}"
            symbolic_formula = "(-pv - fv) / n"
    else:
        if future_value == 0.0:
            numerator = f"({present_value:.4f} * {rate_multiplier:.6f}^{periods} * {-rate:.6f})"
            symbolic_numerator = "(pv * (1 + r)^n * -r)"
        elif present_value == 0.0:
            numerator = f"({future_value:.4f} * {-rate:.6f})"
            symbolic_numerator = "(fv * -r)"
        else:
            if future_value > 0.0:
                add_future_value = f" + {future_value:.4f}"
            else:
                add_future_value = f" - {-future_value:.4f}"
            numerator = (
                f"((({present_value:.4f} * {rate_multiplier:.6f}^{periods})"
                f"{add_future_value}) * {-rate:.6f})"
            )
            symbolic_numerator = "(((pv * (1 + r)^n) + fv) * -r)"

        denominator = f"({rate_multiplier:.6f}^{periods} - 1)"
        symbolic_denominator = "((1 + r)^n - 1)"
        if due_at_beginning:
            denominator = f"({denominator} * {rate_multiplier:.6f})"
            symbolic_denominator = f"({symbolic_denominator} * (1 + r))"

        formula = f"{numerator} / {denominator}"
        symbolic_formula = f"{symbolic_numerator} / {symbolic_denominator}"

    return f"{pmt:.4f} = {formula}", f"pmt = {symbolic_formula}"


@dataclass(frozen=True)
class PaymentPeriod:
    """One row of an amortization table."""

    period: int
    rate: float
    due_at_beginning: bool
    payment: float
    payments_to_date: float
    payments_remaining: float
    principal: float
    principal_to_date: float
    principal_remaining: float
    interest: float
    interest_to_date: float
    interest_remaining: float
    formula: str
    symbolic_formula: str


@dataclass(frozen=True)
class PaymentSeries(Sequence):
    """Amortization table for a PaymentSolution, one entry per payment."""

    entries: Tuple[PaymentPeriod, ...]

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def filter(self, predicate: Callable[[PaymentPeriod], bool]) -> "PaymentSeries":
        return PaymentSeries(tuple(entry for entry in self.entries if predicate(entry)))

    def first(self) -> Optional[PaymentPeriod]:
        return self.entries[0] if self.entries else None

    def last(self) -> Optional[PaymentPeriod]:
        return self.entries[-1] if self.entries else None

    def total_payments(self) -> float:
        return sum(entry.payment for entry in self.entries)

    def total_principal(self) -> float:
        return sum(entry.principal for entry in self.entries)

    def total_interest(self) -> float:
        return sum(entry.interest for entry in self.entries)

    def to_rows(self) -> List[Dict]:
        """Rows with the main columns, in the shape of an amortization schedule."""
        return [
            {
                "period": entry.period,
                "payment": entry.payment,
                "principal": entry.principal,
                "interest": entry.interest,
                "principal_remaining": entry.principal_remaining,
            }
            for entry in self.entries
        ]


@dataclass(frozen=True)
class PaymentSolution:
    """A constant payment together with the inputs that produced it."""

    rate: float
    periods: int
    present_value: float
    future_value: float
    due_at_beginning: bool
    payment: float
    formula: str
    symbolic_formula: str
    calculated_field: CashflowVariable = CashflowVariable.payment

    def __post_init__(self):
        assert self.rate >= -1.0
        assert self.periods >= 0
        assert self.formula and self.symbolic_formula
        assert self.calculated_field.is_payment() or self.future_value == 0.0

    @property
    def sum_of_payments(self) -> float:
        return self.payment * self.periods

    @property
    def sum_of_interest(self) -> float:
        return self.sum_of_payments + self.present_value + self.future_value

    def series(self) -> PaymentSeries:
        """
        Split every payment into principal and interest.

        Interest for a period is charged on the balance outstanding at its
        start. When payments are due at the beginning, the first payment is
        made before any interest accrues so its interest is zero.

        Returns:
            PaymentSeries with one entry per period

        Raises:
            UnsatisfiableConstraintError: If payments are due at the beginning
                and the future value is nonzero. The balance left after the
                last payment still accrues a period of interest, so the table
                could not settle at zero.
        """
        if self.due_at_beginning and self.future_value != 0.0:
            raise UnsatisfiableConstraintError(
                "future_value",
                "an amortization table with payments due at the beginning needs "
                "a future value of zero",
            )

        entries = []
        payments_to_date = 0.0
        principal_to_date = 0.0
        interest_to_date = 0.0
        total_principal = -self.present_value - self.future_value

        for period in range(1, self.periods + 1):
            outstanding = self.present_value + principal_to_date
            if self.due_at_beginning and period == 1:
                interest = 0.0
                formula = "0"
                symbolic_formula = "interest = 0"
            else:
                interest = -outstanding * self.rate
                formula = f"{interest:.4f} = -({outstanding:.4f} * {self.rate:.6f})"
                symbolic_formula = "interest = -(principal * rate)"
            principal = self.payment - interest

            payments_to_date += self.payment
            principal_to_date += principal
            interest_to_date += interest

            entries.append(
                PaymentPeriod(
                    period=period,
                    rate=self.rate,
                    due_at_beginning=self.due_at_beginning,
                    payment=self.payment,
                    payments_to_date=payments_to_date,
                    payments_remaining=self.sum_of_payments - payments_to_date,
                    principal=principal,
                    principal_to_date=principal_to_date,
                    principal_remaining=total_principal - principal_to_date,
                    interest=interest,
                    interest_to_date=interest_to_date,
                    interest_remaining=self.sum_of_interest - interest_to_date,
                    formula=formula,
                    symbolic_formula=symbolic_formula,
                )
            )

        series = PaymentSeries(tuple(entries))
        assert len(series) == self.periods
        return series


def payment_solution(
    rate: float,
    periods: int,
    present_value: float,
    future_value: float = 0.0,
    due_at_beginning: bool = False,
) -> PaymentSolution:
    """
    Calculate the payment and keep the inputs and formulas with it.

    Use series() on the result for the amortization table.
    """
    rate = check_rate(rate)
    periods = check_periods(periods)
    present_value = check_value(present_value, "present_value")
    future_value = check_value(future_value, "future_value")

    pmt = _payment(rate, periods, present_value, future_value, due_at_beginning)
    formula, symbolic_formula = payment_formula(
        rate, periods, present_value, future_value, due_at_beginning, pmt
    )
    return PaymentSolution(
        rate,
        periods,
        present_value,
        future_value,
        due_at_beginning,
        pmt,
        formula,
        symbolic_formula,
    )
