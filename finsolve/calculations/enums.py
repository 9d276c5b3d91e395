"""
Calculation Enumerations
"""

import enum


class TvmVariable(str, enum.Enum):
    """The four time-value-of-money quantities a solver can calculate."""

    rate = "Rate"
    periods = "Periods"
    present_value = "Present Value"
    future_value = "Future Value"

    def is_rate(self) -> bool:
        return self is TvmVariable.rate

    def is_periods(self) -> bool:
        return self is TvmVariable.periods

    def is_present_value(self) -> bool:
        return self is TvmVariable.present_value

    def is_future_value(self) -> bool:
        return self is TvmVariable.future_value

    def __str__(self) -> str:
        return self.value


class CashflowVariable(str, enum.Enum):
    """What an annuity calculation solved for."""

    payment = "Payment"
    present_value_annuity = "Present Value Annuity"
    present_value_annuity_due = "Present Value Annuity Due"

    def is_payment(self) -> bool:
        return self is CashflowVariable.payment

    def is_present_value_annuity(self) -> bool:
        return self is CashflowVariable.present_value_annuity

    def is_present_value_annuity_due(self) -> bool:
        return self is CashflowVariable.present_value_annuity_due

    def __str__(self) -> str:
        return self.value
