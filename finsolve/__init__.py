"""
finsolve: time value of money calculations.

Solve for rate, periods, present value or future value from the other
three, rebuild period-by-period values, and amortize annuity payments.
"""

import logging

from finsolve.config import get_settings
from finsolve.calculations.annuity import (
    annuity_factor,
    present_value_annuity,
    present_value_annuity_solution,
)
from finsolve.calculations.convert_rate import (
    ConvertRateSolution,
    apr,
    apr_continuous,
    convert_apr_to_ear,
    convert_apr_to_ear_continuous,
    convert_apr_to_epr,
    convert_ear_to_apr,
    convert_ear_to_apr_continuous,
    convert_ear_to_epr,
    convert_epr_to_apr,
    convert_epr_to_ear,
    ear,
    ear_continuous,
    epr,
)
from finsolve.calculations.enums import CashflowVariable, TvmVariable
from finsolve.calculations.errors import (
    InvalidParameterError,
    InvalidRateError,
    InvalidValueError,
    UnsatisfiableConstraintError,
)
from finsolve.calculations.npv import net_present_value, net_present_value_schedule
from finsolve.calculations.payment import (
    PaymentPeriod,
    PaymentSeries,
    PaymentSolution,
    payment,
    payment_solution,
)
from finsolve.calculations.schedule import (
    TvmScheduleSolution,
    future_value_schedule_solution,
    present_value_schedule_solution,
    solve_future_value_schedule,
    solve_present_value_schedule,
)
from finsolve.calculations.series import TvmPeriod, TvmSeries
from finsolve.calculations.solution import (
    ScenarioList,
    TvmSolution,
    future_value_solution,
    periods_solution,
    present_value_solution,
    rate_solution,
)
from finsolve.calculations.tvm import (
    solve_future_value,
    solve_periods,
    solve_present_value,
    solve_rate,
)

__version__ = "0.1.0"

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.setLevel(get_settings().log_level)

__all__ = [
    "CashflowVariable",
    "ConvertRateSolution",
    "InvalidParameterError",
    "InvalidRateError",
    "InvalidValueError",
    "PaymentPeriod",
    "PaymentSeries",
    "PaymentSolution",
    "ScenarioList",
    "TvmPeriod",
    "TvmScheduleSolution",
    "TvmSeries",
    "TvmSolution",
    "TvmVariable",
    "UnsatisfiableConstraintError",
    "annuity_factor",
    "apr",
    "apr_continuous",
    "convert_apr_to_ear",
    "convert_apr_to_ear_continuous",
    "convert_apr_to_epr",
    "convert_ear_to_apr",
    "convert_ear_to_apr_continuous",
    "convert_ear_to_epr",
    "convert_epr_to_apr",
    "convert_epr_to_ear",
    "ear",
    "ear_continuous",
    "epr",
    "future_value_schedule_solution",
    "future_value_solution",
    "net_present_value",
    "net_present_value_schedule",
    "payment",
    "payment_solution",
    "periods_solution",
    "present_value_annuity",
    "present_value_annuity_solution",
    "present_value_schedule_solution",
    "present_value_solution",
    "rate_solution",
    "solve_future_value",
    "solve_future_value_schedule",
    "solve_periods",
    "solve_present_value",
    "solve_present_value_schedule",
    "solve_rate",
]
