"""
Financial Calculation Engine

Time-value-of-money solvers, rate schedules, annuity payments and present
values, rate conversions and net present value. All calculations follow the
cash-flow sign convention of Excel's TVM functions.
"""

from finsolve.calculations import (
    annuity,
    convert_rate,
    npv,
    payment,
    schedule,
    series,
    solution,
    tvm,
)

__all__ = ["tvm", "series", "schedule", "solution", "payment", "annuity", "convert_rate", "npv"]
