"""
Rate Conversions

Converts between the three common ways of quoting a rate:

- APR: annual percentage rate, the nominal yearly rate before compounding
- EPR: effective periodic rate, APR / compounding periods in the year
- EAR: effective annual rate, the actual growth over a year after compounding

Continuous variants treat the number of compounding periods as unbounded,
in which case there is no periodic rate.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from finsolve.config import get_settings
from finsolve.calculations.errors import (
    InvalidRateError,
    InvalidValueError,
    UnsatisfiableConstraintError,
)
from finsolve.calculations.validation import check_periods, to_float

logger = logging.getLogger(__name__)


def _check_inputs(rate, compounding_periods_in_year: int, is_ear: bool = False):
    rate = to_float(rate, "rate")
    if not math.isfinite(rate):
        raise InvalidRateError("rate", "must be finite (not NaN or infinity)")
    if is_ear and rate <= -1.0:
        raise InvalidRateError(
            "rate",
            f"the effective annual rate must be greater than -1.0 (-100%), got {rate}",
        )

    periods = check_periods(compounding_periods_in_year, "compounding_periods_in_year")
    if periods < 1:
        raise InvalidValueError(
            "compounding_periods_in_year", "must be at least 1"
        )

    settings = get_settings()
    if abs(rate) > settings.rate_warning_threshold:
        logger.warning(f"You provided a rate of {rate * 100.0}%. Are you sure?")
    if periods > settings.compounding_periods_warning_threshold:
        logger.warning(
            f"You provided more than {settings.compounding_periods_warning_threshold} "
            f"compounding periods in a year ({periods}). Are you sure?"
        )
    return rate, periods


def _compound(rate: float, periods: float) -> float:
    """(1 + rate) ** periods - 1, refusing results too large for a float."""
    try:
        return (1.0 + rate) ** periods - 1.0
    except OverflowError:
        raise UnsatisfiableConstraintError(
            "rate", f"compounding {rate} over {periods} periods overflows a float"
        )


def _compound_continuous(apr: float) -> float:
    try:
        return math.expm1(apr)
    except OverflowError:
        raise UnsatisfiableConstraintError(
            "rate", f"compounding {apr} continuously for a year overflows a float"
        )


def convert_apr_to_ear(apr: float, compounding_periods_in_year: int) -> float:
    """
    Convert a nominal annual rate to the effective annual rate.

    Example: 3.4% compounded monthly is (1 + 0.034 / 12) ** 12 - 1 = 3.4535%.
    """
    apr, periods = _check_inputs(apr, compounding_periods_in_year)
    return _compound(apr / periods, periods)


def convert_apr_to_epr(apr: float, compounding_periods_in_year: int) -> float:
    apr, periods = _check_inputs(apr, compounding_periods_in_year)
    return apr / periods


def convert_ear_to_apr(ear: float, compounding_periods_in_year: int) -> float:
    ear, periods = _check_inputs(ear, compounding_periods_in_year, is_ear=True)
    return _compound(ear, 1.0 / periods) * periods


def convert_ear_to_epr(ear: float, compounding_periods_in_year: int) -> float:
    ear, periods = _check_inputs(ear, compounding_periods_in_year, is_ear=True)
    return _compound(ear, 1.0 / periods)


def convert_epr_to_ear(epr: float, compounding_periods_in_year: int) -> float:
    epr, periods = _check_inputs(epr, compounding_periods_in_year)
    return _compound(epr, periods)


def convert_epr_to_apr(epr: float, compounding_periods_in_year: int) -> float:
    epr, periods = _check_inputs(epr, compounding_periods_in_year)
    return epr * periods


def convert_apr_to_ear_continuous(apr: float) -> float:
    """Effective annual rate of a nominal rate compounded continuously: e^apr - 1."""
    apr, _ = _check_inputs(apr, 1)
    return _compound_continuous(apr)


def convert_ear_to_apr_continuous(ear: float) -> float:
    """Nominal rate that compounds continuously to the given EAR: ln(1 + ear)."""
    ear, _ = _check_inputs(ear, 1, is_ear=True)
    return math.log1p(ear)


@dataclass(frozen=True)
class ConvertRateSolution:
    """
    A rate expressed as APR, EPR and EAR.

    compounding_periods_in_year is None for continuous compounding, where
    the periodic rate does not exist and epr is None as well.
    """

    input_name: str
    input_rate: float
    compounding_periods_in_year: Optional[int]
    apr: float
    epr: Optional[float]
    ear: float
    apr_formula: str
    epr_formula: str
    ear_formula: str

    @property
    def apr_in_percent(self) -> str:
        return f"{self.apr * 100.0:.4f}%"

    @property
    def epr_in_percent(self) -> str:
        return "n/a" if self.epr is None else f"{self.epr * 100.0:.4f}%"

    @property
    def ear_in_percent(self) -> str:
        return f"{self.ear * 100.0:.4f}%"


def apr(apr: float, compounding_periods_in_year: int) -> ConvertRateSolution:
    """Express a nominal annual rate as APR, EPR and EAR."""
    apr, periods = _check_inputs(apr, compounding_periods_in_year)
    epr = apr / periods
    ear = _compound(epr, periods)
    return ConvertRateSolution(
        "apr",
        apr,
        periods,
        apr,
        epr,
        ear,
        apr_formula="",
        epr_formula=f"{apr} / {periods}",
        ear_formula=f"(1 + ({apr} / {periods}))^{periods} - 1",
    )


def ear(ear: float, compounding_periods_in_year: int) -> ConvertRateSolution:
    """Express an effective annual rate as APR, EPR and EAR."""
    ear, periods = _check_inputs(ear, compounding_periods_in_year, is_ear=True)
    epr = _compound(ear, 1.0 / periods)
    apr = epr * periods
    return ConvertRateSolution(
        "ear",
        ear,
        periods,
        apr,
        epr,
        ear,
        apr_formula=f"{epr} * {periods}",
        epr_formula=f"(1 + {ear})^(1 / {periods}) - 1",
        ear_formula="",
    )


def epr(epr: float, compounding_periods_in_year: int) -> ConvertRateSolution:
    """Express an effective periodic rate as APR, EPR and EAR."""
    epr, periods = _check_inputs(epr, compounding_periods_in_year)
    apr = epr * periods
    ear = _compound(epr, periods)
    return ConvertRateSolution(
        "epr",
        epr,
        periods,
        apr,
        epr,
        ear,
        apr_formula=f"{epr} * {periods}",
        epr_formula="",
        ear_formula=f"(1 + {epr})^{periods} - 1",
    )


def apr_continuous(apr: float) -> ConvertRateSolution:
    """Express a continuously compounded nominal rate as its EAR."""
    apr, _ = _check_inputs(apr, 1)
    ear = _compound_continuous(apr)
    return ConvertRateSolution(
        "apr_continuous",
        apr,
        None,
        apr,
        None,
        ear,
        apr_formula="",
        epr_formula="",
        ear_formula=f"e^{apr} - 1",
    )


def ear_continuous(ear: float) -> ConvertRateSolution:
    """Find the continuously compounded nominal rate that produces an EAR."""
    ear, _ = _check_inputs(ear, 1, is_ear=True)
    apr = math.log1p(ear)
    return ConvertRateSolution(
        "ear_continuous",
        ear,
        None,
        apr,
        None,
        ear,
        apr_formula=f"ln(1 + {ear})",
        epr_formula="",
        ear_formula="",
    )
