"""
Tests for APR, EPR and EAR conversions.
"""

import logging
import math

import pytest

from finsolve.calculations import convert_rate
from finsolve.calculations.errors import (
    InvalidRateError,
    InvalidValueError,
    UnsatisfiableConstraintError,
)


class TestConversions:
    """Test the individual conversion functions."""

    def test_apr_to_ear_monthly(self):
        ear = convert_rate.convert_apr_to_ear(0.034, 12)
        assert abs(ear - 0.0345348693603) < 1e-10

    def test_apr_to_epr(self):
        assert convert_rate.convert_apr_to_epr(0.034, 12) == pytest.approx(0.034 / 12)

    def test_epr_to_apr(self):
        assert convert_rate.convert_epr_to_apr(0.01, 12) == pytest.approx(0.12)

    def test_epr_to_ear(self):
        assert convert_rate.convert_epr_to_ear(0.01, 12) == pytest.approx(1.01 ** 12 - 1)

    def test_ear_to_epr(self):
        assert convert_rate.convert_ear_to_epr(1.01 ** 12 - 1, 12) == pytest.approx(0.01)

    def test_single_compounding_period(self):
        """With annual compounding all three rates are the same."""
        assert convert_rate.convert_apr_to_ear(0.07, 1) == pytest.approx(0.07)
        assert convert_rate.convert_ear_to_apr(0.07, 1) == pytest.approx(0.07)

    @pytest.mark.parametrize("rate", [0.034, -0.034, 0.00283333333, 0.0, 1.0, 2.1, 0.00001])
    @pytest.mark.parametrize("periods", [1, 2, 4, 12, 52, 365])
    def test_symmetry(self, rate, periods):
        epr = convert_rate.convert_apr_to_epr(rate, periods)
        assert convert_rate.convert_epr_to_apr(epr, periods) == pytest.approx(rate, abs=1e-12)

        ear = convert_rate.convert_apr_to_ear(rate, periods)
        assert convert_rate.convert_ear_to_apr(ear, periods) == pytest.approx(rate, rel=1e-9, abs=1e-12)
        assert convert_rate.convert_ear_to_epr(ear, periods) == pytest.approx(epr, rel=1e-9, abs=1e-12)
        assert convert_rate.convert_epr_to_ear(epr, periods) == pytest.approx(ear, rel=1e-9, abs=1e-12)

    def test_continuous(self):
        ear = convert_rate.convert_apr_to_ear_continuous(0.05)
        assert ear == pytest.approx(math.exp(0.05) - 1)
        assert convert_rate.convert_ear_to_apr_continuous(ear) == pytest.approx(0.05)

    def test_continuous_negative_rate(self):
        ear = convert_rate.convert_apr_to_ear_continuous(-0.05)
        assert ear == pytest.approx(math.exp(-0.05) - 1)
        assert convert_rate.convert_ear_to_apr_continuous(ear) == pytest.approx(-0.05)

    def test_continuous_exceeds_discrete(self):
        assert convert_rate.convert_apr_to_ear_continuous(0.05) > convert_rate.convert_apr_to_ear(0.05, 365)


class TestConversionErrors:
    """Test rejected inputs and warnings."""

    def test_zero_compounding_periods(self):
        with pytest.raises(InvalidValueError):
            convert_rate.convert_apr_to_ear(0.05, 0)

    def test_fractional_compounding_periods(self):
        with pytest.raises(InvalidValueError):
            convert_rate.convert_apr_to_epr(0.05, 12.5)

    def test_ear_at_minus_one(self):
        with pytest.raises(InvalidRateError):
            convert_rate.convert_ear_to_apr(-1.0, 12)
        with pytest.raises(InvalidRateError):
            convert_rate.ear_continuous(-1.0)

    def test_non_finite_rate(self):
        with pytest.raises(InvalidRateError):
            convert_rate.convert_epr_to_ear(float("inf"), 12)

    def test_compounding_overflows(self):
        with pytest.raises(UnsatisfiableConstraintError):
            convert_rate.convert_epr_to_ear(10.0, 400)
        with pytest.raises(UnsatisfiableConstraintError):
            convert_rate.epr(10.0, 400)
        with pytest.raises(UnsatisfiableConstraintError):
            convert_rate.convert_apr_to_ear_continuous(1_000.0)

    def test_many_compounding_periods_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="finsolve.calculations.convert_rate"):
            convert_rate.convert_apr_to_epr(0.05, 1000)
        assert "compounding periods" in caplog.text

    def test_large_rate_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="finsolve.calculations.convert_rate"):
            convert_rate.convert_apr_to_ear(2.5, 12)
        assert "Are you sure" in caplog.text


class TestConvertRateSolution:
    """Test the solution builders."""

    def test_apr(self):
        solution = convert_rate.apr(0.034, 12)
        assert solution.input_name == "apr"
        assert solution.compounding_periods_in_year == 12
        assert solution.apr == 0.034
        assert solution.epr == pytest.approx(0.034 / 12)
        assert abs(solution.ear - 0.0345348693603) < 1e-10
        assert solution.apr_in_percent == "3.4000%"
        assert solution.epr_in_percent == "0.2833%"
        assert solution.ear_in_percent == "3.4535%"
        assert solution.ear_formula == "(1 + (0.034 / 12))^12 - 1"

    def test_ear(self):
        solution = convert_rate.ear(0.0345348693603, 12)
        assert solution.apr == pytest.approx(0.034)
        assert solution.epr == pytest.approx(0.034 / 12)

    def test_epr(self):
        solution = convert_rate.epr(0.01, 12)
        assert solution.apr == pytest.approx(0.12)
        assert solution.ear == pytest.approx(1.01 ** 12 - 1)
        assert solution.apr_formula == "0.01 * 12"

    def test_apr_continuous(self):
        solution = convert_rate.apr_continuous(0.05)
        assert solution.compounding_periods_in_year is None
        assert solution.epr is None
        assert solution.epr_in_percent == "n/a"
        assert solution.ear == pytest.approx(math.exp(0.05) - 1)

    def test_ear_continuous(self):
        solution = convert_rate.ear_continuous(math.exp(0.05) - 1)
        assert solution.apr == pytest.approx(0.05)
        assert solution.ear_in_percent == "5.1271%"

    def test_solutions_are_frozen(self):
        solution = convert_rate.apr(0.05, 12)
        with pytest.raises(AttributeError):
            solution.apr = 0.06
