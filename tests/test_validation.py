"""
Tests for input validation and floating point helpers.
"""

import logging

import numpy as np
import pytest

from finsolve.calculations.errors import (
    InvalidRateError,
    InvalidValueError,
    UnsatisfiableConstraintError,
)
from finsolve.calculations.numeric import (
    is_approx_equal,
    is_approx_zero,
    is_close,
    is_whole_number,
    round_fractional_periods,
)
from finsolve.calculations.validation import (
    check_fractional_periods,
    check_opposite_signs,
    check_periods,
    check_rate,
    check_rates,
    check_reachable,
    check_value,
)


class TestCheckRate:
    """Test rate validation."""

    def test_accepts_ordinary_rates(self):
        assert check_rate(0.05) == 0.05
        assert check_rate(-1.0) == -1.0
        assert check_rate(0) == 0.0

    def test_accepts_numpy_scalars(self):
        assert check_rate(np.float32(0.25)) == 0.25
        assert isinstance(check_rate(np.float64(0.1)), float)

    def test_rejects_below_minus_one(self):
        with pytest.raises(InvalidRateError):
            check_rate(-1.01)

    def test_rejects_bool(self):
        with pytest.raises(InvalidRateError):
            check_rate(True)

    def test_rejects_non_finite(self):
        with pytest.raises(InvalidRateError):
            check_rate(float("nan"))

    def test_warns_on_large_rate(self, caplog):
        with caplog.at_level(logging.WARNING, logger="finsolve.calculations.validation"):
            assert check_rate(1.5) == 1.5
        assert "Are you sure" in caplog.text

    def test_no_warning_for_ordinary_rate(self, caplog):
        with caplog.at_level(logging.WARNING, logger="finsolve.calculations.validation"):
            check_rate(0.5)
        assert caplog.text == ""

    def test_warning_threshold_from_environment(self, caplog, monkeypatch):
        monkeypatch.setenv("FINSOLVE_RATE_WARNING_THRESHOLD", "2.0")
        with caplog.at_level(logging.WARNING, logger="finsolve.calculations.validation"):
            check_rate(1.5)
        assert caplog.text == ""

    def test_error_carries_name(self):
        with pytest.raises(InvalidRateError) as exc_info:
            check_rate(-3.0, "rates[2]")
        assert exc_info.value.parameter == "rates[2]"
        assert str(exc_info.value).startswith("rates[2]:")


class TestCheckValues:
    """Test value and period validation."""

    def test_check_value(self):
        assert check_value(-250_000, "present_value") == -250_000.0
        assert check_value(np.int64(5), "future_value") == 5.0

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), None, "1", False])
    def test_check_value_rejects(self, value):
        with pytest.raises(InvalidValueError):
            check_value(value, "present_value")

    def test_check_periods(self):
        assert check_periods(12) == 12
        assert check_periods(np.int32(7)) == 7

    @pytest.mark.parametrize("periods", [-1, 1.5, 2.0, True, "12"])
    def test_check_periods_rejects(self, periods):
        with pytest.raises(InvalidValueError):
            check_periods(periods)

    def test_check_fractional_periods(self):
        assert check_fractional_periods(4.37) == 4.37
        with pytest.raises(InvalidValueError):
            check_fractional_periods(-0.5)

    def test_check_rates(self):
        assert check_rates((0.01, 0.02)) == [0.01, 0.02]
        assert check_rates(np.array([0.01, -0.5])) == [0.01, -0.5]

    def test_check_rates_empty(self):
        with pytest.raises(InvalidRateError):
            check_rates([])

    def test_check_rates_names_bad_entry(self):
        with pytest.raises(InvalidRateError) as exc_info:
            check_rates([0.01, 0.02, -2.0])
        assert exc_info.value.parameter == "rates[2]"


class TestSignChecks:
    """Test the checks shared by the rate and periods solvers."""

    def test_opposite_signs(self):
        check_opposite_signs(-100.0, 200.0)
        check_opposite_signs(100.0, -200.0)
        check_opposite_signs(0.0, -200.0)

    def test_same_signs(self):
        with pytest.raises(UnsatisfiableConstraintError):
            check_opposite_signs(-100.0, -200.0)
        with pytest.raises(UnsatisfiableConstraintError):
            check_opposite_signs(100.0, 200.0)

    def test_reachable(self):
        check_reachable(0.05, -100.0, 200.0)
        check_reachable(-0.05, -200.0, 100.0)

    @pytest.mark.parametrize("rate,present_value,future_value", [
        (0.05, 0.0, 100.0),
        (0.05, -100.0, 0.0),
        (-0.05, -100.0, 200.0),
        (0.0, -100.0, 200.0),
        (0.05, -200.0, 100.0),
        (0.0, -200.0, 100.0),
    ])
    def test_unreachable(self, rate, present_value, future_value):
        with pytest.raises(UnsatisfiableConstraintError):
            check_reachable(rate, present_value, future_value)


class TestFloatComparison:
    """Test tolerance comparison and rounding helpers."""

    def test_absolute_epsilon(self):
        assert is_approx_equal(0.1 + 0.2, 0.3)
        assert is_approx_equal(100.0, 100.0000005)
        assert not is_approx_equal(1.0, 1.001)

    def test_ulps_for_large_values(self):
        """Large values are compared by distance in representable floats."""
        a = 1e12
        b = np.nextafter(a, 2e12)
        assert is_approx_equal(a, float(b), epsilon=0.0)
        assert not is_approx_equal(1e12, 1e12 + 1.0, epsilon=0.0)

    def test_non_finite(self):
        assert not is_approx_equal(float("nan"), float("nan"))
        assert is_approx_equal(float("inf"), float("inf"))
        assert not is_approx_equal(float("inf"), 1e308)

    def test_is_approx_zero(self):
        assert is_approx_zero(1e-9)
        assert not is_approx_zero(1e-3)

    def test_is_close_relative(self):
        assert is_close(1e10, 1e10 + 1.0)
        assert not is_close(1e10, 1e10 + 1e3)

    @pytest.mark.parametrize("fractional,expected", [
        (0.0, 0),
        (3.0, 3),
        (4.37, 5),
        (20.149, 21),
        (20.00001, 20),
        (0.99999, 1),
    ])
    def test_round_fractional_periods(self, fractional, expected):
        assert round_fractional_periods(fractional) == expected

    def test_is_whole_number(self):
        assert is_whole_number(12.0)
        assert not is_whole_number(4.37)
