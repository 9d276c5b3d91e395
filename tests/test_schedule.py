"""
Tests for rate schedule calculations.
"""

import pytest

from finsolve.calculations.enums import TvmVariable
from finsolve.calculations.errors import InvalidRateError, UnsatisfiableConstraintError
from finsolve.calculations.schedule import (
    future_value_schedule_solution,
    present_value_schedule_solution,
    solve_future_value_schedule,
    solve_present_value_schedule,
)
from finsolve.calculations.tvm import solve_future_value, solve_present_value


class TestFutureValueSchedule:
    """Test future values over varying rates."""

    def test_future_value_schedule(self):
        fv = solve_future_value_schedule([0.04, -0.039, 0.106, -0.057], -75_000.0)
        assert abs(fv - 78_178.0458) < 0.001

    def test_future_value_schedule_mixed_rates(self):
        fv = solve_future_value_schedule([0.081, 0.11, 0.04, -0.023], -10_000.0)
        assert abs(fv - 12_192.0455) < 0.001

    @pytest.mark.parametrize("rate,periods", [(0.034, 5), (-0.02, 12), (0.0, 3), (0.25, 40)])
    def test_equal_rates_match_closed_form(self, rate, periods):
        schedule = solve_future_value_schedule([rate] * periods, -1_234.56)
        closed_form = solve_future_value(rate, periods, -1_234.56)
        assert schedule == pytest.approx(closed_form, rel=1e-12)

    def test_rate_of_minus_one(self):
        assert solve_future_value_schedule([0.05, -1.0, 0.05], -100.0) == 0.0

    def test_empty_schedule(self):
        with pytest.raises(InvalidRateError):
            solve_future_value_schedule([], -100.0)

    def test_invalid_rate_in_schedule(self):
        with pytest.raises(InvalidRateError) as exc_info:
            solve_future_value_schedule([0.05, float("nan")], -100.0)
        assert exc_info.value.parameter == "rates[1]"


class TestPresentValueSchedule:
    """Test present values over varying rates."""

    def test_present_value_schedule(self):
        pv = solve_present_value_schedule([0.04, 0.07, -0.12, -0.03, 0.11], 100_000.25)
        assert abs(pv - -94_843.2841) < 0.001

    @pytest.mark.parametrize("rate,periods", [(0.034, 5), (-0.02, 12), (0.0, 3)])
    def test_equal_rates_match_closed_form(self, rate, periods):
        schedule = solve_present_value_schedule([rate] * periods, 9_876.5)
        closed_form = solve_present_value(rate, periods, 9_876.5)
        assert schedule == pytest.approx(closed_form, rel=1e-12)

    def test_rate_of_minus_one(self):
        with pytest.raises(UnsatisfiableConstraintError) as exc_info:
            solve_present_value_schedule([0.05, -1.0], 100.0)
        assert exc_info.value.parameter == "rates[1]"

    def test_schedule_growth_underflows(self):
        with pytest.raises(UnsatisfiableConstraintError) as exc_info:
            solve_present_value_schedule([-0.99] * 200, 1_000.0)
        assert exc_info.value.parameter == "rates"


class TestScheduleSolution:
    """Test schedule solutions and their period-by-period series."""

    def test_future_value_solution(self):
        solution = future_value_schedule_solution([0.04, -0.039, 0.106, -0.057], -75_000)
        assert solution.calculated_field == TvmVariable.future_value
        assert solution.periods == 4
        assert solution.rates == (0.04, -0.039, 0.106, -0.057)
        assert solution.present_value == -75_000.0
        assert abs(solution.future_value - 78_178.0458) < 0.001

    def test_future_value_series(self):
        solution = future_value_schedule_solution([0.04, -0.039, 0.106, -0.057], -75_000.0)
        series = solution.series()
        assert len(series) == 5
        assert series[0].value == 75_000.0
        assert series[0].rate == 0.0
        assert abs(series[1].value - 78_000.0) < 1e-9
        assert series[2].rate == -0.039
        assert series[-1].value == pytest.approx(solution.future_value, rel=1e-12)

    def test_present_value_series(self):
        """Built backward from the future value."""
        solution = present_value_schedule_solution([0.04, 0.07, -0.12, -0.03, 0.11], 100_000.25)
        series = solution.series()
        expected = [94_843.2841, 98_637.0154, 105_541.6065, 92_876.6137, 90_090.3153, 100_000.25]
        assert len(series) == len(expected)
        for entry, value in zip(series, expected):
            assert abs(entry.value - value) < 0.001
        assert [entry.period for entry in series] == [0, 1, 2, 3, 4, 5]
        assert series[-1].value == 100_000.25
        assert series[5].rate == 0.11
        assert series[1].symbolic_formula == "value = {next period value} / (1 + r)"
