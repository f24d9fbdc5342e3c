"""
Tests for the shared compounding helpers.
"""

import numpy as np
import pytest

from finplanlab.core.growth import (
    compute_home_value_series,
    grown_recurring_series,
    monthly_rate_from_annual,
    project_value_series,
)


def test_monthly_rate_compounds_to_annual():
    r_m = monthly_rate_from_annual(0.06)
    assert (1 + r_m) ** 12 == pytest.approx(1.06)


class TestHomeValueSeries:
    def test_value_starts_at_purchase_price(self):
        series = compute_home_value_series(200_000, 0.06, 2, 15)

        np.testing.assert_array_equal(series[:2], 0.0)
        assert series[2] == 200_000
        assert series[14] == pytest.approx(200_000 * 1.06)

    def test_negative_rate_depreciates(self):
        series = compute_home_value_series(12_000, -0.12, 0, 3)
        assert series[0] == 12_000
        assert series[2] < series[1] < series[0]

    @pytest.mark.parametrize("price,horizon", [(0, 12), (-1, 12), (1000, 0)])
    def test_degenerate_inputs_are_zero(self, price, horizon):
        series = compute_home_value_series(price, 0.03, 0, horizon)
        assert len(series) == horizon
        assert not series.any()

    def test_start_before_base_clamps_to_zero(self):
        series = compute_home_value_series(1000, 0.0, -5, 3)
        np.testing.assert_array_equal(series, [1000, 1000, 1000])


class TestProjectValueSeries:
    def test_rolls_value_forward_for_pre_base_start(self):
        series = project_value_series(100_000, 0.06, -12, 2)
        assert series[0] == pytest.approx(106_000)

    def test_matches_home_series_for_non_negative_start(self):
        np.testing.assert_array_equal(
            project_value_series(5000, 0.03, 4, 10),
            compute_home_value_series(5000, 0.03, 4, 10),
        )


class TestGrownRecurringSeries:
    def test_growth_measured_from_start(self):
        series = grown_recurring_series(100, 0.12, 0, 13)
        assert series[0] == pytest.approx(100)
        assert series[12] == pytest.approx(112)

    def test_window_is_inclusive(self):
        series = grown_recurring_series(10, 0.0, 2, 8, end_index=4)
        np.testing.assert_array_equal(series, [0, 0, 10, 10, 10, 0, 0, 0])

    def test_pre_base_start_keeps_true_start_growth(self):
        series = grown_recurring_series(100, 0.10, -12, 2)
        assert series[0] == pytest.approx(110)
