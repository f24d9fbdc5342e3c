"""
Tests for the investment valuation strategy.
"""

import numpy as np
import pytest

from finplanlab import compute_projection
from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.specs import InvestmentPosition
from finplanlab.core.utils import build_month_range
from finplanlab.strategies.valuation.investment import (
    ValuationInvestment,
    monthly_factor,
)


def _ctx(horizon, base="2025-01"):
    return ProjectionContext(
        base_month=base,
        horizon_months=horizon,
        months=tuple(build_month_range(base, horizon)),
    )


def _simulate(position, horizon=12):
    strategy = ValuationInvestment()
    ctx = _ctx(horizon)
    strategy.prepare(position, ctx)
    return strategy.simulate(position, ctx)


class TestValuationInvestment:
    def test_contribution_does_not_earn_in_first_month(self):
        """Growth is applied before the month's contribution is added."""
        out = _simulate(
            InvestmentPosition(
                start_month="2025-01",
                annual_return_rate=0.12,
                monthly_contribution=50,
                id="etf",
            )
        )
        factor = 1.12 ** (1 / 12)

        assert out["assets"][0] == pytest.approx(50)
        assert out["assets"][1] == pytest.approx(50 * factor + 50)
        assert out["assets"][0] < 150
        np.testing.assert_array_equal(out["cashflow_by_key"]["investment:etf:contribution"], -50)

    def test_contribution_reduces_cash(self):
        result = compute_projection(
            {
                "baseMonth": "2025-01",
                "horizonMonths": 12,
                "initialCash": 1000,
                "positions": {
                    "investments": [
                        {
                            "startMonth": "2025-01",
                            "initialValue": 0,
                            "annualReturnRate": 0.05,
                            "monthlyContribution": 50,
                        }
                    ]
                },
            }
        )
        assert result.cash_balance[0] == pytest.approx(950)
        assert result.assets.investments[0] == pytest.approx(50)
        assert result.net_worth[0] == pytest.approx(1000)

    def test_withdrawal_is_capped_at_available_value(self):
        out = _simulate(
            InvestmentPosition(
                start_month="2025-01", initial_value=100, monthly_withdrawal=80
            ),
            horizon=4,
        )

        np.testing.assert_allclose(out["assets"], [20, 0, 0, 0])
        np.testing.assert_allclose(out["cashflow"], [80, 20, 0, 0])

    def test_fee_reduces_growth(self):
        out = _simulate(
            InvestmentPosition(
                start_month="2025-01",
                initial_value=1000,
                annual_return_rate=0.0,
                fee_annual_rate=0.12,
            ),
            horizon=12,
        )
        assert out["assets"][11] == pytest.approx(880)

    def test_negative_return_shrinks_value(self):
        out = _simulate(
            InvestmentPosition(
                start_month="2025-01", initial_value=1000, annual_return_rate=-0.2
            )
        )
        assert np.all(np.diff(out["assets"]) < 0)

    def test_start_before_base_month(self):
        """Months before the base month compound but leave no cashflow."""
        out = _simulate(
            InvestmentPosition(
                start_month="2024-01",
                initial_value=1000,
                annual_return_rate=0.10,
                monthly_contribution=0,
            ),
            horizon=1,
        )
        assert out["assets"][0] == pytest.approx(1000 * 1.1 ** (13 / 12))
        assert out["events"] == []

    def test_value_is_zero_before_start(self):
        out = _simulate(
            InvestmentPosition(start_month="2025-04", initial_value=500), horizon=6
        )
        np.testing.assert_array_equal(out["assets"][:3], 0)
        np.testing.assert_array_equal(out["assets"][3:], 500)
        assert out["events"][0].kind == "investment_start"
        assert out["events"][0].month == "2025-04"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_value": -1},
            {"monthly_contribution": -5},
            {"monthly_withdrawal": -5},
            {"annual_return_rate": -1},
            {"fee_annual_rate": 1.0},
        ],
    )
    def test_prepare_rejects_invalid_values(self, kwargs):
        position = InvestmentPosition(start_month="2025-01", **kwargs)
        with pytest.raises(ConfigError):
            ValuationInvestment().prepare(position, _ctx(3))


def test_monthly_factor_compounds_return_and_fee():
    assert monthly_factor(0.06, None) ** 12 == pytest.approx(1.06)
    assert monthly_factor(0.06, 0.01) ** 12 == pytest.approx(1.06 * 0.99)
