"""
Tests for the car valuation strategy.
"""

import numpy as np
import pytest

from finplanlab import compute_projection
from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.specs import CarLoan, CarPosition
from finplanlab.core.utils import build_month_range
from finplanlab.strategies.valuation.car import ValuationCar


def _ctx(horizon, base="2025-01"):
    return ProjectionContext(
        base_month=base,
        horizon_months=horizon,
        months=tuple(build_month_range(base, horizon)),
    )


def _simulate(position, horizon=13):
    strategy = ValuationCar()
    ctx = _ctx(horizon)
    strategy.prepare(position, ctx)
    return strategy.simulate(position, ctx)


class TestValuationCar:
    def test_depreciation(self):
        out = _simulate(
            CarPosition(
                purchase_month="2025-01",
                purchase_price=30_000,
                annual_depreciation_rate=-0.15,
                id="van",
            )
        )

        assert out["assets"][0] == 30_000
        assert out["assets"][12] == pytest.approx(30_000 * 0.85)
        assert np.all(np.diff(out["assets"]) < 0)
        assert list(out["assets_by_key"]) == ["car:van"]

    def test_down_payment_and_growing_holding_cost(self):
        out = _simulate(
            CarPosition(
                purchase_month="2025-01",
                purchase_price=20_000,
                down_payment=5_000,
                holding_cost_monthly=200,
                holding_cost_annual_growth=0.10,
            )
        )

        assert out["cashflow"][0] == pytest.approx(-5_200)
        assert out["cashflow"][1] == pytest.approx(-200 * 1.1 ** (1 / 12))
        assert out["cashflow"][12] == pytest.approx(-220)

    def test_car_loan_is_an_auto_liability(self):
        result = compute_projection(
            {
                "baseMonth": "2025-01",
                "horizonMonths": 12,
                "initialCash": 10_000,
                "positions": {
                    "cars": [
                        {
                            "id": "family",
                            "purchaseMonth": "2025-02",
                            "purchasePrice": 25_000,
                            "downPayment": 5_000,
                            "loan": {
                                "principal": 20_000,
                                "annualInterestRate": 0.0,
                                "termMonths": 20,
                            },
                        }
                    ]
                },
            }
        )

        assert result.liabilities.auto[0] == 0
        assert result.liabilities.auto[1] == pytest.approx(19_000)
        assert not result.liabilities.loans.any()
        assert result.cash_balance[1] == pytest.approx(10_000 - 5_000 - 1_000)
        assert "car:family:loan" in result.breakdown.liabilities_by_key

    def test_loan_paid_off_event(self):
        out = _simulate(
            CarPosition(
                purchase_month="2025-01",
                purchase_price=5_000,
                loan=CarLoan(principal=3_000, term_months=3),
                id="small",
            )
        )
        kinds = [(e.kind, e.month) for e in out["events"]]
        assert kinds == [("purchase", "2025-01"), ("paid_off", "2025-03")]

    def test_purchase_before_base_month(self):
        out = _simulate(
            CarPosition(
                purchase_month="2024-01",
                purchase_price=10_000,
                down_payment=2_000,
                annual_depreciation_rate=-0.2,
            ),
            horizon=2,
        )
        assert out["assets"][0] == pytest.approx(8_000)
        assert not out["cashflow"].any()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"purchase_price": -1},
            {"annual_depreciation_rate": -1},
            {"holding_cost_annual_growth": -1.5},
        ],
    )
    def test_prepare_rejects_invalid_values(self, kwargs):
        position = CarPosition(purchase_month="2025-01", **kwargs)
        with pytest.raises(ConfigError):
            ValuationCar().prepare(position, _ctx(3))
