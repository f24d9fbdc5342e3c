"""
Tests for the home valuation strategy.
"""

import numpy as np
import pytest

from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.specs import HomePosition
from finplanlab.core.utils import build_month_range
from finplanlab.strategies.valuation.home import ValuationHome


def _ctx(horizon, base="2025-01"):
    return ProjectionContext(
        base_month=base,
        horizon_months=horizon,
        months=tuple(build_month_range(base, horizon)),
    )


def _simulate(data, horizon=12):
    position = HomePosition.from_dict({"id": "h", **data})
    strategy = ValuationHome()
    ctx = _ctx(horizon)
    strategy.prepare(position, ctx)
    return strategy.simulate(position, ctx)


class TestNewPurchase:
    def test_purchase_cashflows_and_value(self):
        """Down payment and fees leave cash once; value starts at the price."""
        out = _simulate(
            {
                "purchaseMonth": "2025-03",
                "purchasePrice": 400_000,
                "downPayment": 80_000,
                "feesOneTime": 30_000,
            }
        )

        assert out["cashflow_by_key"]["home:h:down_payment"][2] == -80_000
        assert out["cashflow_by_key"]["home:h:fees_one_time"][2] == -30_000
        np.testing.assert_array_equal(out["assets"][:2], 0)
        np.testing.assert_array_equal(out["assets"][2:], 400_000)
        assert out["cashflow"].sum() == pytest.approx(-110_000)

    def test_no_mortgage_means_no_liability_key(self):
        out = _simulate({"purchaseMonth": "2025-01", "purchasePrice": 1000})
        assert out["liabilities_by_key"] == {}
        assert not out["liabilities"].any()

    def test_mortgage_paid_off_event(self):
        """A mortgage repaid inside the horizon produces a paid_off milestone."""
        out = _simulate(
            {
                "purchaseMonth": "2025-01",
                "purchasePrice": 10_000,
                "mortgage": {"principal": 6000, "annualRate": 0, "termMonths": 6},
            }
        )

        np.testing.assert_allclose(
            out["liabilities_by_key"]["home:h:mortgage"][:6],
            [5000, 4000, 3000, 2000, 1000, 0],
        )
        events = {e.kind: e.month for e in out["events"]}
        assert events == {"purchase": "2025-01", "paid_off": "2025-06"}

    def test_purchase_before_base_month(self):
        """Only the continuing effects of an earlier purchase enter the horizon."""
        out = _simulate(
            {
                "purchaseMonth": "2024-01",
                "purchasePrice": 100_000,
                "downPayment": 20_000,
                "annualAppreciation": 0.06,
            }
        )

        assert out["assets"][0] == pytest.approx(106_000)
        assert "home:h:down_payment" not in out["cashflow_by_key"]
        assert out["events"] == []

    def test_purchase_after_horizon_contributes_nothing(self):
        out = _simulate(
            {"purchaseMonth": "2030-01", "purchasePrice": 1000, "downPayment": 100}
        )
        assert not out["assets"].any()
        assert not out["cashflow"].any()


class TestExistingHome:
    def test_as_of_before_base_rolls_forward(self):
        out = _simulate(
            {
                "mode": "existing",
                "annualAppreciation": 0.06,
                "existing": {
                    "asOfMonth": "2024-01",
                    "marketValue": 100_000,
                    "mortgageBalance": 12_000,
                    "remainingTermMonths": 24,
                    "annualRate": 0,
                },
            }
        )

        assert out["assets"][0] == pytest.approx(106_000)
        assert out["liabilities"][0] == pytest.approx(5500)
        assert out["cashflow"][0] == pytest.approx(-500)
        assert "home:h:down_payment" not in out["cashflow_by_key"]

    def test_existing_without_mortgage_still_reports_liability_key(self):
        out = _simulate(
            {"existing": {"asOfMonth": "2025-01", "marketValue": 250_000}}
        )
        assert not out["liabilities_by_key"]["home:h:mortgage"].any()
        np.testing.assert_array_equal(out["assets"], 250_000)


class TestRentalIncome:
    def test_vacancy_growth_and_end_month(self):
        out = _simulate(
            {
                "purchaseMonth": "2025-01",
                "purchasePrice": 300_000,
                "rental": {
                    "rentMonthly": 1000,
                    "rentStartMonth": "2025-02",
                    "rentEndMonth": "2026-02",
                    "rentAnnualGrowth": 0.05,
                    "vacancyRate": 0.1,
                },
            },
            horizon=16,
        )
        rent = out["cashflow_by_key"]["home:h:rental_income"]

        assert rent[0] == 0
        assert rent[1] == pytest.approx(900)
        assert rent[13] == pytest.approx(945)
        np.testing.assert_array_equal(rent[14:], 0)

    def test_full_vacancy_yields_no_income(self):
        out = _simulate(
            {
                "purchaseMonth": "2025-01",
                "rental": {"rentMonthly": 1000, "rentStartMonth": "2025-01", "vacancyRate": 1},
            }
        )
        assert "home:h:rental_income" not in out["cashflow_by_key"]


class TestValidation:
    @pytest.mark.parametrize(
        "data",
        [
            {"purchaseMonth": "2025-01", "purchasePrice": -1},
            {"purchaseMonth": "2025-01", "annualAppreciation": -1},
            {"purchaseMonth": "2025-01", "holdingCostAnnualGrowth": -2},
            {
                "purchaseMonth": "2025-01",
                "rental": {"rentMonthly": 1, "rentStartMonth": "2025-01", "vacancyRate": 1.5},
            },
        ],
    )
    def test_prepare_rejects_invalid_home(self, data):
        position = HomePosition.from_dict(data)
        with pytest.raises(ConfigError):
            ValuationHome().prepare(position, _ctx(3))
