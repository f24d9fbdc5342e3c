"""
Result classes for FinPlanLab projections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, TypedDict

import numpy as np
import pandas as pd

from .timeline import TimelineEvent


class PositionOutput(TypedDict):
    """
    Standard output structure for all position strategies.

    Attributes:
        cashflow: Signed monthly cashflow (+ inflow, - outflow)
        assets: Monthly asset value (0 if the position holds no asset)
        liabilities: Monthly debt balance (0 if the position carries no debt)
        cashflow_by_key: Breakdown of ``cashflow`` by ledger key
        assets_by_key: Breakdown of ``assets`` by ledger key
        liabilities_by_key: Breakdown of ``liabilities`` by ledger key
        events: Dated milestones describing key occurrences

    Note:
        All numpy arrays have the horizon's length. The totals always equal the
        sum of their by-key breakdown.
    """

    cashflow: np.ndarray
    assets: np.ndarray
    liabilities: np.ndarray
    cashflow_by_key: dict[str, np.ndarray]
    assets_by_key: dict[str, np.ndarray]
    liabilities_by_key: dict[str, np.ndarray]
    events: list[TimelineEvent]


def build_output(
    horizon_months: int,
    cashflow_by_key: dict[str, np.ndarray] | None = None,
    assets_by_key: dict[str, np.ndarray] | None = None,
    liabilities_by_key: dict[str, np.ndarray] | None = None,
    events: list[TimelineEvent] | None = None,
) -> PositionOutput:
    """Assemble a PositionOutput whose totals are the sums of the breakdowns."""
    cashflow_by_key = {
        k: v for k, v in (cashflow_by_key or {}).items() if np.any(v != 0)
    }
    assets_by_key = dict(assets_by_key or {})
    liabilities_by_key = dict(liabilities_by_key or {})

    def _total(parts: dict[str, np.ndarray]) -> np.ndarray:
        total = np.zeros(horizon_months)
        for series in parts.values():
            total += series
        return total

    return PositionOutput(
        cashflow=_total(cashflow_by_key),
        assets=_total(assets_by_key),
        liabilities=_total(liabilities_by_key),
        cashflow_by_key=cashflow_by_key,
        assets_by_key=assets_by_key,
        liabilities_by_key=liabilities_by_key,
        events=list(events or []),
    )


class RiskLevel(str, Enum):
    """Liquidity risk classification of a projection."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __str__(self) -> str:
        return self.value


class LowestPoint(NamedTuple):
    """Minimum of a monthly series (earliest month wins ties)."""

    value: float
    index: int
    month: str


@dataclass
class AssetSeries:
    housing: np.ndarray
    investments: np.ndarray
    cars: np.ndarray
    insurance: np.ndarray
    total: np.ndarray


@dataclass
class LiabilitySeries:
    mortgage: np.ndarray
    loans: np.ndarray
    auto: np.ndarray
    total: np.ndarray


@dataclass
class Breakdown:
    """
    Per-key ledger of everything that went into a projection.

    Keys look like ``event:salary``, ``home:home-1:down_payment`` or
    ``loan:loan-1``. Cashflow keys only appear when the series is non-zero
    somewhere; asset and liability keys are always recorded.
    """

    horizon_months: int
    cashflow_by_key: dict[str, np.ndarray] = field(default_factory=dict)
    assets_by_key: dict[str, np.ndarray] = field(default_factory=dict)
    liabilities_by_key: dict[str, np.ndarray] = field(default_factory=dict)

    @staticmethod
    def _add(ledger: dict[str, np.ndarray], key: str, series: np.ndarray, T: int):
        if key not in ledger:
            ledger[key] = np.zeros(T)
        ledger[key] += series

    def add_cashflow(self, key: str, series: np.ndarray) -> None:
        if np.any(series != 0):
            self._add(self.cashflow_by_key, key, series, self.horizon_months)

    def add_asset(self, key: str, series: np.ndarray) -> None:
        self._add(self.assets_by_key, key, series, self.horizon_months)

    def add_liability(self, key: str, series: np.ndarray) -> None:
        self._add(self.liabilities_by_key, key, series, self.horizon_months)

    @property
    def cashflow_totals(self) -> np.ndarray:
        totals = np.zeros(self.horizon_months)
        for series in self.cashflow_by_key.values():
            totals += series
        return totals


@dataclass
class ProjectionResult:
    """
    Month-by-month projection of cash, assets, liabilities and net worth.

    Attributes:
        base_month: First month of the horizon
        months: Month axis (``YYYY-MM`` strings), one per simulated month
        net_cashflow: Signed net cashflow per month
        cash_balance: Cumulative cash balance (initial cash + running net cashflow)
        assets: Asset series by bucket, plus total
        liabilities: Liability series by bucket, plus total
        net_worth: cash_balance + assets.total - liabilities.total
        lowest_monthly_balance: Minimum of cash_balance
        lowest_net_worth: Minimum of net_worth
        runway_months: Months of month-0 burn the month-0 cash balance covers
        net_worth_year5: Net worth at the year-5 index (or the last month)
        risk_level: Low / Medium / High liquidity risk
        breakdown: Per-key ledger of all contributions
        timeline: Dated milestones produced by positions
    """

    base_month: str
    months: list[str]
    net_cashflow: np.ndarray
    cash_balance: np.ndarray
    assets: AssetSeries
    liabilities: LiabilitySeries
    net_worth: np.ndarray
    lowest_monthly_balance: LowestPoint
    lowest_net_worth: LowestPoint
    runway_months: int
    net_worth_year5: float
    risk_level: RiskLevel
    breakdown: Breakdown
    timeline: list[TimelineEvent] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        """
        Export the monthly series as a DataFrame indexed by month.

        Returns:
            DataFrame with a monthly ``PeriodIndex`` named ``month``
        """
        index = pd.PeriodIndex(self.months, freq="M", name="month")
        return pd.DataFrame(
            {
                "net_cashflow": self.net_cashflow,
                "cash_balance": self.cash_balance,
                "assets_housing": self.assets.housing,
                "assets_investments": self.assets.investments,
                "assets_cars": self.assets.cars,
                "assets_insurance": self.assets.insurance,
                "assets_total": self.assets.total,
                "liabilities_mortgage": self.liabilities.mortgage,
                "liabilities_loans": self.liabilities.loans,
                "liabilities_auto": self.liabilities.auto,
                "liabilities_total": self.liabilities.total,
                "net_worth": self.net_worth,
            },
            index=index,
        )

    def summary(self) -> dict[str, Any]:
        """Headline indicators of the projection."""
        from finplanlab.kpi import max_drawdown

        return {
            "base_month": self.base_month,
            "horizon_months": len(self.months),
            "lowest_monthly_balance": self.lowest_monthly_balance._asdict(),
            "lowest_net_worth": self.lowest_net_worth._asdict(),
            "runway_months": self.runway_months,
            "net_worth_year5": float(self.net_worth_year5),
            "risk_level": self.risk_level.value,
            "final_cash_balance": float(self.cash_balance[-1]),
            "final_net_worth": float(self.net_worth[-1]),
            "net_worth_max_drawdown": max_drawdown(
                pd.Series(self.net_worth, name="net_worth")
            ),
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation (arrays become lists)."""

        def _lists(parts: dict[str, np.ndarray]) -> dict[str, list[float]]:
            return {k: v.tolist() for k, v in parts.items()}

        return {
            "base_month": self.base_month,
            "months": list(self.months),
            "net_cashflow": self.net_cashflow.tolist(),
            "cash_balance": self.cash_balance.tolist(),
            "assets": {
                "housing": self.assets.housing.tolist(),
                "investments": self.assets.investments.tolist(),
                "cars": self.assets.cars.tolist(),
                "insurance": self.assets.insurance.tolist(),
                "total": self.assets.total.tolist(),
            },
            "liabilities": {
                "mortgage": self.liabilities.mortgage.tolist(),
                "loans": self.liabilities.loans.tolist(),
                "auto": self.liabilities.auto.tolist(),
                "total": self.liabilities.total.tolist(),
            },
            "net_worth": self.net_worth.tolist(),
            "lowest_monthly_balance": self.lowest_monthly_balance._asdict(),
            "lowest_net_worth": self.lowest_net_worth._asdict(),
            "runway_months": self.runway_months,
            "net_worth_year5": float(self.net_worth_year5),
            "risk_level": self.risk_level.value,
            "breakdown": {
                "cashflow": _lists(self.breakdown.cashflow_by_key),
                "assets": _lists(self.breakdown.assets_by_key),
                "liabilities": _lists(self.breakdown.liabilities_by_key),
            },
            "timeline": [
                {"month": e.month, "kind": e.kind, "message": e.message, "meta": e.meta}
                for e in self.timeline
            ],
        }
