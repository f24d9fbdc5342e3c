"""
Car valuation strategy (depreciation, running costs, optional car loan).
"""

from __future__ import annotations

from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.growth import grown_recurring_series, project_value_series
from finplanlab.core.interfaces import IPositionStrategy
from finplanlab.core.results import PositionOutput, build_output
from finplanlab.core.specs import CarPosition, position_key
from finplanlab.core.timeline import TimelineEvent

from ..schedule._loan_utils import amortize_loan


class ValuationCar(IPositionStrategy):
    """
    Depreciating vehicle (kind: 'p.car').

    The value equals ``purchase_price`` in the purchase month and compounds
    monthly at ``annual_depreciation_rate`` (negative to decline) from the next
    month on. ``down_payment`` leaves cash in the purchase month;
    ``holding_cost_monthly`` recurs from the purchase month growing at
    ``holding_cost_annual_growth``. An optional ``loan`` is amortized from the
    purchase month and reported as an auto liability.
    """

    def prepare(self, position: CarPosition, ctx: ProjectionContext) -> None:
        if position.purchase_price < 0:
            raise ConfigError(f"{position.id}: purchase_price must be >= 0")
        for name in ("annual_depreciation_rate", "holding_cost_annual_growth"):
            if getattr(position, name) <= -1:
                raise ConfigError(f"{position.id}: {name} must be > -1")

    def simulate(self, position: CarPosition, ctx: ProjectionContext) -> PositionOutput:
        T = ctx.horizon_months
        key = position_key(position)
        start = ctx.index_of(position.purchase_month)

        value = project_value_series(
            position.purchase_price, position.annual_depreciation_rate, start, T
        )
        holding_cost = grown_recurring_series(
            position.holding_cost_monthly, position.holding_cost_annual_growth, start, T
        )

        down_payment = ctx.zeros()
        events: list[TimelineEvent] = []
        if ctx.in_horizon(start):
            down_payment[start] = -position.down_payment
            events.append(
                TimelineEvent(
                    ctx.month_at(start),
                    "purchase",
                    f"Car {position.id} purchased for {position.purchase_price:,.2f}",
                    {"purchase_price": position.purchase_price},
                )
            )

        cashflow_by_key = {
            f"{key}:down_payment": down_payment,
            f"{key}:holding_cost": -holding_cost,
        }
        liabilities_by_key = {}
        loan = position.loan
        if loan is not None:
            schedule = amortize_loan(
                loan.principal,
                loan.annual_interest_rate,
                loan.term_months,
                start,
                T,
                monthly_payment=loan.monthly_payment,
                label=f"{key}:loan",
            )
            cashflow_by_key[f"{key}:loan_interest"] = -schedule.interest_series
            cashflow_by_key[f"{key}:loan_principal"] = -schedule.principal_series
            liabilities_by_key[f"{key}:loan"] = schedule.balance_series
            if schedule.paid_off_index is not None:
                events.append(
                    TimelineEvent(
                        ctx.month_at(schedule.paid_off_index),
                        "paid_off",
                        f"Car loan for {position.id} paid off",
                    )
                )

        return build_output(
            T,
            cashflow_by_key=cashflow_by_key,
            assets_by_key={key: value},
            liabilities_by_key=liabilities_by_key,
            events=events,
        )
