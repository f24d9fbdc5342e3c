"""
Investment portfolio valuation strategy.
"""

from __future__ import annotations

from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.interfaces import IPositionStrategy
from finplanlab.core.results import PositionOutput, build_output
from finplanlab.core.specs import InvestmentPosition, position_key
from finplanlab.core.timeline import TimelineEvent


def monthly_factor(annual_return_rate: float, fee_annual_rate: float | None) -> float:
    """Monthly growth factor net of fees: ``(1+r)**(1/12) * (1-fee)**(1/12)``."""
    factor = (1 + annual_return_rate) ** (1 / 12)
    if fee_annual_rate is not None:
        factor *= (1 - fee_annual_rate) ** (1 / 12)
    return factor


class ValuationInvestment(IPositionStrategy):
    """
    Compounding portfolio fed from cash (kind: 'p.investment').

    Each active month the prior value grows by the monthly factor, then the
    contribution is added and the withdrawal (capped at the available value) is
    taken out::

        value[t] = value[t-1] * factor + contribution - withdrawal

    In the first active month ``value[t-1]`` is ``initial_value``, so the
    contribution does not earn a return in the month it is paid in.
    Contributions are cash outflows, withdrawals cash inflows.

    Note:
        ``annual_return_rate`` may be negative. A start month before the base
        month applies the same rule for the elapsed months.
    """

    def prepare(self, position: InvestmentPosition, ctx: ProjectionContext) -> None:
        if position.initial_value < 0:
            raise ConfigError(f"{position.id}: initial_value must be >= 0")
        if position.monthly_contribution < 0 or position.monthly_withdrawal < 0:
            raise ConfigError(
                f"{position.id}: monthly_contribution and monthly_withdrawal must be >= 0"
            )
        if position.annual_return_rate <= -1:
            raise ConfigError(f"{position.id}: annual_return_rate must be > -1")
        if position.fee_annual_rate is not None and not 0 <= position.fee_annual_rate < 1:
            raise ConfigError(f"{position.id}: fee_annual_rate must be within [0, 1)")

    def simulate(
        self, position: InvestmentPosition, ctx: ProjectionContext
    ) -> PositionOutput:
        T = ctx.horizon_months
        key = position_key(position)
        start = ctx.index_of(position.start_month)
        factor = monthly_factor(position.annual_return_rate, position.fee_annual_rate)

        value = ctx.zeros()
        contributions = ctx.zeros()
        withdrawals = ctx.zeros()

        current = position.initial_value
        for t in range(start, T):
            grown = current * factor + position.monthly_contribution
            withdrawal = min(position.monthly_withdrawal, grown)
            current = grown - withdrawal
            if t < 0:
                continue
            value[t] = current
            contributions[t] = -position.monthly_contribution
            withdrawals[t] = withdrawal

        events = []
        if ctx.in_horizon(start):
            events.append(
                TimelineEvent(
                    ctx.month_at(start),
                    "investment_start",
                    f"Investment {position.id} starts with {position.initial_value:,.2f}",
                    {"monthly_contribution": position.monthly_contribution},
                )
            )

        return build_output(
            T,
            cashflow_by_key={
                f"{key}:contribution": contributions,
                f"{key}:withdrawal": withdrawals,
            },
            assets_by_key={key: value},
            events=events,
        )
