"""
Insurance policy strategy.
"""

from __future__ import annotations

from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.growth import compute_home_value_series
from finplanlab.core.interfaces import IPositionStrategy
from finplanlab.core.results import PositionOutput, build_output
from finplanlab.core.specs import InsurancePosition, position_key


class ValuationInsurance(IPositionStrategy):
    """
    Insurance policy (kind: 'p.insurance').

    ``premium_monthly`` is paid every month of the horizon. Policies with
    ``has_cash_value`` also hold an asset worth ``cash_value`` in month 0,
    growing monthly at the equivalent of ``cash_value_annual_growth``.
    """

    def prepare(self, position: InsurancePosition, ctx: ProjectionContext) -> None:
        if position.premium_monthly < 0:
            raise ConfigError(f"{position.id}: premium_monthly must be >= 0")

    def simulate(
        self, position: InsurancePosition, ctx: ProjectionContext
    ) -> PositionOutput:
        T = ctx.horizon_months
        key = position_key(position)

        premium = ctx.zeros()
        premium[:] = -position.premium_monthly

        assets_by_key = {}
        if position.has_cash_value:
            assets_by_key[key] = compute_home_value_series(
                position.cash_value, position.cash_value_annual_growth, 0, T
            )

        return build_output(
            T,
            cashflow_by_key={f"{key}:premium": premium},
            assets_by_key=assets_by_key,
        )
