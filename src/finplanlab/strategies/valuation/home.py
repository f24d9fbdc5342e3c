"""
Home valuation strategy (new purchase or existing property, optional mortgage).
"""

from __future__ import annotations

import numpy as np

from finplanlab.core.amortization import (
    MortgageSchedule,
    compute_mortgage_schedule_with_offset,
)
from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.growth import grown_recurring_series, project_value_series
from finplanlab.core.interfaces import IPositionStrategy
from finplanlab.core.results import PositionOutput, build_output
from finplanlab.core.specs import HomePosition, RentalIncome, position_key
from finplanlab.core.timeline import TimelineEvent


class ValuationHome(IPositionStrategy):
    """
    Home with appreciation, optional mortgage and rental income (kind: 'p.home').

    **New purchase** (``mode="new_purchase"``): the value equals
    ``purchase_price`` in ``purchase_month`` and compounds monthly at
    ``annual_appreciation``. The down payment and ``fees_one_time`` leave cash
    in the purchase month; the mortgage (if any) is amortized from the purchase
    month with level payments.

    **Existing home** (``mode="existing"``): the value starts at
    ``existing.market_value`` in ``existing.as_of_month`` and the mortgage
    balance ``existing.mortgage_balance`` is amortized over
    ``remaining_term_months`` at ``existing.annual_rate``. No down payment.

    In both modes ``holding_cost_monthly`` is a recurring outflow from the start
    month growing at ``holding_cost_annual_growth``, and ``rental`` adds income
    from ``rent_start_month`` (through ``rent_end_month`` if given), growing at
    ``rent_annual_growth`` and reduced by ``vacancy_rate``.

    Note:
        A start month before the base month rolls the value forward by the
        appreciation law and slices the mortgage schedule from its true start.
        A new purchase without a purchase month contributes nothing.
    """

    def prepare(self, position: HomePosition, ctx: ProjectionContext) -> None:
        if position.purchase_price < 0:
            raise ConfigError(f"{position.id}: purchase_price must be >= 0")
        for name in ("annual_appreciation", "holding_cost_annual_growth"):
            if getattr(position, name) <= -1:
                raise ConfigError(f"{position.id}: {name} must be > -1")
        if position.rental is not None and not 0 <= position.rental.vacancy_rate <= 1:
            raise ConfigError(
                f"{position.id}: rental.vacancy_rate must be within [0, 1]"
            )

    def simulate(
        self, position: HomePosition, ctx: ProjectionContext
    ) -> PositionOutput:
        T = ctx.horizon_months
        key = position_key(position)

        if position.is_existing:
            existing = position.existing
            start = ctx.index_of(existing.as_of_month)
            value = project_value_series(
                existing.market_value, position.annual_appreciation, start, T
            )
            mortgage = compute_mortgage_schedule_with_offset(
                existing.mortgage_balance,
                existing.annual_rate,
                existing.remaining_term_months,
                start,
                T,
            )
        elif position.purchase_month is not None:
            start = ctx.index_of(position.purchase_month)
            value = project_value_series(
                position.purchase_price, position.annual_appreciation, start, T
            )
            terms = position.mortgage
            mortgage = (
                compute_mortgage_schedule_with_offset(
                    terms.principal, terms.annual_rate, terms.term_months, start, T
                )
                if terms is not None
                else MortgageSchedule.zeros(T)
            )
        else:
            return build_output(T)

        down_payment = ctx.zeros()
        fees = ctx.zeros()
        events: list[TimelineEvent] = []
        if not position.is_existing and ctx.in_horizon(start):
            down_payment[start] = -position.down_payment
            fees[start] = -position.fees_one_time
            events.append(
                TimelineEvent(
                    ctx.month_at(start),
                    "purchase",
                    f"Home {position.name or position.id} purchased for "
                    f"{position.purchase_price:,.2f}",
                    {
                        "purchase_price": position.purchase_price,
                        "down_payment": position.down_payment,
                    },
                )
            )

        paid_off = _paid_off_index(mortgage)
        if paid_off is not None:
            events.append(
                TimelineEvent(
                    ctx.month_at(paid_off),
                    "paid_off",
                    f"Mortgage on {position.name or position.id} paid off",
                )
            )

        holding_cost = grown_recurring_series(
            position.holding_cost_monthly, position.holding_cost_annual_growth, start, T
        )

        cashflow_by_key = {
            f"{key}:down_payment": down_payment,
            f"{key}:fees_one_time": fees,
            f"{key}:holding_cost": -holding_cost,
            f"{key}:mortgage_interest": -mortgage.interest_series,
            f"{key}:mortgage_principal": -mortgage.principal_series,
        }
        if position.rental is not None:
            cashflow_by_key[f"{key}:rental_income"] = _rental_series(
                position.rental, ctx
            )

        liabilities_by_key = {}
        if position.is_existing or position.mortgage is not None:
            liabilities_by_key[f"{key}:mortgage"] = mortgage.balance_series

        return build_output(
            T,
            cashflow_by_key=cashflow_by_key,
            assets_by_key={key: value},
            liabilities_by_key=liabilities_by_key,
            events=events,
        )


def _rental_series(rental: RentalIncome, ctx: ProjectionContext) -> np.ndarray:
    """Rental income net of vacancy, growing continuously from its start month."""
    if rental.rent_monthly <= 0:
        return ctx.zeros()
    return grown_recurring_series(
        rental.rent_monthly * (1 - rental.vacancy_rate),
        rental.rent_annual_growth,
        ctx.index_of(rental.rent_start_month),
        ctx.horizon_months,
        end_index=ctx.index_of(rental.rent_end_month),
    )


def _paid_off_index(schedule: MortgageSchedule) -> int | None:
    """First month where a payment brought the balance to zero."""
    paid = np.flatnonzero(
        (schedule.principal_series > 0) & (schedule.balance_series <= 1e-6)
    )
    return int(paid[0]) if paid.size else None
