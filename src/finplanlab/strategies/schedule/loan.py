"""
Amortizing loan schedule strategy.
"""

from __future__ import annotations

from finplanlab.core.context import ProjectionContext
from finplanlab.core.errors import ConfigError
from finplanlab.core.interfaces import IPositionStrategy
from finplanlab.core.results import PositionOutput, build_output
from finplanlab.core.specs import LoanPosition, position_key
from finplanlab.core.timeline import TimelineEvent

from ._loan_utils import amortize_loan


class ScheduleLoan(IPositionStrategy):
    """
    Amortizing personal/consumer loan (kind: 'p.loan').

    The monthly payment is either the level annuity payment for principal, rate
    and term, or the caller's ``monthly_payment`` override. Overrides that do
    not cover interest let the balance grow (negative amortization) instead of
    failing; a FinPlanWarning is emitted.

    **Cashflow keys:**
        - ``loan:<id>:fees_one_time``: one-time fee at the start month
        - ``loan:<id>:interest``: interest share of each payment
        - ``loan:<id>:principal``: principal share of each payment

    **Liability key:** ``loan:<id>`` (balance after each month's payment)

    Note:
        The principal is not paid out as a cash inflow; the loan is assumed to
        finance spending outside the projection. A loan that started before the
        base month enters the horizon with its amortized balance.
    """

    def prepare(self, position: LoanPosition, ctx: ProjectionContext) -> None:
        if position.principal < 0:
            raise ConfigError(f"{position.id}: principal must be >= 0")
        if position.term_months < 0:
            raise ConfigError(f"{position.id}: term_months must be >= 0")

    def simulate(
        self, position: LoanPosition, ctx: ProjectionContext
    ) -> PositionOutput:
        T = ctx.horizon_months
        key = position_key(position)
        start = ctx.index_of(position.start_month)

        schedule = amortize_loan(
            position.principal,
            position.annual_interest_rate,
            position.term_months,
            start,
            T,
            monthly_payment=position.monthly_payment,
            label=key,
        )

        fees = ctx.zeros()
        if position.fees_one_time and ctx.in_horizon(start):
            fees[start] = -position.fees_one_time

        events: list[TimelineEvent] = []
        if ctx.in_horizon(start) and schedule.payment > 0:
            events.append(
                TimelineEvent(
                    ctx.month_at(start),
                    "loan_start",
                    f"Loan {position.id} starts: {position.principal:,.2f} at "
                    f"{schedule.payment:,.2f}/month",
                    {"principal": position.principal, "payment": schedule.payment},
                )
            )
        if schedule.paid_off_index is not None:
            events.append(
                TimelineEvent(
                    ctx.month_at(schedule.paid_off_index),
                    "paid_off",
                    f"Loan {position.id} paid off",
                )
            )
        if schedule.has_residual and ctx.in_horizon(schedule.term_end_index):
            events.append(
                TimelineEvent(
                    ctx.month_at(schedule.term_end_index),
                    "balloon_due",
                    f"Loan {position.id} term ends with {schedule.residual:,.2f} outstanding",
                    {"residual": schedule.residual},
                )
            )

        return build_output(
            T,
            cashflow_by_key={
                f"{key}:fees_one_time": fees,
                f"{key}:interest": -schedule.interest_series,
                f"{key}:principal": -schedule.principal_series,
            },
            liabilities_by_key={key: schedule.balance_series},
            events=events,
        )
