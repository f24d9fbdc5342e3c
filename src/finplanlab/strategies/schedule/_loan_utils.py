"""
Shared utilities for loan schedule strategies.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass

import numpy as np

from finplanlab.core.amortization import (
    apply_amortization_month,
    calc_fixed_monthly_payment,
)
from finplanlab.core.errors import FinPlanWarning

# Balances at or below this are treated as fully repaid
RESIDUAL_TOLERANCE = 1e-6


@dataclass
class LoanSchedule:
    """
    Per-month series of an amortizing loan over a projection horizon.

    Attributes:
        payment: Monthly payment (override or level annuity payment)
        payment_series: Cash paid each active month
        interest_series: Interest share of the payment
        principal_series: Principal share of the payment (payment - interest)
        balance_series: Outstanding balance after each month
        paid_off_index: Horizon index where the balance reached 0, if it did
        residual: Balance left when the term ended (0 if repaid or still running)
        term_end_index: Horizon index of the last scheduled payment
    """

    payment: float
    payment_series: np.ndarray
    interest_series: np.ndarray
    principal_series: np.ndarray
    balance_series: np.ndarray
    paid_off_index: int | None = None
    residual: float = 0.0
    term_end_index: int | None = None

    @property
    def has_residual(self) -> bool:
        return self.residual > RESIDUAL_TOLERANCE


def amortize_loan(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_index: int,
    horizon_months: int,
    *,
    monthly_payment: float | None = None,
    label: str = "loan",
) -> LoanSchedule:
    """
    Amortize a loan month by month with the underpayment-tolerant step.

    Each active month pays the full payment; the interest share is
    ``min(payment, interest)`` and the rest counts as principal. Months before
    the base month (negative indices) are amortized but not recorded, so a loan
    that started earlier enters the horizon with its correct balance. After the
    term ends any residual balance stays outstanding.

    Warns:
        FinPlanWarning: If the payment does not cover the first month's interest
            (the balance will grow), or if the term ends inside the horizon with
            a residual balance
    """
    T = max(0, int(horizon_months))
    zeros = LoanSchedule(
        0.0, np.zeros(T), np.zeros(T), np.zeros(T), np.zeros(T)
    )
    if principal <= 0 or term_months <= 0 or T == 0:
        return zeros

    r_m = annual_rate / 12.0
    payment = (
        float(monthly_payment)
        if monthly_payment is not None
        else calc_fixed_monthly_payment(principal, annual_rate, term_months)
    )
    if payment < principal * r_m:
        warnings.warn(
            f"{label}: monthly payment {payment:,.2f} does not cover the first "
            f"month's interest {principal * r_m:,.2f}; the balance will grow",
            FinPlanWarning,
            stacklevel=3,
        )

    schedule = LoanSchedule(
        payment, np.zeros(T), np.zeros(T), np.zeros(T), np.zeros(T)
    )
    balance = float(principal)
    term_end = start_index + int(term_months) - 1
    last_active = min(term_end, T - 1)

    for t in range(start_index, last_active + 1):
        if balance <= 0:
            break
        step = apply_amortization_month(balance, r_m, payment)
        balance = step.next_outstanding
        if balance <= RESIDUAL_TOLERANCE:
            balance = 0.0
        if t < 0:
            continue
        interest_paid = min(payment, step.interest)
        schedule.payment_series[t] = payment
        schedule.interest_series[t] = interest_paid
        schedule.principal_series[t] = payment - interest_paid
        schedule.balance_series[t] = balance
        if balance <= 0 and schedule.paid_off_index is None:
            schedule.paid_off_index = t

    if term_end < T:
        schedule.term_end_index = term_end
        if balance > RESIDUAL_TOLERANCE:
            schedule.residual = balance
            schedule.balance_series[max(0, term_end + 1) :] = balance
            warnings.warn(
                f"{label}: term ends with a residual balance of {balance:,.2f}",
                FinPlanWarning,
                stacklevel=3,
            )

    return schedule
