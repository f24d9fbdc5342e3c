"""
Amortization primitives and mortgage schedule builder.

Two single-month step rules live here on purpose:

- ``apply_amortization_month`` tolerates underpayment. The balance may grow when
  the payment does not cover interest (negative amortization) and is floored at 0.
  Loans with a caller-overridden ``monthly_payment`` use it.
- ``compute_mortgage_schedule`` uses the scheduled rule
  ``principal = min(balance, payment - interest)``, which assumes the level
  payment always covers interest. System-computed mortgage schedules use it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class AmortizationStep(NamedTuple):
    """Result of one amortization month."""

    interest: float
    principal_paid: float
    next_outstanding: float


@dataclass
class MortgageSchedule:
    """
    Per-month mortgage series over a projection horizon.

    Attributes:
        payment_monthly: Level payment (0 for degenerate inputs)
        interest_series: Interest portion per month
        principal_series: Principal portion per month
        balance_series: Balance after the month's payment

    Note:
        All series have the horizon's length and are 0 outside the active term window.
    """

    payment_monthly: float
    interest_series: np.ndarray
    principal_series: np.ndarray
    balance_series: np.ndarray

    @property
    def payment_series(self) -> np.ndarray:
        """Cash paid each month (interest + principal)."""
        return self.interest_series + self.principal_series

    @classmethod
    def zeros(cls, horizon_months: int) -> MortgageSchedule:
        T = max(0, int(horizon_months))
        return cls(0.0, np.zeros(T), np.zeros(T), np.zeros(T))


def calc_fixed_monthly_payment(
    principal: float, annual_rate: float, term_months: int
) -> float:
    """
    Level monthly payment amortizing ``principal`` over ``term_months``.

    Uses the annuity formula ``P * r / (1 - (1 + r) ** -n)`` with
    ``r = annual_rate / 12``. The denominator is evaluated as
    ``-expm1(-n * log1p(r))`` so rates too small to move ``1 + r`` stay exact.
    A zero rate (or one whose denominator underflows to 0) falls back to
    straight-line ``P / n``; a non-positive principal or term yields 0.
    """
    if principal <= 0 or term_months <= 0:
        return 0.0
    r_m = annual_rate / 12.0
    if r_m == 0:
        return principal / term_months
    denominator = -math.expm1(-term_months * math.log1p(r_m))
    if denominator == 0:
        return principal / term_months
    return principal * r_m / denominator


def apply_amortization_month(
    outstanding: float, monthly_rate: float, payment: float
) -> AmortizationStep:
    """
    Apply one month of a fixed payment to an outstanding balance.

    ``principal_paid`` is clamped to ``[0, outstanding]``. The next balance is
    ``max(0, outstanding + interest - payment)``, so an underpaying payment lets
    the balance grow. A non-positive balance returns an all-zero step.
    """
    if outstanding <= 0:
        return AmortizationStep(0.0, 0.0, 0.0)
    interest = outstanding * monthly_rate
    principal_paid = max(0.0, min(outstanding, payment - interest))
    next_outstanding = max(0.0, outstanding + interest - payment)
    return AmortizationStep(interest, principal_paid, next_outstanding)


def compute_mortgage_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_index: int,
    horizon_months: int,
) -> MortgageSchedule:
    """
    Expand a mortgage into interest/principal/balance series over the horizon.

    Payments run from ``max(0, start_index)`` for ``term_months`` months or until
    the horizon ends, whichever comes first.

    Args:
        principal: Amount borrowed
        annual_rate: Nominal annual rate (e.g. 0.04 for 4%)
        term_months: Amortization term
        start_index: Month index of the first payment
        horizon_months: Length of the returned series

    Returns:
        MortgageSchedule; all-zero with ``payment_monthly=0`` when principal,
        term or horizon is non-positive
    """
    if principal <= 0 or term_months <= 0 or horizon_months <= 0:
        return MortgageSchedule.zeros(horizon_months)

    T = int(horizon_months)
    interest_series = np.zeros(T)
    principal_series = np.zeros(T)
    balance_series = np.zeros(T)

    r_m = annual_rate / 12.0
    payment = calc_fixed_monthly_payment(principal, annual_rate, term_months)

    balance = float(principal)
    first = max(0, int(start_index))
    last = min(T, first + int(term_months))
    for t in range(first, last):
        interest = balance * r_m
        principal_pay = min(balance, payment - interest)
        balance_after = max(0.0, balance - principal_pay)

        interest_series[t] = interest
        principal_series[t] = principal_pay
        balance_series[t] = balance_after

        balance = balance_after

    return MortgageSchedule(payment, interest_series, principal_series, balance_series)


def compute_mortgage_schedule_with_offset(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_index: int,
    horizon_months: int,
) -> MortgageSchedule:
    """
    Mortgage schedule for a loan that may have started before the base month.

    A negative ``start_index`` is handled by building the schedule from the
    loan's true start over a longer horizon and slicing out the projected window,
    so the balance at index 0 reflects the payments already made.
    """
    if start_index >= 0:
        return compute_mortgage_schedule(
            principal, annual_rate, term_months, start_index, horizon_months
        )

    offset = -int(start_index)
    expanded = compute_mortgage_schedule(
        principal, annual_rate, term_months, 0, horizon_months + offset
    )
    window = slice(offset, offset + horizon_months)
    return MortgageSchedule(
        expanded.payment_monthly,
        expanded.interest_series[window],
        expanded.principal_series[window],
        expanded.balance_series[window],
    )
