"""
Compounding helpers shared by valuation strategies.

A single law is used for appreciation, depreciation and cost growth: an annual
rate ``g`` is converted to the equivalent monthly rate ``(1 + g) ** (1/12) - 1``,
so twelve compounded months reproduce exactly one year of ``g``.
"""

from __future__ import annotations

import numpy as np


def monthly_rate_from_annual(annual_rate: float) -> float:
    """Equivalent monthly rate for an annual rate (negative rates depreciate)."""
    return (1 + annual_rate) ** (1 / 12) - 1


def compute_home_value_series(
    purchase_price: float,
    annual_appreciation: float,
    start_index: int,
    horizon_months: int,
) -> np.ndarray:
    """
    Monthly value of an asset bought at ``start_index`` for ``purchase_price``.

    The value equals the purchase price at ``max(0, start_index)`` and compounds
    monthly from there through the end of the horizon. Months before the start
    are 0 (the asset is not owned yet).

    Returns:
        Array of length ``horizon_months``; all zeros when the price or horizon
        is non-positive
    """
    T = max(0, int(horizon_months))
    series = np.zeros(T)
    if purchase_price <= 0 or T == 0:
        return series

    r_m = monthly_rate_from_annual(annual_appreciation)
    start = max(0, int(start_index))
    if start >= T:
        return series

    series[start] = purchase_price
    for t in range(start + 1, T):
        series[t] = series[t - 1] * (1 + r_m)
    return series


def project_value_series(
    initial_value: float,
    annual_rate: float,
    start_index: int,
    horizon_months: int,
) -> np.ndarray:
    """
    Like compute_home_value_series, but rolls the value forward when the asset
    was acquired before the base month.

    For ``start_index >= 0`` the result is identical to
    compute_home_value_series. For a negative start the value at index 0 is
    ``initial_value * (1 + r_m) ** (-start_index)``.
    """
    if start_index >= 0:
        return compute_home_value_series(
            initial_value, annual_rate, start_index, horizon_months
        )

    T = max(0, int(horizon_months))
    series = np.zeros(T)
    if initial_value <= 0 or T == 0:
        return series

    r_m = monthly_rate_from_annual(annual_rate)
    series[0] = initial_value * (1 + r_m) ** (-int(start_index))
    for t in range(1, T):
        series[t] = series[t - 1] * (1 + r_m)
    return series


def grown_recurring_series(
    amount_monthly: float,
    annual_growth: float,
    start_index: int,
    horizon_months: int,
    end_index: int | None = None,
) -> np.ndarray:
    """
    Recurring amount compounding at ``(1 + g) ** (m / 12)``.

    ``m`` counts months since ``start_index`` (which may be negative). The
    amount is written for every horizon month in
    ``[max(0, start_index), min(end_index, horizon_months - 1)]``.
    """
    T = max(0, int(horizon_months))
    series = np.zeros(T)
    if T == 0 or amount_monthly == 0:
        return series

    first = max(0, int(start_index))
    last = T - 1 if end_index is None else min(T - 1, int(end_index))
    if first > last:
        return series

    idx = np.arange(first, last + 1)
    series[first : last + 1] = amount_monthly * (1 + annual_growth) ** (
        (idx - start_index) / 12
    )
    return series
