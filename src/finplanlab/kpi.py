"""
KPI calculation utilities for projection analysis.

This module provides standalone functions for the headline indicators of a
projection: lowest points, runway, year-5 net worth, risk level and drawdown.
The projection orchestrator uses them, and they work equally on the columns of
``ProjectionResult.to_frame()``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import pandas as pd

from finplanlab.core.config import DEFAULT_SETTINGS, ProjectionSettings
from finplanlab.core.results import LowestPoint, RiskLevel


def lowest_point(values: np.ndarray, months: Sequence[str]) -> LowestPoint:
    """
    Minimum of a monthly series with its index and month.

    Ties resolve to the earliest month.
    """
    values = np.asarray(values, dtype=float)
    index = int(np.argmin(values))
    return LowestPoint(float(values[index]), index, months[index])


def runway_months(
    cash_balance: np.ndarray,
    net_cashflow: np.ndarray,
    settings: ProjectionSettings = DEFAULT_SETTINGS,
) -> int:
    """
    Months of month-0 burn that the month-0 cash balance covers.

    Runway = floor(cash_balance[0] / burn) with burn = max(0, -net_cashflow[0]).
    It is ``settings.runway_cap_months`` when month 0 has no net outflow and 0
    when the balance is already exhausted.
    """
    burn = max(0.0, -float(net_cashflow[0]))
    if burn == 0:
        return settings.runway_cap_months
    cash = float(cash_balance[0])
    if cash <= 0:
        return 0
    return int(math.floor(cash / burn))


def net_worth_at(
    net_worth: np.ndarray, settings: ProjectionSettings = DEFAULT_SETTINGS
) -> float:
    """Net worth at ``settings.year5_index``, or at the last month if the horizon is shorter."""
    index = min(settings.year5_index, len(net_worth) - 1)
    return float(net_worth[index])


def classify_risk(
    lowest_balance: float,
    runway: int,
    settings: ProjectionSettings = DEFAULT_SETTINGS,
) -> RiskLevel:
    """
    Liquidity risk of a projection.

    Returns:
        HIGH when the lowest cash balance is negative or the runway is below
        ``high_risk_runway_months``; MEDIUM when the runway is below
        ``medium_risk_runway_months``; LOW otherwise
    """
    if lowest_balance < 0 or runway < settings.high_risk_runway_months:
        return RiskLevel.HIGH
    if runway < settings.medium_risk_runway_months:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def max_drawdown(series_or_df: pd.Series | pd.DataFrame) -> float | pd.Series:
    """
    Calculate maximum drawdown from peak, in absolute terms.

    Drawdown is ``value - running_peak``; the result is its minimum (0 or
    negative). Absolute drawdown stays meaningful for series that cross zero,
    such as net worth.

    Args:
        series_or_df: Series or DataFrame with values to analyze

    Returns:
        A float for a Series; a Series of per-column drawdowns (numeric columns
        only) for a DataFrame
    """
    if isinstance(series_or_df, pd.Series):
        if series_or_df.empty:
            return 0.0
        running_max = series_or_df.expanding().max()
        return float((series_or_df - running_max).min())

    results = {}
    for col in series_or_df.columns:
        if pd.api.types.is_numeric_dtype(series_or_df[col]):
            results[col] = max_drawdown(series_or_df[col])
    return pd.Series(results, name="max_drawdown")
