"""
Projection orchestrator: events and positions in, ProjectionResult out.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import numpy as np

from .config import DEFAULT_SETTINGS, ProjectionSettings
from .context import ProjectionContext
from .errors import ConfigError
from .fallbacks import apply_event_assumption_fallbacks
from .interfaces import IPositionStrategy
from .kinds import ASSET_BUCKETS, LIABILITY_BUCKETS
from .results import AssetSeries, Breakdown, LiabilitySeries, ProjectionResult
from .specs import EventAssumptions, Position, ProjectionInput
from .timeline import TimelineEvent
from .utils import build_month_range

logger = logging.getLogger(__name__)


def compute_projection(
    projection_input: ProjectionInput | Mapping[str, Any],
    assumptions: EventAssumptions | Mapping[str, Any] | None = None,
    settings: ProjectionSettings | None = None,
) -> ProjectionResult:
    """
    Project cash, assets, liabilities and net worth month by month.

    The computation is a single pure pass: events are expanded (after filling
    missing growth rates from ``assumptions``), every position is expanded by
    the strategy registered for its kind, and the contributions are summed into
    the cash balance, asset and liability buckets and net worth.

    Args:
        projection_input: A ProjectionInput, or a mapping with camelCase or
            snake_case keys (normalized and validated first)
        assumptions: Optional growth assumptions for events without a growth rate
        settings: KPI policy constants; defaults to DEFAULT_SETTINGS

    Returns:
        ProjectionResult covering ``horizon_months`` months from ``base_month``

    Raises:
        ConfigError: If the input is malformed (before any computation happens)

    **Example:**
        ```python
        result = compute_projection({
            "baseMonth": "2026-01",
            "horizonMonths": 12,
            "initialCash": 5000,
            "events": [{"type": "salary", "startMonth": "2026-01",
                        "monthlyAmount": 3000}],
        })
        result.cash_balance[-1]  # 41000.0
        ```
    """
    if not isinstance(projection_input, ProjectionInput):
        projection_input = ProjectionInput.from_dict(projection_input)
    if assumptions is not None and not isinstance(assumptions, EventAssumptions):
        assumptions = EventAssumptions.from_dict(assumptions)
    settings = settings or DEFAULT_SETTINGS

    ctx = _create_context(projection_input)
    T = ctx.horizon_months
    positions = list(projection_input.positions.iter_positions())
    logger.debug(
        "Projecting %d months from %s: %d events, %d positions",
        T,
        ctx.base_month,
        len(projection_input.events),
        len(positions),
    )

    # Imported here: strategies depend on core modules
    from finplanlab.strategies import PositionRegistry, event_key, expand_event_to_series

    breakdown = Breakdown(T)
    for i, event in enumerate(projection_input.events):
        event = apply_event_assumption_fallbacks(event, assumptions)
        breakdown.add_cashflow(
            event_key(event, i), expand_event_to_series(event, ctx.base_month, T)
        )

    strategies = [_strategy_for(p, PositionRegistry) for p in positions]
    for position, strategy in zip(positions, strategies):
        strategy.prepare(position, ctx)

    assets = {bucket: ctx.zeros() for bucket in ("housing", "investments", "cars", "insurance")}
    liabilities = {bucket: ctx.zeros() for bucket in ("mortgage", "loans", "auto")}
    timeline: list[TimelineEvent] = []
    for position, strategy in zip(positions, strategies):
        out = strategy.simulate(position, ctx)
        for key, series in out["cashflow_by_key"].items():
            breakdown.add_cashflow(key, series)
        for key, series in out["assets_by_key"].items():
            breakdown.add_asset(key, series)
        for key, series in out["liabilities_by_key"].items():
            breakdown.add_liability(key, series)
        if position.kind in ASSET_BUCKETS:
            assets[ASSET_BUCKETS[position.kind]] += out["assets"]
        if position.kind in LIABILITY_BUCKETS:
            liabilities[LIABILITY_BUCKETS[position.kind]] += out["liabilities"]
        timeline.extend(out["events"])

    net_cashflow = breakdown.cashflow_totals
    cash_balance = projection_input.initial_cash + np.cumsum(net_cashflow)
    asset_series = AssetSeries(total=sum(assets.values()), **assets)
    liability_series = LiabilitySeries(total=sum(liabilities.values()), **liabilities)
    net_worth = cash_balance + asset_series.total - liability_series.total

    return _finalize(
        ctx,
        settings,
        net_cashflow=net_cashflow,
        cash_balance=cash_balance,
        assets=asset_series,
        liabilities=liability_series,
        net_worth=net_worth,
        breakdown=breakdown,
        timeline=sorted(timeline, key=lambda e: e.month),
    )


def _create_context(projection_input: ProjectionInput) -> ProjectionContext:
    """Build the month axis shared by every strategy."""
    months = build_month_range(projection_input.base_month, projection_input.horizon_months)
    return ProjectionContext(
        base_month=projection_input.base_month,
        horizon_months=projection_input.horizon_months,
        months=tuple(months),
    )


def _strategy_for(
    position: Position, registry: Mapping[str, IPositionStrategy]
) -> IPositionStrategy:
    try:
        return registry[position.kind]
    except KeyError:
        raise ConfigError(
            f"{position.id}: no strategy registered for kind '{position.kind}'"
        ) from None


def _finalize(
    ctx: ProjectionContext,
    settings: ProjectionSettings,
    **series: Any,
) -> ProjectionResult:
    """Attach the summary indicators to the projected series."""
    from finplanlab.kpi import (
        classify_risk,
        lowest_point,
        net_worth_at,
        runway_months,
    )

    lowest_balance = lowest_point(series["cash_balance"], ctx.months)
    runway = runway_months(series["cash_balance"], series["net_cashflow"], settings)
    return ProjectionResult(
        base_month=ctx.base_month,
        months=list(ctx.months),
        lowest_monthly_balance=lowest_balance,
        lowest_net_worth=lowest_point(series["net_worth"], ctx.months),
        runway_months=runway,
        net_worth_year5=net_worth_at(series["net_worth"], settings),
        risk_level=classify_risk(lowest_balance.value, runway, settings),
        **series,
    )
