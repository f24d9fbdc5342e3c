"""
Resolution of missing event growth rates from scenario assumptions.
"""

from __future__ import annotations

from dataclasses import replace

from .specs import CashflowEvent, EventAssumptions


def apply_event_assumption_fallbacks(
    event: CashflowEvent, assumptions: EventAssumptions | None
) -> CashflowEvent:
    """
    Fill a missing ``annual_growth_pct`` from the scenario assumptions.

    An event that already carries a growth rate is returned unchanged. Otherwise:
    ``rent`` events use ``rent_annual_growth_pct`` (falling back to
    ``inflation_rate``) and ``salary`` events use ``salary_growth_rate``. Other
    types keep whatever was present, possibly None (expanded as 0% growth).

    Returns:
        The same event, or a copy with the resolved growth rate
    """
    if event.annual_growth_pct is not None or assumptions is None:
        return event

    growth: float | None = None
    if event.type == "rent":
        growth = assumptions.rent_annual_growth_pct
        if growth is None:
            growth = assumptions.inflation_rate
    elif event.type == "salary":
        growth = assumptions.salary_growth_rate

    if growth is None:
        return event
    return replace(event, annual_growth_pct=growth)
