"""
Cashflow event expansion (recurring and one-time amounts).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from finplanlab.core.growth import grown_recurring_series
from finplanlab.core.specs import CashflowEvent
from finplanlab.core.utils import month_index


def expand_event_to_series(
    event: CashflowEvent | Mapping[str, Any], base_month: str, horizon_months: int
) -> np.ndarray:
    """
    Expand one event into a signed monthly series over the horizon.

    The recurring amount is written for every month in the event's window
    (clamped to the horizon) and grows as ``(1 + g) ** (m / 12)`` where ``m``
    counts months since the event's start month. The one-time amount is added
    once, in the start month, provided that month lies inside the horizon.

    Args:
        event: The event (a CashflowEvent or a plain mapping)
        base_month: Month index 0 of the horizon
        horizon_months: Length of the returned series

    Returns:
        Array of length ``horizon_months``; all zeros for disabled events and
        for windows that fall entirely outside the horizon

    **Example:**
        ```python
        ev = CashflowEvent(start_month="2026-01", monthly_amount=-1000,
                           annual_growth_pct=0.10)
        s = expand_event_to_series(ev, "2026-01", 25)
        # s[0] == -1000, s[12] ~= -1100, s[24] ~= -1210
        ```
    """
    if not isinstance(event, CashflowEvent):
        event = CashflowEvent.from_dict(event)

    T = max(0, int(horizon_months))
    series = np.zeros(T)
    if not event.enabled or T == 0:
        return series

    start = month_index(base_month, event.start_month)
    end = T - 1 if event.end_month is None else month_index(base_month, event.end_month)
    first = max(0, start)
    last = min(T - 1, end)
    if first > last:
        return series

    series += grown_recurring_series(
        event.monthly_amount,
        event.annual_growth_pct or 0.0,
        start,
        T,
        end_index=last,
    )
    if start == first:
        series[start] += event.one_time_amount
    return series


def event_key(event: CashflowEvent, index: int) -> str:
    """Breakdown key of an event: its id, else its type, else ``event-N``."""
    return f"event:{event.id or event.type or f'event-{index + 1}'}"
