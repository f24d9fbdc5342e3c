"""
Timeline milestone records emitted by position strategies.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Optional


class TimelineEvent(NamedTuple):
    """
    Dated milestone produced while simulating a position.

    Timeline events describe notable occurrences (a purchase, a loan paid off)
    and carry no cash effect of their own; amounts live in the series.

    Attributes:
        month: The month when the milestone occurred (``YYYY-MM``)
        kind: Milestone type identifier (e.g., 'purchase', 'loan_start', 'paid_off')
        message: Human-readable description
        meta: Optional dictionary with additional metadata
    """

    month: str
    kind: str
    message: str
    meta: Optional[dict[str, Any]] = None
