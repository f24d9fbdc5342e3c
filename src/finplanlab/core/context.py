"""
Context classes for FinPlanLab projections.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .utils import month_index


@dataclass(frozen=True)
class ProjectionContext:
    """
    Context object passed to all position strategies during a projection.

    Attributes:
        base_month: Month index 0 of the projection (``YYYY-MM``)
        horizon_months: Number of simulated months
        months: The month axis as ``YYYY-MM`` strings

    Note:
        The context is created fresh for each projection and is never mutated,
        so strategies can share nothing across calls.
    """

    base_month: str
    horizon_months: int
    months: tuple[str, ...]

    def index_of(self, month: str | None) -> int | None:
        """Offset of ``month`` from the base month, or None when month is None."""
        if month is None:
            return None
        return month_index(self.base_month, month)

    def month_at(self, index: int) -> str:
        """Month string at a horizon index."""
        return self.months[index]

    def in_horizon(self, index: int | None) -> bool:
        return index is not None and 0 <= index < self.horizon_months

    def zeros(self) -> np.ndarray:
        return np.zeros(self.horizon_months)
