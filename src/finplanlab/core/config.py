"""
Projection settings (KPI policy constants).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectionSettings:
    """
    Policy constants for the summary indicators of a projection.

    Attributes:
        runway_cap_months: Runway reported when month 0 has no net outflow
        high_risk_runway_months: Runway below this is "High" risk
        medium_risk_runway_months: Runway below this (and not High) is "Medium" risk
        year5_index: Month index reported as net worth at year 5 (clamped to the horizon)
    """

    runway_cap_months: int = 999
    high_risk_runway_months: int = 3
    medium_risk_runway_months: int = 6
    year5_index: int = 59

    def __post_init__(self) -> None:
        if self.high_risk_runway_months > self.medium_risk_runway_months:
            raise ValueError(
                "high_risk_runway_months must not exceed medium_risk_runway_months"
            )
        if self.year5_index < 0:
            raise ValueError("year5_index must be >= 0")


DEFAULT_SETTINGS = ProjectionSettings()
