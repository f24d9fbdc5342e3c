"""
Core module for FinPlanLab.

This module contains the building blocks of the projection engine: month
arithmetic, amortization and growth primitives, input specs, results and the
projection orchestrator.
"""

from .amortization import (
    AmortizationStep,
    MortgageSchedule,
    apply_amortization_month,
    calc_fixed_monthly_payment,
    compute_mortgage_schedule,
    compute_mortgage_schedule_with_offset,
)
from .catalog import (
    EVENT_CATALOG,
    apply_default_sign,
    get_event_group,
    get_event_meta,
    list_event_types_by_group,
)
from .config import DEFAULT_SETTINGS, ProjectionSettings
from .context import ProjectionContext
from .errors import ConfigError, FinPlanWarning, MonthFormatError
from .fallbacks import apply_event_assumption_fallbacks
from .growth import compute_home_value_series, monthly_rate_from_annual
from .interfaces import IPositionStrategy
from .kinds import K
from .projection import compute_projection
from .results import (
    AssetSeries,
    Breakdown,
    LiabilitySeries,
    LowestPoint,
    PositionOutput,
    ProjectionResult,
    RiskLevel,
)
from .specs import (
    CarLoan,
    CarPosition,
    CashflowEvent,
    EventAssumptions,
    ExistingHome,
    HomePosition,
    InsurancePosition,
    InvestmentPosition,
    LoanPosition,
    MortgageTerms,
    PositionsInput,
    ProjectionInput,
    RentalIncome,
)
from .timeline import TimelineEvent
from .utils import (
    add_months,
    build_month_range,
    month_index,
    month_range,
    normalize_month,
    parse_month,
)

__all__ = [
    # Errors
    "ConfigError",
    "MonthFormatError",
    "FinPlanWarning",
    # Month utilities
    "parse_month",
    "normalize_month",
    "month_index",
    "add_months",
    "build_month_range",
    "month_range",
    # Amortization and growth
    "AmortizationStep",
    "MortgageSchedule",
    "calc_fixed_monthly_payment",
    "apply_amortization_month",
    "compute_mortgage_schedule",
    "compute_mortgage_schedule_with_offset",
    "compute_home_value_series",
    "monthly_rate_from_annual",
    # Specs
    "CashflowEvent",
    "EventAssumptions",
    "MortgageTerms",
    "ExistingHome",
    "RentalIncome",
    "HomePosition",
    "LoanPosition",
    "InvestmentPosition",
    "CarLoan",
    "CarPosition",
    "InsurancePosition",
    "PositionsInput",
    "ProjectionInput",
    # Catalog and fallbacks
    "EVENT_CATALOG",
    "get_event_meta",
    "get_event_group",
    "list_event_types_by_group",
    "apply_default_sign",
    "apply_event_assumption_fallbacks",
    # Context, results and settings
    "K",
    "ProjectionContext",
    "IPositionStrategy",
    "PositionOutput",
    "ProjectionResult",
    "AssetSeries",
    "LiabilitySeries",
    "Breakdown",
    "LowestPoint",
    "RiskLevel",
    "TimelineEvent",
    "ProjectionSettings",
    "DEFAULT_SETTINGS",
    # Orchestrator
    "compute_projection",
]
