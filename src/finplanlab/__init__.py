"""
FinPlanLab - Month-by-Month Personal Finance Projections

FinPlanLab projects a household's cash balance, assets, liabilities and net
worth over a fixed horizon of months, from a set of cashflow events and
structured positions (homes, loans, investments, cars, insurance policies).

Key Features:
- **Strategy Pattern**: Each position kind is expanded by the strategy registered
  for its 'kind' discriminator, not by inheritance
- **Pure and Deterministic**: A projection is a single pass over plain input;
  nothing is mutated and no state survives between calls
- **Explicit Ledger**: Every cashflow, asset and liability contribution is kept
  under its own breakdown key
- **Lenient Input, Strict Shape**: Missing optional fields default to neutral
  values; malformed months or horizons fail fast with ConfigError

Quick Start:
    ```python
    from finplanlab import compute_projection

    result = compute_projection({
        "baseMonth": "2026-01",
        "horizonMonths": 60,
        "initialCash": 20000,
        "events": [
            {"type": "salary", "startMonth": "2026-01", "monthlyAmount": 4000},
            {"type": "rent", "startMonth": "2026-01", "monthlyAmount": -1500},
        ],
        "positions": {
            "investments": [{"startMonth": "2026-01", "initialValue": 5000,
                             "annualReturnRate": 0.05, "monthlyContribution": 500}],
        },
    })
    print(result.risk_level, result.net_worth_year5)
    df = result.to_frame()
    ```

Available Position Kinds:
    - 'p.home': New purchase or existing home, optional mortgage and rental income
    - 'p.loan': Amortizing loan with optional payment override
    - 'p.investment': Compounding portfolio with contributions and withdrawals
    - 'p.car': Depreciating vehicle with running costs and optional car loan
    - 'p.insurance': Premium-paying policy with optional cash value
"""

# Version information
__version__ = "0.1.0"
__author__ = "FinPlanLab Team"
__description__ = "Month-by-month personal finance projections"

# Import core components for easy access
import finplanlab.strategies

from .core import (
    ConfigError,
    EventAssumptions,
    FinPlanWarning,
    MonthFormatError,
    ProjectionInput,
    ProjectionResult,
    ProjectionSettings,
    RiskLevel,
    apply_default_sign,
    apply_event_assumption_fallbacks,
    build_month_range,
    calc_fixed_monthly_payment,
    compute_home_value_series,
    compute_mortgage_schedule,
    compute_projection,
    month_index,
    normalize_month,
)

# Import KPI utilities
from .kpi import classify_risk, lowest_point, max_drawdown, net_worth_at, runway_months
from .strategies import PositionRegistry, expand_event_to_series

# Define what gets imported with "from finplanlab import *"
__all__ = [
    # Orchestrator and I/O types
    "compute_projection",
    "ProjectionInput",
    "ProjectionResult",
    "ProjectionSettings",
    "EventAssumptions",
    "RiskLevel",
    # Primitives
    "calc_fixed_monthly_payment",
    "compute_mortgage_schedule",
    "compute_home_value_series",
    "expand_event_to_series",
    "apply_event_assumption_fallbacks",
    "apply_default_sign",
    "month_index",
    "build_month_range",
    "normalize_month",
    # KPI utilities
    "lowest_point",
    "runway_months",
    "net_worth_at",
    "classify_risk",
    "max_drawdown",
    # Registry
    "PositionRegistry",
    # Errors
    "ConfigError",
    "MonthFormatError",
    "FinPlanWarning",
]
