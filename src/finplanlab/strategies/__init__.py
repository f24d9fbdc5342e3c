"""
Strategy implementations for FinPlanLab.

Each position kind ('p.home', 'p.loan', ...) has one strategy that expands a
position into monthly cashflow, asset and liability series. Events are expanded
by the flow helpers.

Strategy Categories:
- Valuation Strategies: homes, investments, cars and insurance (asset value plus
  the cashflows and debts attached to it)
- Schedule Strategies: amortizing loans
- Flow helpers: recurring and one-time cashflow events

Registry System:
The module registers all default strategies in PositionRegistry when imported,
so the projection orchestrator can dispatch on a position's kind.
"""

from .flow import event_key, expand_event_to_series
from .registry import PositionRegistry, register_defaults
from .schedule import ScheduleLoan
from .valuation import (
    ValuationCar,
    ValuationHome,
    ValuationInsurance,
    ValuationInvestment,
)

# Register all default strategies when module is imported
register_defaults()

__all__ = [
    # Valuation strategies
    "ValuationHome",
    "ValuationInvestment",
    "ValuationCar",
    "ValuationInsurance",
    # Schedule strategies
    "ScheduleLoan",
    # Flow helpers
    "expand_event_to_series",
    "event_key",
    # Registry
    "PositionRegistry",
    "register_defaults",
]
