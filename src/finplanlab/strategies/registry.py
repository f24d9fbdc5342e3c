"""
Strategy registry setup for FinPlanLab.
"""

from finplanlab.core.interfaces import IPositionStrategy
from finplanlab.core.kinds import K

# Schedule strategies
from .schedule.loan import ScheduleLoan

# Valuation strategies
from .valuation.car import ValuationCar
from .valuation.home import ValuationHome
from .valuation.insurance import ValuationInsurance
from .valuation.investment import ValuationInvestment

# Global registry mapping position kind to its strategy
PositionRegistry: dict[str, IPositionStrategy] = {}


def register_defaults():
    """
    Register all default strategy implementations in the global registry.

    Registered Strategies:
        - 'p.home': Home with appreciation, mortgage and rental income
        - 'p.loan': Amortizing loan
        - 'p.investment': Compounding portfolio with contributions
        - 'p.car': Depreciating vehicle with optional car loan
        - 'p.insurance': Premium-paying policy with optional cash value

    Note:
        This function is automatically called when the module is imported.
        Additional strategies can be registered by assigning into
        PositionRegistry directly.
    """
    PositionRegistry[K.P_HOME] = ValuationHome()
    PositionRegistry[K.P_INVESTMENT] = ValuationInvestment()
    PositionRegistry[K.P_CAR] = ValuationCar()
    PositionRegistry[K.P_INSURANCE] = ValuationInsurance()

    PositionRegistry[K.P_LOAN] = ScheduleLoan()
