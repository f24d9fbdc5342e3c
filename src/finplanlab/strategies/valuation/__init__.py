"""
Valuation strategies for asset-holding positions.
"""

from .car import ValuationCar
from .home import ValuationHome
from .insurance import ValuationInsurance
from .investment import ValuationInvestment

__all__ = [
    "ValuationHome",
    "ValuationInvestment",
    "ValuationCar",
    "ValuationInsurance",
]
