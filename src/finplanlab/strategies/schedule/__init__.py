"""
Schedule strategies for debt positions.
"""

from .loan import ScheduleLoan

__all__ = [
    "ScheduleLoan",
]
