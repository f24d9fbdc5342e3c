"""
Flow helpers for cashflow events.
"""

from .events import event_key, expand_event_to_series

__all__ = [
    "expand_event_to_series",
    "event_key",
]
