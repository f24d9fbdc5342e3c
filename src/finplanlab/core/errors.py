"""
Error classes for FinPlanLab.

This module defines the exception and warning classes used throughout FinPlanLab
for reporting invalid projection inputs and legal-but-suspicious configurations.
"""


class ConfigError(Exception):
    """
    Configuration error raised while normalizing a projection input.

    The projection engine never raises for legitimately absent optional fields
    (they default to neutral values). ConfigError is reserved for inputs that
    violate the call contract and would otherwise produce a misleading result.

    **Common Causes:**
    - Non-positive or non-integer horizon
    - Missing required fields (e.g. an event without start_month)
    - Positions of an unknown kind
    - Malformed month strings (see MonthFormatError)

    **Example Usage:**
        ```python
        from finplanlab import compute_projection
        from finplanlab.core.errors import ConfigError

        try:
            compute_projection({"baseMonth": "2026-01", "horizonMonths": 0, "events": []})
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class MonthFormatError(ConfigError, ValueError):
    """Raised when a month string is not a valid calendar month in YYYY-MM form."""


class FinPlanWarning(UserWarning):
    """Warning for configurations that are valid but probably unintended."""
