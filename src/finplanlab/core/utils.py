"""
Month arithmetic utilities for FinPlanLab.

All month values are calendar months written as ``YYYY-MM`` strings. Offsets are
computed on whole months, never on floating-point durations, so they are exact
for any sign and magnitude.
"""

from __future__ import annotations

import re

import numpy as np

from .errors import MonthFormatError

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_LOOSE_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


def parse_month(value: str) -> tuple[int, int]:
    """
    Parse a strict ``YYYY-MM`` month string into ``(year, month)``.

    Raises:
        MonthFormatError: If the string is malformed or the month is outside 1..12
    """
    if not isinstance(value, str):
        raise MonthFormatError(f"Invalid month format: {value!r}")
    match = _MONTH_RE.match(value)
    if not match:
        raise MonthFormatError(f"Invalid month format: {value!r}")
    year = int(match.group(1))
    month = int(match.group(2))
    if month < 1 or month > 12:
        raise MonthFormatError(f"Invalid month value: {value!r}")
    return year, month


def normalize_month(value: str) -> str:
    """
    Normalize a loose ``YYYY-M`` month string to ``YYYY-0M``.

    ``"2026-3"`` becomes ``"2026-03"``; already-normalized values pass through.

    Raises:
        MonthFormatError: If the value cannot be read as a month or is out of range
    """
    if not isinstance(value, str):
        raise MonthFormatError(f"Invalid month format: {value!r}")
    match = _LOOSE_MONTH_RE.match(value)
    if not match:
        raise MonthFormatError(f"Invalid month format: {value!r}")
    year = int(match.group(1))
    month = int(match.group(2))
    if month < 1 or month > 12:
        raise MonthFormatError(f"Invalid month value: {value!r}")
    return f"{year:04d}-{month:02d}"


def month_index(base_month: str, target_month: str) -> int:
    """Return the offset in months from base_month to target_month (negative if earlier)."""
    base_year, base_m = parse_month(base_month)
    target_year, target_m = parse_month(target_month)
    return (target_year - base_year) * 12 + (target_m - base_m)


def add_months(base_month: str, offset: int) -> str:
    """Return the month ``offset`` months after base_month (before it if negative)."""
    year, month = parse_month(base_month)
    total = year * 12 + (month - 1) + int(offset)
    return f"{total // 12:04d}-{total % 12 + 1:02d}"


def build_month_range(base_month: str, count: int) -> list[str]:
    """
    Build ``count`` consecutive month strings starting at base_month.

    **Example:**
        ```python
        build_month_range("2025-11", 3)
        # ['2025-11', '2025-12', '2026-01']
        ```
    """
    return [add_months(base_month, i) for i in range(max(0, int(count)))]


def month_range(base_month: str, months: int) -> np.ndarray:
    """
    Generate a numpy month axis starting from base_month.

    **Use Cases:**
    - Vectorized date handling alongside the string month axis
    - Building pandas indices for exported projections

    **Args:**
        base_month: First month of the range (``YYYY-MM``)
        months: Number of months to generate

    **Returns:**
        A numpy array of ``datetime64[M]`` values
    """
    parse_month(base_month)
    s = np.datetime64(base_month, "M")
    return s + np.arange(max(0, int(months))).astype("timedelta64[M]")
