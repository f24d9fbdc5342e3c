"""
Tests for month arithmetic utilities.
"""

import numpy as np
import pytest

from finplanlab.core.errors import ConfigError, MonthFormatError
from finplanlab.core.utils import (
    add_months,
    build_month_range,
    month_index,
    month_range,
    normalize_month,
    parse_month,
)


class TestParseMonth:
    def test_parses_valid_month(self):
        assert parse_month("2026-03") == (2026, 3)

    @pytest.mark.parametrize("bad", ["2026-3", "2026-13", "2026-00", "26-01", "2026/01", "", None])
    def test_rejects_malformed_months(self, bad):
        with pytest.raises(MonthFormatError):
            parse_month(bad)

    def test_month_format_error_is_config_and_value_error(self):
        with pytest.raises(ConfigError):
            parse_month("nope")
        with pytest.raises(ValueError):
            parse_month("nope")


class TestNormalizeMonth:
    def test_pads_single_digit_month(self):
        assert normalize_month("2026-3") == "2026-03"

    def test_passes_through_normalized_value(self):
        assert normalize_month("2026-11") == "2026-11"

    def test_rejects_out_of_range_month(self):
        with pytest.raises(MonthFormatError):
            normalize_month("2026-13")


class TestMonthOffsets:
    def test_month_index_positive_and_negative(self):
        assert month_index("2025-01", "2025-01") == 0
        assert month_index("2025-01", "2026-03") == 14
        assert month_index("2025-01", "2024-12") == -1
        assert month_index("2025-01", "1995-01") == -360

    def test_add_months_crosses_year_boundaries(self):
        assert add_months("2025-11", 2) == "2026-01"
        assert add_months("2025-01", -1) == "2024-12"
        assert add_months("2025-06", -18) == "2023-12"

    def test_add_months_inverts_month_index(self):
        for offset in (-500, -13, -1, 0, 1, 11, 12, 240):
            assert month_index("2025-07", add_months("2025-07", offset)) == offset

    def test_build_month_range(self):
        assert build_month_range("2025-11", 3) == ["2025-11", "2025-12", "2026-01"]
        assert build_month_range("2025-11", 0) == []

    def test_month_range_numpy_axis(self):
        axis = month_range("2025-11", 3)
        assert axis.dtype == np.dtype("datetime64[M]")
        assert [str(m) for m in axis] == ["2025-11", "2025-12", "2026-01"]
