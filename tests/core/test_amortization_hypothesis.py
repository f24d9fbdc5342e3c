"""
Property-based tests using Hypothesis for amortization invariants.
"""

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from finplanlab.core.amortization import (
    apply_amortization_month,
    calc_fixed_monthly_payment,
    compute_mortgage_schedule,
)

principal_strategy = st.floats(
    min_value=1_000.0, max_value=5_000_000.0, allow_nan=False, allow_infinity=False
)
rate_strategy = st.floats(
    min_value=0.0, max_value=0.15, allow_nan=False, allow_infinity=False
)
term_strategy = st.integers(min_value=1, max_value=480)


class TestAmortizationProperties:
    """Invariants of level-payment schedules for any principal, rate and term."""

    @settings(max_examples=75, deadline=None)
    @given(principal=principal_strategy, annual_rate=rate_strategy, term=term_strategy)
    def test_schedule_balance_non_increasing_and_repaid(self, principal, annual_rate, term):
        schedule = compute_mortgage_schedule(principal, annual_rate, term, 0, term)

        assert np.all(np.diff(schedule.balance_series) <= 1e-6)
        assert schedule.balance_series[-1] == pytest.approx(0.0, abs=1e-4 * principal)

    @settings(max_examples=75, deadline=None)
    @given(principal=principal_strategy, annual_rate=rate_strategy, term=term_strategy)
    def test_principal_paid_sums_to_principal(self, principal, annual_rate, term):
        schedule = compute_mortgage_schedule(principal, annual_rate, term, 0, term)

        assert schedule.principal_series.sum() == pytest.approx(principal, rel=1e-6)
        assert np.all(schedule.interest_series >= 0)

    @settings(max_examples=100, deadline=None)
    @given(
        outstanding=principal_strategy,
        annual_rate=rate_strategy,
        payment=st.floats(min_value=0.0, max_value=1e6, allow_nan=False),
    )
    def test_single_step_clamps(self, outstanding, annual_rate, payment):
        step = apply_amortization_month(outstanding, annual_rate / 12, payment)

        assert 0.0 <= step.principal_paid <= outstanding
        assert step.next_outstanding >= 0.0
        if payment >= step.interest:
            assert step.next_outstanding <= outstanding + 1e-9

    @settings(max_examples=50, deadline=None)
    @given(principal=principal_strategy, term=term_strategy)
    def test_zero_rate_payment_is_straight_line(self, principal, term):
        assert calc_fixed_monthly_payment(principal, 0.0, term) == pytest.approx(
            principal / term
        )
