"""Tests for the IRR solver."""

import math

import numpy as np
import numpy_financial as npf
import pytest

from src.calculations import irr as irr_module
from src.calculations.irr import _bisect, calculate_equity_irr, calculate_irr


class TestCalculateIRR:
    """Tests for the periodic IRR solve."""

    def test_simple_two_period(self):
        """-1000 then +1100 is exactly 10%."""
        assert calculate_irr([-1000, 1100]) == pytest.approx(0.10, abs=1e-7)

    def test_matches_numpy_financial(self):
        cash_flows = [-100, 39, 59, 55, 20]
        assert calculate_irr(cash_flows) == pytest.approx(npf.irr(cash_flows), abs=1e-6)

    def test_negative_rate(self):
        """Getting back less than invested gives a negative rate."""
        rate = calculate_irr([-1000, 500, 400])
        assert rate < 0
        assert rate == pytest.approx(npf.irr([-1000, 500, 400]), abs=1e-6)

    def test_long_monthly_series(self):
        """Thirty months of capital calls then distributions."""
        cash_flows = [-100_000.0] * 24 + [500_000.0] * 6
        assert calculate_irr(cash_flows) == pytest.approx(npf.irr(cash_flows), abs=1e-6)

    def test_all_negative_returns_none(self):
        assert calculate_irr([-100, -200, -300]) is None

    def test_all_positive_returns_none(self):
        assert calculate_irr([100, 200, 300]) is None

    def test_zeros_return_none(self):
        assert calculate_irr([0, 0, 0]) is None

    def test_too_short_returns_none(self):
        assert calculate_irr([-100]) is None
        assert calculate_irr([]) is None

    def test_non_finite_returns_none(self):
        assert calculate_irr([-100, float("nan"), 200]) is None
        assert calculate_irr([-100, float("inf")]) is None


class TestBisection:
    """Tests for the bisection fallback."""

    def test_bisect_finds_root(self):
        assert _bisect(np.array([-1000.0, 1100.0])) == pytest.approx(0.10, abs=1e-6)

    def test_bisect_without_sign_change(self):
        """Both bracket ends on the same side gives None."""
        assert _bisect(np.array([100.0, 100.0])) is None

    def test_falls_back_when_newton_fails(self, monkeypatch):
        """A stalled Newton solve still resolves through bisection."""
        monkeypatch.setattr(irr_module, "_newton", lambda cash_flows, guess: None)

        assert calculate_irr([-1000, 1100]) == pytest.approx(0.10, abs=1e-6)

    def test_fallback_matches_numpy_financial(self, monkeypatch):
        monkeypatch.setattr(irr_module, "_newton", lambda cash_flows, guess: None)
        cash_flows = [-100_000.0] * 24 + [500_000.0] * 6

        assert calculate_irr(cash_flows) == pytest.approx(npf.irr(cash_flows), abs=1e-6)

    def test_both_solvers_failing_returns_none(self, monkeypatch):
        monkeypatch.setattr(irr_module, "_newton", lambda cash_flows, guess: None)
        monkeypatch.setattr(irr_module, "_bisect", lambda cash_flows: None)

        assert calculate_irr([-1000, 1100]) is None
        assert calculate_equity_irr([-1000, 1100]) is None

    def test_series_without_real_root(self):
        """NPV of -100, 300, -300 peaks at -25, so no rate zeroes it."""
        assert calculate_irr([-100, 300, -300]) is None
        assert calculate_equity_irr([-100, 300, -300]) is None


class TestCalculateEquityIRR:
    """Tests for annualized equity IRR."""

    def test_annualizes_monthly_rate(self):
        """1% monthly compounds to about 12.68% a year."""
        irr = calculate_equity_irr([-1000, 1010])
        assert irr == pytest.approx(((1.01 ** 12) - 1) * 100, rel=1e-6)

    def test_no_sign_change(self):
        assert calculate_equity_irr([-1000, -10]) is None
        assert calculate_equity_irr([1000, 10]) is None

    def test_result_is_finite(self):
        irr = calculate_equity_irr([-1, 1_000_000])
        assert irr is None or math.isfinite(irr)
