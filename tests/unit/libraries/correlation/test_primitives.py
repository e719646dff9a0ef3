"""Unit tests for pairwise correlation primitives."""

import math

import pytest

from equitylens.libraries.correlation.primitives import (
    beta,
    capm_alpha,
    pearson,
    r_squared,
    rank_with_ties,
    spearman,
    tracking_error,
)


class TestPearson:
    """Test Pearson correlation."""

    def test_perfect_positive(self):
        """Linear relationship gives 1."""
        assert pearson([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        """Inverse linear relationship gives -1."""
        assert pearson([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == pytest.approx(-1.0)

    def test_length_mismatch_is_zero(self):
        """Different lengths are treated as degenerate input."""
        assert pearson([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0

    def test_empty_is_zero(self):
        """Empty input gives 0."""
        assert pearson([], []) == 0.0

    def test_all_zero_is_zero(self):
        """Zero variance gives exactly 0."""
        assert pearson([0.0, 0.0, 0.0], [0.0, 0.0, 0.0]) == 0.0

    def test_constant_series_is_zero(self):
        """One constant side gives 0."""
        assert pearson([0.01, 0.02, 0.03], [0.5, 0.5, 0.5]) == 0.0

    def test_constant_nonzero_series_is_exactly_zero(self):
        """A flat non-zero series gives exactly 0, not rounding noise."""
        assert pearson([0.01, 0.01, 0.01], [0.0, 0.01, 0.02]) == 0.0
        assert spearman([0.01, 0.01, 0.01], [0.0, 0.01, 0.02]) == 0.0

    @pytest.mark.parametrize(
        "x, y",
        [
            ([0.01, -0.02, 0.03, 0.0, 0.015], [0.02, 0.01, -0.01, 0.005, 0.0]),
            ([1e-9, 2e-9, 3e-9], [3e9, 1e9, 2e9]),
            ([0.1, 0.1000001, 0.1000002], [5.0, 5.0000001, 5.0000002]),
        ],
    )
    def test_bounded(self, x, y):
        """Results lie within [-1, 1]."""
        assert -1.0 <= pearson(x, y) <= 1.0


class TestRanking:
    """Test tie-averaged ranking and Spearman."""

    def test_ties_share_average_rank(self):
        """Three tied values at positions 1-3 all get rank 2."""
        assert rank_with_ties([5.0, 5.0, 5.0, 10.0]) == [2.0, 2.0, 2.0, 4.0]

    def test_ranks_follow_input_positions(self):
        """Ranks are reported in input order."""
        assert rank_with_ties([30.0, 10.0, 20.0, 10.0]) == [4.0, 1.5, 3.0, 1.5]

    def test_empty(self):
        """No values, no ranks."""
        assert rank_with_ties([]) == []

    def test_spearman_monotonic_nonlinear(self):
        """A monotonic but non-linear relationship has rank correlation 1."""
        assert spearman([1.0, 2.0, 3.0, 4.0], [1.0, 8.0, 27.0, 64.0]) == pytest.approx(1.0)

    def test_spearman_degenerate(self):
        """Mismatched lengths give 0."""
        assert spearman([1.0], [1.0, 2.0]) == 0.0


class TestBenchmarkPrimitives:
    """Test beta, CAPM alpha, tracking error and R²."""

    def test_beta_of_scaled_series(self):
        """Doubling the benchmark gives beta 2."""
        benchmark = [0.01, -0.02, 0.03, 0.005]
        strategy = [2 * r for r in benchmark]

        assert beta(strategy, benchmark) == pytest.approx(2.0)

    def test_beta_zero_benchmark_variance(self):
        """Flat benchmark gives beta 0."""
        assert beta([0.01, 0.02], [0.5, 0.5]) == 0.0

    @pytest.mark.parametrize("level", [0.001, 0.005, 0.01])
    def test_beta_constant_benchmark_over_a_month(self, level):
        """A flat benchmark of any level gives exactly 0."""
        strategy = [0.01 * ((i % 5) - 2) for i in range(21)]

        assert beta(strategy, [level] * 21) == 0.0

    def test_beta_degenerate(self):
        """Empty input gives beta 0."""
        assert beta([], []) == 0.0

    def test_capm_alpha_annualizes_daily_alpha(self):
        """Daily excess over the CAPM expectation times 252."""
        alpha = capm_alpha(0.001, 0.0005, 1.0, 0.0, 252)

        assert alpha == pytest.approx(0.0005 * 252)

    def test_capm_alpha_with_risk_free_rate(self):
        """Risk-free rate enters both sides of the expectation."""
        alpha = capm_alpha(0.002, 0.001, 0.5, 0.0001, 252)

        expected_daily = 0.002 - (0.0001 + 0.5 * (0.001 - 0.0001))
        assert alpha == pytest.approx(expected_daily * 252)

    def test_tracking_error_of_identical_series(self):
        """Identical series do not deviate."""
        returns = [0.01, -0.02, 0.03]

        assert tracking_error(returns, returns) == 0.0

    def test_tracking_error_of_constant_offset(self):
        """A constant spread has zero deviation."""
        benchmark = [0.25, -0.5, 0.125, 0.0]
        strategy = [r + 0.5 for r in benchmark]

        assert tracking_error(strategy, benchmark) == pytest.approx(0.0, abs=1e-12)

    def test_tracking_error_is_annualized(self):
        """Population std of differences times sqrt(252)."""
        assert tracking_error([0.02, 0.0], [0.0, 0.0]) == pytest.approx(0.01 * math.sqrt(252))

    def test_tracking_error_degenerate(self):
        """Mismatched lengths give 0."""
        assert tracking_error([0.01], [0.01, 0.02]) == 0.0

    def test_r_squared(self):
        """R² is the squared correlation."""
        assert r_squared(-0.5) == pytest.approx(0.25)
