"""Tests for Rich report formatters."""

from datetime import datetime

import pytest
from rich.console import Console

from equitylens.libraries.correlation import (
    StrategyBenchmarkCorrelation,
    analyze_correlations,
    build_correlation_matrix,
)
from equitylens.libraries.performance import PortfolioStats, build_chart_data, compute_stats
from equitylens.services.reporting import (
    display_benchmark_report,
    display_correlation_report,
    display_stats_report,
    display_super_block_report,
)
from equitylens.services.reporting.formatters import _format_currency, _format_pct, _get_color
from equitylens.services.superblock import EquityCurveComponent, combine_super_block


@pytest.fixture
def console():
    """Recording console wide enough for every table."""
    return Console(record=True, width=200)


class TestFormatHelpers:
    """Cell formatting."""

    def test_format_pct(self):
        """Fractions render as percentages."""
        assert _format_pct(0.1234) == "12.34%"
        assert _format_pct(-0.05, precision=1) == "-5.0%"

    def test_format_currency(self):
        """Negative amounts put the sign before the dollar."""
        assert _format_currency(1234.5) == "$1,234.50"
        assert _format_currency(-1234.5) == "-$1,234.50"

    @pytest.mark.parametrize("value, color", [(1.0, "green"), (-1.0, "red"), (0.0, "white")])
    def test_get_color(self, value, color):
        """Sign picks the color."""
        assert _get_color(value) == color


class TestStatsReport:
    """Portfolio statistics report."""

    def test_summary_only(self, console, make_entries):
        """Summary level shows returns but not risk."""
        stats = compute_stats(make_entries([0.01, -0.02, 0.015]))

        display_stats_report(stats, detail_level="summary", title="Iron Condor", console=console)
        text = console.export_text()

        assert "Iron Condor" in text
        assert "Total Return" in text
        assert "Sharpe Ratio" not in text

    def test_full_report(self, console, streak_scenario_entries):
        """Full level adds streaks and monthly returns."""
        stats = compute_stats(streak_scenario_entries)
        chart_data = build_chart_data(streak_scenario_entries)

        display_stats_report(stats, chart_data, detail_level="full", console=console)
        text = console.export_text()

        assert "Sharpe Ratio" in text
        assert "Win Rate" in text
        assert "Streaks" in text
        assert "Monthly Returns" in text
        assert "2024" in text
        assert "Avg Margin" in text

    def test_no_losses_profit_factor(self, console, make_entries):
        """Without losing days the profit factor is marked N/A."""
        stats = compute_stats(make_entries([0.01, 0.02]))

        display_stats_report(stats, console=console)

        assert "N/A (no losses)" in console.export_text()

    def test_empty_stats(self, console):
        """All-zero statistics still render."""
        display_stats_report(PortfolioStats(), console=console)
        text = console.export_text()

        assert "$0.00" in text
        assert "Trading Days" not in text


class TestCorrelationReport:
    """Correlation matrix and analytics report."""

    def test_matrix_and_analytics(self, console, make_entries):
        """Strategies, method and diversification score are shown."""
        groups = {
            "Alpha": make_entries([0.01, -0.02, 0.015, 0.005], strategy_name="Alpha"),
            "Beta": make_entries([0.012, -0.018, 0.01, 0.004], strategy_name="Beta"),
        }
        matrix = build_correlation_matrix(groups, method="spearman")

        display_correlation_report(matrix, analyze_correlations(matrix), console=console)
        text = console.export_text()

        assert "spearman" in text
        assert "Alpha" in text and "Beta" in text
        assert "Diversification Score" in text
        assert "4 aligned dates" in text


class TestBenchmarkReport:
    """Benchmark fit report."""

    def test_rows_per_strategy(self, console):
        """Strategies without overlap are marked."""
        results = [
            StrategyBenchmarkCorrelation(strategy="Alpha", correlation=0.5, beta=1.2, overlapping_days=20),
            StrategyBenchmarkCorrelation(strategy="Late"),
        ]

        display_benchmark_report(results, "SPX", console=console)
        text = console.export_text()

        assert "Benchmark: SPX" in text
        assert "1.20" in text
        assert "no overlap" in text


class TestSuperBlockReport:
    """Combined super-block report."""

    def test_components_and_range(self, console):
        """Warnings, components and the combined range are shown."""
        components = [
            EquityCurveComponent(
                block_id=name,
                block_name=name,
                equity_curve_entries=[
                    {"date": datetime(2024, 6, 3), "daily_return_pct": 0.0, "account_value": 100.0},
                    {"date": datetime(2024, 6, 4), "daily_return_pct": 0.1, "account_value": 110.0},
                ],
            )
            for name in ("Put Spreads", "Strangles")
        ]
        data = combine_super_block(components, alignment="union")

        display_super_block_report(data, console=console)
        text = console.export_text()

        assert "forward-fill" in text
        assert "Combined Portfolio" in text
        assert "Put Spreads" in text and "Strangles" in text
        assert "2024-06-03 to 2024-06-04" in text
