"""Unit tests for chart data building."""

from datetime import datetime, timedelta

import pytest

from equitylens.libraries.performance import (
    EquityCurveChartData,
    EquityCurveEntry,
    build_chart_data,
    build_drawdown_series,
    build_equity_series,
    build_snapshot,
    compute_stats,
)


def _entries_with_values(values: list[float]) -> list[EquityCurveEntry]:
    entries = []
    previous = values[0]
    for offset, value in enumerate(values):
        entries.append(
            EquityCurveEntry(
                date=datetime(2024, 1, 1) + timedelta(days=offset),
                daily_return_pct=(value - previous) / previous if offset and previous else 0.0,
                account_value=value,
                strategy_name="Alpha",
            )
        )
        previous = value
    return entries


class TestEmptyInput:
    """Empty input yields empty collections."""

    def test_build_chart_data_empty(self):
        """Every series is empty and there is no streak data."""
        data = build_chart_data([])

        assert data == EquityCurveChartData()
        assert data.equity_curve == []
        assert data.drawdown_data == []
        assert data.monthly_returns == {}
        assert data.monthly_returns_percent == {}
        assert data.return_distribution == []
        assert data.rolling_metrics == []
        assert data.streak_data is None


class TestEquityAndDrawdownSeries:
    """Equity-with-HWM and drawdown series."""

    def test_equity_series_tracks_high_water_mark(self):
        """Each point carries the running maximum and a 1-based index."""
        points = build_equity_series(_entries_with_values([100.0, 110.0, 99.0, 120.0]))

        assert [p.trade_number for p in points] == [1, 2, 3, 4]
        assert [p.high_water_mark for p in points] == [100.0, 110.0, 110.0, 120.0]
        assert [p.equity for p in points] == [100.0, 110.0, 99.0, 120.0]

    def test_drawdown_series_is_non_positive_percent(self):
        """Drawdown is 0 at highs and negative percent below them."""
        points = build_drawdown_series(_entries_with_values([100.0, 110.0, 99.0, 120.0]))

        assert [p.drawdown_pct for p in points] == pytest.approx([0.0, 0.0, -10.0, 0.0])
        assert all(p.drawdown_pct <= 0 for p in points)

    def test_drawdown_series_zero_when_peak_not_positive(self):
        """No percentage is defined from a non-positive peak."""
        entries = [
            EquityCurveEntry(date=datetime(2024, 1, 1), daily_return_pct=0.0, account_value=-5.0),
            EquityCurveEntry(date=datetime(2024, 1, 2), daily_return_pct=0.0, account_value=-10.0),
        ]

        assert [p.drawdown_pct for p in build_drawdown_series(entries)] == [0.0, 0.0]


class TestDerivedSeries:
    """Distribution, monthly, rolling and streak series."""

    def test_return_distribution_in_chronological_order(self, make_entries):
        """Returns are in percent and follow date order even for unsorted input."""
        entries = make_entries([0.01, -0.02, 0.005])

        data = build_chart_data(list(reversed(entries)))

        assert data.return_distribution == pytest.approx([1.0, -2.0, 0.5])
        assert [p.date for p in data.equity_curve] == [e.date for e in entries]

    def test_monthly_returns_sum_daily_values(self, make_entries):
        """Monthly percent is the linear sum of daily percent."""
        entries = make_entries([0.01, 0.02, -0.005], start=datetime(2024, 1, 30))

        data = build_chart_data(entries)

        assert data.monthly_returns_percent[2024][1] == pytest.approx(3.0)
        assert data.monthly_returns_percent[2024][2] == pytest.approx(-0.5)
        assert data.monthly_returns[2024][2] == pytest.approx(entries[2].account_value * -0.005)

    def test_rolling_metrics_start_at_window_end(self, make_entries):
        """One rolling point per date from the 30th observation on."""
        entries = make_entries([0.01 if i % 3 else -0.01 for i in range(35)])

        data = build_chart_data(entries)

        assert len(data.rolling_metrics) == 6
        assert data.rolling_metrics[0].date == entries[29].date
        assert data.rolling_metrics[-1].date == entries[-1].date

    def test_rolling_metrics_need_a_full_window(self, make_entries):
        """Fewer observations than the window gives no rolling points."""
        data = build_chart_data(make_entries([0.01] * 29))

        assert data.rolling_metrics == []

    def test_rolling_window_is_configurable(self, make_entries):
        """A shorter window produces more points."""
        data = build_chart_data(make_entries([0.01, -0.01, 0.02, 0.01]), rolling_window=2)

        assert len(data.rolling_metrics) == 3

    def test_streak_scenario(self, streak_scenario_entries):
        """Three wins, two losses, one win."""
        data = build_chart_data(streak_scenario_entries)

        assert data.streak_data is not None
        assert data.streak_data.statistics.max_win_streak == 3
        assert data.streak_data.statistics.max_loss_streak == 2
        assert data.streak_data.win_distribution == {3: 1, 1: 1}
        assert data.streak_data.loss_distribution == {2: 1}


class TestSnapshot:
    """Statistics and chart data bundled together."""

    def test_snapshot_matches_separate_calls(self, make_entries):
        """The snapshot is the same as computing each part directly."""
        entries = make_entries([0.01, -0.02, 0.015, 0.0])

        snapshot = build_snapshot(entries, risk_free_rate=3.0)

        assert snapshot.entries == entries
        assert snapshot.portfolio_stats == compute_stats(entries, risk_free_rate=3.0)
        assert snapshot.chart_data == build_chart_data(entries)

    def test_snapshot_passes_annualization(self, make_entries):
        """Annualization and fallback capital reach the statistics."""
        entries = make_entries([0.01, -0.02, 0.015, 0.0])

        snapshot = build_snapshot(entries, periods_per_year=52, initial_capital_fallback=5_000.0)

        expected = compute_stats(entries, periods_per_year=52, initial_capital_fallback=5_000.0)
        assert snapshot.portfolio_stats == expected
        assert snapshot.portfolio_stats.volatility != compute_stats(entries).volatility

    def test_empty_snapshot(self):
        """Empty entries give zero stats and empty chart data."""
        snapshot = build_snapshot([])

        assert snapshot.entries == []
        assert snapshot.portfolio_stats.total_trades == 0
        assert snapshot.chart_data.streak_data is None
