"""Chart-ready series derived from one equity curve."""

from typing import Sequence

from equitylens.libraries.performance.calculators import (
    MonthlyReturnsCalculator,
    RollingMetricsCalculator,
    StreakCalculator,
)
from equitylens.libraries.performance.metrics import TRADING_DAYS_PER_YEAR
from equitylens.libraries.performance.models import (
    DrawdownPoint,
    EquityCurveChartData,
    EquityCurveEntry,
    EquityCurvePoint,
    EquityCurveSnapshot,
    RollingMetricPoint,
)
from equitylens.libraries.performance.statistics import compute_stats, sort_entries


def build_equity_series(sorted_entries: Sequence[EquityCurveEntry]) -> list[EquityCurvePoint]:
    """Equity values paired with the running high-water mark and a 1-based index."""
    points: list[EquityCurvePoint] = []
    if not sorted_entries:
        return points

    high_water_mark = sorted_entries[0].account_value
    for index, entry in enumerate(sorted_entries, start=1):
        high_water_mark = max(high_water_mark, entry.account_value)
        points.append(
            EquityCurvePoint(
                date=entry.date,
                equity=entry.account_value,
                high_water_mark=high_water_mark,
                trade_number=index,
            )
        )
    return points


def build_drawdown_series(sorted_entries: Sequence[EquityCurveEntry]) -> list[DrawdownPoint]:
    """
    Percentage drawdown from the running high-water mark.

    Values are non-positive percent (-5.0 = 5% below the peak), 0 at a new
    high and 0 whenever the high-water mark is not positive.
    """
    points: list[DrawdownPoint] = []
    if not sorted_entries:
        return points

    high_water_mark = sorted_entries[0].account_value
    for entry in sorted_entries:
        high_water_mark = max(high_water_mark, entry.account_value)
        if high_water_mark > 0:
            drawdown_pct = (entry.account_value - high_water_mark) / high_water_mark * 100
        else:
            drawdown_pct = 0.0
        points.append(DrawdownPoint(date=entry.date, drawdown_pct=drawdown_pct))
    return points


def build_chart_data(
    entries: Sequence[EquityCurveEntry],
    rolling_window: int = 30,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> EquityCurveChartData:
    """
    Build every chart series for one equity curve.

    Args:
        entries: Observations of a single series, in any order
        rolling_window: Observations per rolling-metrics window
        periods_per_year: Annualization factor for rolling Sharpe and volatility

    Returns:
        EquityCurveChartData; empty collections and no streak data for an
        empty series
    """
    if not entries:
        return EquityCurveChartData()

    sorted_entries = sort_entries(entries)

    monthly = MonthlyReturnsCalculator()
    rolling = RollingMetricsCalculator(window=rolling_window, periods_per_year=periods_per_year)
    streaks = StreakCalculator()
    rolling_metrics: list[RollingMetricPoint] = []

    for entry in sorted_entries:
        monthly.update(entry.date, entry.account_value, entry.daily_return_pct)
        streaks.update(entry.daily_return_pct)
        point = rolling.update(entry.date, entry.daily_return_pct)
        if point is not None:
            rolling_metrics.append(point)

    return EquityCurveChartData(
        equity_curve=build_equity_series(sorted_entries),
        drawdown_data=build_drawdown_series(sorted_entries),
        monthly_returns=monthly.monthly_returns,
        monthly_returns_percent=monthly.monthly_returns_percent,
        return_distribution=[e.daily_return_pct * 100 for e in sorted_entries],
        rolling_metrics=rolling_metrics,
        streak_data=streaks.to_streak_data(),
    )


def build_snapshot(
    entries: Sequence[EquityCurveEntry],
    risk_free_rate: float = 2.0,
    rolling_window: int = 30,
    initial_capital_fallback: float = 10_000.0,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> EquityCurveSnapshot:
    """Compute statistics and chart data for the same entries."""
    return EquityCurveSnapshot(
        entries=list(entries),
        portfolio_stats=compute_stats(
            entries,
            risk_free_rate=risk_free_rate,
            initial_capital_fallback=initial_capital_fallback,
            periods_per_year=periods_per_year,
        ),
        chart_data=build_chart_data(entries, rolling_window=rolling_window, periods_per_year=periods_per_year),
    )
