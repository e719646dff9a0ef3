"""Equity-curve performance analytics.

1. **Models** (`models.py`): Pydantic data structures
   - EquityCurveEntry: One daily account observation
   - PortfolioStats: Statistics snapshot of one series
   - EquityCurveChartData: Chart-ready derived series

2. **Metrics** (`metrics.py`): Pure calculation functions
   - Risk: volatility, population std
   - Risk-adjusted: Sharpe, Sortino, Calmar
   - Day stats: win_rate, profit_factor, expectancy

3. **Calculators** (`calculators.py`): Incremental scans
   - DrawdownCalculator: High-water mark and drawdown episodes
   - StreakCalculator: Win/loss streaks and histograms
   - MonthlyReturnsCalculator: Linear monthly sums
   - RollingMetricsCalculator: Trailing-window metrics

4. **Statistics / Charts** (`statistics.py`, `charts.py`): Entry points
   - compute_stats, build_chart_data, build_snapshot

Usage:
    >>> from equitylens.libraries.performance import compute_stats, build_chart_data
    >>> stats = compute_stats(entries, risk_free_rate=2.0)
    >>> chart = build_chart_data(entries)
    >>> print(f"Sharpe: {stats.sharpe_ratio:.2f}, streak: {chart.streak_data.statistics.current_streak}")

Degenerate input (empty series, single observation, zero variance) never
raises; every affected value is reported as 0.
"""

from equitylens.libraries.performance.calculators import (
    DrawdownCalculator,
    MonthlyReturnsCalculator,
    RollingMetricsCalculator,
    StreakCalculator,
)
from equitylens.libraries.performance.charts import (
    build_chart_data,
    build_drawdown_series,
    build_equity_series,
    build_snapshot,
)
from equitylens.libraries.performance.metrics import (
    calculate_calmar_ratio,
    calculate_expectancy,
    calculate_profit_factor,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_volatility,
    calculate_win_rate,
)
from equitylens.libraries.performance.models import (
    DrawdownPoint,
    EquityCurveChartData,
    EquityCurveEntry,
    EquityCurvePoint,
    EquityCurveSnapshot,
    PortfolioStats,
    RollingMetricPoint,
    StreakData,
    StreakStatistics,
)
from equitylens.libraries.performance.statistics import compute_stats, sort_entries

__all__ = [
    # Calculators
    "DrawdownCalculator",
    "MonthlyReturnsCalculator",
    "RollingMetricsCalculator",
    "StreakCalculator",
    # Entry points
    "build_chart_data",
    "build_drawdown_series",
    "build_equity_series",
    "build_snapshot",
    "compute_stats",
    "sort_entries",
    # Metrics
    "calculate_calmar_ratio",
    "calculate_expectancy",
    "calculate_profit_factor",
    "calculate_sharpe_ratio",
    "calculate_sortino_ratio",
    "calculate_volatility",
    "calculate_win_rate",
    # Models
    "DrawdownPoint",
    "EquityCurveChartData",
    "EquityCurveEntry",
    "EquityCurvePoint",
    "EquityCurveSnapshot",
    "PortfolioStats",
    "RollingMetricPoint",
    "StreakData",
    "StreakStatistics",
]
