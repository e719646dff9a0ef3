"""Cross-strategy correlation matrix, diversification analytics and benchmark fit."""

from datetime import datetime
from typing import Callable, Mapping, Sequence

from equitylens.libraries.correlation import primitives
from equitylens.libraries.correlation.alignment import align_returns, group_by_strategy
from equitylens.libraries.correlation.models import (
    AlignmentPolicy,
    BenchmarkCorrelation,
    CorrelationAnalytics,
    CorrelationMatrix,
    CorrelationMethod,
    CorrelationPair,
    ExtremePair,
    StrategyBenchmarkCorrelation,
)
from equitylens.libraries.performance.metrics import (
    TRADING_DAYS_PER_YEAR,
    calculate_mean,
    daily_risk_free_rate,
)
from equitylens.libraries.performance.models import EquityCurveEntry

EntriesByStrategy = Mapping[str, Sequence[EquityCurveEntry]] | Sequence[EquityCurveEntry]
ReturnSeries = Mapping[datetime, float] | Sequence[EquityCurveEntry]

_ESTIMATORS: dict[CorrelationMethod, Callable[[Sequence[float], Sequence[float]], float]] = {
    CorrelationMethod.PEARSON: primitives.pearson,
    CorrelationMethod.SPEARMAN: primitives.spearman,
}


def _as_groups(entries: EntriesByStrategy) -> Mapping[str, Sequence[EquityCurveEntry]]:
    if isinstance(entries, Mapping):
        return entries
    return group_by_strategy(entries)


def build_correlation_matrix(
    entries_by_strategy: EntriesByStrategy,
    method: CorrelationMethod | str = CorrelationMethod.PEARSON,
    alignment: AlignmentPolicy | str = AlignmentPolicy.COMMON_DATES,
) -> CorrelationMatrix:
    """
    Correlate every pair of strategies over an aligned date axis.

    Args:
        entries_by_strategy: Strategy name -> entries, or a flat entry list
            grouped by `strategy_name`
        method: "pearson" or "spearman"
        alignment: "common" (intersection) or "union" (zero-filled)

    Returns:
        CorrelationMatrix with strategies sorted by name, diagonal exactly 1
        and `[i][j] == [j][i]`

    Raises:
        ValueError: Unknown method or alignment name
    """
    method = CorrelationMethod(method)
    alignment = AlignmentPolicy(alignment)
    estimator = _ESTIMATORS[method]

    aligned = align_returns(_as_groups(entries_by_strategy), alignment)
    strategies = sorted(aligned.returns)
    n = len(strategies)

    data = [[0.0] * n for _ in range(n)]
    for i in range(n):
        data[i][i] = 1.0
        for j in range(i + 1, n):
            value = estimator(aligned.returns[strategies[i]], aligned.returns[strategies[j]])
            data[i][j] = value
            data[j][i] = value

    return CorrelationMatrix(
        strategies=strategies,
        correlation_data=data,
        dates=aligned.dates,
        aligned_returns={name: aligned.returns[name] for name in strategies},
        method=method,
        alignment=alignment,
    )


def analyze_correlations(
    matrix: CorrelationMatrix,
    high_threshold: float = 0.7,
    low_threshold: float = 0.3,
    max_pairs: int = 10,
) -> CorrelationAnalytics:
    """
    Summarize a correlation matrix for diversification review.

    Only the upper triangle is read, so each pair counts once. Ties for the
    strongest or weakest pair keep the first pair in row-major order.

    Args:
        matrix: Matrix from build_correlation_matrix
        high_threshold: Pairs with |corr| above this are highly correlated
        low_threshold: Pairs with |corr| below this are uncorrelated
        max_pairs: Maximum length of each pair list

    Returns:
        CorrelationAnalytics; a neutral result with diversification score 1
        when there are fewer than two strategies
    """
    strategies = matrix.strategies
    n = len(strategies)
    if n < 2:
        return CorrelationAnalytics(strategy_count=n)

    pairs = [
        CorrelationPair(strategy1=strategies[i], strategy2=strategies[j], correlation=matrix.correlation_data[i][j])
        for i in range(n)
        for j in range(i + 1, n)
    ]

    strongest = pairs[0]
    weakest = pairs[0]
    for pair in pairs[1:]:
        if pair.correlation > strongest.correlation:
            strongest = pair
        if pair.correlation < weakest.correlation:
            weakest = pair

    average = calculate_mean([p.correlation for p in pairs])

    highly_correlated = sorted(
        (p for p in pairs if abs(p.correlation) > high_threshold),
        key=lambda p: abs(p.correlation),
        reverse=True,
    )
    uncorrelated = sorted(
        (p for p in pairs if abs(p.correlation) < low_threshold),
        key=lambda p: abs(p.correlation),
    )

    return CorrelationAnalytics(
        strongest=ExtremePair(value=strongest.correlation, pair=(strongest.strategy1, strongest.strategy2)),
        weakest=ExtremePair(value=weakest.correlation, pair=(weakest.strategy1, weakest.strategy2)),
        average_correlation=average,
        max_correlation=strongest.correlation,
        min_correlation=weakest.correlation,
        diversification_score=max(0.0, 1.0 - average),
        strategy_count=n,
        highly_correlated_pairs=highly_correlated[:max_pairs],
        uncorrelated_pairs=uncorrelated[:max_pairs],
    )


def _as_return_map(series: ReturnSeries) -> dict[datetime, float]:
    if isinstance(series, Mapping):
        return dict(series)
    return {entry.date: entry.daily_return_pct for entry in sorted(series, key=lambda e: e.date)}


def correlate_to_benchmark(
    strategy_returns: ReturnSeries,
    benchmark_returns: ReturnSeries,
    annual_risk_free_rate: float = 2.0,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> BenchmarkCorrelation:
    """
    Fit one return series against a benchmark over their common dates.

    Args:
        strategy_returns: Date -> daily return, or entries
        benchmark_returns: Date -> daily return, or entries
        annual_risk_free_rate: Annual risk-free rate in percent
        periods_per_year: Annualization factor for alpha and tracking error

    Returns:
        BenchmarkCorrelation; all zeros when the series share no date
    """
    strategy_map = _as_return_map(strategy_returns)
    benchmark_map = _as_return_map(benchmark_returns)

    common = sorted(set(strategy_map) & set(benchmark_map))
    if not common:
        return BenchmarkCorrelation()

    strategy = [strategy_map[d] for d in common]
    benchmark = [benchmark_map[d] for d in common]

    correlation = primitives.pearson(strategy, benchmark)
    beta_value = primitives.beta(strategy, benchmark)
    alpha = primitives.capm_alpha(
        calculate_mean(strategy),
        calculate_mean(benchmark),
        beta_value,
        daily_risk_free_rate(annual_risk_free_rate, periods_per_year),
        periods_per_year,
    )

    return BenchmarkCorrelation(
        correlation=correlation,
        beta=beta_value,
        alpha=alpha,
        r_squared=primitives.r_squared(correlation),
        tracking_error=primitives.tracking_error(strategy, benchmark, periods_per_year),
        overlapping_days=len(common),
    )


def correlate_strategies_to_benchmark(
    entries_by_strategy: EntriesByStrategy,
    benchmark_returns: ReturnSeries,
    annual_risk_free_rate: float = 2.0,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> list[StrategyBenchmarkCorrelation]:
    """Benchmark fit for every strategy, ordered by strategy name."""
    groups = _as_groups(entries_by_strategy)
    results = []
    for name in sorted(groups):
        fit = correlate_to_benchmark(groups[name], benchmark_returns, annual_risk_free_rate, periods_per_year)
        results.append(StrategyBenchmarkCorrelation(strategy=name, **fit.model_dump()))
    return results
