"""Pairwise statistics over aligned return vectors.

Every function takes two equal-length sequences whose positions refer to the
same dates. Mismatched lengths, empty input and zero variance are treated as
degenerate input and yield 0.0 instead of raising.

Usage:
    >>> from equitylens.libraries.correlation import primitives
    >>> primitives.rank_with_ties([5.0, 5.0, 5.0, 10.0])
    [2.0, 2.0, 2.0, 4.0]
    >>> primitives.pearson([1.0, 2.0, 3.0], [2.0, 4.0, 6.0])
    1.0
"""

import math
from typing import Sequence

from equitylens.libraries.performance.metrics import (
    TRADING_DAYS_PER_YEAR,
    calculate_mean,
    calculate_population_std,
)


def _is_degenerate(x: Sequence[float], y: Sequence[float]) -> bool:
    return len(x) != len(y) or len(x) == 0


def _is_constant(values: Sequence[float]) -> bool:
    # Exact test; centred moments of a constant series carry rounding noise
    return max(values) == min(values)


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson product-moment correlation.

    Uses the running-sums form
    (n·Σxy − Σx·Σy) / √((n·Σx² − (Σx)²)(n·Σy² − (Σy)²)).

    Returns:
        Correlation in [-1, 1], or 0 for degenerate input or a constant series
    """
    if _is_degenerate(x, y) or _is_constant(x) or _is_constant(y):
        return 0.0

    n = len(x)
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(xi * yi for xi, yi in zip(x, y))
    sum_x2 = sum(xi * xi for xi in x)
    sum_y2 = sum(yi * yi for yi in y)

    numerator = n * sum_xy - sum_x * sum_y
    radicand = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    # Rounding can push a zero-variance product slightly below 0
    if radicand <= 0:
        return 0.0
    denominator = math.sqrt(radicand)
    if denominator == 0:
        return 0.0

    return max(-1.0, min(1.0, numerator / denominator))


def rank_with_ties(values: Sequence[float]) -> list[float]:
    """
    Rank values 1..n, giving tied values the average of their positions.

    Ties are exact float equality.

    Example:
        >>> rank_with_ties([3.0, 1.0, 2.0])
        [3.0, 1.0, 2.0]
    """
    order = sorted(range(len(values)), key=lambda idx: values[idx])
    ranks = [0.0] * len(values)

    i = 0
    while i < len(order):
        j = i
        while j < len(order) and values[order[j]] == values[order[i]]:
            j += 1
        average_rank = (i + j - 1) / 2 + 1
        for k in range(i, j):
            ranks[order[k]] = average_rank
        i = j

    return ranks


def spearman(x: Sequence[float], y: Sequence[float]) -> float:
    """Spearman rank correlation: Pearson over tie-averaged ranks."""
    if _is_degenerate(x, y):
        return 0.0
    return pearson(rank_with_ties(x), rank_with_ties(y))


def beta(strategy_returns: Sequence[float], benchmark_returns: Sequence[float]) -> float:
    """
    Linear beta: cov(strategy, benchmark) / var(benchmark).

    Covariance and variance are both population moments, so the ratio is the
    ordinary least-squares slope. A constant benchmark has zero variance and
    gives 0.
    """
    if _is_degenerate(strategy_returns, benchmark_returns) or _is_constant(benchmark_returns):
        return 0.0

    mean_strategy = calculate_mean(strategy_returns)
    mean_benchmark = calculate_mean(benchmark_returns)
    n = len(benchmark_returns)

    covariance = (
        sum((s - mean_strategy) * (b - mean_benchmark) for s, b in zip(strategy_returns, benchmark_returns)) / n
    )
    variance = sum((b - mean_benchmark) ** 2 for b in benchmark_returns) / n
    if variance == 0:
        return 0.0
    return covariance / variance


def capm_alpha(
    avg_strategy_return: float,
    avg_benchmark_return: float,
    beta_value: float,
    daily_risk_free_rate: float,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Annualized CAPM (Jensen's) alpha.

    Daily alpha = avg_strategy − (rf + β·(avg_benchmark − rf)), multiplied
    by `periods_per_year`.
    """
    expected = daily_risk_free_rate + beta_value * (avg_benchmark_return - daily_risk_free_rate)
    return (avg_strategy_return - expected) * periods_per_year


def tracking_error(
    strategy_returns: Sequence[float],
    benchmark_returns: Sequence[float],
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Annualized population std of the pairwise return differences."""
    if _is_degenerate(strategy_returns, benchmark_returns):
        return 0.0

    differences = [s - b for s, b in zip(strategy_returns, benchmark_returns)]
    return calculate_population_std(differences) * math.sqrt(periods_per_year)


def r_squared(correlation: float) -> float:
    """Coefficient of determination of a single-factor fit."""
    return correlation * correlation
