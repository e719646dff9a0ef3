"""Cross-strategy correlation analytics.

1. **Primitives** (`primitives.py`): Pearson, Spearman, beta, CAPM alpha,
   tracking error, R²
2. **Alignment** (`alignment.py`): Shared date axis under a chosen policy
3. **Matrix** (`matrix.py`): Correlation matrix, diversification analytics,
   benchmark fit

Usage:
    >>> from equitylens.libraries.correlation import build_correlation_matrix, analyze_correlations
    >>> matrix = build_correlation_matrix(entries, method="spearman")
    >>> analytics = analyze_correlations(matrix)
    >>> print(f"Diversification: {analytics.diversification_score:.2f}")
"""

from equitylens.libraries.correlation.alignment import align_returns, group_by_strategy
from equitylens.libraries.correlation.matrix import (
    analyze_correlations,
    build_correlation_matrix,
    correlate_strategies_to_benchmark,
    correlate_to_benchmark,
)
from equitylens.libraries.correlation.models import (
    AlignedReturns,
    AlignmentPolicy,
    BenchmarkCorrelation,
    CorrelationAnalytics,
    CorrelationMatrix,
    CorrelationMethod,
    CorrelationPair,
    ExtremePair,
    StrategyBenchmarkCorrelation,
)
from equitylens.libraries.correlation.primitives import (
    beta,
    capm_alpha,
    pearson,
    r_squared,
    rank_with_ties,
    spearman,
    tracking_error,
)

__all__ = [
    "align_returns",
    "group_by_strategy",
    "analyze_correlations",
    "build_correlation_matrix",
    "correlate_strategies_to_benchmark",
    "correlate_to_benchmark",
    "AlignedReturns",
    "AlignmentPolicy",
    "BenchmarkCorrelation",
    "CorrelationAnalytics",
    "CorrelationMatrix",
    "CorrelationMethod",
    "CorrelationPair",
    "ExtremePair",
    "StrategyBenchmarkCorrelation",
    "beta",
    "capm_alpha",
    "pearson",
    "r_squared",
    "rank_with_ties",
    "spearman",
    "tracking_error",
]
