"""Correlation analytics data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CorrelationMethod(str, Enum):
    """Pairwise correlation estimator."""

    PEARSON = "pearson"
    SPEARMAN = "spearman"


class AlignmentPolicy(str, Enum):
    """
    How per-strategy series are put on one date axis.

    COMMON_DATES keeps only dates every strategy reported. ZERO_FILLED_UNION
    keeps every date any strategy reported and uses a 0 return where a
    strategy has no observation ("did not trade", not a loss).
    """

    COMMON_DATES = "common"
    ZERO_FILLED_UNION = "union"


class AlignedReturns(BaseModel):
    """Shared date axis with one return vector per strategy, matching 1:1."""

    model_config = ConfigDict(frozen=True)

    dates: list[datetime] = Field(default_factory=list)
    returns: dict[str, list[float]] = Field(default_factory=dict)


class CorrelationMatrix(BaseModel):
    """
    Square correlation matrix across strategies.

    `correlation_data[i][j]` correlates `strategies[i]` with `strategies[j]`.
    The diagonal is exactly 1 and the matrix is symmetric.
    """

    model_config = ConfigDict(frozen=True)

    strategies: list[str] = Field(default_factory=list)
    correlation_data: list[list[float]] = Field(default_factory=list)
    dates: list[datetime] = Field(default_factory=list)
    aligned_returns: dict[str, list[float]] = Field(default_factory=dict)
    method: CorrelationMethod = CorrelationMethod.PEARSON
    alignment: AlignmentPolicy = AlignmentPolicy.COMMON_DATES


class CorrelationPair(BaseModel):
    """One distinct strategy pair with its correlation."""

    model_config = ConfigDict(frozen=True)

    strategy1: str
    strategy2: str
    correlation: float


class ExtremePair(BaseModel):
    """Extremal correlation value and the pair that produced it."""

    model_config = ConfigDict(frozen=True)

    value: float
    pair: tuple[str, str]


class CorrelationAnalytics(BaseModel):
    """
    Aggregate diversification analytics of a correlation matrix.

    `strongest`/`weakest` use the algebraic (signed) extremes, not absolute
    values. Both are None with fewer than two strategies.
    """

    model_config = ConfigDict(frozen=True)

    strongest: ExtremePair | None = None
    weakest: ExtremePair | None = None
    average_correlation: float = 0.0
    max_correlation: float = 0.0
    min_correlation: float = 0.0
    diversification_score: float = 1.0
    strategy_count: int = 0
    highly_correlated_pairs: list[CorrelationPair] = Field(default_factory=list)
    uncorrelated_pairs: list[CorrelationPair] = Field(default_factory=list)

    @property
    def avg_correlation(self) -> float:
        """Alias for average_correlation."""
        return self.average_correlation


class BenchmarkCorrelation(BaseModel):
    """Relationship of one return series to a benchmark over their common dates."""

    model_config = ConfigDict(frozen=True)

    correlation: float = 0.0
    beta: float = 0.0
    alpha: float = 0.0  # Annualized
    r_squared: float = 0.0
    tracking_error: float = 0.0  # Annualized
    overlapping_days: int = 0


class StrategyBenchmarkCorrelation(BenchmarkCorrelation):
    """Benchmark relationship labelled with its strategy."""

    strategy: str
