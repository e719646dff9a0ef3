"""Analytics configuration.

One configuration object for every tunable constant of the analytics engine.
The engine functions never read this object themselves; callers (the CLI, an
application service) load it once and pass the values they need.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from equitylens.system.log_system import LoggingConfig


class AnalyticsConfig(BaseModel):
    """Tunable constants for statistics, chart data and correlation analytics.

    Example YAML:

        analytics:
          risk_free_rate: 4.5
          rolling_window: 20
          correlation_method: spearman
          logging:
            level: DEBUG
    """

    risk_free_rate: float = Field(
        default=2.0,
        description="Annual risk-free rate in percent (2.0 = 2%)",
    )
    initial_capital_fallback: float = Field(
        default=10_000.0,
        description="Initial capital used when it cannot be backed out of the first entry",
    )
    trading_days_per_year: int = Field(
        default=252,
        description="Periods per year used to annualize daily statistics",
    )
    rolling_window: int = Field(
        default=30,
        description="Number of observations in each rolling-metrics window",
    )
    correlation_method: Literal["pearson", "spearman"] = Field(
        default="pearson",
        description="Correlation method for strategy matrices",
    )
    high_correlation_threshold: float = Field(
        default=0.7,
        description="Pairs with |corr| above this are reported as highly correlated",
    )
    low_correlation_threshold: float = Field(
        default=0.3,
        description="Pairs with |corr| below this are reported as uncorrelated",
    )
    max_pair_results: int = Field(
        default=10,
        description="Maximum number of pairs kept in each pair list",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    @field_validator("trading_days_per_year", "rolling_window", "max_pair_results")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Counts must be strictly positive."""
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v

    @field_validator("initial_capital_fallback")
    @classmethod
    def validate_capital(cls, v: float) -> float:
        """Fallback capital must be positive."""
        if v <= 0:
            raise ValueError(f"initial_capital_fallback must be positive, got {v}")
        return v

    @field_validator("high_correlation_threshold", "low_correlation_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Thresholds are absolute correlation values."""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"correlation threshold must be within [0, 1], got {v}")
        return v

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "AnalyticsConfig":
        """Low threshold cannot exceed the high threshold."""
        if self.low_correlation_threshold > self.high_correlation_threshold:
            raise ValueError(
                "low_correlation_threshold "
                f"({self.low_correlation_threshold}) exceeds high_correlation_threshold "
                f"({self.high_correlation_threshold})"
            )
        return self

    @classmethod
    def from_yaml(cls, path: Path) -> "AnalyticsConfig":
        """Load configuration from the `analytics` section of a YAML file."""
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data.get("analytics", {}))
