"""Performance analytics data models.

Pydantic models for equity-curve input and the derived statistics and chart
series. Output models are frozen: they are snapshots computed from one input
batch and are never patched afterwards.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EquityCurveEntry(BaseModel):
    """
    One daily observation of a strategy's account.

    `daily_return_pct` is a fraction (0.01 = 1%). `margin_req` units are set by
    the source (absolute dollars or a fraction of equity); the engine only
    averages it within one series.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime
    daily_return_pct: float
    account_value: float
    margin_req: float = 0.0
    strategy_name: str = ""


class PortfolioStats(BaseModel):
    """
    Performance snapshot of one equity-curve series.

    Day-level counts reuse the "trades" vocabulary of trade-based blocks:
    each observation is one "trade". Dollar-valued win/loss fields are the
    per-day return scaled by `initial_capital`.

    `max_drawdown_duration` only reflects drawdown episodes that recovered
    within the series; an episode still open at the end does not count.
    """

    model_config = ConfigDict(frozen=True)

    initial_capital: float = 0.0
    final_capital: float = 0.0
    total_pl: float = 0.0
    net_pl: float = 0.0
    total_return: float = 0.0  # Fraction

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    break_even_trades: int = 0
    win_rate: float = 0.0  # Fraction

    avg_win: float = 0.0
    avg_loss: float = 0.0
    max_win: float = 0.0
    max_loss: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0

    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    annualized_return: float = 0.0  # Fraction
    volatility: float = 0.0  # Annualized fraction

    max_drawdown: float = 0.0  # Currency units
    max_drawdown_pct: float = 0.0  # Fraction in [0, 1]
    max_drawdown_duration: float = 0.0  # Days, closed episodes only
    return_on_max_drawdown: float = 0.0

    max_win_streak: int = 0
    max_loss_streak: int = 0

    avg_daily_pl: float = 0.0
    avg_margin_used: float = 0.0
    max_margin_used: float = 0.0
    total_commissions: float = 0.0

    @property
    def largest_win(self) -> float:
        """Alias for max_win."""
        return self.max_win

    @property
    def largest_loss(self) -> float:
        """Alias for max_loss."""
        return self.max_loss


class EquityCurvePoint(BaseModel):
    """Single point on the equity curve chart."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    equity: float
    high_water_mark: float
    trade_number: int  # 1-based sequence index


class DrawdownPoint(BaseModel):
    """Drawdown from the running high-water mark, in percent (<= 0)."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    drawdown_pct: float


class RollingMetricPoint(BaseModel):
    """Metrics of the trailing window ending at `date`."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    win_rate: float  # Percent
    sharpe_ratio: float
    profit_factor: float
    volatility: float  # Annualized percent


class StreakStatistics(BaseModel):
    """
    Summary of win/loss streaks.

    `current_streak` is signed: positive for an open win streak, negative for
    an open loss streak, 0 when the last observation was break-even.
    """

    model_config = ConfigDict(frozen=True)

    max_win_streak: int = 0
    max_loss_streak: int = 0
    avg_win_streak: float = 0.0
    avg_loss_streak: float = 0.0
    current_streak: int = 0


class StreakData(BaseModel):
    """Streak length histograms (length -> number of streaks) and statistics."""

    model_config = ConfigDict(frozen=True)

    win_distribution: dict[int, int] = Field(default_factory=dict)
    loss_distribution: dict[int, int] = Field(default_factory=dict)
    statistics: StreakStatistics = Field(default_factory=StreakStatistics)


class EquityCurveChartData(BaseModel):
    """
    Presentation-ready series derived from one equity curve.

    Monthly returns are keyed year -> month (1-12). `monthly_returns` holds the
    summed dollar change, `monthly_returns_percent` the summed percentage
    points; both are linear sums of daily values, not compounded.
    """

    model_config = ConfigDict(frozen=True)

    equity_curve: list[EquityCurvePoint] = Field(default_factory=list)
    drawdown_data: list[DrawdownPoint] = Field(default_factory=list)
    monthly_returns: dict[int, dict[int, float]] = Field(default_factory=dict)
    monthly_returns_percent: dict[int, dict[int, float]] = Field(default_factory=dict)
    return_distribution: list[float] = Field(default_factory=list)
    rolling_metrics: list[RollingMetricPoint] = Field(default_factory=list)
    streak_data: StreakData | None = None


class EquityCurveSnapshot(BaseModel):
    """Entries with their statistics and chart data, computed together."""

    model_config = ConfigDict(frozen=True)

    entries: list[EquityCurveEntry]
    portfolio_stats: PortfolioStats
    chart_data: EquityCurveChartData
