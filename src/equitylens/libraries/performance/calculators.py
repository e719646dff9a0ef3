"""Incremental scan calculators for equity-curve analysis.

Each calculator is a local accumulator: create one per computation, feed it the
sorted series one observation at a time, then read its results. Instances are
never shared between computations.

Usage:
    >>> from equitylens.libraries.performance.calculators import DrawdownCalculator
    >>> calc = DrawdownCalculator()
    >>> calc.update(datetime(2024, 1, 1), 10_000.0)
    >>> calc.update(datetime(2024, 1, 2), 9_500.0)
    >>> calc.max_drawdown_pct
    0.05
"""

import math
from collections import deque
from datetime import datetime

from equitylens.libraries.performance.metrics import (
    TRADING_DAYS_PER_YEAR,
    calculate_daily_volatility,
    calculate_mean,
    calculate_profit_factor,
    calculate_win_rate,
)
from equitylens.libraries.performance.models import RollingMetricPoint, StreakData, StreakStatistics

SECONDS_PER_DAY = 86_400


class DrawdownCalculator:
    """
    Tracks the high-water mark and drawdown episodes of an equity series.

    The high-water mark starts at the first value. Every observation that does
    not set a new high (including one equal to it) belongs to a drawdown
    episode; the episode opens at its first such observation and closes at the
    next new high, at which point its length in days is recorded. Episodes
    still open at the end of the series never contribute a duration.
    """

    def __init__(self) -> None:
        self._high_water_mark: float | None = None
        self._episode_start: datetime | None = None
        self._max_drawdown = 0.0
        self._max_drawdown_pct = 0.0
        self._max_duration_days = 0.0
        self._current_drawdown_pct = 0.0

    def update(self, timestamp: datetime, equity: float) -> None:
        """
        Update drawdown state with the next observation.

        Args:
            timestamp: Observation date
            equity: Account value at that date
        """
        if self._high_water_mark is None:
            self._high_water_mark = equity

        if equity > self._high_water_mark:
            self._high_water_mark = equity
            self._current_drawdown_pct = 0.0
            if self._episode_start is not None:
                duration = (timestamp - self._episode_start).total_seconds() / SECONDS_PER_DAY
                if duration > self._max_duration_days:
                    self._max_duration_days = duration
                self._episode_start = None
            return

        if self._episode_start is None:
            self._episode_start = timestamp

        if self._high_water_mark <= 0:
            return

        drawdown = self._high_water_mark - equity
        # Negative equity cannot lose more than the whole peak
        drawdown_pct = min(drawdown / self._high_water_mark, 1.0)
        self._current_drawdown_pct = drawdown_pct
        if drawdown_pct > self._max_drawdown_pct:
            self._max_drawdown_pct = drawdown_pct
            self._max_drawdown = drawdown

    @property
    def high_water_mark(self) -> float:
        """Running maximum equity (0 before the first update)."""
        return self._high_water_mark if self._high_water_mark is not None else 0.0

    @property
    def max_drawdown(self) -> float:
        """Currency drawdown at the deepest percentage drawdown."""
        return self._max_drawdown

    @property
    def max_drawdown_pct(self) -> float:
        """Deepest drawdown as a fraction of the high-water mark."""
        return self._max_drawdown_pct

    @property
    def max_drawdown_duration(self) -> float:
        """Longest closed drawdown episode in days."""
        return self._max_duration_days

    @property
    def current_drawdown_pct(self) -> float:
        """Drawdown of the latest observation as a fraction."""
        return self._current_drawdown_pct

    @property
    def is_underwater(self) -> bool:
        """True while a drawdown episode is open."""
        return self._episode_start is not None


class StreakCalculator:
    """
    Counts consecutive winning and losing days.

    A positive return extends the win streak and closes an open loss streak;
    a negative return does the mirror. A zero return closes both open streaks
    without starting a new one. This break-even policy is a deliberate choice:
    a flat day ends a run of wins or losses rather than being skipped.
    """

    def __init__(self) -> None:
        self._current_win = 0
        self._current_loss = 0
        self._max_win = 0
        self._max_loss = 0
        self._win_streaks: list[int] = []
        self._loss_streaks: list[int] = []

    def update(self, daily_return: float) -> None:
        """Process the next daily return."""
        if daily_return > 0:
            self._close_loss_streak()
            self._current_win += 1
            self._max_win = max(self._max_win, self._current_win)
        elif daily_return < 0:
            self._close_win_streak()
            self._current_loss += 1
            self._max_loss = max(self._max_loss, self._current_loss)
        else:
            self._close_win_streak()
            self._close_loss_streak()

    def _close_win_streak(self) -> None:
        if self._current_win > 0:
            self._win_streaks.append(self._current_win)
            self._current_win = 0

    def _close_loss_streak(self) -> None:
        if self._current_loss > 0:
            self._loss_streaks.append(self._current_loss)
            self._current_loss = 0

    @property
    def current_streak(self) -> int:
        """Signed length of the open streak (+wins, -losses, 0 if none)."""
        if self._current_win > 0:
            return self._current_win
        if self._current_loss > 0:
            return -self._current_loss
        return 0

    @property
    def max_win_streak(self) -> int:
        return self._max_win

    @property
    def max_loss_streak(self) -> int:
        return self._max_loss

    def to_streak_data(self) -> StreakData:
        """
        Build streak histograms and statistics.

        The open streak, if any, is included as if closed at the end of the
        series. The calculator itself is left unchanged.
        """
        win_streaks = list(self._win_streaks)
        loss_streaks = list(self._loss_streaks)
        if self._current_win > 0:
            win_streaks.append(self._current_win)
        if self._current_loss > 0:
            loss_streaks.append(self._current_loss)

        return StreakData(
            win_distribution=_histogram(win_streaks),
            loss_distribution=_histogram(loss_streaks),
            statistics=StreakStatistics(
                max_win_streak=self._max_win,
                max_loss_streak=self._max_loss,
                avg_win_streak=calculate_mean(win_streaks),
                avg_loss_streak=calculate_mean(loss_streaks),
                current_streak=self.current_streak,
            ),
        )


def _histogram(lengths: list[int]) -> dict[int, int]:
    distribution: dict[int, int] = {}
    for length in lengths:
        distribution[length] = distribution.get(length, 0) + 1
    return distribution


class MonthlyReturnsCalculator:
    """
    Aggregates daily returns by calendar month.

    Both aggregates are linear sums of daily values, not compounded returns:
    dollars sum `account_value × daily_return`, percent sums
    `daily_return × 100`.
    """

    def __init__(self) -> None:
        self._dollars: dict[int, dict[int, float]] = {}
        self._percent: dict[int, dict[int, float]] = {}

    def update(self, timestamp: datetime, account_value: float, daily_return: float) -> None:
        """Add one day's contribution to its month."""
        year_dollars = self._dollars.setdefault(timestamp.year, {})
        year_percent = self._percent.setdefault(timestamp.year, {})
        month = timestamp.month
        year_dollars[month] = year_dollars.get(month, 0.0) + account_value * daily_return
        year_percent[month] = year_percent.get(month, 0.0) + daily_return * 100

    @property
    def monthly_returns(self) -> dict[int, dict[int, float]]:
        """Year -> month -> summed dollar return."""
        return {year: dict(months) for year, months in self._dollars.items()}

    @property
    def monthly_returns_percent(self) -> dict[int, dict[int, float]]:
        """Year -> month -> summed percentage points."""
        return {year: dict(months) for year, months in self._percent.items()}


class RollingMetricsCalculator:
    """
    Computes metrics over a fixed trailing window of daily returns.

    Every window is evaluated from its own slice only. `update` returns a point
    once the window is full, and None before that.
    """

    def __init__(self, window: int = 30, periods_per_year: int = TRADING_DAYS_PER_YEAR) -> None:
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self._window = window
        self._periods_per_year = periods_per_year
        self._returns: deque[float] = deque(maxlen=window)

    def update(self, timestamp: datetime, daily_return: float) -> RollingMetricPoint | None:
        """Push the next return and evaluate the window ending at `timestamp`."""
        self._returns.append(daily_return)
        if len(self._returns) < self._window:
            return None

        window_returns = list(self._returns)
        volatility = calculate_daily_volatility(window_returns)
        annualizer = math.sqrt(self._periods_per_year)
        sharpe = calculate_mean(window_returns) / volatility * annualizer if volatility > 0 else 0.0

        return RollingMetricPoint(
            date=timestamp,
            win_rate=calculate_win_rate(window_returns) * 100,
            sharpe_ratio=sharpe,
            profit_factor=calculate_profit_factor(window_returns),
            volatility=volatility * annualizer * 100,
        )
