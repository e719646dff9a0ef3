"""Portfolio statistics for a single equity-curve series.

`compute_stats` turns one list of daily observations into a `PortfolioStats`
snapshot. Day-level classification follows the sign of `daily_return_pct`:
positive days are wins, negative days are losses, zero days are break-even.
"""

import math
from typing import Sequence

from equitylens.libraries.performance.calculators import DrawdownCalculator, StreakCalculator
from equitylens.libraries.performance.metrics import (
    TRADING_DAYS_PER_YEAR,
    calculate_annualized_return,
    calculate_calmar_ratio,
    calculate_daily_volatility,
    calculate_expectancy,
    calculate_mean,
    calculate_profit_factor,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_total_return,
    calculate_win_rate,
)
from equitylens.libraries.performance.models import EquityCurveEntry, PortfolioStats


def sort_entries(entries: Sequence[EquityCurveEntry]) -> list[EquityCurveEntry]:
    """Return entries ascending by date; ties keep their input order."""
    return sorted(entries, key=lambda e: e.date)


def derive_initial_capital(first: EquityCurveEntry, fallback: float) -> float:
    """
    Back out the pre-return balance of the first observation.

    Args:
        first: Earliest entry of the series
        fallback: Capital to use when the first return is -100% or the
            division is otherwise not finite

    Returns:
        account_value / (1 + daily_return_pct), or `fallback`

    Example:
        >>> entry = EquityCurveEntry(date=datetime(2024, 1, 2), daily_return_pct=0.01, account_value=10_100.0)
        >>> derive_initial_capital(entry, 10_000.0)
        10000.0
    """
    growth = 1 + first.daily_return_pct
    if growth == 0:
        return fallback
    capital = first.account_value / growth
    if not math.isfinite(capital):
        return fallback
    return capital


def compute_stats(
    entries: Sequence[EquityCurveEntry],
    risk_free_rate: float = 2.0,
    initial_capital_fallback: float = 10_000.0,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> PortfolioStats:
    """
    Compute portfolio statistics for one equity-curve series.

    Args:
        entries: Observations of a single series, in any order
        risk_free_rate: Annual risk-free rate in percent (2.0 = 2%)
        initial_capital_fallback: Initial capital when it cannot be derived
        periods_per_year: Annualization factor

    Returns:
        PortfolioStats; all zeros for an empty series

    Example:
        >>> stats = compute_stats(entries, risk_free_rate=2.0)
        >>> stats.win_rate
        0.75
    """
    if not entries:
        return PortfolioStats()

    sorted_entries = sort_entries(entries)
    returns = [e.daily_return_pct for e in sorted_entries]

    initial_capital = derive_initial_capital(sorted_entries[0], initial_capital_fallback)
    final_capital = sorted_entries[-1].account_value
    net_pl = final_capital - initial_capital

    drawdown = DrawdownCalculator()
    streaks = StreakCalculator()
    for entry in sorted_entries:
        drawdown.update(entry.date, entry.account_value)
        streaks.update(entry.daily_return_pct)

    mean_return = calculate_mean(returns)
    annualized_return = calculate_annualized_return(mean_return, periods_per_year)
    daily_volatility = calculate_daily_volatility(returns)

    wins = [r for r in returns if r > 0]
    losses = [r for r in returns if r < 0]
    win_rate = calculate_win_rate(returns)
    avg_win = calculate_mean(wins) * initial_capital
    avg_loss = calculate_mean(losses) * initial_capital

    margins = [e.margin_req for e in sorted_entries]

    return PortfolioStats(
        initial_capital=initial_capital,
        final_capital=final_capital,
        total_pl=net_pl,
        net_pl=net_pl,
        total_return=calculate_total_return(initial_capital, final_capital),
        total_trades=len(returns),
        winning_trades=len(wins),
        losing_trades=len(losses),
        break_even_trades=len(returns) - len(wins) - len(losses),
        win_rate=win_rate,
        avg_win=avg_win,
        avg_loss=avg_loss,
        max_win=max(returns) * initial_capital,
        max_loss=min(returns) * initial_capital,
        profit_factor=calculate_profit_factor(returns),
        expectancy=calculate_expectancy(avg_win, avg_loss, win_rate),
        sharpe_ratio=calculate_sharpe_ratio(returns, risk_free_rate, periods_per_year),
        sortino_ratio=calculate_sortino_ratio(returns, risk_free_rate, periods_per_year),
        calmar_ratio=calculate_calmar_ratio(annualized_return, drawdown.max_drawdown_pct),
        annualized_return=annualized_return,
        volatility=daily_volatility * math.sqrt(periods_per_year),
        max_drawdown=drawdown.max_drawdown,
        max_drawdown_pct=drawdown.max_drawdown_pct,
        max_drawdown_duration=drawdown.max_drawdown_duration,
        return_on_max_drawdown=net_pl / drawdown.max_drawdown if drawdown.max_drawdown > 0 else 0.0,
        max_win_streak=streaks.max_win_streak,
        max_loss_streak=streaks.max_loss_streak,
        avg_daily_pl=mean_return * initial_capital,
        avg_margin_used=calculate_mean(margins),
        max_margin_used=max(margins),
        total_commissions=0.0,
    )
