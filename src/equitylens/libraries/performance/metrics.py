"""Performance metrics calculation functions.

Pure functions for calculating performance statistics from daily return
series. All functions are stateless and never raise on degenerate input:
empty series, single observations and zero variance produce 0.

Conventions:
- Daily returns are fractions (0.01 = 1%)
- Risk-free rates are annual percentages (2.0 = 2%)
- Annualization uses trading days (252 by default), not calendar days
- Standard deviations are population (uncorrected) deviations

Usage:
    >>> from equitylens.libraries.performance import metrics
    >>> returns = [0.01, -0.005, 0.02]
    >>> round(metrics.calculate_profit_factor(returns), 6)
    6.0
    >>> metrics.calculate_win_rate(returns)
    0.6666666666666666
"""

import math
from typing import Sequence

TRADING_DAYS_PER_YEAR = 252


def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def calculate_population_std(values: Sequence[float]) -> float:
    """
    Population (uncorrected) standard deviation.

    Args:
        values: Sequence of observations

    Returns:
        Standard deviation dividing by N, or 0 for an empty sequence

    Example:
        >>> calculate_population_std([1.0, 3.0])
        1.0
    """
    if not values:
        return 0.0

    mean_value = calculate_mean(values)
    variance = sum((v - mean_value) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def calculate_daily_volatility(returns: Sequence[float]) -> float:
    """Population std of daily returns, 0 with fewer than 2 observations."""
    if len(returns) < 2:
        return 0.0
    return calculate_population_std(returns)


def calculate_volatility(returns: Sequence[float], periods_per_year: int = TRADING_DAYS_PER_YEAR) -> float:
    """
    Calculate annualized volatility.

    Args:
        returns: Daily returns as fractions
        periods_per_year: Annualization factor (252 for daily)

    Returns:
        Annualized volatility as a fraction (0.20 = 20%)

    Example:
        >>> calculate_volatility([0.01, -0.01])
        0.15874507866387544
    """
    return calculate_daily_volatility(returns) * math.sqrt(periods_per_year)


def daily_risk_free_rate(annual_rate_pct: float, periods_per_year: int = TRADING_DAYS_PER_YEAR) -> float:
    """
    Convert an annual risk-free rate in percent to a compounded daily rate.

    Example:
        >>> round(daily_risk_free_rate(2.0), 8)
        7.858e-05
    """
    return (1 + annual_rate_pct / 100) ** (1 / periods_per_year) - 1


def calculate_annualized_return(mean_daily_return: float, periods_per_year: int = TRADING_DAYS_PER_YEAR) -> float:
    """
    Compound a mean daily return over one year.

    Returns:
        (1 + mean)^periods - 1, or +inf when the result overflows
    """
    try:
        return (1 + mean_daily_return) ** periods_per_year - 1
    except OverflowError:
        return math.inf


def calculate_total_return(initial_capital: float, final_capital: float) -> float:
    """Total return as a fraction, 0 when initial capital is 0."""
    if initial_capital == 0:
        return 0.0
    return (final_capital - initial_capital) / initial_capital


def calculate_sharpe_ratio(
    returns: Sequence[float],
    risk_free_rate: float,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Calculate annualized Sharpe ratio.

    Sharpe = (mean(daily) - daily_rf) / daily_volatility * sqrt(periods)

    Args:
        returns: Daily returns as fractions
        risk_free_rate: Annual risk-free rate in percent
        periods_per_year: Annualization factor

    Returns:
        Sharpe ratio, 0 when volatility is 0

    Example:
        >>> calculate_sharpe_ratio([0.01, 0.03], risk_free_rate=0.0)
        31.74901573277509
    """
    volatility = calculate_daily_volatility(returns)
    if volatility == 0:
        return 0.0

    excess = calculate_mean(returns) - daily_risk_free_rate(risk_free_rate, periods_per_year)
    return (excess / volatility) * math.sqrt(periods_per_year)


def calculate_sortino_ratio(
    returns: Sequence[float],
    risk_free_rate: float,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Calculate annualized Sortino ratio.

    Downside returns are the daily returns strictly below the daily risk-free
    rate. The downside deviation is the population std of that subset.

    Args:
        returns: Daily returns as fractions
        risk_free_rate: Annual risk-free rate in percent
        periods_per_year: Annualization factor

    Returns:
        Sortino ratio, 0 when there is no downside or its deviation is 0
    """
    if not returns:
        return 0.0

    daily_rf = daily_risk_free_rate(risk_free_rate, periods_per_year)
    downside = [r for r in returns if r < daily_rf]
    downside_deviation = calculate_population_std(downside)
    if downside_deviation == 0:
        return 0.0

    excess = calculate_mean(returns) - daily_rf
    return (excess / downside_deviation) * math.sqrt(periods_per_year)


def calculate_calmar_ratio(annualized_return: float, max_drawdown_pct: float) -> float:
    """
    Calculate Calmar ratio.

    Args:
        annualized_return: Annualized return as a fraction
        max_drawdown_pct: Maximum drawdown as a fraction

    Returns:
        annualized_return / max_drawdown_pct, 0 when there was no drawdown

    Example:
        >>> calculate_calmar_ratio(0.2, 0.1)
        2.0
    """
    if max_drawdown_pct == 0:
        return 0.0
    return annualized_return / max_drawdown_pct


def calculate_win_rate(returns: Sequence[float]) -> float:
    """Fraction of strictly positive days, 0 for an empty series."""
    if not returns:
        return 0.0
    return sum(1 for r in returns if r > 0) / len(returns)


def calculate_profit_factor(returns: Sequence[float]) -> float:
    """
    Calculate profit factor over daily returns.

    Returns:
        Sum of positive returns / |sum of negative returns|, 0 without losses

    Example:
        >>> round(calculate_profit_factor([0.02, 0.03, -0.01]), 6)
        5.0
    """
    gross_profit = sum(r for r in returns if r > 0)
    gross_loss = abs(sum(r for r in returns if r < 0))
    if gross_loss == 0:
        return 0.0
    return gross_profit / gross_loss


def calculate_expectancy(avg_win: float, avg_loss: float, win_rate: float) -> float:
    """
    Calculate expectancy (expected value per day).

    Expectancy = AvgWin × Win% + AvgLoss × (1 - Win%)

    `avg_loss` keeps its negative sign, so losses reduce the result.

    Example:
        >>> calculate_expectancy(100.0, -50.0, 0.5)
        25.0
    """
    return avg_win * win_rate + avg_loss * (1 - win_rate)
