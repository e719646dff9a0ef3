"""Rich console formatters for equity-curve reports.

Renders portfolio statistics, correlation analytics, benchmark fits and
super-block results as terminal tables.
"""

from typing import Literal

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from equitylens.libraries.correlation.models import (
    CorrelationAnalytics,
    CorrelationMatrix,
    CorrelationPair,
    StrategyBenchmarkCorrelation,
)
from equitylens.libraries.performance.models import EquityCurveChartData, PortfolioStats, StreakData
from equitylens.services.superblock.models import SuperBlockData

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _format_pct(value: float, precision: int = 2) -> str:
    """Format a fraction as a percentage."""
    return f"{value * 100:.{precision}f}%"


def _format_currency(value: float, precision: int = 2) -> str:
    """Format currency value."""
    if value < 0:
        return f"-${abs(value):,.{precision}f}"
    return f"${value:,.{precision}f}"


def _format_number(value: int | float, precision: int = 0) -> str:
    """Format numeric value."""
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.{precision}f}"


def _get_color(value: float) -> str:
    """Get color based on positive/negative value."""
    if value > 0:
        return "green"
    elif value < 0:
        return "red"
    return "white"


def _ratio_color(value: float, good: float = 1.0) -> str:
    return "green" if value > good else "yellow" if value > 0 else "red"


def _create_summary_table(stats: PortfolioStats, title: str) -> Table:
    """Create capital and return summary table."""
    table = Table(title=f"📊 {title}", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Initial Capital", _format_currency(stats.initial_capital))
    table.add_row("Final Capital", _format_currency(stats.final_capital))

    pl_color = _get_color(stats.net_pl)
    table.add_row("Net P/L", f"[{pl_color}]{_format_currency(stats.net_pl)}[/{pl_color}]")

    return_color = _get_color(stats.total_return)
    table.add_row("Total Return", f"[{return_color}]{_format_pct(stats.total_return)}[/{return_color}]")
    table.add_row("Annualized Return", _format_pct(stats.annualized_return))
    table.add_row("Avg Daily P/L", _format_currency(stats.avg_daily_pl))

    return table


def _create_risk_table(stats: PortfolioStats) -> Table:
    """Create risk and risk-adjusted return table."""
    table = Table(title="⚠️  Risk Metrics", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Volatility (Annual)", _format_pct(stats.volatility))
    table.add_row("Max Drawdown", f"[red]{_format_currency(stats.max_drawdown)}[/red]")
    table.add_row("Max Drawdown %", f"[red]{_format_pct(stats.max_drawdown_pct)}[/red]")
    table.add_row("Max DD Duration", f"{stats.max_drawdown_duration:.0f} days")
    table.add_row("", "")  # Spacer

    for label, value in (
        ("Sharpe Ratio", stats.sharpe_ratio),
        ("Sortino Ratio", stats.sortino_ratio),
        ("Calmar Ratio", stats.calmar_ratio),
    ):
        color = _ratio_color(value)
        table.add_row(label, f"[{color}]{value:.2f}[/{color}]")

    table.add_row("Return / Max DD", f"{stats.return_on_max_drawdown:.2f}")

    return table


def _create_day_stats_table(stats: PortfolioStats) -> Table:
    """Create win/loss day statistics table."""
    table = Table(title="💼 Daily Statistics", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Trading Days", _format_number(stats.total_trades))
    table.add_row("Winning Days", f"[green]{_format_number(stats.winning_trades)}[/green]")
    table.add_row("Losing Days", f"[red]{_format_number(stats.losing_trades)}[/red]")
    table.add_row("Break-even Days", _format_number(stats.break_even_trades))

    win_rate_color = "green" if stats.win_rate > 0.5 else "yellow" if stats.win_rate > 0.4 else "red"
    table.add_row("Win Rate", f"[{win_rate_color}]{_format_pct(stats.win_rate)}[/{win_rate_color}]")

    if stats.losing_trades > 0:
        pf_color = _ratio_color(stats.profit_factor - 1.0)
        table.add_row("Profit Factor", f"[{pf_color}]{stats.profit_factor:.2f}[/{pf_color}]")
    else:
        table.add_row("Profit Factor", "N/A (no losses)")

    expectancy_color = _get_color(stats.expectancy)
    table.add_row("Expectancy", f"[{expectancy_color}]{_format_currency(stats.expectancy)}[/{expectancy_color}]")

    table.add_row("", "")  # Spacer
    table.add_row("Avg Win", f"[green]{_format_currency(stats.avg_win)}[/green]")
    table.add_row("Avg Loss", f"[red]{_format_currency(stats.avg_loss)}[/red]")
    table.add_row("Largest Win", f"[green]{_format_currency(stats.largest_win)}[/green]")
    table.add_row("Largest Loss", f"[red]{_format_currency(stats.largest_loss)}[/red]")
    table.add_row("Max Win Streak", _format_number(stats.max_win_streak))
    table.add_row("Max Loss Streak", _format_number(stats.max_loss_streak))

    if stats.max_margin_used > 0:
        table.add_row("Avg Margin", _format_number(stats.avg_margin_used, 2))
        table.add_row("Max Margin", _format_number(stats.max_margin_used, 2))

    return table


def _create_streak_table(streaks: StreakData) -> Table:
    """Create streak length distribution table."""
    table = Table(title="🔁 Streaks", box=None, padding=(0, 1))

    table.add_column("Length", justify="right", style="cyan")
    table.add_column("Win Streaks", justify="right", style="green")
    table.add_column("Loss Streaks", justify="right", style="red")

    lengths = sorted(set(streaks.win_distribution) | set(streaks.loss_distribution))
    for length in lengths:
        table.add_row(
            str(length),
            str(streaks.win_distribution.get(length, 0)),
            str(streaks.loss_distribution.get(length, 0)),
        )

    current = streaks.statistics.current_streak
    if current > 0:
        current_str = f"[green]{current} wins[/green]"
    elif current < 0:
        current_str = f"[red]{-current} losses[/red]"
    else:
        current_str = "none"
    table.caption = (
        f"Avg win streak {streaks.statistics.avg_win_streak:.1f} · "
        f"avg loss streak {streaks.statistics.avg_loss_streak:.1f} · current {current_str}"
    )

    return table


def _create_monthly_table(monthly_returns_percent: dict[int, dict[int, float]]) -> Table | None:
    """Create year-by-month return grid (summed percentage points)."""
    if not monthly_returns_percent:
        return None

    table = Table(title="📅 Monthly Returns", box=None, padding=(0, 1))
    table.add_column("Year", style="cyan")
    for name in MONTH_NAMES:
        table.add_column(name, justify="right")
    table.add_column("Total", justify="right", style="bold")

    for year in sorted(monthly_returns_percent):
        months = monthly_returns_percent[year]
        cells = []
        for month in range(1, 13):
            if month in months:
                color = _get_color(months[month])
                cells.append(f"[{color}]{months[month]:.1f}[/{color}]")
            else:
                cells.append("—")
        total = sum(months.values())
        cells.append(f"[{_get_color(total)}]{total:.1f}[/{_get_color(total)}]")
        table.add_row(str(year), *cells)

    return table


def display_stats_report(
    stats: PortfolioStats,
    chart_data: EquityCurveChartData | None = None,
    detail_level: Literal["summary", "standard", "full"] = "standard",
    title: str = "Performance Summary",
    console: Console | None = None,
) -> None:
    """
    Display portfolio statistics in Rich-formatted console output.

    Args:
        stats: Portfolio statistics
        chart_data: Optional chart data for streak and monthly tables
        detail_level: "summary" (returns only), "standard" (+ risk and daily
            statistics) or "full" (+ streaks and monthly returns)
        title: Summary table title
        console: Rich Console instance (creates new if None)
    """
    if console is None:
        console = Console()

    console.print()
    console.print(_create_summary_table(stats, title))
    console.print()

    if detail_level in ["standard", "full"]:
        console.print(_create_risk_table(stats))
        console.print()

        if stats.total_trades > 0:
            console.print(_create_day_stats_table(stats))
            console.print()

    if detail_level == "full" and chart_data is not None:
        if chart_data.streak_data is not None:
            console.print(_create_streak_table(chart_data.streak_data))
            console.print()

        monthly = _create_monthly_table(chart_data.monthly_returns_percent)
        if monthly:
            console.print(monthly)
            console.print()


def _create_matrix_table(matrix: CorrelationMatrix) -> Table:
    """Create the correlation matrix grid."""
    table = Table(
        title=f"🔗 Correlation Matrix ({matrix.method.value}, {matrix.alignment.value} dates)",
        box=None,
        padding=(0, 1),
    )
    table.add_column("", style="cyan")
    for name in matrix.strategies:
        table.add_column(name, justify="right")

    for name, row in zip(matrix.strategies, matrix.correlation_data):
        cells = []
        for value in row:
            color = "red" if abs(value) > 0.7 else "yellow" if abs(value) > 0.3 else "green"
            cells.append(f"[{color}]{value:.2f}[/{color}]")
        table.add_row(name, *cells)

    table.caption = f"{len(matrix.dates)} aligned dates"
    return table


def _create_pair_table(pairs: list[CorrelationPair], title: str) -> Table | None:
    if not pairs:
        return None

    table = Table(title=title, box=None, padding=(0, 1))
    table.add_column("Strategy 1", style="cyan")
    table.add_column("Strategy 2", style="cyan")
    table.add_column("Correlation", justify="right")
    for pair in pairs:
        table.add_row(pair.strategy1, pair.strategy2, f"{pair.correlation:.3f}")
    return table


def display_correlation_report(
    matrix: CorrelationMatrix,
    analytics: CorrelationAnalytics,
    console: Console | None = None,
) -> None:
    """Display a correlation matrix with its diversification analytics."""
    if console is None:
        console = Console()

    console.print()
    console.print(_create_matrix_table(matrix))
    console.print()

    table = Table(title="🧩 Diversification", show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Strategies", _format_number(analytics.strategy_count))
    table.add_row("Average Correlation", f"{analytics.average_correlation:.3f}")
    table.add_row("Max Correlation", f"{analytics.max_correlation:.3f}")
    table.add_row("Min Correlation", f"{analytics.min_correlation:.3f}")
    if analytics.strongest is not None:
        table.add_row("Strongest Pair", " / ".join(analytics.strongest.pair))
    if analytics.weakest is not None:
        table.add_row("Weakest Pair", " / ".join(analytics.weakest.pair))

    score = analytics.diversification_score
    score_color = "green" if score > 0.7 else "yellow" if score > 0.3 else "red"
    table.add_row("Diversification Score", f"[{score_color}]{score:.2f}[/{score_color}]")
    console.print(table)
    console.print()

    for pairs, title in (
        (analytics.highly_correlated_pairs, "⚠️  Highly Correlated Pairs"),
        (analytics.uncorrelated_pairs, "✅ Uncorrelated Pairs"),
    ):
        pair_table = _create_pair_table(pairs, title)
        if pair_table:
            console.print(pair_table)
            console.print()


def display_benchmark_report(
    results: list[StrategyBenchmarkCorrelation],
    benchmark_name: str,
    console: Console | None = None,
) -> None:
    """Display each strategy's fit against a benchmark."""
    if console is None:
        console = Console()

    table = Table(title=f"📈 Benchmark: {benchmark_name}", box=None, padding=(0, 1))
    table.add_column("Strategy", style="cyan")
    table.add_column("Days", justify="right")
    table.add_column("Correlation", justify="right")
    table.add_column("Beta", justify="right")
    table.add_column("Alpha", justify="right")
    table.add_column("R²", justify="right")
    table.add_column("Tracking Error", justify="right")

    for result in results:
        if result.overlapping_days == 0:
            table.add_row(result.strategy, "0", "[dim]no overlap[/dim]", "—", "—", "—", "—")
            continue
        alpha_color = _get_color(result.alpha)
        table.add_row(
            result.strategy,
            _format_number(result.overlapping_days),
            f"{result.correlation:.3f}",
            f"{result.beta:.2f}",
            f"[{alpha_color}]{_format_pct(result.alpha)}[/{alpha_color}]",
            f"{result.r_squared:.3f}",
            _format_pct(result.tracking_error),
        )

    console.print()
    console.print(table)
    console.print()


def display_super_block_report(data: SuperBlockData, console: Console | None = None) -> None:
    """Display combined and per-component statistics of a super block."""
    if console is None:
        console = Console()

    for warning in data.alignment_warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    display_stats_report(data.portfolio_stats, title="Combined Portfolio", console=console)

    table = Table(title="🧱 Components", box=None, padding=(0, 1))
    table.add_column("Component", style="cyan")
    table.add_column("Days", justify="right")
    table.add_column("Return", justify="right")
    table.add_column("Sharpe", justify="right")
    table.add_column("Max DD", justify="right", style="red")
    table.add_column("Final Value", justify="right")

    for name, stats in data.component_stats.items():
        return_color = _get_color(stats.total_return)
        table.add_row(
            name,
            _format_number(stats.total_trades),
            f"[{return_color}]{_format_pct(stats.total_return)}[/{return_color}]",
            f"{stats.sharpe_ratio:.2f}",
            _format_pct(stats.max_drawdown_pct),
            _format_currency(stats.final_capital),
        )

    console.print(table)
    console.print()

    start = data.date_range.start.strftime("%Y-%m-%d")
    end = data.date_range.end.strftime("%Y-%m-%d")
    summary_text = Text()
    summary_text.append("🏁 Combined: ", style="bold")
    summary_text.append(f"{len(data.combined_equity_curve)} days from {start} to {end}", style="bold cyan")
    total_return = data.portfolio_stats.total_return
    summary_text.append(f" ({_format_pct(total_return)})", style=f"bold {_get_color(total_return)}")
    console.print(Panel(summary_text, border_style="green" if total_return > 0 else "red"))
    console.print()
