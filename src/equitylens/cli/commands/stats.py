"""Portfolio statistics command."""

from pathlib import Path
from typing import Optional

import click

from equitylens.cli.commands.common import (
    config_option,
    console,
    fail_on_load_error,
    load_config,
    log_level_option,
)
from equitylens.errors import EquityCurveLoadError
from equitylens.libraries.correlation import group_by_strategy
from equitylens.libraries.performance import build_chart_data, compute_stats
from equitylens.services.data import load_equity_curve
from equitylens.services.reporting import display_stats_report
from equitylens.system import LoggerFactory


@click.command("stats")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--risk-free-rate", "-r", type=float, help="Annual risk-free rate in percent (default from config)")
@click.option("--strategy", "-s", "strategy_name", help="Only analyze this strategy from a multi-strategy file")
@click.option(
    "--detail",
    "-d",
    type=click.Choice(["summary", "standard", "full"]),
    default="full",
    show_default=True,
    help="Report detail level",
)
@config_option
@log_level_option
def stats_command(
    file: Path,
    risk_free_rate: Optional[float],
    strategy_name: Optional[str],
    detail: str,
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Compute portfolio statistics for an equity-curve CSV.

    Each strategy in the file is reported separately.

    \b
    Examples:
        equitylens stats data/iron_condor.csv
        equitylens stats data/all.csv --strategy "Iron Condor" -r 4.5
    """
    config = load_config(config_file, log_level)
    logger = LoggerFactory.get_logger()
    rate = config.risk_free_rate if risk_free_rate is None else risk_free_rate

    try:
        entries = load_equity_curve(file)
    except EquityCurveLoadError as e:
        fail_on_load_error(e)
        return

    groups = group_by_strategy(entries)
    if strategy_name is not None:
        if strategy_name not in groups:
            raise click.BadParameter(
                f"'{strategy_name}' not found (available: {', '.join(sorted(groups))})",
                param_hint="--strategy",
            )
        groups = {strategy_name: groups[strategy_name]}

    logger.info("cli.stats", file=str(file), strategies=len(groups), risk_free_rate=rate)

    for name in sorted(groups):
        series = groups[name]
        stats = compute_stats(
            series,
            risk_free_rate=rate,
            initial_capital_fallback=config.initial_capital_fallback,
            periods_per_year=config.trading_days_per_year,
        )
        chart_data = build_chart_data(
            series,
            rolling_window=config.rolling_window,
            periods_per_year=config.trading_days_per_year,
        )
        console.rule(f"[bold blue]{name}[/bold blue]")
        display_stats_report(
            stats,
            chart_data,
            detail_level=detail,  # type: ignore[arg-type]
            title=name,
            console=console,
        )
