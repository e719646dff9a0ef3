"""Benchmark correlation command."""

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
from equitylens.libraries.correlation import correlate_strategies_to_benchmark
from equitylens.services.data import load_equity_curve
from equitylens.services.reporting import display_benchmark_report
from equitylens.system import LoggerFactory


@click.command("benchmark")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("benchmark_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--risk-free-rate", "-r", type=float, help="Annual risk-free rate in percent (default from config)")
@config_option
@log_level_option
def benchmark_command(
    file: Path,
    benchmark_file: Path,
    risk_free_rate: Optional[float],
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Fit every strategy in FILE against BENCHMARK_FILE.

    Reports correlation, beta, annualized CAPM alpha, R² and annualized
    tracking error over the dates both series share. BENCHMARK_FILE uses the
    equity-curve layout.

    \b
    Example:
        equitylens benchmark data/strategies.csv data/spx.csv -r 4.5
    """
    config = load_config(config_file, log_level)
    logger = LoggerFactory.get_logger()
    rate = config.risk_free_rate if risk_free_rate is None else risk_free_rate

    try:
        entries = load_equity_curve(file)
        benchmark = load_equity_curve(benchmark_file)
    except EquityCurveLoadError as e:
        fail_on_load_error(e)
        return

    results = correlate_strategies_to_benchmark(
        entries,
        benchmark,
        annual_risk_free_rate=rate,
        periods_per_year=config.trading_days_per_year,
    )

    for result in results:
        if result.overlapping_days == 0:
            logger.warning("benchmark.no_overlap", strategy=result.strategy, benchmark=benchmark_file.stem)

    logger.info("cli.benchmark", strategies=len(results), benchmark=benchmark_file.stem)
    display_benchmark_report(results, benchmark_file.stem, console=console)
