"""Correlation matrix command."""

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
from equitylens.libraries.correlation import AlignmentPolicy, analyze_correlations, build_correlation_matrix
from equitylens.services.data import load_equity_curve
from equitylens.services.reporting import display_correlation_report
from equitylens.system import LoggerFactory


@click.command("correlate")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--method",
    "-m",
    type=click.Choice(["pearson", "spearman"]),
    help="Correlation method (default from config)",
)
@click.option(
    "--alignment",
    "-a",
    type=click.Choice([p.value for p in AlignmentPolicy]),
    default=AlignmentPolicy.COMMON_DATES.value,
    show_default=True,
    help="common: dates every strategy has; union: all dates, missing days as 0",
)
@config_option
@log_level_option
def correlate_command(
    files: tuple[Path, ...],
    method: Optional[str],
    alignment: str,
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Correlate strategies and score their diversification.

    FILES may hold several strategies each (`strategy_name` column) or one
    strategy per file (named after the file).

    \b
    Examples:
        equitylens correlate data/all_strategies.csv
        equitylens correlate a.csv b.csv c.csv --method spearman --alignment union
    """
    config = load_config(config_file, log_level)
    logger = LoggerFactory.get_logger()

    entries = []
    try:
        for file in files:
            entries.extend(load_equity_curve(file))
    except EquityCurveLoadError as e:
        fail_on_load_error(e)
        return

    matrix = build_correlation_matrix(entries, method=method or config.correlation_method, alignment=alignment)
    analytics = analyze_correlations(
        matrix,
        high_threshold=config.high_correlation_threshold,
        low_threshold=config.low_correlation_threshold,
        max_pairs=config.max_pair_results,
    )

    logger.info(
        "cli.correlate",
        strategies=len(matrix.strategies),
        dates=len(matrix.dates),
        method=matrix.method.value,
        alignment=matrix.alignment.value,
    )
    display_correlation_report(matrix, analytics, console=console)
