"""Super-block combination command."""

import sys
from pathlib import Path
from typing import Optional

import click

from equitylens.cli.commands.common import (
    EXIT_ANALYTICS_ERROR,
    config_option,
    console,
    fail_on_load_error,
    load_config,
    log_level_option,
)
from equitylens.errors import EquityCurveLoadError, SuperBlockError
from equitylens.services.data import load_component
from equitylens.services.reporting import display_super_block_report
from equitylens.services.superblock import DateAlignmentStrategy, combine_super_block
from equitylens.system import LoggerFactory


@click.command("combine")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--alignment",
    "-a",
    type=click.Choice([s.value for s in DateAlignmentStrategy]),
    default=DateAlignmentStrategy.INTERSECTION.value,
    show_default=True,
    help="How component dates are aligned",
)
@click.option("--risk-free-rate", "-r", type=float, help="Annual risk-free rate in percent (default from config)")
@config_option
@log_level_option
def combine_command(
    files: tuple[Path, ...],
    alignment: str,
    risk_free_rate: Optional[float],
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Combine several blocks into one super block.

    Each file is one component: an equity curve, a trade list (has a `pl`
    column) or daily logs (has a `net_liquidity` column).

    \b
    Examples:
        equitylens combine ic.csv strangles.csv
        equitylens combine ic.csv trades.csv --alignment union
    """
    config = load_config(config_file, log_level)
    logger = LoggerFactory.get_logger()
    rate = config.risk_free_rate if risk_free_rate is None else risk_free_rate

    try:
        components = [load_component(file) for file in files]
    except EquityCurveLoadError as e:
        fail_on_load_error(e)
        return

    try:
        data = combine_super_block(
            components,
            alignment=alignment,
            risk_free_rate=rate,
            initial_capital_fallback=config.initial_capital_fallback,
            periods_per_year=config.trading_days_per_year,
        )
    except SuperBlockError as e:
        console.print(f"[bold red]✗ Combination failed:[/bold red] {e}")
        for warning in getattr(e, "warnings", []):
            console.print(f"[yellow]⚠ {warning}[/yellow]")
        sys.exit(EXIT_ANALYTICS_ERROR)

    logger.info("cli.combine", components=len(components), points=len(data.combined_equity_curve))
    console.rule("[bold blue]Super Block[/bold blue]")
    display_super_block_report(data, console=console)
