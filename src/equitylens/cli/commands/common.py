"""Options and setup shared by the analytics commands."""

import sys
from pathlib import Path
from typing import Callable, Literal, Optional, TypeVar, cast

import click
from pydantic import ValidationError
from rich.console import Console

from equitylens.errors import EquityCurveLoadError
from equitylens.system import AnalyticsConfig, LoggerFactory

console = Console()

F = TypeVar("F", bound=Callable[..., object])

# Input errors use click's usage-error status
EXIT_INPUT_ERROR = 2
EXIT_ANALYTICS_ERROR = 1


def config_option(func: F) -> F:
    """Add `--config` for an analytics YAML file."""
    return click.option(
        "--config",
        "-c",
        "config_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Analytics configuration file (YAML, `analytics:` section)",
    )(func)


def log_level_option(func: F) -> F:
    """Add `--log-level` overriding the configured logging level."""
    return click.option(
        "--log-level",
        "-l",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
        help="Set logging level (DEBUG shows per-series details)",
    )(func)


def load_config(config_file: Optional[Path], log_level: Optional[str]) -> AnalyticsConfig:
    """
    Load analytics configuration and configure logging from it.

    Exits with status 2 when the file does not validate.
    """
    try:
        config = AnalyticsConfig.from_yaml(config_file) if config_file else AnalyticsConfig()
    except ValidationError as e:
        console.print(f"[bold red]✗ Invalid configuration:[/bold red] {e}")
        sys.exit(EXIT_INPUT_ERROR)

    if log_level:
        # click already validated the choice
        level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
        config.logging.level = level
    LoggerFactory.configure(config.logging)
    return config


def fail_on_load_error(error: EquityCurveLoadError) -> None:
    """Report an unreadable input file and exit with status 2."""
    console.print(f"[bold red]✗ Could not load input:[/bold red] {error}")
    sys.exit(EXIT_INPUT_ERROR)
