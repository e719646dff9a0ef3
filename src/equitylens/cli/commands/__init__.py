"""Commands __init__ - exports all analytics commands."""

from equitylens.cli.commands.benchmark import benchmark_command
from equitylens.cli.commands.combine import combine_command
from equitylens.cli.commands.correlate import correlate_command
from equitylens.cli.commands.stats import stats_command

__all__ = ["benchmark_command", "combine_command", "correlate_command", "stats_command"]
