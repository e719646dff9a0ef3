"""equitylens CLI main entry point."""

import click

from equitylens import __version__
from equitylens.cli.commands import benchmark_command, combine_command, correlate_command, stats_command


@click.group()
@click.version_option(version=__version__)
def main():
    """equitylens - Equity Curve Performance Analytics"""
    pass


# Register commands
main.add_command(stats_command)
main.add_command(correlate_command)
main.add_command(benchmark_command)
main.add_command(combine_command)


if __name__ == "__main__":
    main()
