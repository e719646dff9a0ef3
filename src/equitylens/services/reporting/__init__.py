"""Terminal reports for equity-curve analytics."""

from equitylens.services.reporting.formatters import (
    display_benchmark_report,
    display_correlation_report,
    display_stats_report,
    display_super_block_report,
)

__all__ = [
    "display_benchmark_report",
    "display_correlation_report",
    "display_stats_report",
    "display_super_block_report",
]
