"""
System configuration package.

Exports:
    - AnalyticsConfig: Tunable constants for the analytics engine
    - LoggerFactory: Factory for creating configured loggers
    - LoggingConfig: Logging configuration model
"""

from equitylens.system.config import AnalyticsConfig
from equitylens.system.log_system import LoggerFactory, LoggingConfig

__all__ = [
    "AnalyticsConfig",
    "LoggerFactory",
    "LoggingConfig",
]
