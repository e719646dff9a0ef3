"""
equitylens - Equity Curve Analytics

Portfolio statistics, chart series, correlation analytics and multi-block
combination for daily equity-curve data.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("equitylens")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
